"""Core building blocks: error hierarchy, chunk framing and stream I/O."""
