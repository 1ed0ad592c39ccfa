"""Allow ``python -m chunkseal``."""

import sys

from chunkseal.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
