"""
Exceptions for the chunkseal core
Every failure raised by the library derives from ChunkSealError so the CLI
has a single thing to catch
"""


class ChunkSealError(Exception):
    # general container for errors
    pass


class ConfigurationError(ChunkSealError):
    # raised when the buffer layout cannot hold a single byte of plaintext
    pass


class KeyDerivationError(ChunkSealError):
    # raised when Argon2 rejects the parameters or fails internally
    pass


class SessionClosedError(ChunkSealError):
    # raised when a session is used after its key was wiped
    pass


class EncryptionError(ChunkSealError):
    # raised when the AEAD primitive refuses to seal a chunk
    pass


class StreamIOError(ChunkSealError):
    # raised when the source or sink fails (underlying OSError is chained)
    pass


class StreamFormatError(ChunkSealError):
    # general container for malformed ciphertext streams
    pass


class TruncatedHeaderError(StreamFormatError):
    # raised when the stream ends inside a 4-byte length prefix
    def __init__(self, chunk_index: int, got: int):
        self.chunk_index = chunk_index
        self.got = got
        super().__init__(
            f"Truncated header for chunk #{chunk_index} ([{got}] of 4 bytes)"
        )


class TruncatedChunkError(StreamFormatError):
    # raised when the stream ends inside a chunk payload
    def __init__(self, chunk_index: int, expected: int, got: int):
        self.chunk_index = chunk_index
        self.expected = expected
        self.got = got
        super().__init__(
            f"Chunk #{chunk_index} too short ([{expected}] bytes expected, got [{got}])"
        )


class OversizedChunkError(StreamFormatError):
    # raised when a declared length exceeds what the scratch buffer can hold
    def __init__(self, chunk_index: int, declared: int, maximum: int):
        self.chunk_index = chunk_index
        self.declared = declared
        self.maximum = maximum
        super().__init__(f"Chunk size too large ([{declared}] > [{maximum}])")


class PrematureEndOfStreamError(StreamFormatError):
    # raised when the stream ends without a terminal 0-length chunk
    def __init__(self, chunks_read: int):
        self.chunks_read = chunks_read
        if chunks_read == 0:
            msg = "Premature end of stream (stream contains no chunks)"
        else:
            msg = f"Premature end of stream after {chunks_read} chunk(s)"
        super().__init__(msg)


class AuthenticationFailedError(ChunkSealError):
    # raised when a chunk fails AEAD verification
    def __init__(self, chunk_index: int):
        self.chunk_index = chunk_index
        if self.likely_wrong_password:
            hint = "wrong password or key?"
        else:
            hint = "corrupted or incomplete stream?"
        super().__init__(f"Unable to decrypt chunk #{chunk_index} - {hint}")

    @property
    def likely_wrong_password(self) -> bool:
        return self.chunk_index == 0
