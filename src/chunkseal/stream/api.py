"""One-shot helpers: password plus file objects (or bytes) in, result out."""
from __future__ import annotations

import io

from chunkseal.core.framing import DEFAULT_BUFFER_SIZE
from chunkseal.security.kdf import DEFAULT_KDF_PARAMS, KdfParams
from chunkseal.stream.session import Mode, SessionContext, StreamStats


def encrypt_stream(
    source,
    sink,
    password,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    kdf_params: KdfParams = DEFAULT_KDF_PARAMS,
) -> StreamStats:
    with SessionContext.from_password(
        password, Mode.ENCRYPT, buffer_size=buffer_size, kdf_params=kdf_params
    ) as session:
        return session.run(source, sink)


def decrypt_stream(
    source,
    sink,
    password,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    kdf_params: KdfParams = DEFAULT_KDF_PARAMS,
) -> StreamStats:
    with SessionContext.from_password(
        password, Mode.DECRYPT, buffer_size=buffer_size, kdf_params=kdf_params
    ) as session:
        return session.run(source, sink)


def encrypt_bytes(data: bytes, password, **kwargs) -> bytes:
    out = io.BytesIO()
    encrypt_stream(io.BytesIO(data), out, password, **kwargs)
    return out.getvalue()


def decrypt_bytes(blob: bytes, password, **kwargs) -> bytes:
    out = io.BytesIO()
    decrypt_stream(io.BytesIO(blob), out, password, **kwargs)
    return out.getvalue()
