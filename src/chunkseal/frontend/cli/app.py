"""Command-line driver for chunkseal.

Usage:
    chunkseal -e -p <password> [-i <inputfile>] [-o <outputfile>]
    chunkseal -d -p <password> [-i <inputfile>] [-o <outputfile>]
    chunkseal --inspect [-i <inputfile>]

Input and output default to stdin/stdout (``-``). Exit status is 0 on success,
1 on any encryption/decryption failure, 130 when interrupted.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from chunkseal import __version__
from chunkseal.core.exceptions import ChunkSealError
from chunkseal.frontend.cli.config import AppConfig, build_config, resolve_log_level
from chunkseal.frontend.cli.files import open_input, open_output
from chunkseal.frontend.cli.logging_config import configure_logging
from chunkseal.security.kdf import DEFAULT_KDF_PARAMS, KdfParams, kdf_params_to_dict
from chunkseal.security.memory import zeroize
from chunkseal.stream.headers import iter_chunk_headers
from chunkseal.stream.session import Mode, SessionContext


logger = logging.getLogger("chunkseal")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chunkseal",
        description="Password-based streaming authenticated encryption.",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "-e", "--encrypt", dest="mode", action="store_const", const=Mode.ENCRYPT.value,
        help="Encrypt the input",
    )
    action.add_argument(
        "-d", "--decrypt", dest="mode", action="store_const", const=Mode.DECRYPT.value,
        help="Decrypt the input",
    )
    action.add_argument(
        "--inspect", action="store_true",
        help="List the chunk headers of an encrypted input without decrypting it",
    )
    parser.add_argument(
        "-p", "--password", default=None,
        help="Password (default: $CHUNKSEAL_PASSWORD, else prompt)",
    )
    parser.add_argument("-i", "--in", dest="in_path", default="-", help="Input file (default: stdin)")
    parser.add_argument("-o", "--out", dest="out_path", default="-", help="Output file (default: stdout)")
    parser.add_argument(
        "--buffer-size", type=int, default=None,
        help="Scratch buffer size in bytes; must match between encryption and decryption "
             "(default: $CHUNKSEAL_BUFFER_SIZE, else 1048576)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_inspect(config: AppConfig) -> None:
    with open_input(config.in_path) as source:
        for header in iter_chunk_headers(source, config.buffer_size):
            suffix = " (terminal)" if header.terminal else ""
            print(f"chunk #{header.index}: {header.declared_length} bytes{suffix}")


def run_stream(config: AppConfig, kdf_params: KdfParams = DEFAULT_KDF_PARAMS) -> None:
    logger.debug("deriving key with %s", kdf_params_to_dict(kdf_params))
    # derive_key wipes config.password
    with SessionContext.from_password(
        config.password, config.mode, buffer_size=config.buffer_size, kdf_params=kdf_params
    ) as session:
        with open_input(config.in_path) as source, open_output(config.out_path) as sink:
            stats = session.run(source, sink)
    logger.info(
        "%s done: %d chunk(s), %d plaintext bytes, %d ciphertext bytes",
        config.mode.value, stats.chunks, stats.plaintext_bytes, stats.ciphertext_bytes,
    )


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    kdf_params: KdfParams = DEFAULT_KDF_PARAMS,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.mode is None and not args.inspect:
        parser.error("one of -e/--encrypt, -d/--decrypt or --inspect is required")

    environ = os.environ if environ is None else environ
    configure_logging(resolve_log_level(args.verbose, args.quiet, environ))

    config: Optional[AppConfig] = None
    try:
        config = build_config(args, environ)
        if config.inspect:
            run_inspect(config)
        else:
            run_stream(config, kdf_params=kdf_params)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_INTERRUPTED
    except ChunkSealError as exc:
        logger.debug("fatal error", exc_info=True)
        print(f"chunkseal: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        if config is not None:
            zeroize(config.password)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
