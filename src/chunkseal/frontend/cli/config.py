"""Build the runtime configuration for the command line.

Values come from, in order of precedence:

- command-line flags
- environment variables ``CHUNKSEAL_PASSWORD``, ``CHUNKSEAL_BUFFER_SIZE``
  and ``CHUNKSEAL_LOG_LEVEL``
- an interactive ``getpass`` prompt (password only)
- built-in defaults
"""

from __future__ import annotations

import getpass
import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from chunkseal.core.exceptions import ConfigurationError
from chunkseal.core.framing import DEFAULT_BUFFER_SIZE, clamp_buffer_size
from chunkseal.security.memory import to_secret_buffer
from chunkseal.stream.session import Mode


ENV_PASSWORD = "CHUNKSEAL_PASSWORD"
ENV_BUFFER_SIZE = "CHUNKSEAL_BUFFER_SIZE"
ENV_LOG_LEVEL = "CHUNKSEAL_LOG_LEVEL"


@dataclass
class AppConfig:
    """Everything one command-line run needs."""

    mode: Optional[Mode]
    password: Optional[bytearray]
    in_path: str = "-"
    out_path: str = "-"
    buffer_size: int = DEFAULT_BUFFER_SIZE
    log_level: int = logging.WARNING
    inspect: bool = False


def resolve_log_level(verbose: int = 0, quiet: bool = False, environ: Optional[Mapping[str, str]] = None) -> int:
    environ = os.environ if environ is None else environ
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    name = environ.get(ENV_LOG_LEVEL)
    if name:
        level = logging.getLevelName(name.strip().upper())
        if isinstance(level, int):
            return level
    return logging.WARNING


def resolve_buffer_size(flag: Optional[int], environ: Mapping[str, str]) -> int:
    if flag is not None:
        return clamp_buffer_size(flag)
    raw = environ.get(ENV_BUFFER_SIZE)
    if not raw:
        return DEFAULT_BUFFER_SIZE
    try:
        return clamp_buffer_size(int(raw))
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_BUFFER_SIZE} must be an integer, got {raw!r}") from exc


def prompt_password(
    mode: Mode,
    prompt: Callable[[str], str] = getpass.getpass,
    confirm: Optional[bool] = None,
) -> bytearray:
    # Confirm only when encrypting interactively; a typo there is unrecoverable.
    if confirm is None:
        confirm = mode is Mode.ENCRYPT and sys.stdin.isatty()
    first = prompt("Password: ")
    if confirm and prompt("Confirm password: ") != first:
        raise ConfigurationError("passwords do not match")
    return to_secret_buffer(first)


def build_config(
    args,
    environ: Optional[Mapping[str, str]] = None,
    prompt: Callable[[str], str] = getpass.getpass,
) -> AppConfig:
    """Turn parsed arguments into an :class:`AppConfig`.

    No password is requested in ``--inspect`` mode since nothing is decrypted.
    """
    environ = os.environ if environ is None else environ
    mode = Mode(args.mode) if args.mode else None

    password = None
    if not args.inspect:
        if args.password is not None:
            password = to_secret_buffer(args.password)
        elif environ.get(ENV_PASSWORD):
            password = to_secret_buffer(environ[ENV_PASSWORD])
        else:
            password = prompt_password(mode, prompt=prompt)

    return AppConfig(
        mode=mode,
        password=password,
        in_path=args.in_path,
        out_path=args.out_path,
        buffer_size=resolve_buffer_size(args.buffer_size, environ),
        log_level=resolve_log_level(args.verbose, args.quiet, environ),
        inspect=args.inspect,
    )
