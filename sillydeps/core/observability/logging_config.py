"""
Logging configuration, set up once by the CLI entrypoint.

Every module that does ``logger = logging.getLogger(__name__)``
inherits this config.

Console level, in precedence order:
    --debug  >  --verbose  >  --quiet  >  SILLYDEPS_LOG_LEVEL  >  WARNING

SILLYDEPS_LOG_FILE adds a file handler (level from
SILLYDEPS_LOG_FILE_LEVEL, else the console level).

Reports go to stdout and logs to stderr, so ``scan --json`` output stays
parseable whatever the level.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "SILLYDEPS_LOG_LEVEL"
ENV_FILE = "SILLYDEPS_LOG_FILE"
ENV_FILE_LEVEL = "SILLYDEPS_LOG_FILE_LEVEL"

# Console formats, most detailed first: (max level, format, datefmt)
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_FMT_MINIMAL = "%(levelname)s: %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second setup replaces only those
_HANDLER_TAG = "_sillydeps_handler"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def configure_cli_logging(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Set up logging from the global CLI flags and SILLYDEPS_LOG_* variables."""
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (and optional file handler) on the root logger.

    Calling it again swaps the handlers it installed before and leaves
    any others (test capture, embedding applications) in place.
    """
    console_level = _parse_level(level)

    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    _install(root, console)

    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        _install(root, _file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _install(root: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG, True)
    root.addHandler(handler)


def _console_formatter(level: int) -> logging.Formatter:
    for max_level, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= max_level:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_FMT_MINIMAL)


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    return logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
