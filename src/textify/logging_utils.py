"""Logging setup for the textify command-line entry point.

Library modules only create module loggers (``logging.getLogger(__name__)``)
and never install handlers; the CLI calls :func:`configure_logging` once to
route those records to stderr and, optionally, a log file.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "textify"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    # getLevelName maps a registered name back to its number
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Route textify log records to stderr and an optional file.

    Handlers already installed by an earlier call are replaced, so the
    function can be called repeatedly (e.g. once per CLI invocation in tests).

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"DEBUG"``.
        Unknown names fall back to INFO.
    log_file : str, optional
        Also append records to this file. A file that cannot be opened is
        reported as a warning and otherwise ignored.
    trace_mode : bool, default False
        Timestamped records with logger name and line number, for following
        renderer creation and table passes.

    Returns
    -------
    logging.Logger
        The configured ``textify`` package logger.

    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt=_TRACE_DATE_FORMAT if trace_mode else None,
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if file_error is not None:
        logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        logger.info("Logging to file: %s", log_file)
    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
