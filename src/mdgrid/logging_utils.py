"""Logging setup for the mdgrid command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mdgrid"

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _console_handler(rich_output: bool, trace_mode: bool) -> logging.Handler:
    if rich_output:
        from rich.console import Console
        from rich.logging import RichHandler

        # RichHandler renders its own time and level columns
        return RichHandler(console=Console(stderr=True), show_path=trace_mode, markup=False)

    handler = logging.StreamHandler(sys.stderr)
    if trace_mode:
        handler.setFormatter(logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    rich_output: bool = False,
) -> logging.Logger:
    """Replace the root handlers with mdgrid's console (and optional file) handler.

    Parameters
    ----------
    log_level : int | str
        Level number or name such as ``"DEBUG"``; unknown names mean INFO.
    log_file : str, optional
        Also append records to this file, always in the trace format.
    trace_mode : bool, default False
        Prefix console records with timestamp and logger name.
    rich_output : bool, default False
        Use ``rich.logging.RichHandler`` for the console.

    Returns
    -------
    logging.Logger
        The ``mdgrid`` logger.

    """
    level = _resolve_level(log_level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    console = _console_handler(rich_output, trace_mode)
    console.setLevel(level)
    root.addHandler(console)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(TRACE_FORMAT))
            root.addHandler(file_handler)
            root.info("Logging to file: %s", log_file)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    return package_logger
