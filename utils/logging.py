"""Centralized logging setup for the comparison engine."""
from __future__ import annotations

import logging
import sys
from typing import IO, List, Optional, Union


_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

LOGGER_NAME = "docdiff"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    logfile: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure the root logger for applications embedding the engine.

    The engine itself only emits records on the ``docdiff`` logger; calling
    this is left to the surrounding application.

    Args:
        level: Logging level as an int or a level name such as ``"DEBUG"``
        logfile: Optional path of a file receiving the same records
        stream: Console stream, defaults to stdout
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if logfile:
        handlers.append(logging.FileHandler(logfile))

    logging.basicConfig(level=level, format=_LOG_FORMAT, handlers=handlers, force=True)


logger = logging.getLogger(LOGGER_NAME)
