from __future__ import annotations

import logging
import sys
from typing import Optional

_LOGGER: Optional[logging.Logger] = None

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _BelowError(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def get_logger() -> logging.Logger:
    """
    Routine lines go to stdout, ERROR and above to stderr,
    so a failed start is visible on the diagnostic stream.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    logger = logging.getLogger("claude_example")
    logger.setLevel(logging.INFO)

    if not logger.handlers:
        fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

        out = logging.StreamHandler(sys.stdout)
        out.addFilter(_BelowError())
        out.setFormatter(fmt)
        logger.addHandler(out)

        err = logging.StreamHandler(sys.stderr)
        err.setLevel(logging.ERROR)
        err.setFormatter(fmt)
        logger.addHandler(err)

    logger.propagate = False
    _LOGGER = logger
    return logger


def set_level(level: str) -> None:
    # "trace" is uvicorn-only; stdlib has no such level, so keep the current one
    lvl = logging.getLevelName((level or "INFO").upper())
    if isinstance(lvl, int):
        get_logger().setLevel(lvl)


def log_event(src: str, level: str, event: str, detail: str) -> None:
    """
    One line per event:
      src | event | detail
    """
    logger = get_logger()

    lvl = (level or "INFO").upper()
    if lvl == "ERROR":
        logger.error("%s | %s | %s", src, event, detail)
    elif lvl == "WARN" or lvl == "WARNING":
        logger.warning("%s | %s | %s", src, event, detail)
    else:
        logger.info("%s | %s | %s", src, event, detail)
