from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level: <8}</level> <cyan>{name}</cyan> - <level>{message}</level>"


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr at ``level``.

    stdout carries the MCP stdio transport and must stay free of log lines.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT, backtrace=False, diagnose=False)


__all__ = ["configure_logging"]
