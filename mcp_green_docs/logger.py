# src/mcp_green_docs/logger.py
from __future__ import annotations

import logging
import sys

# stdout carries the MCP stdio stream and CLI output; logs only ever go to stderr
logger = logging.getLogger("mcp_green_docs")


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a single stderr handler to the package logger."""
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
