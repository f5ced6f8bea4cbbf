# src/mcp_green_docs/utils.py
"""Shared markdown and naming helpers used by the assembler, handlers and CLI."""
from __future__ import annotations

import re

# ---- Regex patterns for markdown cleanup ----
# without re.M the caret only anchors at the start of the document
LEADING_TITLE_PATTERN = re.compile(r"^#\s+.*?\n")
CLASS_LINE_PATTERN = re.compile(r"\*\*Class\*\*:.*?\n")
TAG_LINE_PATTERN = re.compile(r"\*\*Tag\*\*:.*?\n")

# ---- MCP -> CLI wording ----
MCP_SERVER_PATTERN = re.compile(r"\bMCP server\b", re.IGNORECASE)
MCP_WORD_PATTERN = re.compile(r"\bMCP\b")


def capitalize(value: str) -> str:
    """Upper-case the first character only: ``web-component`` -> ``Web-component``."""
    return value[:1].upper() + value[1:]


def strip_leading_title(markdown: str) -> str:
    """Drop a leading ``# Title`` line; the assembler writes its own heading."""
    return LEADING_TITLE_PATTERN.sub("", markdown, count=1)


def strip_api_header(markdown: str) -> str:
    """
    Remove the title and the class/tag lines from an API document.

    What remains is the Properties / Events / Slots / Methods body.
    """
    text = strip_leading_title(markdown)
    text = CLASS_LINE_PATTERN.sub("", text, count=1)
    text = TAG_LINE_PATTERN.sub("", text, count=1)
    return text.strip()


def to_cli_wording(text: str) -> str:
    """Rewrite references to the MCP server for terminal users."""
    text = MCP_SERVER_PATTERN.sub("Context CLI", text)
    return MCP_WORD_PATTERN.sub("CLI", text)
