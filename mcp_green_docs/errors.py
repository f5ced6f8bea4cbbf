# src/mcp_green_docs/errors.py
"""Error taxonomy shared by the handlers, the MCP server and the CLI.

Nothing in this package retries: the corpus is a static set of local files,
so every failure is either the caller's fault (``ValidationError`` and its
``RegexError`` refinement) or a resource that is simply absent
(``NotFoundError``). Errors propagate to the boundary, which formats them.
"""
from __future__ import annotations

from typing import Optional

from .logger import logger


class McpError(Exception):
    """Base class for errors surfaced to MCP clients and CLI users."""

    code = "MCP_ERROR"

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(McpError):
    """Malformed, missing or out-of-range input."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        constraint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.constraint = constraint


class RegexError(ValidationError):
    """A regex query that is too long, catastrophic, or does not compile.

    ``reason`` is one of ``too_long``, ``catastrophic`` or ``invalid``.
    """

    code = "REGEX_ERROR"

    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message, field="query", constraint=reason)
        self.reason = reason


class NotFoundError(McpError):
    """A component, guide, index, URI or file that does not exist."""

    code = "NOT_FOUND"

    def __init__(self, message: str, resource_type: str, identifier: str) -> None:
        super().__init__(message)
        self.resource_type = resource_type
        self.identifier = identifier


def log_error(error: BaseException, context: str) -> None:
    if isinstance(error, McpError):
        logger.warning("%s: [%s] %s", context, error.code, error.message)
    else:
        logger.error("%s: unexpected error: %s", context, error, exc_info=error)


def format_error_message(error: BaseException) -> str:
    if isinstance(error, McpError):
        return f"Error [{error.code}]: {error.message}"
    return f"Error: {error}"
