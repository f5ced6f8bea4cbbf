# src/mcp_green_docs/query.py
"""Turn a raw query string into search terms or a vetted, compiled regex."""
from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from .constants import SEARCH_CONFIG
from .errors import RegexError

_TERM_SPLIT = re.compile(r"[\s,]+")

# Repeating quantifiers; ``?`` is not one, so ``(icon-)?`` passes.
_QUANTIFIER = re.compile(r"[+*]|\{\d+(?:,\d*)?\}")


class ParsedQuery(NamedTuple):
    search_terms: List[str]
    regex_pattern: Optional[re.Pattern[str]]


def _strip_delimiters(pattern: str) -> str:
    """Accept JavaScript-style ``/pattern/`` queries."""
    if len(pattern) >= 2 and pattern.startswith("/") and pattern.endswith("/"):
        return pattern[1:-1]
    return pattern


def _skip_class(pattern: str, i: int) -> int:
    """Return the index just past the ``[...]`` class opening at ``i``."""
    i += 1
    if pattern.startswith("^", i):
        i += 1
    if pattern.startswith("]", i):
        i += 1
    while i < len(pattern) and pattern[i] != "]":
        i += 2 if pattern[i] == "\\" else 1
    return i + 1


def has_nested_quantifiers(pattern: str) -> bool:
    """True when a quantified group contains a quantifier at any depth.

    Catches ``(a+)+``, ``(a*)*b``, ``(a+){2,}``, ``([a-z]+)*`` as well as
    the same shapes wrapped in further groups: ``((a+))+``, ``((a+)b)*``.
    """
    # one flag per open group: does its body contain a quantifier?
    stack: List[bool] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            i = _skip_class(pattern, i)
            continue
        if ch == "(":
            stack.append(False)
            i += 1
            continue
        if ch == ")" and stack:
            quantified = stack.pop()
            i += 1
            m = _QUANTIFIER.match(pattern, i)
            if m:
                if quantified:
                    return True
                quantified = True
                i = m.end()
            if quantified and stack:
                stack[-1] = True
            continue
        m = _QUANTIFIER.match(pattern, i)
        if m:
            if stack:
                stack[-1] = True
            i = m.end()
            continue
        i += 1
    return False


def compile_search_regex(query: str) -> re.Pattern[str]:
    """Validate and compile a user regex (case-insensitive).

    Raises:
        RegexError: pattern too long, shaped for catastrophic backtracking,
            or not a valid regular expression.
    """
    pattern = _strip_delimiters(query.strip())

    if len(pattern) > SEARCH_CONFIG.MAX_REGEX_LENGTH:
        raise RegexError(
            f"Regex pattern too long ({len(pattern)} characters). "
            f"Maximum length is {SEARCH_CONFIG.MAX_REGEX_LENGTH}.",
            reason="too_long",
        )

    if has_nested_quantifiers(pattern):
        raise RegexError(
            f"Regex pattern '{pattern}' contains nested quantifiers, which can cause "
            "catastrophic backtracking. Simplify the pattern.",
            reason="catastrophic",
        )

    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise RegexError(f"Invalid regular expression '{pattern}': {e}", reason="invalid") from e


def split_search_terms(query: str) -> List[str]:
    return [t.lower() for t in _TERM_SPLIT.split(query.strip()) if t]


def parse_search_query(query: str, split_terms: bool, use_regex: bool) -> ParsedQuery:
    if use_regex:
        return ParsedQuery([], compile_search_regex(query))
    if split_terms:
        return ParsedQuery(split_search_terms(query), None)
    term = query.strip().lower()
    return ParsedQuery([term] if term else [], None)
