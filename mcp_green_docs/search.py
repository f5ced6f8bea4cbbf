# src/mcp_green_docs/search.py
"""Tiered relevance search over component and icon entries.

Each search term is scored against an entry once, taking the best tier it
reaches:

    A  exact name / tag name / short tag name       TIER_WEIGHTS.EXACT
    B  prefix of one of those                       TIER_WEIGHTS.PREFIX
    C  substring of name, tag name or class name    TIER_WEIGHTS.NAME_SUBSTRING
    D  substring of the description                 TIER_WEIGHTS.DESCRIPTION

Results are ordered by the number of matched terms, then total score, then
exact matches, then corpus order (components before icons).
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union

from .constants import ICON_TAG_PREFIX, SEARCH_CONFIG, TAG_PREFIX, TIER_WEIGHTS
from .models import ComponentEntry, IconEntry, SearchResult

Entry = Union[ComponentEntry, IconEntry]


class UriBuilder(Protocol):
    """Builds the resource URI of one document of an entry."""

    def __call__(self, item: Entry, doc_type: str) -> str: ...


def _strip_tag_prefix(tag: str) -> str:
    for prefix in (ICON_TAG_PREFIX, TAG_PREFIX):
        if tag.startswith(prefix):
            return tag[len(prefix):]
    return tag


def score_term(item: Entry, term: str) -> Tuple[int, bool]:
    """Return ``(score, exact)`` for a single lowercased term."""
    if not term:
        return 0, False
    name = item.name.lower()
    tag = item.tag_name.lower()
    keys = (name, tag, _strip_tag_prefix(tag))

    if term in keys:
        return TIER_WEIGHTS.EXACT, True
    if any(k.startswith(term) for k in keys):
        return TIER_WEIGHTS.PREFIX, False
    if term in name or term in tag or term in item.class_name.lower():
        return TIER_WEIGHTS.NAME_SUBSTRING, False
    if term in item.description.lower():
        return TIER_WEIGHTS.DESCRIPTION, False
    return 0, False


def score_item(item: Entry, terms: Sequence[str]) -> Tuple[int, int, bool]:
    """Return ``(total score, matched term count, any exact match)``."""
    total = 0
    matched = 0
    exact = False
    for term in terms:
        s, is_exact = score_term(item, term)
        if s > 0:
            total += s
            matched += 1
            exact = exact or is_exact
    return total, matched, exact


def _clamp_max_results(max_results: int) -> int:
    return max(SEARCH_CONFIG.MIN_RESULTS, min(SEARCH_CONFIG.MAX_RESULTS, int(max_results)))


def _to_result(item: Entry, uri_builder: UriBuilder, **ranking: object) -> SearchResult:
    uris: Dict[str, str] = {doc_type: uri_builder(item, doc_type) for doc_type in item.files}
    return SearchResult(
        name=item.name,
        tag_name=item.tag_name,
        class_name=item.class_name,
        category=item.category,
        description=item.description,
        resource_uris=uris,
        **ranking,
    )


def perform_search(
    components: Sequence[ComponentEntry],
    icons: Sequence[IconEntry],
    query: str,
    search_terms: Sequence[str],
    regex_pattern: Optional[re.Pattern[str]],
    match_all: bool,
    split_terms: bool,
    max_results: int,
    uri_builder: UriBuilder,
) -> List[SearchResult]:
    limit = _clamp_max_results(max_results)
    candidates: List[Entry] = [*components, *icons]

    if regex_pattern is not None:
        hits = [item for item in candidates if regex_pattern.search(item.tag_name)]
        return [_to_result(item, uri_builder) for item in hits[:limit]]

    terms = [t for t in search_terms if t]
    if not terms and not split_terms:
        # unsplit queries are scored as one whole term
        terms = [t for t in [query.strip().lower()] if t]
    if not terms:
        return []

    ranked: List[Tuple[Tuple[int, int, int, int], Entry, int, int, bool]] = []
    for position, item in enumerate(candidates):
        total, matched, exact = score_item(item, terms)
        if matched == 0:
            continue
        if match_all and matched < len(terms):
            continue
        key = (-matched, -total, 0 if exact else 1, position)
        ranked.append((key, item, total, matched, exact))

    ranked.sort(key=lambda r: r[0])
    return [
        _to_result(item, uri_builder, score=total, matched_terms=matched, exact_match=exact)
        for _, item, total, matched, exact in ranked[:limit]
    ]
