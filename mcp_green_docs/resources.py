# src/mcp_green_docs/resources.py
"""Corpus index loading, entry lookup, resource URIs and file reads.

Every read goes through ``asyncio.to_thread`` so independent indexes can be
loaded concurrently with ``asyncio.gather``. Missing or unparsable files are
reported as ``None``; callers decide whether that is fatal.
"""
from __future__ import annotations

import asyncio
import pathlib
import re
from typing import Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import CorpusSettings
from .constants import (
    DOC_TYPES,
    ENTRY_RESOURCE_CATEGORIES,
    GUIDE_RESOURCE_CATEGORIES,
    ICON_TAG_PREFIX,
    RESOURCE_CATEGORIES,
    TAG_PREFIX,
    URI_PREFIX,
    URI_SCHEME,
)
from .logger import logger
from .models import (
    ComponentEntry,
    ComponentsIndex,
    GlobalIndex,
    IconEntry,
    IconsIndex,
    ResourceUriParts,
)

IndexT = TypeVar("IndexT", bound=BaseModel)

_URI_PATTERN = re.compile(
    rf"^{URI_SCHEME}://(components|icons|guides|concepts)/([^/\x00-\x1f]+)(?:/([^/\x00-\x1f]+))?$"
)


# ---- file access ----
def _is_within(root: pathlib.Path, path: pathlib.Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def _read_text_sync(path: pathlib.Path) -> Optional[str]:
    if not path.is_file():
        return None
    try:
        # undecodable bytes become U+FFFD instead of failing the read
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


async def _read_text(path: pathlib.Path) -> Optional[str]:
    return await asyncio.to_thread(_read_text_sync, path)


async def read_mcp_file(relative_path: str, settings: CorpusSettings) -> Optional[str]:
    """Read a corpus-relative markdown file whole, or ``None`` if it is absent."""
    root = settings.corpus_root
    try:
        path = (root / relative_path.lstrip("/")).resolve()
    except (OSError, ValueError) as e:
        # e.g. an embedded NUL in a client-supplied name
        logger.warning("Unusable corpus path %r: %s", relative_path, e)
        return None
    if not _is_within(root, path):
        logger.warning("Refusing to read outside the corpus: %s", relative_path)
        return None
    return await _read_text(path)


# ---- indexes ----
async def _load_index(path: pathlib.Path, model: Type[IndexT]) -> Optional[IndexT]:
    raw = await _read_text(path)
    if raw is None:
        logger.warning("Index not found: %s", path)
        return None
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as e:
        logger.warning("Index %s could not be parsed: %s", path, e.errors()[0]["msg"])
        return None


async def load_components_index(settings: CorpusSettings) -> Optional[ComponentsIndex]:
    return await _load_index(settings.components_index_path, ComponentsIndex)


async def load_icons_index(settings: CorpusSettings) -> Optional[IconsIndex]:
    return await _load_index(settings.icons_index_path, IconsIndex)


async def load_global_index(settings: CorpusSettings) -> Optional[GlobalIndex]:
    return await _load_index(settings.global_index_path, GlobalIndex)


# ---- lookups ----
def find_component(name: str, components: Sequence[ComponentEntry]) -> Optional[ComponentEntry]:
    """Find by full tag name (``gds-button``) or short name (``button``), ignoring case."""
    needle = name.strip().lower()
    for component in components:
        tag = component.tag_name.lower()
        if tag == needle or tag == TAG_PREFIX + needle:
            return component
    return None


def find_icon(name: str, icons: Sequence[IconEntry]) -> Optional[IconEntry]:
    """Like ``find_component``; also accepts ``arrow`` for ``gds-icon-arrow``."""
    needle = name.strip().lower()
    for icon in icons:
        tag = icon.tag_name.lower()
        if tag in (needle, TAG_PREFIX + needle, ICON_TAG_PREFIX + needle):
            return icon
    return None


# ---- URIs ----
def build_resource_uri(category: str, name: str, doc_type: Optional[str] = None) -> str:
    if category not in RESOURCE_CATEGORIES:
        raise ValueError(f"Unknown resource category: {category}")
    uri = f"{URI_PREFIX}{category}/{name}"
    if doc_type:
        uri += f"/{doc_type}"
    return uri


def parse_resource_uri(uri: str) -> Optional[ResourceUriParts]:
    """Inverse of ``build_resource_uri``; ``None`` for anything off-grammar."""
    if not isinstance(uri, str):
        return None
    m = _URI_PATTERN.match(uri.strip())
    if not m:
        return None
    category, name, doc_type = m.groups()
    if category in GUIDE_RESOURCE_CATEGORIES and doc_type is not None:
        return None
    if category in ENTRY_RESOURCE_CATEGORIES and doc_type is not None and doc_type not in DOC_TYPES.ALL:
        return None
    return ResourceUriParts(category=category, name=name, doc_type=doc_type)


def build_entry_uri(item: Union[ComponentEntry, IconEntry], doc_type: str) -> str:
    """Default ``UriBuilder`` for search results."""
    category = "components" if item.category == "component" else "icons"
    return build_resource_uri(category, item.short_name, doc_type)


def resource_file_path(parts: ResourceUriParts) -> str:
    """Corpus-relative file behind a parsed URI (components/icons need a doc type)."""
    if parts.category in ENTRY_RESOURCE_CATEGORIES:
        return f"{parts.name}/{parts.doc_type}.md"
    return f"{parts.category}/{parts.name}.md"
