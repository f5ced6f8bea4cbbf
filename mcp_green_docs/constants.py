# src/mcp_green_docs/constants.py
"""Fixed vocabulary shared by the search engine, resolver, handlers and CLI."""
from __future__ import annotations

from typing import Dict, Tuple

# ---- resource URIs ----
URI_SCHEME = "green"
URI_PREFIX = f"{URI_SCHEME}://"
INSTRUCTIONS_URI = f"{URI_PREFIX}instructions"

RESOURCE_CATEGORIES: Tuple[str, ...] = ("components", "icons", "guides", "concepts")
ENTRY_RESOURCE_CATEGORIES: Tuple[str, ...] = ("components", "icons")
GUIDE_RESOURCE_CATEGORIES: Tuple[str, ...] = ("guides", "concepts")


class DOC_TYPES:
    API = "api"
    ANGULAR = "angular"
    REACT = "react"
    GUIDELINES = "guidelines"
    INSTRUCTIONS = "instructions"

    ALL: Tuple[str, ...] = ("api", "angular", "react", "guidelines", "instructions")


# ---- corpus layout ----
class PATHS:
    COMPONENTS_INDEX = "components.json"
    ICONS_INDEX = "icons.json"
    GLOBAL_INDEX = "index.json"
    INSTRUCTIONS_FILE = "INSTRUCTIONS.md"


TAG_PREFIX = "gds-"
ICON_TAG_PREFIX = "gds-icon-"

# ---- enums ----
CATEGORIES: Tuple[str, ...] = ("component", "icon", "all")
FRAMEWORKS: Tuple[str, ...] = ("angular", "react", "web-component")
GUIDE_CATEGORIES: Tuple[str, ...] = (
    "framework-setup",
    "getting-started",
    "concepts",
    "troubleshooting",
    "migration",
    "all",
)
GUIDE_FRAMEWORKS: Tuple[str, ...] = ("angular", "react", "all")

FRAMEWORK_ALIASES: Dict[str, str] = {
    "angular": "angular",
    "react": "react",
    "web-component": "web-component",
    "web-components": "web-component",
    "webcomponent": "web-component",
    "webcomponents": "web-component",
    "web": "web-component",
}


# ---- search ----
class SEARCH_CONFIG:
    DEFAULT_MAX_RESULTS = 20
    MIN_RESULTS = 1
    MAX_RESULTS = 100
    MAX_REGEX_LENGTH = 100
    # matches every tag name; used when a term query is blank
    BROAD_TERM = "gds"


class TIER_WEIGHTS:
    EXACT = 100
    PREFIX = 50
    NAME_SUBSTRING = 25
    DESCRIPTION = 10
