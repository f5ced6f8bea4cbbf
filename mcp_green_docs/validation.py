# src/mcp_green_docs/validation.py
"""Input schemas for every operation.

The ``validate_*`` functions take whatever a client sent (camelCase wire
names or snake_case), apply defaults, and either return a typed model or
raise ``errors.ValidationError`` naming the offending field.
"""
from __future__ import annotations

import re
from typing import Any, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .constants import FRAMEWORK_ALIASES, SEARCH_CONFIG
from .errors import ValidationError

InputT = TypeVar("InputT", bound=BaseModel)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9-]")


def sanitize_component_name(value: str) -> str:
    """Reduce a name to letters, digits and hyphens before it touches a path.

    ``../../etc/passwd`` -> ``etcpasswd``, ``my_component`` -> ``mycomponent``.
    """
    cleaned = value.replace("..", "").replace("/", "").replace("\\", "")
    return _UNSAFE_NAME_CHARS.sub("", cleaned)


def normalize_docs_framework(value: str) -> Optional[str]:
    """Map a framework name or alias (``web``, ``webcomponent``...) to its canonical form."""
    return FRAMEWORK_ALIASES.get(value.strip().lower())


# ---- schemas ----
class _Input(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class SearchComponentsInput(_Input):
    query: str = Field(min_length=1)
    category: Literal["component", "icon", "all"] = "all"
    split_terms: bool = Field(default=True, alias="splitTerms")
    match_all: bool = Field(default=False, alias="matchAll")
    use_regex: bool = Field(default=False, alias="useRegex")
    max_results: int = Field(
        default=SEARCH_CONFIG.DEFAULT_MAX_RESULTS,
        ge=SEARCH_CONFIG.MIN_RESULTS,
        le=SEARCH_CONFIG.MAX_RESULTS,
        alias="maxResults",
    )


class GetComponentDocsInput(_Input):
    component_name: str = Field(min_length=1, alias="componentName")
    framework: Literal["angular", "react", "web-component"]
    include_guidelines: bool = Field(default=True, alias="includeGuidelines")
    include_instructions: bool = Field(default=True, alias="includeInstructions")

    @field_validator("framework", mode="before")
    @classmethod
    def _normalize_framework(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_docs_framework(v) or v
        return v

    @field_validator("component_name")
    @classmethod
    def _sanitize_name(cls, v: str) -> str:
        cleaned = sanitize_component_name(v)
        if not cleaned:
            raise ValueError("must contain letters, digits or hyphens")
        return cleaned


class GetGuideInput(_Input):
    name: str = Field(min_length=1)


class ListGuidesInput(_Input):
    # left unset when absent; the handler treats None as "all"
    category: Optional[
        Literal["framework-setup", "getting-started", "concepts", "troubleshooting", "migration", "all"]
    ] = None
    framework: Optional[Literal["angular", "react", "all"]] = None


# ---- validators ----
def _validate(model: Type[InputT], raw: Any) -> InputT:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValidationError("Input must be an object", constraint="type")
    try:
        return model.model_validate(dict(raw))
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"]) or None
        raise ValidationError(
            f"Invalid input for '{field}': {err['msg']}",
            field=field,
            constraint=err["type"],
        ) from e


def validate_search_components_input(raw: Any) -> SearchComponentsInput:
    return _validate(SearchComponentsInput, raw)


def validate_get_component_docs_input(raw: Any) -> GetComponentDocsInput:
    return _validate(GetComponentDocsInput, raw)


def validate_get_guide_input(raw: Any) -> GetGuideInput:
    return _validate(GetGuideInput, raw)


def validate_list_guides_input(raw: Any) -> ListGuidesInput:
    return _validate(ListGuidesInput, raw)
