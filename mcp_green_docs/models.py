# src/mcp_green_docs/models.py
"""Pydantic models for the on-disk corpus indexes and derived search results."""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import TAG_PREFIX


# ---- catalog entries ----
class _CatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str
    tag_name: str = Field(alias="tagName")
    class_name: str = Field(default="", alias="className")
    description: str = ""
    path: str = ""
    files: Tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _stamp_category(cls, data: Any) -> Any:
        # the index an entry is loaded through decides its category
        if isinstance(data, dict):
            expected = cls.model_fields["category"].default
            if data.get("category") != expected:
                data = {**data, "category": expected}
        return data

    @property
    def short_name(self) -> str:
        """Tag name without the ``gds-`` prefix; names the corpus directory."""
        if self.tag_name.startswith(TAG_PREFIX):
            return self.tag_name[len(TAG_PREFIX):]
        return self.tag_name


class ComponentEntry(_CatalogEntry):
    category: Literal["component"] = "component"


class IconEntry(_CatalogEntry):
    category: Literal["icon"] = "icon"


CatalogEntry = Annotated[Union[ComponentEntry, IconEntry], Field(discriminator="category")]


class GuideEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str
    title: str
    category: str
    description: str = ""
    tags: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Guide name as used in URIs: ``guides/angular.md`` -> ``angular``."""
        stem = self.path
        if stem.startswith(("guides/", "concepts/")):
            stem = stem.split("/", 1)[1]
        if stem.endswith(".md"):
            stem = stem[:-3]
        return stem

    @property
    def resource_category(self) -> str:
        return "guides" if self.path.startswith("guides/") else "concepts"


# ---- indexes ----
class ComponentsIndex(BaseModel):
    model_config = ConfigDict(extra="ignore")

    components: List[ComponentEntry] = Field(default_factory=list)


class IconsIndex(BaseModel):
    model_config = ConfigDict(extra="ignore")

    icons: List[IconEntry] = Field(default_factory=list)


class GlobalIndex(BaseModel):
    model_config = ConfigDict(extra="ignore")

    guides: List[GuideEntry] = Field(default_factory=list)
    # truthy when the generator produced INSTRUCTIONS.md
    instructions: Union[bool, str, Dict[str, Any], None] = None


# ---- responses ----
class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    tag_name: str = Field(alias="tagName")
    class_name: str = Field(alias="className")
    category: Literal["component", "icon"]
    description: str
    resource_uris: Dict[str, str] = Field(default_factory=dict, alias="resourceUris")
    # ranking metadata, never serialised
    score: int = Field(default=0, exclude=True)
    matched_terms: int = Field(default=0, exclude=True)
    exact_match: bool = Field(default=False, exclude=True)


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str
    result_count: int = Field(alias="resultCount")
    results: List[SearchResult]


class GuideSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    category: str
    description: str
    tags: List[str]
    resource_uri: str = Field(alias="resourceUri")


class GuideListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    guide_count: int = Field(alias="guideCount")
    guides: List[GuideSummary]


class ResourceUriParts(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    name: str
    doc_type: Optional[str] = None
