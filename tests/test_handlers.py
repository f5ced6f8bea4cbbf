"""Tests for the shared operation handlers and component docs assembly."""

from __future__ import annotations

import json

import pytest

from mcp_green_docs.config import CorpusSettings
from mcp_green_docs.errors import NotFoundError, RegexError, ValidationError
from mcp_green_docs.handlers import (
    handle_get_component_docs,
    handle_get_guide,
    handle_get_instructions,
    handle_list_guides,
    handle_resolve_uri,
    handle_search_components,
    primary_text,
    text_response,
)

from conftest import BUTTON_API, write_corpus


async def search(settings, **raw):
    return json.loads(primary_text(await handle_search_components(raw, settings)))


async def docs(settings, name, framework, **extra):
    raw = {"componentName": name, "framework": framework, **extra}
    return primary_text(await handle_get_component_docs(raw, settings))


async def guides(settings, **raw):
    return json.loads(primary_text(await handle_list_guides(raw, settings)))


def test_text_response_round_trip():
    assert primary_text(text_response("hello")) == "hello"


@pytest.mark.search
class TestSearchHandler:
    """Test the search_components handler."""

    @pytest.mark.asyncio
    async def test_response_shape(self, settings):
        data = await search(settings, query="button")
        assert set(data) == {"query", "resultCount", "results"}
        assert data["query"] == "button"
        assert data["resultCount"] == len(data["results"]) == 1
        result = data["results"][0]
        assert result["tagName"] == "gds-button"
        assert result["resourceUris"]["api"] == "green://components/button/api"
        assert "score" not in result

    @pytest.mark.asyncio
    async def test_multi_term_query(self, settings):
        data = await search(settings, query="dropdown menu")
        assert data["resultCount"] == 1
        assert data["results"][0]["name"] == "Dropdown"

    @pytest.mark.asyncio
    async def test_blank_query_lists_everything(self, settings):
        data = await search(settings, query="   ")
        assert data["resultCount"] == 5

    @pytest.mark.asyncio
    async def test_blank_unsplit_query_lists_everything(self, settings):
        data = await search(settings, query=" ", splitTerms=False, maxResults=3)
        assert data["resultCount"] == 3

    @pytest.mark.asyncio
    async def test_icon_category_only_needs_icons_index(self, settings, corpus_dir):
        (corpus_dir / "components.json").unlink()
        data = await search(settings, query="arrow", category="icon")
        assert [r["tagName"] for r in data["results"]] == ["gds-icon-arrow"]
        assert data["results"][0]["resourceUris"] == {"api": "green://icons/icon-arrow/api"}

    @pytest.mark.asyncio
    async def test_component_category_excludes_icons(self, settings):
        data = await search(settings, query="gds", category="component")
        assert {r["category"] for r in data["results"]} == {"component"}

    @pytest.mark.asyncio
    async def test_missing_indexes_give_empty_results(self, tmp_path):
        data = await search(CorpusSettings(corpus_root=tmp_path), query="button")
        assert data == {"query": "button", "resultCount": 0, "results": []}

    @pytest.mark.asyncio
    async def test_regex_query(self, settings):
        data = await search(settings, query="/^gds-icon-/", useRegex=True)
        assert [r["name"] for r in data["results"]] == ["Arrow", "Check"]

    @pytest.mark.asyncio
    async def test_catastrophic_regex_rejected(self, settings):
        with pytest.raises(RegexError):
            await search(settings, query="(a+)+", useRegex=True)

    @pytest.mark.asyncio
    async def test_snake_case_input_accepted(self, settings):
        data = await search(settings, query="gds", max_results=2)
        assert data["resultCount"] == 2

    @pytest.mark.asyncio
    async def test_empty_query_rejected(self, settings):
        with pytest.raises(ValidationError) as excinfo:
            await search(settings, query="")
        assert excinfo.value.field == "query"

    @pytest.mark.asyncio
    async def test_max_results_range(self, settings):
        with pytest.raises(ValidationError):
            await search(settings, query="gds", maxResults=0)
        with pytest.raises(ValidationError):
            await search(settings, query="gds", maxResults=101)


@pytest.mark.retrieval
class TestComponentDocs:
    """Test get_component_docs assembly."""

    @pytest.mark.asyncio
    async def test_angular_sections_in_order(self, settings):
        text = await docs(settings, "button", "angular")

        assert text.startswith("# gds-button - Angular\n")
        assert "⚠️ **Angular-Specific Documentation**" in text
        assert "The import paths and syntax below are for Angular applications." in text
        assert "GdsButtonComponent" in text
        assert "# Button (Angular)" not in text

        positions = [
            text.index("## Component API Reference"),
            text.index("## Design Guidelines"),
            text.index("## Usage Instructions"),
            text.index("💡 **Using a different framework?**"),
        ]
        assert positions == sorted(positions)

    @pytest.mark.asyncio
    async def test_api_reference_drops_header_lines(self, settings):
        text = await docs(settings, "button", "react")
        assert "The following properties, events, slots, and methods are available:" in text
        assert "## Properties" in text
        assert "**Class**" not in text
        assert "**Tag**" not in text

    @pytest.mark.asyncio
    async def test_hint_lists_other_frameworks(self, settings):
        text = await docs(settings, "button", "react")
        hint = text[text.index("Call this tool again with:"):]
        assert 'framework: "angular"' in hint
        assert 'framework: "web-component"' in hint
        assert 'framework: "react"' not in hint

    @pytest.mark.asyncio
    async def test_web_component_uses_api_doc(self, settings):
        text = await docs(settings, "gds-button", "web-component")
        assert text.startswith("# gds-button - Web-component\n")
        assert "Specific Documentation" not in text
        assert "## Component API Reference" not in text
        assert "**Class**: `GdsButton`" in text
        assert "# Button\n" not in text

    @pytest.mark.asyncio
    async def test_framework_alias(self, settings):
        text = await docs(settings, "button", "web")
        assert text.startswith("# gds-button - Web-component")

    @pytest.mark.asyncio
    async def test_optional_sections_can_be_excluded(self, settings):
        text = await docs(settings, "button", "angular", includeGuidelines=False, includeInstructions=False)
        assert "## Design Guidelines" not in text
        assert "## Usage Instructions" not in text
        assert "## Component API Reference" in text

    @pytest.mark.asyncio
    async def test_missing_optional_file_is_skipped(self, settings):
        # Input advertises guidelines that were never written
        text = await docs(settings, "input", "react")
        assert "## Design Guidelines" not in text
        assert "## Component API Reference" in text
        assert "---\n\n---" not in text

    @pytest.mark.asyncio
    async def test_falls_back_to_icons(self, settings):
        text = await docs(settings, "arrow", "web-component")
        assert text.startswith("# gds-icon-arrow - Web-component")
        assert "**Tag**: `gds-icon-arrow`" in text

    @pytest.mark.asyncio
    async def test_path_characters_are_stripped(self, settings):
        text = await docs(settings, "../button", "angular")
        assert text.startswith("# gds-button - Angular")

    @pytest.mark.asyncio
    async def test_unknown_component(self, settings):
        with pytest.raises(NotFoundError) as excinfo:
            await docs(settings, "nonexistent", "react")
        assert excinfo.value.resource_type == "component"
        assert excinfo.value.identifier == "nonexistent"
        assert "search_components" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_unknown_framework(self, settings):
        with pytest.raises(ValidationError) as excinfo:
            await docs(settings, "button", "vue")
        assert excinfo.value.field == "framework"

    @pytest.mark.asyncio
    async def test_name_that_sanitises_to_nothing(self, settings):
        with pytest.raises(ValidationError):
            await docs(settings, "../../", "react")

    @pytest.mark.asyncio
    async def test_missing_indexes(self, tmp_path):
        with pytest.raises(NotFoundError) as excinfo:
            await docs(CorpusSettings(corpus_root=tmp_path), "button", "react")
        assert excinfo.value.resource_type == "index"


@pytest.mark.retrieval
class TestGuides:
    """Test list_guides and get_guide."""

    @pytest.mark.asyncio
    async def test_lists_all_by_default(self, settings):
        data = await guides(settings)
        assert data["guideCount"] == 5
        assert data["guides"][0]["resourceUri"] == "green://guides/angular"

    @pytest.mark.asyncio
    async def test_filter_by_category(self, settings):
        data = await guides(settings, category="concepts")
        assert data["guideCount"] == 3
        assert {g["category"] for g in data["guides"]} == {"concepts"}

    @pytest.mark.asyncio
    async def test_filter_by_category_and_framework(self, settings):
        data = await guides(settings, category="concepts", framework="angular")
        assert [g["title"] for g in data["guides"]] == ["Angular Forms"]
        assert data["guides"][0]["resourceUri"] == "green://concepts/angular-forms"

    @pytest.mark.asyncio
    async def test_all_is_no_filter(self, settings):
        data = await guides(settings, category="all", framework="all")
        assert data["guideCount"] == 5

    @pytest.mark.asyncio
    async def test_none_input_is_no_filter(self, settings):
        data = json.loads(primary_text(await handle_list_guides(None, settings)))
        assert data["guideCount"] == 5

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, settings):
        with pytest.raises(ValidationError) as excinfo:
            await guides(settings, category="tutorials")
        assert excinfo.value.field == "category"

    @pytest.mark.asyncio
    async def test_get_guide(self, settings):
        text = primary_text(await handle_get_guide({"name": "angular"}, settings))
        assert text == "# Angular\n\nAdd `provideGreen()` to your application config.\n"

    @pytest.mark.asyncio
    async def test_get_concept_by_name(self, settings):
        text = primary_text(await handle_get_guide({"name": "tokens"}, settings))
        assert text.startswith("# Design Tokens\n\n")

    @pytest.mark.asyncio
    async def test_unknown_guide(self, settings):
        with pytest.raises(NotFoundError) as excinfo:
            await handle_get_guide({"name": "nope"}, settings)
        assert excinfo.value.resource_type == "guide"
        assert "list_guides" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_indexed_guide_without_file(self, settings):
        with pytest.raises(NotFoundError) as excinfo:
            await handle_get_guide({"name": "layout"}, settings)
        assert excinfo.value.resource_type == "file"
        assert excinfo.value.identifier == "concepts/layout.md"

    @pytest.mark.asyncio
    async def test_missing_global_index(self, tmp_path):
        with pytest.raises(NotFoundError):
            await handle_list_guides({}, CorpusSettings(corpus_root=tmp_path))


@pytest.mark.retrieval
class TestInstructions:
    """Test get_instructions."""

    @pytest.mark.asyncio
    async def test_returns_file_verbatim(self, settings, corpus_dir):
        text = primary_text(await handle_get_instructions(settings))
        assert text == (corpus_dir / "INSTRUCTIONS.md").read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_not_generated(self, tmp_path):
        root = write_corpus(tmp_path / "corpus", instructions=False)
        with pytest.raises(NotFoundError) as excinfo:
            await handle_get_instructions(CorpusSettings(corpus_root=root))
        assert "Instructions not available" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_flag_set_but_file_missing(self, settings, corpus_dir):
        (corpus_dir / "INSTRUCTIONS.md").unlink()
        with pytest.raises(NotFoundError) as excinfo:
            await handle_get_instructions(settings)
        assert excinfo.value.resource_type == "file"


@pytest.mark.retrieval
class TestResolveUri:
    """Test green:// URI resolution."""

    @pytest.mark.asyncio
    async def test_component_doc(self, settings):
        text = primary_text(await handle_resolve_uri("green://components/button/api", settings))
        assert text == BUTTON_API

    @pytest.mark.asyncio
    async def test_icon_doc(self, settings):
        text = primary_text(await handle_resolve_uri("green://icons/icon-arrow/api", settings))
        assert "gds-icon-arrow" in text

    @pytest.mark.asyncio
    async def test_guide_and_concept(self, settings):
        guide = primary_text(await handle_resolve_uri("green://guides/installing", settings))
        concept = primary_text(await handle_resolve_uri("green://concepts/tokens", settings))
        assert guide == "npm install @sebgroup/green-core\n"
        assert concept.startswith("Tokens are exposed")

    @pytest.mark.asyncio
    async def test_instructions(self, settings):
        text = primary_text(await handle_resolve_uri("green://instructions", settings))
        assert "The MCP server provides documentation." in text

    @pytest.mark.asyncio
    async def test_missing_doc_type(self, settings):
        with pytest.raises(NotFoundError) as excinfo:
            await handle_resolve_uri("green://components/button", settings)
        assert excinfo.value.resource_type == "docType"
        assert "green://components/button/api" in excinfo.value.message

    @pytest.mark.parametrize(
        "uri",
        [
            "green://widgets/button/api",
            "http://components/button/api",
            "green://components/button/pdf",
            "green://guides/a\x00b",
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_uri(self, settings, uri):
        with pytest.raises(NotFoundError) as excinfo:
            await handle_resolve_uri(uri, settings)
        assert excinfo.value.resource_type == "uri"

    @pytest.mark.asyncio
    async def test_missing_file(self, settings):
        with pytest.raises(NotFoundError) as excinfo:
            await handle_resolve_uri("green://components/input/guidelines", settings)
        assert excinfo.value.resource_type == "file"
        assert excinfo.value.identifier == "input/guidelines.md"
