# src/mcp_green_docs/handlers.py
"""Operations shared by the MCP server and the context CLI.

Each handler validates its raw input, loads what it needs from the corpus,
applies the search / filter / assembly logic and returns a uniform
``CallToolResult`` holding a single text block. Errors from ``errors`` are
raised, never turned into responses here.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from mcp.types import CallToolResult, TextContent

from .assembler import assemble_component_docs
from .config import CorpusSettings
from .constants import ENTRY_RESOURCE_CATEGORIES, INSTRUCTIONS_URI, PATHS, SEARCH_CONFIG
from .errors import NotFoundError
from .logger import logger
from .models import GuideListResponse, GuideSummary, SearchResponse
from .query import parse_search_query
from .resources import (
    build_entry_uri,
    build_resource_uri,
    find_component,
    find_icon,
    load_components_index,
    load_global_index,
    load_icons_index,
    parse_resource_uri,
    read_mcp_file,
    resource_file_path,
)
from .search import perform_search
from .validation import (
    validate_get_component_docs_input,
    validate_get_guide_input,
    validate_list_guides_input,
    validate_search_components_input,
)

HandlerResponse = CallToolResult


def text_response(text: str) -> HandlerResponse:
    return CallToolResult(content=[TextContent(type="text", text=text)])


def primary_text(result: HandlerResponse) -> str:
    """Return the first text block of a handler response."""
    for block in result.content:
        if isinstance(block, TextContent):
            return block.text
    raise ValueError("Tool response did not include a text content block")


async def _none() -> None:
    return None


async def handle_search_components(
    raw: Any, settings: Optional[CorpusSettings] = None
) -> HandlerResponse:
    settings = settings or CorpusSettings()
    params = validate_search_components_input(raw)

    # only read the indexes the category needs
    want_components = params.category in ("component", "all")
    want_icons = params.category in ("icon", "all")
    components_index, icons_index = await asyncio.gather(
        load_components_index(settings) if want_components else _none(),
        load_icons_index(settings) if want_icons else _none(),
    )
    components = components_index.components if components_index else []
    icons = icons_index.icons if icons_index else []

    search_terms, regex_pattern = parse_search_query(
        params.query, params.split_terms, params.use_regex
    )
    if not params.use_regex and not params.query.strip():
        search_terms = [SEARCH_CONFIG.BROAD_TERM]

    results = perform_search(
        components,
        icons,
        params.query,
        search_terms,
        regex_pattern,
        params.match_all,
        params.split_terms,
        params.max_results,
        build_entry_uri,
    )
    logger.debug("search %r -> %d results", params.query, len(results))

    response = SearchResponse(query=params.query, result_count=len(results), results=results)
    return text_response(response.model_dump_json(by_alias=True, indent=2))


async def handle_get_component_docs(
    raw: Any, settings: Optional[CorpusSettings] = None
) -> HandlerResponse:
    settings = settings or CorpusSettings()
    params = validate_get_component_docs_input(raw)

    components_index, icons_index = await asyncio.gather(
        load_components_index(settings),
        load_icons_index(settings),
    )
    if components_index is None or icons_index is None:
        raise NotFoundError("Failed to load component indexes", "index", "components/icons")

    # components win over icons with the same short name
    found = find_component(params.component_name, components_index.components) or find_icon(
        params.component_name, icons_index.icons
    )
    if found is None:
        raise NotFoundError(
            f"Component not found: {params.component_name}. "
            "Try using the search_components tool to find available components.",
            "component",
            params.component_name,
        )

    text = await assemble_component_docs(
        found,
        params.framework,
        params.include_guidelines,
        params.include_instructions,
        settings,
    )
    return text_response(text)


async def handle_list_guides(
    raw: Any = None, settings: Optional[CorpusSettings] = None
) -> HandlerResponse:
    settings = settings or CorpusSettings()
    params = validate_list_guides_input(raw)
    category = params.category or "all"

    global_index = await load_global_index(settings)
    if global_index is None:
        raise NotFoundError("Failed to load global index", "index", "global")

    guides = global_index.guides
    if category != "all":
        guides = [g for g in guides if g.category == category]
    if params.framework and params.framework != "all":
        guides = [g for g in guides if params.framework in g.tags]

    summaries = [
        GuideSummary(
            title=g.title,
            category=g.category,
            description=g.description,
            tags=list(g.tags),
            resource_uri=build_resource_uri(g.resource_category, g.name),
        )
        for g in guides
    ]
    response = GuideListResponse(guide_count=len(summaries), guides=summaries)
    return text_response(response.model_dump_json(by_alias=True, indent=2))


async def handle_get_guide(raw: Any, settings: Optional[CorpusSettings] = None) -> HandlerResponse:
    settings = settings or CorpusSettings()
    params = validate_get_guide_input(raw)

    global_index = await load_global_index(settings)
    if global_index is None:
        raise NotFoundError("Failed to load global index", "index", "global")

    guide = next((g for g in global_index.guides if g.name == params.name), None)
    if guide is None:
        raise NotFoundError(
            f"Guide not found: {params.name}. Use list_guides to see available guides.",
            "guide",
            params.name,
        )

    content = await read_mcp_file(guide.path, settings)
    if content is None:
        raise NotFoundError(f"Guide file not found: {guide.path}", "file", guide.path)

    return text_response(f"# {guide.title}\n\n{content}")


async def handle_get_instructions(settings: Optional[CorpusSettings] = None) -> HandlerResponse:
    settings = settings or CorpusSettings()

    global_index = await load_global_index(settings)
    if global_index is None:
        raise NotFoundError("Failed to load global index", "index", "global")
    if not global_index.instructions:
        raise NotFoundError(
            "Instructions not available. The MCP may not have been generated with instructions support.",
            "file",
            PATHS.INSTRUCTIONS_FILE,
        )

    content = await read_mcp_file(PATHS.INSTRUCTIONS_FILE, settings)
    if content is None:
        raise NotFoundError("Instructions file not found", "file", PATHS.INSTRUCTIONS_FILE)
    return text_response(content)


async def handle_resolve_uri(uri: str, settings: Optional[CorpusSettings] = None) -> HandlerResponse:
    """
    Return the raw content behind a green:// resource URI.

    Supported forms:
        green://components/{name}/{docType}
        green://icons/{name}/{docType}
        green://guides/{name}
        green://concepts/{name}
        green://instructions
    """
    settings = settings or CorpusSettings()

    if uri.strip() == INSTRUCTIONS_URI:
        content = await read_mcp_file(PATHS.INSTRUCTIONS_FILE, settings)
        if content is None:
            raise NotFoundError("Instructions file not found", "file", PATHS.INSTRUCTIONS_FILE)
        return text_response(content)

    parts = parse_resource_uri(uri)
    if parts is None:
        raise NotFoundError(f"Invalid resource URI format: {uri}", "uri", uri)

    if parts.category in ENTRY_RESOURCE_CATEGORIES and not parts.doc_type:
        raise NotFoundError(
            f"Document type required for {parts.category} URIs "
            f"(e.g. {build_resource_uri(parts.category, parts.name, 'api')})",
            "docType",
            uri,
        )

    file_path = resource_file_path(parts)
    content = await read_mcp_file(file_path, settings)
    if content is None:
        raise NotFoundError(f"Resource not found: {uri}", "file", file_path)
    return text_response(content)
