# src/mcp_green_docs/mcp.py
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ResourceError, ToolError

from .config import CorpusSettings
from .constants import INSTRUCTIONS_URI, SEARCH_CONFIG
from .errors import McpError, format_error_message, log_error
from .handlers import (
    HandlerResponse,
    handle_get_component_docs,
    handle_get_guide,
    handle_get_instructions,
    handle_list_guides,
    handle_resolve_uri,
    handle_search_components,
    primary_text,
)
from .logger import configure_logging, logger
from .resources import build_resource_uri, load_components_index, load_global_index, load_icons_index


def _settings() -> CorpusSettings:
    # re-read per call so environment overrides apply without a restart
    return CorpusSettings()


async def _call(tool: str, run: Callable[[], Awaitable[HandlerResponse]]) -> str:
    try:
        result = await run()
    except McpError as e:
        log_error(e, f"handleToolCall:{tool}")
        raise ToolError(format_error_message(e)) from e
    return primary_text(result)


async def _resolve(uri: str) -> str:
    try:
        result = await handle_resolve_uri(uri, _settings())
    except McpError as e:
        log_error(e, f"readResource:{uri}")
        raise ResourceError(format_error_message(e)) from e
    return primary_text(result)


# ---- Startup validation ----
async def _validate_corpus(settings: CorpusSettings) -> Dict[str, Any]:
    """Check that the three corpus indexes exist and parse."""
    components, icons, global_index = await asyncio.gather(
        load_components_index(settings),
        load_icons_index(settings),
        load_global_index(settings),
    )
    return {
        "valid": components is not None and icons is not None and global_index is not None,
        "corpus_root": str(settings.corpus_root),
        "components": len(components.components) if components else None,
        "icons": len(icons.icons) if icons else None,
        "guides": len(global_index.guides) if global_index else None,
        "instructions": bool(global_index and global_index.instructions),
    }


def _log_corpus_status(settings: CorpusSettings) -> None:
    status = asyncio.run(_validate_corpus(settings))
    if status["valid"]:
        logger.info(
            "Corpus ready at %s: %d components, %d icons, %d guides",
            status["corpus_root"],
            status["components"],
            status["icons"],
            status["guides"],
        )
        return

    logger.error("=" * 80)
    logger.error("CORPUS INDEXES NOT FOUND OR UNREADABLE")
    logger.error(f"Corpus root: {status['corpus_root']}")
    logger.error("")
    logger.error("Solutions:")
    logger.error("  - Generate the MCP corpus before starting the server")
    logger.error("  - Or point GDS_MCP_CORPUS_ROOT at an existing corpus directory")
    logger.error("=" * 80)


# ---- MCP server ----
mcp = FastMCP(
    "green-core",
    instructions=(
        "Green Design System documentation. Read get_instructions first, find components "
        "with search_components, then fetch get_component_docs for your framework."
    ),
)


@mcp.tool(name="health_ping", description="Returns simple pong")
def ping() -> str:
    return "pong"


@mcp.tool(name="health_validate", description="Validate that the corpus indexes exist and parse")
async def validate() -> Dict[str, Any]:
    return await _validate_corpus(_settings())


@mcp.tool(
    name="search_components",
    description=(
        "Search for Green Design System components by name, description, or functionality. "
        "Use this when you don't know the exact component name or want to discover available "
        "components. Supports multi-term searches and regex patterns."
    ),
)
async def t_search(
    query: str,
    category: str = "all",  # "component" | "icon" | "all"
    split_terms: bool = True,
    match_all: bool = False,
    use_regex: bool = False,
    max_results: int = SEARCH_CONFIG.DEFAULT_MAX_RESULTS,  # 1-100
) -> str:
    raw = {
        "query": query,
        "category": category,
        "splitTerms": split_terms,
        "matchAll": match_all,
        "useRegex": use_regex,
        "maxResults": max_results,
    }
    return await _call("search_components", lambda: handle_search_components(raw, _settings()))


@mcp.tool(
    name="get_component_docs",
    description=(
        "Get complete documentation for a specific Green component. ALWAYS specify the framework "
        "parameter ('angular', 'react' or 'web-component') to get correct import paths, event "
        "handling syntax, and framework-specific examples."
    ),
)
async def t_component_docs(
    component_name: str,
    framework: str,
    include_guidelines: bool = True,
    include_instructions: bool = True,
) -> str:
    raw = {
        "componentName": component_name,
        "framework": framework,
        "includeGuidelines": include_guidelines,
        "includeInstructions": include_instructions,
    }
    return await _call("get_component_docs", lambda: handle_get_component_docs(raw, _settings()))


@mcp.tool(
    name="list_guides",
    description="List available setup guides and conceptual documentation for Green Design System",
)
async def t_list_guides(
    category: Optional[str] = None,  # framework-setup | getting-started | concepts | troubleshooting | migration | all
    framework: Optional[str] = None,  # angular | react | all
) -> str:
    raw: Dict[str, Any] = {}
    if category is not None:
        raw["category"] = category
    if framework is not None:
        raw["framework"] = framework
    return await _call("list_guides", lambda: handle_list_guides(raw, _settings()))


@mcp.tool(
    name="get_guide",
    description=(
        "Get the full content of a specific guide. Use list_guides first to discover "
        "available guides and their names."
    ),
)
async def t_get_guide(name: str) -> str:
    return await _call("get_guide", lambda: handle_get_guide({"name": name}, _settings()))


@mcp.tool(
    name="get_instructions",
    description=(
        "Get the base instructions for using the Green Design System MCP: critical rules, "
        "typography guidelines, layout system requirements and general best practices. "
        "Read these before implementing any Green components."
    ),
)
async def t_get_instructions() -> str:
    return await _call("get_instructions", lambda: handle_get_instructions(_settings()))


# ---- resources ----
@mcp.resource(INSTRUCTIONS_URI, name="instructions", mime_type="text/markdown")
async def r_instructions() -> str:
    return await _resolve(INSTRUCTIONS_URI)


@mcp.resource("green://components/{name}/{doc_type}", mime_type="text/markdown")
async def r_component(name: str, doc_type: str) -> str:
    return await _resolve(build_resource_uri("components", name, doc_type))


@mcp.resource("green://icons/{name}/{doc_type}", mime_type="text/markdown")
async def r_icon(name: str, doc_type: str) -> str:
    return await _resolve(build_resource_uri("icons", name, doc_type))


@mcp.resource("green://guides/{name}", mime_type="text/markdown")
async def r_guide(name: str) -> str:
    return await _resolve(build_resource_uri("guides", name))


@mcp.resource("green://concepts/{name}", mime_type="text/markdown")
async def r_concept(name: str) -> str:
    return await _resolve(build_resource_uri("concepts", name))


def main() -> None:
    configure_logging()
    _log_corpus_status(_settings())
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
