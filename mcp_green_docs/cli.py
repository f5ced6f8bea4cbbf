# src/mcp_green_docs/cli.py
"""Green Design System context CLI.

Gives terminal users the same context as the MCP server. Results go to
stdout so they can be piped to grep, jq or less; errors and diagnostics go
to stderr with a non-zero exit code. All input passes through the shared
validation layer; nothing is executed and nothing leaves the machine.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, List, Optional

from .config import CorpusSettings
from .constants import CATEGORIES, FRAMEWORKS, GUIDE_CATEGORIES, GUIDE_FRAMEWORKS, SEARCH_CONFIG
from .errors import format_error_message
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
from .logger import configure_logging
from .utils import to_cli_wording
from .validation import normalize_docs_framework

PROGRAM_NAME = "green-core-context"
DIST_NAME = "mcp-green-docs"

DESCRIPTION = """\
Green Design System - Context CLI

Provides design system documentation, component APIs, guides, and usage
instructions directly from the command line. Outputs to stdout for easy
piping to grep, jq, less, etc."""

SEARCH_EPILOG = f"""\
examples:
  {PROGRAM_NAME} search button
  {PROGRAM_NAME} search "dropdown menu" --match-all
  {PROGRAM_NAME} search "^gds-card" --use-regex
  {PROGRAM_NAME} search arrow --category icon
  {PROGRAM_NAME} search button | jq '.results[0]'"""

DOCS_EPILOG = f"""\
aliases accepted for web-component: web, webcomponent, web-components

examples:
  {PROGRAM_NAME} docs button angular
  {PROGRAM_NAME} docs gds-dropdown react
  {PROGRAM_NAME} docs card web --no-guidelines"""

GET_EPILOG = f"""\
supported URI formats:
  green://components/{{name}}/{{doc}}   api, angular, react, guidelines, instructions
  green://icons/{{name}}/{{doc}}        api, angular, react
  green://guides/{{name}}             setup and framework guides
  green://concepts/{{name}}           conceptual documentation
  green://instructions              base instructions document

examples:
  {PROGRAM_NAME} get green://components/button/api
  {PROGRAM_NAME} get green://guides/react"""


def get_package_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action="version", version=get_package_version())
    sub = parser.add_subparsers(dest="command", metavar="<command>")

    search = sub.add_parser(
        "search",
        help="Search for components and icons",
        epilog=SEARCH_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    search.add_argument("query", help="Search term")
    # values are checked by the shared input schemas, not by argparse
    search.add_argument(
        "--category", default=None, help=f"Filter by type: {', '.join(CATEGORIES)} (default: all)"
    )
    search.add_argument(
        "--split-terms",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Split query on spaces/commas into separate terms (default: on)",
    )
    search.add_argument("--match-all", action="store_true", help="Require ALL terms to match (AND logic)")
    search.add_argument("--use-regex", action="store_true", help="Treat query as a regular expression")
    search.add_argument(
        "--max-results",
        default=None,
        help=f"Maximum results to return, 1-100 (default: {SEARCH_CONFIG.DEFAULT_MAX_RESULTS})",
    )

    docs = sub.add_parser(
        "docs",
        help="Get component documentation",
        epilog=DOCS_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    docs.add_argument("component", help='Component name, e.g. "button" or "gds-button"')
    docs.add_argument("framework", help=f"Target framework: {', '.join(FRAMEWORKS)}")
    docs.add_argument(
        "--guidelines",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include UX/design guidelines (default: on)",
    )
    docs.add_argument(
        "--instructions",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include agent-specific instructions (default: on)",
    )

    get = sub.add_parser(
        "get",
        help="Fetch raw content by green:// URI",
        epilog=GET_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    get.add_argument("uri", help="A green:// resource URI")

    guides = sub.add_parser("guides", help="List available guides")
    guides.add_argument("--category", default=None, help=f"Filter by category: {', '.join(GUIDE_CATEGORIES)}")
    guides.add_argument("--framework", default=None, help=f"Filter by framework: {', '.join(GUIDE_FRAMEWORKS)}")

    guide = sub.add_parser("guide", help="Get a specific guide's content")
    guide.add_argument("name", help=f"Guide name; run '{PROGRAM_NAME} guides' to list them")

    sub.add_parser("instructions", help="Get base usage instructions")

    return parser


def _search_input(args: argparse.Namespace) -> Dict[str, Any]:
    raw: Dict[str, Any] = {"query": args.query}
    if args.category is not None:
        raw["category"] = args.category
    if not args.split_terms:
        raw["splitTerms"] = False
    if args.match_all:
        raw["matchAll"] = True
    if args.use_regex:
        raw["useRegex"] = True
    if args.max_results is not None:
        raw["maxResults"] = args.max_results
    return raw


async def _dispatch(args: argparse.Namespace, settings: CorpusSettings) -> HandlerResponse:
    if args.command == "search":
        return await handle_search_components(_search_input(args), settings)
    if args.command == "docs":
        raw = {
            "componentName": args.component,
            "framework": normalize_docs_framework(args.framework),
            "includeGuidelines": args.guidelines,
            "includeInstructions": args.instructions,
        }
        return await handle_get_component_docs(raw, settings)
    if args.command == "get":
        return await handle_resolve_uri(args.uri, settings)
    if args.command == "guides":
        raw = {k: v for k, v in (("category", args.category), ("framework", args.framework)) if v is not None}
        return await handle_list_guides(raw, settings)
    if args.command == "guide":
        return await handle_get_guide({"name": args.name}, settings)
    if args.command == "instructions":
        return await handle_get_instructions(settings)
    raise ValueError(f"Unknown command '{args.command}'")


def main(argv: Optional[List[str]] = None, settings: Optional[CorpusSettings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stdout)
        return 0

    if args.command == "docs" and normalize_docs_framework(args.framework) is None:
        sys.stderr.write(
            f"Error: Invalid framework '{args.framework}'. Allowed values: {', '.join(FRAMEWORKS)}.\n"
            "Aliases accepted for web-component: web, webcomponent, web-components.\n"
        )
        return 1

    configure_logging(logging.WARNING)
    try:
        result = asyncio.run(_dispatch(args, settings or CorpusSettings()))
    except Exception as e:  # every failure becomes one stderr line and exit 1
        sys.stderr.write(format_error_message(e) + "\n")
        return 1

    text = primary_text(result)
    if args.command == "instructions":
        text = to_cli_wording(text)
    sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
