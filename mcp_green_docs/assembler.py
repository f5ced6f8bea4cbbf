# src/mcp_green_docs/assembler.py
"""Compose the markdown answer for ``get_component_docs``.

Sections, in order: title and framework banner, the primary document for the
framework, the API reference (angular/react only), design guidelines, usage
instructions, and a hint naming the other frameworks. Optional sections whose
file is missing are left out together with their separator.
"""
from __future__ import annotations

from typing import List, Optional, Union

from .config import CorpusSettings
from .constants import DOC_TYPES
from .models import ComponentEntry, IconEntry
from .resources import read_mcp_file
from .utils import capitalize, strip_api_header, strip_leading_title

_FRAMEWORK_PRIMARY_DOC = {
    "angular": DOC_TYPES.ANGULAR,
    "react": DOC_TYPES.REACT,
}

_FRAMEWORK_HINTS = (
    ("angular", '- `framework: "angular"` for Angular documentation'),
    ("react", '- `framework: "react"` for React documentation'),
    ("web-component", '- `framework: "web-component"` for vanilla JS usage'),
)


def primary_doc_type(framework: str) -> str:
    return _FRAMEWORK_PRIMARY_DOC.get(framework, DOC_TYPES.API)


async def _read_doc(entry: Union[ComponentEntry, IconEntry], doc_type: str, settings: CorpusSettings) -> Optional[str]:
    if doc_type not in entry.files:
        return None
    return await read_mcp_file(f"{entry.short_name}/{doc_type}.md", settings)


def _section(lines: List[str], heading: str, body: str, intro: Optional[str] = None) -> None:
    lines.extend(["---", "", f"## {heading}", ""])
    if intro:
        lines.extend([intro, ""])
    lines.extend([body, ""])


async def assemble_component_docs(
    entry: Union[ComponentEntry, IconEntry],
    framework: str,
    include_guidelines: bool,
    include_instructions: bool,
    settings: CorpusSettings,
) -> str:
    is_framework_specific = framework in _FRAMEWORK_PRIMARY_DOC
    label = capitalize(framework)

    lines: List[str] = [f"# {entry.tag_name} - {label}", ""]
    if is_framework_specific:
        lines.append(f"⚠️ **{label}-Specific Documentation**")
        lines.append(f"The import paths and syntax below are for {label} applications.")
        lines.append("")

    primary = await _read_doc(entry, primary_doc_type(framework), settings)
    if primary:
        lines.extend([strip_leading_title(primary), ""])

    if is_framework_specific:
        api = await _read_doc(entry, DOC_TYPES.API, settings)
        if api:
            _section(
                lines,
                "Component API Reference",
                strip_api_header(api),
                intro="The following properties, events, slots, and methods are available:",
            )

    if include_guidelines:
        guidelines = await _read_doc(entry, DOC_TYPES.GUIDELINES, settings)
        if guidelines:
            _section(lines, "Design Guidelines", guidelines)

    if include_instructions:
        instructions = await _read_doc(entry, DOC_TYPES.INSTRUCTIONS, settings)
        if instructions:
            _section(lines, "Usage Instructions", instructions)

    lines.extend(["---", "", "💡 **Using a different framework?**", "Call this tool again with:"])
    lines.extend(hint for name, hint in _FRAMEWORK_HINTS if name != framework)

    return "\n".join(lines)
