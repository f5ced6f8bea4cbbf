"""Pytest configuration and fixtures for the Green docs MCP tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pytest

from mcp_green_docs.config import CorpusSettings
from mcp_green_docs.models import ComponentEntry, IconEntry

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s'
)

logger = logging.getLogger(__name__)


COMPONENTS: List[Dict[str, Any]] = [
    {
        "name": "Button",
        "tagName": "gds-button",
        "className": "GdsButton",
        "description": "A clickable button component",
        "path": "components/button",
        "files": ["api", "angular", "react", "guidelines", "instructions"],
    },
    {
        "name": "Input",
        "tagName": "gds-input",
        "className": "GdsInput",
        "description": "An input field for text entry",
        "path": "components/input",
        # guidelines is advertised but never written to disk
        "files": ["api", "guidelines"],
    },
    {
        "name": "Dropdown",
        "tagName": "gds-dropdown",
        "className": "GdsDropdown",
        "description": "A dropdown menu component for selecting options",
        "path": "components/dropdown",
        "files": ["api"],
    },
]

ICONS: List[Dict[str, Any]] = [
    {
        "name": "Arrow",
        "tagName": "gds-icon-arrow",
        "className": "GdsIconArrow",
        "description": "Arrow icon",
        "path": "icons/arrow",
        "files": ["api"],
    },
    {
        "name": "Check",
        "tagName": "gds-icon-check",
        "className": "GdsIconCheck",
        "description": "Checkmark icon",
        "path": "icons/check",
        "files": ["api"],
    },
]

GUIDES: List[Dict[str, Any]] = [
    {
        "path": "guides/angular.md",
        "title": "Angular",
        "category": "framework-setup",
        "description": "Set up Green Core in an Angular application",
        "tags": ["angular", "setup"],
    },
    {
        "path": "guides/installing.md",
        "title": "Installing",
        "category": "getting-started",
        "description": "Install the packages",
        "tags": ["angular", "react"],
    },
    {
        "path": "concepts/tokens.md",
        "title": "Design Tokens",
        "category": "concepts",
        "description": "Colour, spacing and typography tokens",
        "tags": ["tokens"],
    },
    {
        "path": "concepts/angular-forms.md",
        "title": "Angular Forms",
        "category": "concepts",
        "description": "Using Green form controls with Angular forms",
        "tags": ["angular", "forms"],
    },
    {
        # listed in the index but the markdown file is missing
        "path": "concepts/layout.md",
        "title": "Layout",
        "category": "concepts",
        "description": "Layout system",
        "tags": ["react"],
    },
]

BUTTON_API = """# Button

**Class**: `GdsButton`
**Tag**: `gds-button`

## Properties

| Name | Type |
| variant | 'primary' \\| 'secondary' |

## Events

- `click`
"""

FILES: Dict[str, str] = {
    "button/api.md": BUTTON_API,
    "button/angular.md": "# Button (Angular)\n\nimport { GdsButtonComponent } from '@sebgroup/green-core-ng'\n",
    "button/react.md": "# Button (React)\n\nimport { GdsButton } from '@sebgroup/green-core-react'\n",
    "button/guidelines.md": "Use one primary button per view.\n",
    "button/instructions.md": "Always set an accessible label.\n",
    "input/api.md": "# Input\n\n**Class**: `GdsInput`\n**Tag**: `gds-input`\n\n## Properties\n\n- `value`\n",
    "dropdown/api.md": "# Dropdown\n\n## Properties\n\n- `options`\n",
    "icon-arrow/api.md": "# Arrow\n\n**Tag**: `gds-icon-arrow`\n",
    "icon-check/api.md": "# Check\n",
    "guides/angular.md": "Add `provideGreen()` to your application config.\n",
    "guides/installing.md": "npm install @sebgroup/green-core\n",
    "concepts/tokens.md": "Tokens are exposed as CSS custom properties.\n",
    "concepts/angular-forms.md": "Bind with formControlName.\n",
    "INSTRUCTIONS.md": (
        "# Instructions\n\nThe MCP server provides documentation. "
        "Use the MCP to fetch docs. The AMCP protocol is different.\n"
    ),
}


def write_corpus(root: Path, *, instructions: bool = True) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "components.json").write_text(json.dumps({"components": COMPONENTS}), encoding="utf-8")
    (root / "icons.json").write_text(json.dumps({"icons": ICONS}), encoding="utf-8")
    (root / "index.json").write_text(
        json.dumps({"guides": GUIDES, "instructions": instructions}), encoding="utf-8"
    )
    for rel, content in FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """A complete throw-away corpus."""
    return write_corpus(tmp_path / "corpus")


@pytest.fixture
def settings(corpus_dir: Path) -> CorpusSettings:
    return CorpusSettings(corpus_root=corpus_dir)


@pytest.fixture
def components() -> List[ComponentEntry]:
    return [ComponentEntry.model_validate(c) for c in COMPONENTS]


@pytest.fixture
def icons() -> List[IconEntry]:
    return [IconEntry.model_validate(i) for i in ICONS]


@pytest.fixture
def corpus_env(monkeypatch: pytest.MonkeyPatch, corpus_dir: Path) -> Path:
    """Point environment-built settings (MCP tools) at the test corpus."""
    monkeypatch.setenv("GDS_MCP_CORPUS_ROOT", str(corpus_dir))
    return corpus_dir
