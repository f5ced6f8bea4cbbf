# src/mcp_green_docs/config.py
"""Corpus configuration.

Settings are read from the environment (prefix ``GDS_MCP_``) and passed
explicitly into every handler call; nothing in the core keeps a process-wide
copy.
"""
from __future__ import annotations

import pathlib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import PATHS

PKG_DIR = pathlib.Path(__file__).resolve().parent


def _find_corpus_root() -> pathlib.Path:
    """
    Locate the generated corpus directory.
    Works in both development and installed modes.
    """
    current = PKG_DIR
    for parent in [current] + list(current.parents):
        corpus = parent / "corpus"
        if (corpus / PATHS.GLOBAL_INDEX).exists() or (corpus / PATHS.COMPONENTS_INDEX).exists():
            return corpus
        # also check inside the package dir (bundled corpus)
        if (parent / "mcp_green_docs" / "corpus").exists():
            return parent / "mcp_green_docs" / "corpus"

    return PKG_DIR.parent / "corpus"


class CorpusSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GDS_MCP_",
        case_sensitive=False,
        extra="ignore",
    )

    corpus_root: pathlib.Path = Field(
        default_factory=_find_corpus_root,
        description="Directory holding the JSON indexes and markdown files",
    )
    components_index: str = Field(default=PATHS.COMPONENTS_INDEX)
    icons_index: str = Field(default=PATHS.ICONS_INDEX)
    global_index: str = Field(default=PATHS.GLOBAL_INDEX)

    @property
    def components_index_path(self) -> pathlib.Path:
        return self.corpus_root / self.components_index

    @property
    def icons_index_path(self) -> pathlib.Path:
        return self.corpus_root / self.icons_index

    @property
    def global_index_path(self) -> pathlib.Path:
        return self.corpus_root / self.global_index
