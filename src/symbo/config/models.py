"""Pydantic configuration models with env var support."""

from __future__ import annotations

from pydantic import BaseModel, Field

from symbo.config.defaults import (
    DEFAULT_ARCHIVES_DIRECTORY,
    DEFAULT_ATOS_COMMAND,
    DEFAULT_DWARFDUMP_COMMAND,
    DEFAULT_MDFIND_COMMAND,
    DEFAULT_RESOLVER_WORKERS,
    DEFAULT_SEARCH_TIMEOUT,
    DEFAULT_TOOL_TIMEOUT,
    SYMBOLICATED_MARKER,
)


class ToolsConfig(BaseModel):
    dwarfdump: list[str] = Field(default_factory=lambda: list(DEFAULT_DWARFDUMP_COMMAND))
    atos: list[str] = Field(default_factory=lambda: list(DEFAULT_ATOS_COMMAND))
    mdfind: list[str] = Field(default_factory=lambda: list(DEFAULT_MDFIND_COMMAND))
    translator: list[str] = Field(default_factory=list)
    timeout: float = DEFAULT_TOOL_TIMEOUT


class SearchConfig(BaseModel):
    timeout: float = DEFAULT_SEARCH_TIMEOUT
    archives_directory: str = DEFAULT_ARCHIVES_DIRECTORY
    spotlight: bool = True
    report_directory: bool = True
    archives: bool = True


class SymbolicationConfig(BaseModel):
    resolver_workers: int = Field(default=DEFAULT_RESOLVER_WORKERS, ge=1)
    marker: str = SYMBOLICATED_MARKER


class SymboConfig(BaseModel):
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    symbolication: SymbolicationConfig = Field(default_factory=SymbolicationConfig)
