"""Spotlight (``mdfind``) lookup of dSYM bundles by UUID metadata."""

from __future__ import annotations

from symbo.config.defaults import SPOTLIGHT_UUID_ATTRIBUTE
from symbo.config.models import ToolsConfig
from symbo.tools.runner import ToolResult, run_tool


def spotlight_query(uuid: str) -> str:
    return f"{SPOTLIGHT_UUID_ATTRIBUTE} == {uuid}"


def find_dsyms(uuid: str, config: ToolsConfig | None = None) -> ToolResult:
    cfg = config or ToolsConfig()
    return run_tool([*cfg.mdfind, spotlight_query(uuid)], timeout=cfg.timeout)
