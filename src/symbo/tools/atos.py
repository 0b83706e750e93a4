"""Address resolution via ``atos``."""

from __future__ import annotations

from collections.abc import Callable

from symbo.config.models import ToolsConfig
from symbo.tools.runner import ToolResult, run_tool

AddressResolver = Callable[[str, str, str, str], ToolResult]


def build_atos_command(
    dsym_path: str,
    architecture: str,
    load_address: str,
    address: str,
    config: ToolsConfig | None = None,
) -> list[str]:
    cfg = config or ToolsConfig()
    return [*cfg.atos, "-o", dsym_path, "-arch", architecture, "-l", load_address, address]


class AtosResolver:
    """Callable resolving one runtime address against one DWARF binary."""

    def __init__(self, config: ToolsConfig | None = None) -> None:
        self._config = config or ToolsConfig()

    def __call__(self, dsym_path: str, architecture: str, load_address: str, address: str) -> ToolResult:
        cmd = build_atos_command(dsym_path, architecture, load_address, address, self._config)
        return run_tool(cmd, timeout=self._config.timeout)
