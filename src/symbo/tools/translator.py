"""Conversion of JSON (.ips) crash reports to the legacy text format.

The conversion itself is delegated to an external command configured under
``tools.translator``; the command gets the report path as its last argument,
or the raw content on stdin when the report did not come from a file.
"""

from __future__ import annotations

from pathlib import Path

from symbo.config.models import ToolsConfig
from symbo.errors import TranslationError
from symbo.tools.runner import run_tool
from symbo.utils.logging import get_logger

log = get_logger(__name__)


def is_json_report(content: str) -> bool:
    return content.lstrip().startswith("{")


class CommandTranslator:
    def __init__(self, config: ToolsConfig | None = None) -> None:
        self._config = config or ToolsConfig()

    def __call__(self, source: Path | str) -> str:
        if not self._config.translator:
            raise TranslationError("No translator configured for JSON (.ips) reports")

        if isinstance(source, Path):
            result = run_tool([*self._config.translator, str(source)], timeout=self._config.timeout)
        else:
            result = run_tool(self._config.translator, timeout=self._config.timeout, input=source)

        if result.returncode != 0:
            raise TranslationError(f"Translator exited with {result.returncode}: {result.error_text}")
        if not result.output_text:
            raise TranslationError("Translator produced no output")

        log.info("report_translated", source=str(source) if isinstance(source, Path) else "<text>")
        return result.output
