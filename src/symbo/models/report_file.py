"""Crash report container: normalized text plus its parsed processes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from symbo.errors import EmptyReportError, ReportReadError, TranslationError
from symbo.models.identifiers import BinaryUUID
from symbo.models.report import ReportProcess
from symbo.parsing.report_parser import parse_processes
from symbo.tools.translator import CommandTranslator, is_json_report
from symbo.utils.logging import get_logger

log = get_logger(__name__)

Translator = Callable[[Path | str], str]

SYMBOLICATED_PREFIX = "[S] "


class ReportFile:
    """A crash report, always held in the line-oriented text format.

    JSON (.ips) content is converted by ``translator`` before parsing. Raises
    EmptyReportError or TranslationError when no usable text results.
    """

    def __init__(
        self,
        content: str,
        path: Path | None = None,
        translator: Translator | None = None,
    ) -> None:
        if not content.strip():
            raise EmptyReportError(f"Report is empty: {path or '<text>'}")

        self.path = Path(path) if path is not None else None

        if is_json_report(content):
            translate = translator or CommandTranslator()
            try:
                content = translate(self.path if self.path is not None else content)
            except TranslationError:
                raise
            except Exception as exc:
                raise TranslationError(f"Could not translate report: {exc}") from exc
            if not content.strip():
                raise TranslationError("Translated report is empty")

        self.content = content.replace("\r\n", "\n")
        self.processes: list[ReportProcess] = parse_processes(self.content)
        self.symbolicated_content: str | None = None

        log.info("report_loaded", path=str(self.path) if self.path else None, processes=len(self.processes))

    @classmethod
    def from_path(cls, path: Path | str, translator: Translator | None = None) -> ReportFile:
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportReadError(f"Could not read {path}: {exc}") from exc
        return cls(content, path=path, translator=translator)

    @property
    def filename(self) -> str | None:
        return self.path.name if self.path else None

    @property
    def directory(self) -> Path | None:
        return self.path.parent if self.path else None

    @property
    def uuids_for_symbolication(self) -> list[BinaryUUID]:
        uuids: dict[BinaryUUID, None] = {}
        for process in self.processes:
            uuids.update(dict.fromkeys(process.uuids_for_symbolication))
        return list(uuids)

    @property
    def symbolicated_save_path(self) -> Path | None:
        """Suggested location for the symbolicated output, next to the original."""
        if self.path is None:
            return None
        return self.path.parent / f"{SYMBOLICATED_PREFIX}{self.path.stem}.txt"
