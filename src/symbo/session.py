"""Symbolication session: one report, the dSYMs gathered for it, and the search.

Tracks which UUIDs the report needs, which ones the added dSYMs already cover
and which are still missing, so a search only ever looks for the remainder.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from symbo.config.models import SymboConfig
from symbo.errors import ReportError
from symbo.models.dsym import DSYMFile, UUIDDumper
from symbo.models.report_file import ReportFile, Translator
from symbo.search.engine import DSYMSearch, ProgressHandler
from symbo.search.results import SearchOutcome
from symbo.search.strategies import default_strategies
from symbo.symbolication.engine import Symbolicator
from symbo.tools.atos import AddressResolver, AtosResolver
from symbo.tools.dwarfdump import dump_uuids
from symbo.tools.translator import CommandTranslator
from symbo.utils.log_sink import LogSink
from symbo.utils.logging import get_logger, report_context

log = get_logger(__name__)


@dataclass
class SymbolicationOutcome:
    success: bool
    content: str | None
    logs: list[str]
    save_path: Path | None = None


class SymbolicationSession:
    def __init__(
        self,
        config: SymboConfig | None = None,
        log_sink: LogSink | None = None,
        uuid_dumper: UUIDDumper | None = None,
        resolver: AddressResolver | None = None,
        translator: Translator | None = None,
    ) -> None:
        self.config = config or SymboConfig()
        self.log_sink = log_sink or LogSink()
        self._uuid_dumper = uuid_dumper or functools.partial(dump_uuids, config=self.config.tools)
        self._resolver = resolver or AtosResolver(self.config.tools)
        self._translator = translator or CommandTranslator(self.config.tools)
        self.report: ReportFile | None = None
        self.dsym_files: list[DSYMFile] = []
        self.searching = False

    def load_report(self, source: Path | str) -> ReportFile:
        """Load a report from a file (Path) or from raw report text (str)."""
        self.log_sink.reset()
        self.report = None
        try:
            if isinstance(source, Path):
                report = ReportFile.from_path(source, translator=self._translator)
            else:
                report = ReportFile(source, translator=self._translator)
        except ReportError as exc:
            self.log_sink.add(f"Error loading report file: {exc}")
            raise
        self.report = report
        return report

    def add_dsyms(self, paths: Iterable[Path | str]) -> list[DSYMFile]:
        """Load bundles (or folders of bundles) and keep the ones not seen yet."""
        known = {dsym.path for dsym in self.dsym_files}
        added = []
        for path in paths:
            for dsym in DSYMFile.dsym_files(path, self._uuid_dumper):
                if dsym.path in known:
                    continue
                known.add(dsym.path)
                added.append(dsym)
        self.dsym_files.extend(added)
        log.info("dsyms_added", added=len(added), total=len(self.dsym_files))
        return added

    @property
    def expected_uuids(self) -> set[str]:
        if self.report is None:
            return set()
        return {uuid.pretty for uuid in self.report.uuids_for_symbolication}

    @property
    def found_uuids(self) -> set[str]:
        added = {uuid for dsym in self.dsym_files for uuid in dsym.uuid_strings}
        return self.expected_uuids & added

    @property
    def remaining_uuids(self) -> set[str]:
        return self.expected_uuids - self.found_uuids

    def search_for_dsyms(
        self,
        search: DSYMSearch | None = None,
        progress_handler: ProgressHandler | None = None,
        timeout: float | None = None,
    ) -> SearchOutcome:
        if self.report is None:
            return SearchOutcome(True, [])

        remaining = sorted(self.remaining_uuids)
        if not remaining:
            return SearchOutcome(True, [])

        search = search or DSYMSearch(
            strategies=default_strategies(self.config.search, self.config.tools, self._uuid_dumper),
            timeout=timeout,
            config=self.config.search,
        )

        self.searching = True
        try:
            with report_context(self.report.path):
                outcome = search.search(
                    remaining,
                    report_directory=self.report.directory,
                    log_handler=self.log_sink.add,
                    progress_handler=progress_handler,
                )
        finally:
            self.searching = False

        self.add_dsyms(Path(result.path) for result in outcome.results)
        return outcome

    def report_status_text(self) -> str:
        count = len(self.expected_uuids)
        if count == 0:
            return "(Symbolication not needed)"
        if count == 1:
            return "(1 dSYM needed)"
        return f"({count} dSYMs needed)"

    def dsym_status_text(self) -> str:
        if self.report is None:
            return "(if not found automatically)"
        if not self.expected_uuids:
            return ""
        prefix = "Searching…" if self.searching else "Found"
        return f"{prefix} {len(self.found_uuids)}/{len(self.expected_uuids)}"

    def symbolicate(self, workers: int | None = None) -> SymbolicationOutcome:
        if self.report is None:
            raise ReportError("No report loaded")

        symbolicator = Symbolicator(
            self.report,
            self.dsym_files,
            self.log_sink,
            resolver=self._resolver,
            workers=workers or self.config.symbolication.resolver_workers,
            marker=self.config.symbolication.marker,
        )
        with report_context(self.report.path):
            success = symbolicator.symbolicate()
        return SymbolicationOutcome(
            success=success,
            content=self.report.symbolicated_content,
            logs=self.log_sink.messages,
            save_path=self.report.symbolicated_save_path,
        )
