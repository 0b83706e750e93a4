"""The independent places a missing dSYM is looked for."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from symbo.config.models import SearchConfig, ToolsConfig
from symbo.errors import SearchStrategyError
from symbo.models.dsym import UUIDDumper
from symbo.search.file_search import FileSearch
from symbo.search.results import SearchResult
from symbo.tools.spotlight import find_dsyms
from symbo.tools.runner import ToolResult

LogHandler = Callable[[str], None]
SpotlightRunner = Callable[[str], ToolResult]


class SearchStrategy:
    """Base class: one self-contained way of locating bundles."""

    name = "strategy"

    def run(
        self,
        uuids: list[str],
        report_directory: Path | None,
        log_handler: LogHandler,
    ) -> list[SearchResult]:
        raise NotImplementedError


class SpotlightStrategy(SearchStrategy):
    """Query the Spotlight index for bundles carrying each UUID."""

    name = "spotlight"

    def __init__(self, runner: SpotlightRunner | None = None, tools: ToolsConfig | None = None) -> None:
        cfg = tools or ToolsConfig()
        self._runner = runner or (lambda uuid: find_dsyms(uuid, cfg))

    def run(self, uuids, report_directory, log_handler):
        log_handler(f"Searching Spotlight for UUIDs: {uuids}")
        results = []
        for uuid in uuids:
            result = self._runner(uuid)
            if not result.started:
                log_handler("Spotlight query could not be started.")
                raise SearchStrategyError(f"Spotlight query failed: {result.error_text}")
            for line in result.output.splitlines():
                path = line.strip()
                if path:
                    results.append(SearchResult(path=path, matched_uuid=uuid))
        log_handler(f"Spotlight search completed. Found {len(results)} results.")
        return results


class NonRecursiveStrategy(SearchStrategy):
    """Look at the bundles sitting right next to the report."""

    name = "non_recursive"

    def __init__(self, uuid_dumper: UUIDDumper | None = None) -> None:
        self._uuid_dumper = uuid_dumper

    def run(self, uuids, report_directory, log_handler):
        if report_directory is None:
            log_handler("Non-recursive file search skipped: report has no directory.")
            return []
        log_handler(f"Non-recursive file search starting at {report_directory} for UUIDs: {uuids}")
        search = FileSearch(report_directory, recursive=False, log_handler=log_handler, uuid_dumper=self._uuid_dumper)
        results = search.search(uuids)
        log_handler(f"Non-recursive search completed. Found {len(results)} results.")
        return results


class RecursiveStrategy(SearchStrategy):
    """Walk the Xcode archives folder."""

    name = "recursive"

    def __init__(self, root: Path | str, uuid_dumper: UUIDDumper | None = None) -> None:
        self.root = root
        self._uuid_dumper = uuid_dumper

    def run(self, uuids, report_directory, log_handler):
        log_handler(f"Recursive file search starting at {self.root} for UUIDs: {uuids}")
        search = FileSearch(self.root, recursive=True, log_handler=log_handler, uuid_dumper=self._uuid_dumper)
        results = search.search(uuids)
        log_handler(f"Recursive search completed. Found {len(results)} results.")
        return results


def default_strategies(
    search: SearchConfig | None = None,
    tools: ToolsConfig | None = None,
    uuid_dumper: UUIDDumper | None = None,
) -> list[SearchStrategy]:
    search = search or SearchConfig()
    strategies: list[SearchStrategy] = []
    if search.spotlight:
        strategies.append(SpotlightStrategy(tools=tools))
    if search.report_directory:
        strategies.append(NonRecursiveStrategy(uuid_dumper))
    if search.archives:
        strategies.append(RecursiveStrategy(search.archives_directory, uuid_dumper))
    return strategies
