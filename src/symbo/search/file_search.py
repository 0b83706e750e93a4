"""Filesystem walk for dSYM bundles matching a set of UUIDs."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from symbo.config.defaults import DSYM_EXTENSION
from symbo.errors import DSYMLoadError
from symbo.models.dsym import DSYMFile, UUIDDumper
from symbo.search.results import SearchResult

LogHandler = Callable[[str], None]


def _noop(_: str) -> None:
    pass


class FileSearch:
    """Finds bundles by extension under ``directory``, then keeps the ones whose
    UUIDs intersect the wanted set."""

    def __init__(
        self,
        directory: Path | str,
        recursive: bool = False,
        log_handler: LogHandler | None = None,
        uuid_dumper: UUIDDumper | None = None,
    ) -> None:
        self.directory = Path(directory).expanduser()
        self.recursive = recursive
        self._log = log_handler or _noop
        self._uuid_dumper = uuid_dumper

    def find(self, extension: str = DSYM_EXTENSION) -> list[Path]:
        """Sorted bundle paths. A missing directory yields nothing."""
        if not self.directory.is_dir():
            self._log(f"Search directory does not exist: {self.directory}")
            return []

        extension = extension.lower()
        if not self.recursive:
            try:
                entries = list(self.directory.iterdir())
            except OSError as exc:
                self._log(f"Could not list {self.directory}: {exc}")
                return []
            return sorted(p for p in entries if p.name.lower().endswith(extension))

        found: list[Path] = []
        for root, dirs, files in os.walk(self.directory):
            for name in list(dirs):
                if name.lower().endswith(extension):
                    found.append(Path(root) / name)
                    # don't walk into the bundle itself
                    dirs.remove(name)
            found.extend(Path(root) / name for name in files if name.lower().endswith(extension))
        return sorted(found)

    def matching(self, paths: Iterable[Path], uuids: Iterable[str]) -> list[SearchResult]:
        wanted = {uuid.upper() for uuid in uuids}
        results = []
        for path in paths:
            try:
                dsym = DSYMFile.load(path, self._uuid_dumper)
            except DSYMLoadError as exc:
                self._log(f"Skipping unreadable dSYM {path}: {exc}")
                continue
            for uuid in sorted(dsym.uuid_strings & wanted):
                results.append(SearchResult(path=str(path), matched_uuid=uuid))
        return results

    def search(self, uuids: Iterable[str], extension: str = DSYM_EXTENSION) -> list[SearchResult]:
        return self.matching(self.find(extension), uuids)
