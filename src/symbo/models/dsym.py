"""dSYM bundle model: UUID map, DWARF binary slices and slice selection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from symbo.config.defaults import DSYM_EXTENSION
from symbo.errors import DSYMLoadError
from symbo.models.identifiers import Architecture, BinaryUUID
from symbo.tools.dwarfdump import DSYMSlice, dump_uuids, parse_uuid_lines
from symbo.tools.runner import ToolResult
from symbo.utils.logging import get_logger

log = get_logger(__name__)

UUIDDumper = Callable[[Path], ToolResult]

DWARF_SUBPATH = Path("Contents") / "Resources" / "DWARF"


def is_dsym_name(name: str) -> bool:
    return name.lower().endswith(DSYM_EXTENSION)


def discover_binary_paths(path: Path) -> tuple[str, ...]:
    """List the DWARF binaries inside a bundle, falling back to the bundle itself."""
    dwarf_dir = path / DWARF_SUBPATH
    try:
        entries = sorted(entry.name for entry in dwarf_dir.iterdir())
    except OSError:
        return (str(path),)
    if not entries:
        return (str(path),)
    return tuple(str(dwarf_dir / name) for name in entries)


@dataclass(frozen=True)
class DSYMFile:
    path: Path
    filename: str
    uuids: dict[BinaryUUID, str]
    slices: tuple[DSYMSlice, ...] = field(default=(), compare=False)
    binary_paths: tuple[str, ...] = field(default=(), compare=False)

    def __hash__(self) -> int:
        return hash((self.path, self.filename, frozenset(self.uuids)))

    @classmethod
    def load(cls, path: Path | str, uuid_dumper: UUIDDumper | None = None) -> DSYMFile:
        """Read a bundle's UUIDs with the dump tool.

        Raises DSYMLoadError when the tool wrote nothing to stdout but
        complained on stderr. A silent tool yields a bundle with no UUIDs.
        """
        path = Path(path)
        dumper = uuid_dumper or dump_uuids
        result = dumper(path)

        if not result.output_text and result.error_text:
            raise DSYMLoadError(f"Could not read UUIDs of {path}: {result.error_text}")

        slices = tuple(parse_uuid_lines(result.output))
        uuids = {dsym_slice.uuid: dsym_slice.binary_path for dsym_slice in slices}

        log.debug("dsym_loaded", path=str(path), uuids=len(uuids))
        return cls(
            path=path,
            filename=path.name,
            uuids=uuids,
            slices=slices,
            binary_paths=discover_binary_paths(path),
        )

    @classmethod
    def dsym_files(cls, url: Path | str, uuid_dumper: UUIDDumper | None = None) -> list[DSYMFile]:
        """Load ``url`` as a bundle, or as a folder holding bundles one level deep.

        Archiving tools (fastlane, for one) wrap several .dSYM bundles in a
        plain directory.
        """
        url = Path(url)
        try:
            bundle = cls.load(url, uuid_dumper)
        except DSYMLoadError as exc:
            log.debug("not_a_dsym", path=str(url), error=str(exc))
            bundle = None
        if bundle is not None and bundle.uuids:
            return [bundle]

        try:
            entries = sorted(url.iterdir())
        except OSError:
            return [bundle] if bundle is not None and is_dsym_name(url.name) else []

        bundles = []
        for entry in entries:
            if not is_dsym_name(entry.name):
                continue
            try:
                bundles.append(cls.load(entry, uuid_dumper))
            except DSYMLoadError as exc:
                log.warning("embedded_dsym_load_failed", path=str(entry), error=str(exc))
        if not bundles and bundle is not None and is_dsym_name(url.name):
            return [bundle]
        return bundles

    @property
    def uuid_strings(self) -> set[str]:
        return {uuid.pretty for uuid in self.uuids}

    def select_binary(
        self,
        process_name: str,
        uuid: BinaryUUID | None = None,
        architecture: Architecture | str | None = None,
    ) -> str | None:
        """Pick the DWARF binary to resolve ``process_name`` against.

        Only paths whose last component equals ``process_name`` qualify. Among
        those, the one the dump tool reported for ``uuid`` (and
        ``architecture``, when given) is preferred; otherwise the first
        qualifying path wins. Pure lookup, the bundle is not modified.
        """
        candidates = [p for p in self.binary_paths if Path(p).name == process_name]
        if not candidates:
            return None

        if uuid is not None:
            arch = Architecture.from_tag(architecture) if isinstance(architecture, str) else architecture
            for dsym_slice in self.slices:
                if dsym_slice.uuid != uuid:
                    continue
                if arch is not None and dsym_slice.architecture not in (arch, Architecture.UNKNOWN):
                    continue
                if dsym_slice.binary_path in candidates:
                    return dsym_slice.binary_path

        return candidates[0]
