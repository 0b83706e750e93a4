"""UUID dump of dSYM bundles via ``dwarfdump --uuid``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from symbo.config.models import ToolsConfig
from symbo.errors import InvalidUUIDError
from symbo.models.identifiers import Architecture, BinaryUUID
from symbo.tools.runner import ToolResult, run_tool

# "UUID: 4D5FF2E3-B1A4-3B0E-9D1B-6B6B8D4E5B2C (arm64) /path/App.dSYM/Contents/Resources/DWARF/App"
UUID_LINE_RE = re.compile(r"UUID: (?P<uuid>.*?) \((?P<arch>.*?)\) (?P<binary>.*)")


@dataclass(frozen=True)
class DSYMSlice:
    uuid: BinaryUUID
    architecture: Architecture
    binary_path: str


def dump_uuids(path: Path | str, config: ToolsConfig | None = None) -> ToolResult:
    cfg = config or ToolsConfig()
    return run_tool([*cfg.dwarfdump, str(path)], timeout=cfg.timeout)


def parse_uuid_lines(output: str) -> list[DSYMSlice]:
    """Parse dump output. Lines that don't match, or carry a bad UUID, are skipped."""
    slices = []
    for line in output.splitlines():
        match = UUID_LINE_RE.search(line)
        if match is None:
            continue
        try:
            uuid = BinaryUUID.parse(match.group("uuid"))
        except InvalidUUIDError:
            continue
        slices.append(
            DSYMSlice(
                uuid=uuid,
                architecture=Architecture.from_tag(match.group("arch")),
                binary_path=match.group("binary").strip(),
            )
        )
    return slices
