"""Search result value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class SearchResult:
    path: str
    matched_uuid: str


class SearchOutcome(NamedTuple):
    succeeded: bool
    results: list[SearchResult]
