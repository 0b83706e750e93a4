"""Binary images, stack frames and processes extracted from a crash report."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from symbo.models.identifiers import Architecture, BinaryUUID

# Example frame lines:
#   "0   Crashy    0x104c2f9a4 0x104c2c000 + 14756"
#   "1   libsystem_kernel.dylib  0x7ff81a2d4c4a __pthread_kill + 10"
FRAME_LINE_RE = re.compile(
    r"""
    ^\d+\s+
    (?P<image>.+?)\s+
    (?P<address>0x[0-9a-f]+)\s+
    (?P<target>.+?)\s+
    \+\s+
    (?P<offset>.+)$
    """,
    re.IGNORECASE | re.VERBOSE,
)

_SPACES_BEFORE_ADDRESS = " " * 5


@dataclass(frozen=True)
class BinaryImage:
    name: str
    load_address: str
    uuid: BinaryUUID
    path: str | None = field(default=None, compare=False)


@dataclass(eq=False)
class StackFrame:
    """One frame line. Several frames share the same BinaryImage."""

    original_line: str
    cryptic_address: str
    target: str
    byte_offset: str
    binary_image: BinaryImage
    resolved_symbol: str | None = None

    def __post_init__(self) -> None:
        if self.binary_image is None:
            raise ValueError(f"Stack frame without a binary image: {self.original_line!r}")

    @property
    def address_token(self) -> str:
        return f"{self.cryptic_address} {self.target} + {self.byte_offset}"

    def symbolicated_line(self, symbol: str, marker: str = ">>>> ") -> str:
        """Return the original line with the target replaced by ``symbol``.

        The marker takes the place of the five spaces in front of the address
        when they are there, otherwise it is inserted right before it.
        """
        match = FRAME_LINE_RE.match(self.original_line)
        if match is None:
            return self.original_line

        line = self.original_line
        target_start, target_end = match.span("target")
        address_start = match.start("address")

        head = line[:address_start]
        if head.endswith(_SPACES_BEFORE_ADDRESS):
            head = head[: -len(_SPACES_BEFORE_ADDRESS)] + marker
        else:
            head = head + marker

        return head + line[address_start:target_start] + symbol + line[target_end:]


@dataclass
class ReportProcess:
    name: str | None
    architecture: Architecture | None
    binary_images: list[BinaryImage] = field(default_factory=list)
    stack_frames: list[StackFrame] = field(default_factory=list)

    @property
    def binaries_for_symbolication(self) -> list[BinaryImage]:
        """Distinct images referenced by at least one frame, in first-use order."""
        return list(dict.fromkeys(frame.binary_image for frame in self.stack_frames))

    @property
    def uuids_for_symbolication(self) -> list[BinaryUUID]:
        return list(dict.fromkeys(image.uuid for image in self.binaries_for_symbolication))

    @property
    def display_name(self) -> str:
        return self.name or "<null>"
