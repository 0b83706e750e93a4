"""Binary UUID and CPU architecture value types."""

from __future__ import annotations

import re
import uuid as _uuid
from dataclasses import dataclass
from enum import Enum

from symbo.errors import InvalidUUIDError


@dataclass(frozen=True, order=True)
class BinaryUUID:
    """Build identifier shared by a binary and its dSYM.

    Always stored in canonical uppercase hyphenated form, so equality and
    hashing ignore the case and hyphenation of whatever was parsed.
    """

    value: str

    @classmethod
    def parse(cls, raw: str) -> BinaryUUID:
        text = raw.strip().strip("<>").strip()
        try:
            parsed = _uuid.UUID(hex=text)
        except (ValueError, AttributeError) as exc:
            raise InvalidUUIDError(f"Not a UUID: {raw!r}") from exc
        return cls(str(parsed).upper())

    @property
    def pretty(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


_CODE_TYPE_RE = re.compile(r"^Code Type:\s*(?P<code_type>[^\s(]+)", re.IGNORECASE | re.MULTILINE)
_ARM64E_IMAGE_RE = re.compile(
    r"^\s*0x[0-9a-f]+\s+-\s+\S+\s+\+?\S+\s+arm64e\s+<", re.IGNORECASE | re.MULTILINE
)

_CODE_TYPES = {
    "X86-64": "x86_64",
    "X86": "i386",
    "ARM-64": "arm64",
    "ARM-64E": "arm64e",
    "ARM64_32": "arm64_32",
    "ARM": "armv7",
    "PPC": "ppc",
}


class Architecture(Enum):
    X86_64 = "x86_64"
    X86_64H = "x86_64h"
    I386 = "i386"
    ARM64 = "arm64"
    ARM64E = "arm64e"
    ARM64_32 = "arm64_32"
    ARMV7 = "armv7"
    ARMV7S = "armv7s"
    ARMV7K = "armv7k"
    PPC = "ppc"
    UNKNOWN = "unknown"

    @property
    def atos_arg(self) -> str | None:
        """Value passed to the resolver's ``-arch`` flag, if known."""
        if self is Architecture.UNKNOWN:
            return None
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> Architecture:
        normalized = tag.strip().lower()
        for arch in cls:
            if arch.value == normalized:
                return arch
        mapped = _CODE_TYPES.get(tag.strip().upper())
        return cls(mapped) if mapped else cls.UNKNOWN

    @classmethod
    def find(cls, content: str) -> Architecture | None:
        """Detect the crashed process architecture from report text.

        Returns None when the report has no ``Code Type:`` line at all and
        UNKNOWN when it has one that cannot be mapped.
        """
        match = _CODE_TYPE_RE.search(content)
        if match is None:
            return None

        code_type = match.group("code_type")
        mapped = _CODE_TYPES.get(code_type.upper())
        # some reports already carry the slice tag ("arm64", "x86_64")
        arch = cls(mapped) if mapped else cls.from_tag(code_type)
        # ARM-64 reports don't distinguish arm64e, but the image list does
        if arch is cls.ARM64 and _ARM64E_IMAGE_RE.search(content):
            return cls.ARM64E
        return arch
