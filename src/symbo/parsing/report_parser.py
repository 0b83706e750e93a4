"""Crash report text parser.

Splits the report into ``Process:`` sections and extracts, per section:

  * the process name and architecture,
  * the binary images listed under ``Binary Images:``,
  * stack frames whose target resolves to one of those images.

Anything that does not match the line grammar is ignored. Frames pointing at
images that are not listed (system images outside the report, unloaded
libraries) are dropped without error.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable

from symbo.errors import InvalidUUIDError
from symbo.models.identifiers import Architecture, BinaryUUID
from symbo.models.report import FRAME_LINE_RE, BinaryImage, ReportProcess, StackFrame
from symbo.utils.logging import get_logger

log = get_logger(__name__)

PROCESS_SECTION_RE = re.compile(
    r"^(Process:.*?)(?=\Z|^Process:)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
PROCESS_NAME_RE = re.compile(r"^Process:[ \t]*(?P<name>[^\s\[].*?)[ \t]*\[", re.IGNORECASE | re.MULTILINE)
BINARY_IMAGES_HEADER_RE = re.compile(r"^Binary Images:.*$", re.IGNORECASE | re.MULTILINE)

# Examples:
#   "0x104c2c000 -        0x104c33fff com.inket.Crashy (1.0 - 1) <4d5ff2e3-...> /Applications/Crashy.app/Contents/MacOS/Crashy"
#   "0x10b0e2000 -        0x10b0e9fff +com.inket.Crashy (1.0 - 1) <4D5FF2E3...> /path/Crashy"
#   "0x1002e0000 - 0x1002fbfff CrashyApp arm64e  <4d5ff2e3b1a43b0e9d1b6b6b8d4e5b2c> /var/containers/.../CrashyApp"
BINARY_IMAGE_LINE_RE = re.compile(
    r"""
    ^\s*
    (?P<load_address>0x[0-9a-f]+)\s+-\s+
    (?:0x[0-9a-f]+|\?+)\s+
    \+?(?P<identifier>.+?)\s+
    (?:(?P<arch>arm64e|arm64_32|arm64|x86_64h|x86_64|i386|armv7[sk]?|ppc)\s+)?
    (?:\(.*?\)\s+)?
    <(?P<uuid>[-0-9a-f]+)>
    \s*(?P<path>.*?)\s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)


class BinaryImageMap:
    """Lookup of a section's binary images by load address or by name."""

    def __init__(self, binary_images: Iterable[BinaryImage]) -> None:
        self._by_load_address: dict[str, BinaryImage] = {}
        self._by_name: dict[str, BinaryImage] = {}
        for image in binary_images:
            self._by_load_address.setdefault(image.load_address.lower(), image)
            self._by_name.setdefault(image.name, image)

    def for_load_address(self, load_address: str) -> BinaryImage | None:
        return self._by_load_address.get(load_address.lower())

    def for_name(self, name: str) -> BinaryImage | None:
        return self._by_name.get(name)

    def resolve(self, target: str) -> BinaryImage | None:
        return self.for_load_address(target) or self.for_name(target)


def split_process_sections(content: str) -> list[str]:
    return [match.group(1) for match in PROCESS_SECTION_RE.finditer(content)]


def parse_binary_image_line(line: str) -> BinaryImage | None:
    match = BINARY_IMAGE_LINE_RE.match(line)
    if match is None:
        return None

    try:
        uuid = BinaryUUID.parse(match.group("uuid"))
    except InvalidUUIDError:
        log.debug("binary_image_bad_uuid", line=line)
        return None

    path = match.group("path") or None
    if path and not path.startswith("?"):
        name = posixpath.basename(path)
    else:
        path = None
        name = match.group("identifier").strip()

    return BinaryImage(
        name=name,
        load_address=match.group("load_address"),
        uuid=uuid,
        path=path,
    )


def parse_binary_images(section: str) -> list[BinaryImage]:
    """Parse the image list following ``Binary Images:`` (or the whole section)."""
    header = BINARY_IMAGES_HEADER_RE.search(section)
    body = section[header.end():] if header else section

    images = []
    for line in body.splitlines():
        image = parse_binary_image_line(line)
        if image is not None:
            images.append(image)
    return images


def parse_stack_frame(line: str, image_map: BinaryImageMap) -> StackFrame | None:
    match = FRAME_LINE_RE.match(line)
    if match is None:
        return None

    image = image_map.resolve(match.group("target"))
    if image is None:
        return None

    return StackFrame(
        original_line=line,
        cryptic_address=match.group("address"),
        target=match.group("target"),
        byte_offset=match.group("offset"),
        binary_image=image,
    )


def parse_stack_frames(section: str, image_map: BinaryImageMap) -> list[StackFrame]:
    frames = []
    for line in section.splitlines():
        frame = parse_stack_frame(line, image_map)
        if frame is not None:
            frames.append(frame)
    return frames


def parse_process(section: str) -> ReportProcess | None:
    name_match = PROCESS_NAME_RE.search(section)
    if name_match is None:
        log.debug("process_without_name")
        return None

    binary_images = parse_binary_images(section)
    return ReportProcess(
        name=name_match.group("name"),
        architecture=Architecture.find(section),
        binary_images=binary_images,
        stack_frames=parse_stack_frames(section, BinaryImageMap(binary_images)),
    )


def parse_processes(content: str) -> list[ReportProcess]:
    """Extract every process described in a text crash report."""
    processes = []
    for section in split_process_sections(content):
        process = parse_process(section)
        if process is not None:
            processes.append(process)

    log.debug(
        "report_parsed",
        processes=len(processes),
        frames=sum(len(p.stack_frames) for p in processes),
    )
    return processes
