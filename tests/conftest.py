"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from symbo.tools.runner import ToolResult

CRASHY_UUID = "4D5FF2E3-B1A4-3B0E-9D1B-6B6B8D4E5B2C"
KIT_UUID = "A1B2C3D4-E5F6-4718-9A0B-1C2D3E4F5A6B"
DYLD_UUID = "002418CC-AD11-3D10-865B-015591D24E6C"

SAMPLE_REPORT = """\
Process:               Crashy [4242]
Path:                  /Applications/Crashy.app/Contents/MacOS/Crashy
Identifier:            com.inket.Crashy
Version:               1.0 (1)
Code Type:             X86-64 (Native)
Parent Process:        launchd [1]

Date/Time:             2024-08-03 10:15:42.123 +0200
OS Version:            macOS 14.5 (23F79)

Exception Type:        EXC_BAD_INSTRUCTION (SIGILL)

Thread 0 Crashed:: Dispatch queue: com.apple.main-thread
0   Crashy                             0x000000010a0f39a4 0x10a0f0000 + 14756
1   Crashy                             0x000000010a0f3b20 0x10a0f0000 + 15136
2   libdyld.dylib                      0x00007fff6c1e3cc9 start + 1

Thread 1:
0   CrashyKit                          0x000000010a200100 0x10a1f0000 + 65792

Binary Images:
       0x10a0f0000 -        0x10a0f7fff +com.inket.Crashy (1.0 - 1) <4d5ff2e3-b1a4-3b0e-9d1b-6b6b8d4e5b2c> /Applications/Crashy.app/Contents/MacOS/Crashy
       0x10a1f0000 -        0x10a20ffff +com.inket.CrashyKit (1.0 - 1) <A1B2C3D4E5F647189A0B1C2D3E4F5A6B> /Applications/Crashy.app/Contents/Frameworks/CrashyKit.framework/Versions/A/CrashyKit
    0x7fff6c1e0000 -     0x7fff6c1e1fff  libdyld.dylib (832.7.3) <002418CC-AD11-3D10-865B-015591D24E6C> /usr/lib/system/libdyld.dylib
"""


def uuid_line(uuid: str, arch: str, binary: str) -> str:
    return f"UUID: {uuid} ({arch}) {binary}"


class FakeDumper:
    """Stands in for ``dwarfdump --uuid``: known paths print their UUID lines,
    anything else fails like dwarfdump does on a non-Mach-O path."""

    def __init__(self) -> None:
        self.outputs: dict[str, str] = {}
        self.calls: list[Path] = []

    def register(self, path: Path, *lines: str) -> None:
        self.outputs[str(path)] = "\n".join(lines) + "\n"

    def __call__(self, path: Path) -> ToolResult:
        self.calls.append(Path(path))
        output = self.outputs.get(str(path))
        command = ("dwarfdump", "--uuid", str(path))
        if output is None:
            return ToolResult(command, error=f"error: {path}: not a valid Mach-O file\n", returncode=1)
        return ToolResult(command, output=output)


class FakeResolver:
    """Stands in for ``atos``: returns a symbol per (binary name, address)."""

    def __init__(self, symbols: dict[str, str] | None = None, default: str = "") -> None:
        self.symbols = symbols or {}
        self.default = default
        self.calls: list[tuple[str, str, str, str]] = []

    def __call__(self, dsym_path: str, architecture: str, load_address: str, address: str) -> ToolResult:
        self.calls.append((dsym_path, architecture, load_address, address))
        output = self.symbols.get(address, self.default)
        command = ("atos", "-o", dsym_path, "-arch", architecture, "-l", load_address, address)
        return ToolResult(command, output=output + "\n" if output else "")


def make_dsym(root: Path, bundle_name: str, binary_name: str) -> Path:
    """Create an on-disk dSYM layout with a single DWARF binary."""
    bundle = root / bundle_name
    dwarf = bundle / "Contents" / "Resources" / "DWARF"
    dwarf.mkdir(parents=True)
    (dwarf / binary_name).write_bytes(b"\xcf\xfa\xed\xfe")
    return bundle


@pytest.fixture
def sample_report_text() -> str:
    return SAMPLE_REPORT


@pytest.fixture
def fake_dumper() -> FakeDumper:
    return FakeDumper()


@pytest.fixture
def crashy_dsym(tmp_path, fake_dumper) -> Path:
    bundle = make_dsym(tmp_path, "Crashy.app.dSYM", "Crashy")
    fake_dumper.register(
        bundle,
        uuid_line(CRASHY_UUID, "x86_64", str(bundle / "Contents/Resources/DWARF/Crashy")),
    )
    return bundle


@pytest.fixture
def kit_dsym(tmp_path, fake_dumper) -> Path:
    bundle = make_dsym(tmp_path, "CrashyKit.framework.dSYM", "CrashyKit")
    fake_dumper.register(
        bundle,
        uuid_line(KIT_UUID, "x86_64", str(bundle / "Contents/Resources/DWARF/CrashyKit")),
    )
    return bundle


# Markers
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: requires the Xcode command line tools")
