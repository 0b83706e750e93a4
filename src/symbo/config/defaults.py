"""Default configuration values and paths."""

from __future__ import annotations

from pathlib import Path

CONFIG_FILE_NAMES = [
    "symbo.yaml",
    "symbo.yml",
    ".symbo.yaml",
    ".symbo.yml",
]

CONFIG_ENV_VAR = "SYMBO_CONFIG"

CONFIG_SEARCH_PATHS = [
    Path.cwd(),
    Path.home() / ".config" / "symbo",
    Path.home(),
]

DEFAULT_DWARFDUMP_COMMAND = ["xcrun", "dwarfdump", "--uuid"]
DEFAULT_ATOS_COMMAND = ["xcrun", "atos"]
DEFAULT_MDFIND_COMMAND = ["mdfind"]
DEFAULT_TOOL_TIMEOUT = 60.0

DEFAULT_SEARCH_TIMEOUT = 300.0
DEFAULT_ARCHIVES_DIRECTORY = "~/Library/Developer/Xcode/Archives"
DSYM_EXTENSION = ".dsym"
SPOTLIGHT_UUID_ATTRIBUTE = "com_apple_xcode_dsym_uuids"

DEFAULT_RESOLVER_WORKERS = 1
SYMBOLICATED_MARKER = ">>>> "
