"""Subprocess execution for the external Xcode / Spotlight tools."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from symbo.utils.logging import get_logger

log = get_logger(__name__)

EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


@dataclass(frozen=True)
class ToolResult:
    command: tuple[str, ...]
    output: str = ""
    error: str = ""
    returncode: int = 0

    @property
    def output_text(self) -> str:
        return self.output.strip()

    @property
    def error_text(self) -> str:
        return self.error.strip()

    @property
    def started(self) -> bool:
        """False when the executable could not be launched at all."""
        return self.returncode != EXIT_NOT_FOUND

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


def run_tool(
    cmd: Sequence[str],
    timeout: float | None = None,
    input: str | None = None,
) -> ToolResult:
    """Run ``cmd`` and capture both streams. Never raises for tool failures."""
    command = tuple(str(part) for part in cmd)
    log.debug("running_tool", cmd=shlex.join(command))

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=input,
        )
    except FileNotFoundError:
        log.warning("tool_not_found", tool=command[0])
        return ToolResult(command, error=f"{command[0]}: command not found", returncode=EXIT_NOT_FOUND)
    except subprocess.TimeoutExpired:
        log.error("tool_timeout", tool=command[0], timeout=timeout)
        return ToolResult(command, error=f"{command[0]}: timed out after {timeout} seconds", returncode=EXIT_TIMEOUT)
    except OSError as exc:
        log.error("tool_failed_to_start", tool=command[0], error=str(exc))
        return ToolResult(command, error=str(exc), returncode=EXIT_NOT_FOUND)

    if result.returncode != 0:
        log.debug("tool_nonzero_exit", tool=command[0], returncode=result.returncode, stderr=result.stderr[:500])

    return ToolResult(
        command,
        output=result.stdout or "",
        error=result.stderr or "",
        returncode=result.returncode,
    )
