"""Symbo: symbolicate macOS / iOS crash reports with dSYM bundles."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from symbo.version import __version__

if TYPE_CHECKING:
    from symbo.config.models import SymboConfig
    from symbo.session import SymbolicationSession


@dataclass
class SymboContext:
    """Dependency-injection container shared across CLI commands."""

    config: SymboConfig | None = None
    config_path: Path | None = None

    def ensure_config(self) -> SymboConfig:
        if self.config is None:
            from symbo.config.loader import load_config

            self.config = load_config(self.config_path)
        return self.config

    def new_session(self) -> SymbolicationSession:
        """A fresh session for one report, wired to the configured tools."""
        from symbo.session import SymbolicationSession

        return SymbolicationSession(self.ensure_config())


__all__ = ["SymboContext", "__version__"]
