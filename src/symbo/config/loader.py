"""YAML configuration loader with env var interpolation.

Lookup order: an explicit ``--config`` path, then ``$SYMBO_CONFIG``, then the
first of ``symbo.yaml`` / ``.symbo.yaml`` (or ``.yml``) in the working
directory, ``~/.config/symbo`` and the home directory. Without any file the
built-in defaults apply, which run the tools through ``xcrun``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from symbo.config.defaults import CONFIG_ENV_VAR, CONFIG_FILE_NAMES, CONFIG_SEARCH_PATHS
from symbo.config.models import SymboConfig
from symbo.errors import ConfigError
from symbo.utils.logging import get_logger

log = get_logger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)(?::([^}]*))?\}")


def _interpolate_env(value: str) -> str:
    """Replace ${VAR} or ${VAR:default} with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        default = match.group(2)
        return os.environ.get(match.group(1), default if default is not None else "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _walk_and_interpolate(obj: object) -> object:
    # tool commands are lists of strings, so lists are walked too
    if isinstance(obj, str):
        return _interpolate_env(obj)
    if isinstance(obj, dict):
        return {key: _walk_and_interpolate(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_walk_and_interpolate(item) for item in obj]
    return obj


def find_config_file(explicit_path: str | Path | None = None) -> Path | None:
    """Locate a symbo config file, returning the first found or None."""
    if explicit_path is None:
        explicit_path = os.environ.get(CONFIG_ENV_VAR) or None
    if explicit_path is not None:
        candidate = Path(explicit_path).expanduser()
        return candidate if candidate.is_file() else None

    for search_dir in CONFIG_SEARCH_PATHS:
        for name in CONFIG_FILE_NAMES:
            candidate = search_dir / name
            if candidate.is_file():
                return candidate
    return None


def load_config(path: str | Path | None = None) -> SymboConfig:
    """Load and validate configuration, falling back to defaults.

    Raises ConfigError when the file exists but is not valid YAML or does not
    validate against :class:`SymboConfig`.
    """
    config_path = find_config_file(path)
    if config_path is None:
        log.debug("config_defaults", requested=str(path) if path else None)
        return SymboConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read config {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {config_path} must be a mapping, got {type(raw).__name__}")

    try:
        config = SymboConfig.model_validate(_walk_and_interpolate(raw))
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {config_path}:\n{exc}") from exc

    log.debug("config_loaded", path=str(config_path))
    return config
