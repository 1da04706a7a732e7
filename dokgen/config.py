"""Configuration loading for dokgen (.dokgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".dokgen.yml"

COMMENT_SCOPE_DECLARATION = "declaration"
COMMENT_SCOPE_FILE = "file"
_COMMENT_SCOPES = {COMMENT_SCOPE_DECLARATION, COMMENT_SCOPE_FILE}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DokgenConfig:
    """Represents the settings defined in .dokgen.yml."""

    root: Path
    source_dir: str = "src"
    recursive: bool = True
    comment_scope: str = COMMENT_SCOPE_DECLARATION
    output: str = "documentation.dok"


def load_config(config_path: Path) -> DokgenConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DokgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DokgenConfig(root=root)

    source_dir = _as_str(data.get("source_dir"))
    if source_dir:
        config.source_dir = source_dir

    recursive = _as_bool(data.get("recursive"))
    if recursive is not None:
        config.recursive = recursive

    scope = _as_str(data.get("comment_scope"))
    if scope is not None:
        scope = scope.strip().lower()
        if scope not in _COMMENT_SCOPES:
            allowed = ", ".join(sorted(_COMMENT_SCOPES))
            raise ConfigError(f"comment_scope must be one of: {allowed} (got {scope!r})")
        config.comment_scope = scope

    output = _as_str(data.get("output"))
    if output:
        config.output = output

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
