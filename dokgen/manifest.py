"""Cargo manifest reader."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .detect import MANIFEST_FILENAME
from .logging import get_logger
from .models import PROJECT_TYPE_RUST, PackageMetadata

PURL_ECOSYSTEM = "cargo"

_logger = get_logger("manifest")


class ManifestError(ValueError):
    """Raised when the manifest is not valid TOML."""


@dataclass(frozen=True)
class CargoManifest:
    """Metadata and dependency coordinates extracted from Cargo.toml."""

    metadata: PackageMetadata
    dependencies: List[str] = field(default_factory=list)


def format_dependency_purl(name: str, version: Optional[str] = None) -> str:
    """Return the package coordinate for a Cargo dependency."""
    if version is None:
        return f"pkg:{PURL_ECOSYSTEM}/{name}"
    return f"pkg:{PURL_ECOSYSTEM}/{name}@{version}"


def read_manifest(project_dir: Path | str) -> CargoManifest:
    """Read ``Cargo.toml`` from ``project_dir``.

    I/O failures (missing or unreadable manifest) propagate as ``OSError``.
    Content that does not parse as TOML raises :class:`ManifestError`.
    """
    manifest_path = Path(project_dir) / MANIFEST_FILENAME
    content = manifest_path.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"Failed to parse {manifest_path}: {exc}") from exc
    return parse_manifest(data)


def parse_manifest(data: Mapping[str, Any]) -> CargoManifest:
    """Build a :class:`CargoManifest` from decoded TOML.

    Dependencies come out sorted by crate name, whatever order they were
    declared in.
    """
    package = _as_table(data.get("package"))
    metadata = PackageMetadata(
        author=_first_author(package.get("authors")),
        type=PROJECT_TYPE_RUST,
        name=_as_str(package.get("name")),
        version=_as_str(package.get("version")),
        description=_as_str(package.get("description")),
        license=_as_str(package.get("license")),
        repository=_opt_str(package.get("repository")),
        distributor=None,
    )

    dependencies = [
        format_dependency_purl(name, _dependency_version(value))
        for name, value in sorted(_as_table(data.get("dependencies")).items())
    ]
    _logger.debug(
        "Manifest for %r declares %d dependencies", metadata.name, len(dependencies)
    )
    return CargoManifest(metadata=metadata, dependencies=dependencies)


def _dependency_version(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        version = value.get("version")
        if isinstance(version, str):
            return version
    return None


def _first_author(value: Any) -> str:
    if isinstance(value, list) and value and isinstance(value[0], str):
        return value[0]
    return ""


def _as_table(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


__all__ = [
    "CargoManifest",
    "ManifestError",
    "format_dependency_purl",
    "parse_manifest",
    "read_manifest",
]
