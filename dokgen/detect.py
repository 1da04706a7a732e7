"""Project type detection."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .logging import get_logger

MANIFEST_FILENAME = "Cargo.toml"

_logger = get_logger("detect")


class ProjectType(str, Enum):
    """Build ecosystems known to dokgen. Only Cargo is extracted today."""

    CARGO = "Cargo"
    NODE = "Node"
    PYTHON = "Python"

    def __str__(self) -> str:
        return self.value


class UnsupportedProjectError(RuntimeError):
    """Raised when a directory does not look like a supported project."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"The entered directory ({path}) is not of a valid project structure."
        )
        self.path = path


def detect_project(path: Path | str) -> ProjectType:
    """Return the project type for ``path`` or raise UnsupportedProjectError."""
    root = Path(path)
    if (root / MANIFEST_FILENAME).exists():
        _logger.debug("Found %s in %s", MANIFEST_FILENAME, root)
        return ProjectType.CARGO
    raise UnsupportedProjectError(root)


__all__ = ["MANIFEST_FILENAME", "ProjectType", "UnsupportedProjectError", "detect_project"]
