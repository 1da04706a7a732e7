"""Source directory scanning."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

from .logging import get_logger

DEFAULT_SOURCE_DIR = "src"

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "target",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

_logger = get_logger("scanner")


@dataclass(frozen=True)
class SourceFile:
    """A source file and its full text content."""

    path: Path
    relative_path: str
    text: str


def _list_flat(source_root: Path) -> List[Path]:
    entries = sorted(source_root.iterdir(), key=lambda entry: entry.name)
    return [entry for entry in entries if entry.is_file()]


def _list_recursive(source_root: Path) -> List[Path]:
    files: List[Path] = []

    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(source_root, onerror=_raise):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES:
                continue
            files.append(current_dir / filename)
    return files


def iter_source_files(
    project_dir: Path | str,
    source_dir: str = DEFAULT_SOURCE_DIR,
    *,
    recursive: bool = True,
) -> Iterator[SourceFile]:
    """Yield each file below ``project_dir/source_dir`` with its text.

    With ``recursive=False`` only the immediate entries of the source directory
    are visited. Each file is read to completion before the next is opened.
    Listing and read failures propagate as ``OSError``.
    """
    source_root = Path(project_dir) / source_dir
    if not source_root.exists():
        raise FileNotFoundError(f"Source directory not found: {source_root}")
    if not source_root.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {source_root}")

    paths = _list_recursive(source_root) if recursive else _list_flat(source_root)
    _logger.debug("Found %d source files under %s", len(paths), source_root)

    for path in paths:
        text = path.read_text(encoding="utf-8")
        yield SourceFile(
            path=path,
            relative_path=path.relative_to(source_root).as_posix(),
            text=text,
        )


__all__ = ["DEFAULT_SOURCE_DIR", "SourceFile", "iter_source_files"]
