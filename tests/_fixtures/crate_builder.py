"""Helper utilities for constructing temporary Cargo projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from dokgen.assembler import document_project
from dokgen.models import ProjectDocumentation


class CrateBuilder:
    """Utility for writing files into a throwaway crate and documenting it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "crate"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the crate."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def manifest(self, name: str = "demo", version: str = "0.1.0", extra: str = "") -> None:
        """Write a minimal Cargo.toml with optional extra TOML appended."""
        body = f'[package]\nname = "{name}"\nversion = "{version}"\n'
        if extra:
            body += textwrap.dedent(extra).lstrip("\n")
        (self.root / "Cargo.toml").write_text(body, encoding="utf-8")

    def document(self) -> ProjectDocumentation:
        """Run the extraction pass over the crate."""
        return document_project(self.root)

    def path(self) -> Path:
        """Return the crate root path."""
        return self.root


__all__ = ["CrateBuilder"]
