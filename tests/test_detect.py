"""Tests for project type detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from dokgen.detect import ProjectType, UnsupportedProjectError, detect_project


def test_detects_cargo_project(tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").write_text("[package]\n", encoding="utf-8")

    project_type = detect_project(tmp_path)

    assert project_type is ProjectType.CARGO
    assert str(project_type) == "Cargo"


def test_other_directories_are_unsupported(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")

    with pytest.raises(UnsupportedProjectError) as excinfo:
        detect_project(tmp_path)

    assert str(tmp_path) in str(excinfo.value)
    assert "not of a valid project structure" in str(excinfo.value)
