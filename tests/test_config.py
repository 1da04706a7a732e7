"""Tests for dokgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from dokgen.config import ConfigError, DokgenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DokgenConfig)
    assert config.root == tmp_path.resolve()
    assert config.source_dir == "src"
    assert config.recursive is True
    assert config.comment_scope == "declaration"
    assert config.output == "documentation.dok"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".dokgen.yml"
    config_file.write_text(
        """
source_dir: lib
recursive: false
comment_scope: File
output: out/api.dok
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.source_dir == "lib"
    assert config.recursive is False
    assert config.comment_scope == "file"
    assert config.output == "out/api.dok"


def test_load_config_resolves_sibling_of_other_file(tmp_path: Path) -> None:
    (tmp_path / ".dokgen.yml").write_text("recursive: 'no'\n", encoding="utf-8")

    config = load_config(tmp_path / "Cargo.toml")

    assert config.recursive is False


def test_wrongly_typed_values_fall_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / ".dokgen.yml").write_text(
        "source_dir: [a, b]\nrecursive: maybe\noutput: {}\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.source_dir == "src"
    assert config.recursive is True
    assert config.output == "documentation.dok"


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".dokgen.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).comment_scope == "declaration"


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".dokgen.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".dokgen.yml").write_text("source_dir: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_comment_scope_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".dokgen.yml").write_text("comment_scope: nearby\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert "comment_scope" in str(excinfo.value)
