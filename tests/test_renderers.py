"""Tests for record serialization and rendering."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dokgen.models import (
    FunctionDocumentation,
    FunctionParameter,
    PackageMetadata,
    ProjectDocumentation,
    TypeDocumentation,
)
from dokgen.renderers import RecordError, load_record, render, to_json


def _record() -> ProjectDocumentation:
    return ProjectDocumentation(
        metadata=PackageMetadata(
            author="Ada",
            name="demo",
            version="0.1.0",
            description="Demo crate",
            license="MIT",
            repository="https://example.com/demo",
        ),
        dependencies=["pkg:cargo/foo@1.2", "pkg:cargo/local"],
        types={
            "Wrapper": TypeDocumentation(
                definition="pub struct Wrapper<T> {\n    inner: Vec<T>,\n}",
                description="Holds <things> & stuff.",
            )
        },
        functions={
            "greet": FunctionDocumentation(
                definition="pub fn greet(name: &str, loud: bool)",
                description="Greets someone.",
                params=[
                    FunctionParameter(name="name", type="&str"),
                    FunctionParameter(name="loud", type="bool"),
                ],
            ),
            "reset": FunctionDocumentation(
                definition="pub fn reset(&mut self)",
                description="",
                params=[FunctionParameter(name="&mut self")],
            ),
        },
    )


def test_json_layout_matches_record_fields() -> None:
    payload = json.loads(to_json(_record()))

    assert set(payload) == {"metadata", "dependencies", "types", "functions"}
    assert payload["metadata"]["type"] == "rust-project"
    assert payload["metadata"]["distributor"] is None
    assert payload["dependencies"] == ["pkg:cargo/foo@1.2", "pkg:cargo/local"]
    assert payload["functions"]["greet"]["params"][0] == {
        "name": "name",
        "type": "&str",
        "description": None,
        "default": None,
    }
    assert payload["functions"]["greet"]["examples"] == []
    assert payload["types"]["Wrapper"]["implementations"] == []
    assert payload["types"]["Wrapper"]["usage"] is None


def test_load_record_reads_written_file(tmp_path: Path) -> None:
    record = _record()
    path = tmp_path / "documentation.dok"
    path.write_text(to_json(record), encoding="utf-8")

    assert load_record(path) == record


def test_load_record_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.dok"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RecordError):
        load_record(path)


def test_load_record_rejects_wrong_structure(tmp_path: Path) -> None:
    path = tmp_path / "other.dok"
    path.write_text(json.dumps({"functions": {}}), encoding="utf-8")

    with pytest.raises(RecordError):
        load_record(path)

    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(RecordError):
        load_record(path)


def test_markdown_rendering() -> None:
    output = render(_record(), "md")

    assert output.startswith("# demo\n")
    assert "Demo crate" in output
    assert "- **Version:** 0.1.0" in output
    assert "- `pkg:cargo/foo@1.2`" in output
    assert "### `Wrapper`" in output
    assert "```rust\npub struct Wrapper<T> {\n    inner: Vec<T>,\n}\n```" in output
    assert "| `name` | `&str` |" in output
    assert "| `&mut self` | - |" in output
    assert "\n\n\n" not in output


def test_markdown_rendering_of_empty_record() -> None:
    output = render(ProjectDocumentation(metadata=PackageMetadata()), "md")

    assert output.startswith("# Unnamed project")
    assert "_No dependencies declared._" in output
    assert "_No public types._" in output
    assert "_No public functions._" in output


def test_html_rendering_escapes_content() -> None:
    output = render(_record(), "html")

    assert output.startswith("<!DOCTYPE html>")
    assert "<h1>demo</h1>" in output
    assert "Holds &lt;things&gt; &amp; stuff." in output
    assert "pub struct Wrapper&lt;T&gt;" in output
    assert '<section id="fn-greet">' in output


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ValueError):
        render(_record(), "pdf")
