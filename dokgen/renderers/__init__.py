"""Output renderers for documentation records."""

from __future__ import annotations

import json
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..models import ProjectDocumentation

FORMAT_JSON = "json"
FORMAT_MARKDOWN = "md"
FORMAT_HTML = "html"

FORMATS = (FORMAT_JSON, FORMAT_MARKDOWN, FORMAT_HTML)

_TEMPLATES = {
    FORMAT_MARKDOWN: "documentation.md.j2",
    FORMAT_HTML: "documentation.html.j2",
}
_TEMPLATES_DIR = Path(__file__).with_name("templates")
_BLANK_RUN = re.compile(r"\n{3,}")


class RecordError(ValueError):
    """Raised when a documentation record file cannot be decoded."""


def to_json(record: ProjectDocumentation) -> str:
    """Serialize a record as pretty-printed JSON (the .dok format)."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False) + "\n"


def load_record(path: Path | str) -> ProjectDocumentation:
    """Read a .dok file back into a :class:`ProjectDocumentation`."""
    record_path = Path(path)
    text = record_path.read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordError(f"{record_path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise RecordError(f"{record_path} must contain a JSON object")
    try:
        return ProjectDocumentation.from_dict(payload)
    except (KeyError, TypeError, AttributeError) as exc:
        raise RecordError(f"{record_path} is not a documentation record: {exc}") from exc


def _create_env(fmt: str) -> Environment:
    loader = FileSystemLoader(str(_TEMPLATES_DIR))
    return Environment(
        loader=loader,
        autoescape=fmt == FORMAT_HTML,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render(record: ProjectDocumentation, fmt: str = FORMAT_JSON) -> str:
    """Render ``record`` in one of :data:`FORMATS`."""
    if fmt == FORMAT_JSON:
        return to_json(record)
    if fmt not in _TEMPLATES:
        raise ValueError(f"Unknown output format: {fmt!r}")

    template = _create_env(fmt).get_template(_TEMPLATES[fmt])
    rendered = template.render(
        metadata=record.metadata,
        dependencies=record.dependencies,
        types=sorted(record.types.items()),
        functions=sorted(record.functions.items()),
    )
    return _BLANK_RUN.sub("\n\n", rendered).strip() + "\n"


__all__ = [
    "FORMATS",
    "FORMAT_HTML",
    "FORMAT_JSON",
    "FORMAT_MARKDOWN",
    "RecordError",
    "load_record",
    "render",
    "to_json",
]
