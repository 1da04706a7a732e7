"""Doc comment collection for Rust sources."""

from __future__ import annotations

from typing import List, Optional, Sequence

DOC_MARKER = "///"


def doc_comment_text(line: str) -> Optional[str]:
    """Return the text of a ``///`` doc comment line, or None for other lines.

    The marker and at most one following space are stripped. ``////`` lines
    are plain comments in Rust and are not treated as documentation, even
    though they begin with the marker; a plain prefix test would accept them.
    """
    stripped = line.lstrip()
    if not stripped.startswith(DOC_MARKER) or stripped.startswith(DOC_MARKER + "/"):
        return None
    body = stripped[len(DOC_MARKER):]
    if body.startswith(" "):
        body = body[1:]
    return body.rstrip("\r\n")


def _join(parts: Sequence[str]) -> str:
    return " ".join(parts)


def aggregate_doc_comments(text: str) -> str:
    """Join every doc comment line in ``text`` with single spaces."""
    parts: List[str] = []
    for line in text.splitlines():
        body = doc_comment_text(line)
        if body is not None:
            parts.append(body)
    return _join(parts)


def _is_attribute(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("#[") and stripped.endswith("]")


def preceding_doc_comment(lines: Sequence[str], index: int) -> str:
    """Return the doc comment block directly above ``lines[index]``.

    Single-line attributes between the block and the declaration are skipped;
    any blank or code line ends the block.
    """
    cursor = index - 1
    while cursor >= 0 and _is_attribute(lines[cursor]):
        cursor -= 1

    block: List[str] = []
    while cursor >= 0:
        body = doc_comment_text(lines[cursor])
        if body is None:
            break
        block.append(body)
        cursor -= 1
    block.reverse()
    return _join(block)


__all__ = [
    "DOC_MARKER",
    "aggregate_doc_comments",
    "doc_comment_text",
    "preceding_doc_comment",
]
