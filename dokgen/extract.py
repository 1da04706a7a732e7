"""Lexical extraction of public Rust declarations."""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .comments import aggregate_doc_comments, preceding_doc_comment
from .config import COMMENT_SCOPE_DECLARATION, COMMENT_SCOPE_FILE
from .logging import get_logger
from .models import FunctionDocumentation, FunctionParameter, TypeDocumentation

_FN_HEAD = re.compile(
    r"^[ \t]*(pub[ \t]+"
    r"(?:(?:const|async|unsafe|extern(?:[ \t]+\"[^\"\n]*\")?)[ \t]+)*"
    r"fn[ \t]+([A-Za-z_][A-Za-z0-9_]*))",
    re.MULTILINE,
)
_TYPE_HEAD = re.compile(
    r"^[ \t]*pub[ \t]+(?:unsafe[ \t]+)?(struct|enum|trait)[ \t]+([A-Za-z_][A-Za-z0-9_]*)",
    re.MULTILINE,
)
_WHITESPACE = re.compile(r"\s+")
_COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_RAW_STRING = re.compile(r'r(#*)"')
_TRAILING_COMMA = re.compile(r",\s*\)$")

_OPENERS = "([{"
_CLOSERS = ")]}"

_logger = get_logger("extract")


@dataclass
class ExtractedDeclarations:
    """Public declarations found in one or more source files, keyed by name."""

    functions: Dict[str, FunctionDocumentation] = field(default_factory=dict)
    types: Dict[str, TypeDocumentation] = field(default_factory=dict)

    def update(self, other: "ExtractedDeclarations") -> None:
        """Merge ``other`` into this collection; later names replace earlier ones."""
        for name in other.functions.keys() & self.functions.keys():
            _logger.debug("Function %s redeclared; keeping the later definition", name)
        for name in other.types.keys() & self.types.keys():
            _logger.debug("Type %s redeclared; keeping the later definition", name)
        self.functions.update(other.functions)
        self.types.update(other.types)


# ----------------------------------------------------------------------
# Scanning helpers


def _skip_literal(text: str, index: int) -> int:
    """Return the index after a comment or literal starting at ``index``.

    Returns ``index`` unchanged when no comment or literal starts there.
    """
    char = text[index]
    nxt = text[index + 1] if index + 1 < len(text) else ""

    if char == "/" and nxt == "/":
        end = text.find("\n", index)
        return len(text) if end == -1 else end
    if char == "/" and nxt == "*":
        end = text.find("*/", index + 2)
        return len(text) if end == -1 else end + 2
    if char == "r" and nxt in {'"', "#"} and (index == 0 or not _is_ident(text[index - 1])):
        match = _RAW_STRING.match(text, index)
        if match:
            terminator = '"' + match.group(1)
            end = text.find(terminator, match.end())
            return len(text) if end == -1 else end + len(terminator)
    if char == '"':
        cursor = index + 1
        while cursor < len(text):
            if text[cursor] == "\\":
                cursor += 2
                continue
            if text[cursor] == '"':
                return cursor + 1
            cursor += 1
        return len(text)
    if char == "'":
        # Character literals; a lone quote is a lifetime.
        if nxt == "\\":
            end = text.find("'", index + 2)
            return len(text) if end == -1 else end + 1
        if index + 2 < len(text) and text[index + 2] == "'":
            return index + 3
    return index


def _is_ident(char: str) -> bool:
    return char.isalnum() or char == "_"


def _find_matching(text: str, open_index: int) -> Optional[int]:
    """Return the index of the delimiter closing ``text[open_index]``."""
    depth = 0
    index = open_index
    while index < len(text):
        skipped = _skip_literal(text, index)
        if skipped != index:
            index = skipped
            continue
        char = text[index]
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return None


def _skip_generics(text: str, index: int) -> int:
    """Skip a ``<...>`` generic parameter list starting at ``index``."""
    depth = 0
    cursor = index
    while cursor < len(text):
        char = text[cursor]
        if char == "<":
            depth += 1
        elif char == ">" and text[cursor - 1] != "-":
            depth -= 1
            if depth == 0:
                return cursor + 1
        cursor += 1
    return cursor


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def find_body_end(text: str, start: int) -> int:
    """Return the index just past the type declaration beginning at ``start``.

    A declaration ends at the brace closing its body, or at a top-level ``;``
    for bodiless and tuple forms. Nesting is tracked by depth, not by layout.
    """
    depth = 0
    index = start
    while index < len(text):
        skipped = _skip_literal(text, index)
        if skipped != index:
            index = skipped
            continue
        char = text[index]
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if char == "}" and depth <= 0:
                return index + 1
        elif char == ";" and depth == 0:
            return index + 1
        index += 1
    return len(text)


# ----------------------------------------------------------------------
# Parameters


def split_parameters(text: str) -> List[FunctionParameter]:
    """Split a parameter list on top-level commas into name/type pairs."""
    segments: List[str] = []
    depth = 0
    current: List[str] = []
    for position, char in enumerate(text):
        if char in "([{<":
            depth += 1
        elif char in ")]}" or (char == ">" and (position == 0 or text[position - 1] != "-")):
            depth -= 1
        elif char == "," and depth == 0:
            segments.append("".join(current))
            current = []
            continue
        current.append(char)
    segments.append("".join(current))

    params: List[FunctionParameter] = []
    for segment in segments:
        segment = _WHITESPACE.sub(" ", segment).strip()
        if not segment:
            continue
        name, sep, type_part = segment.partition(":")
        type_part = type_part.strip()
        params.append(
            FunctionParameter(
                name=name.strip(),
                type=type_part if sep and type_part else None,
            )
        )
    return params


# ----------------------------------------------------------------------
# Extraction


def _line_index(text: str, offset: int) -> int:
    return text.count("\n", 0, offset)


def _extract_functions(
    text: str, lines: List[str], file_description: Optional[str]
) -> Dict[str, FunctionDocumentation]:
    functions: Dict[str, FunctionDocumentation] = {}
    for match in _FN_HEAD.finditer(text):
        name = match.group(2)
        cursor = _skip_whitespace(text, match.end())
        if cursor < len(text) and text[cursor] == "<":
            cursor = _skip_whitespace(text, _skip_generics(text, cursor))
        if cursor >= len(text) or text[cursor] != "(":
            _logger.debug("Skipping fn %s: no parameter list", name)
            continue
        close = _find_matching(text, cursor)
        if close is None:
            _logger.debug("Skipping fn %s: unbalanced parameter list", name)
            continue

        head = _COMMENT.sub(" ", text[match.start(1) : close + 1])
        definition = _WHITESPACE.sub(" ", head).strip()
        definition = _TRAILING_COMMA.sub(")", definition.replace("( ", "(").replace(" )", ")"))
        params = split_parameters(_COMMENT.sub(" ", text[cursor + 1 : close]))

        if file_description is None:
            description = preceding_doc_comment(lines, _line_index(text, match.start(1)))
        else:
            description = file_description

        if name in functions:
            _logger.debug("Function %s redeclared; keeping the later definition", name)
        functions[name] = FunctionDocumentation(
            definition=definition,
            description=description,
            params=params,
            examples=[],
        )
    return functions


def _extract_types(
    text: str, lines: List[str], file_description: Optional[str]
) -> Dict[str, TypeDocumentation]:
    types: Dict[str, TypeDocumentation] = {}
    for match in _TYPE_HEAD.finditer(text):
        name = match.group(2)
        end = find_body_end(text, match.end())
        definition = textwrap.dedent(text[match.start() : end]).strip()

        if file_description is None:
            description = preceding_doc_comment(lines, _line_index(text, match.start()))
        else:
            description = file_description

        if name in types:
            _logger.debug("Type %s redeclared; keeping the later definition", name)
        types[name] = TypeDocumentation(
            definition=definition,
            description=description,
            usage=None,
            implementations=[],
        )
    return types


def extract_declarations(
    text: str, comment_scope: str = COMMENT_SCOPE_DECLARATION
) -> ExtractedDeclarations:
    """Find public functions and types in one file's text.

    ``comment_scope`` selects how doc comments are attached: ``"declaration"``
    uses the block directly above each declaration, ``"file"`` attaches the
    whole-file aggregate to every declaration.
    """
    if comment_scope not in {COMMENT_SCOPE_DECLARATION, COMMENT_SCOPE_FILE}:
        raise ValueError(f"Unknown comment scope: {comment_scope!r}")

    lines = text.split("\n")
    file_description = (
        aggregate_doc_comments(text) if comment_scope == COMMENT_SCOPE_FILE else None
    )
    return ExtractedDeclarations(
        functions=_extract_functions(text, lines, file_description),
        types=_extract_types(text, lines, file_description),
    )


__all__ = [
    "ExtractedDeclarations",
    "extract_declarations",
    "find_body_end",
    "split_parameters",
]
