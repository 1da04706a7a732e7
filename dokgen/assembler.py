"""Assembly of the project documentation record."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from .config import DokgenConfig, load_config
from .extract import ExtractedDeclarations, extract_declarations
from .logging import get_logger
from .manifest import CargoManifest, read_manifest
from .models import FunctionDocumentation, ProjectDocumentation, TypeDocumentation
from .source_scanner import iter_source_files

_logger = get_logger("assembler")


def assemble(
    manifest: CargoManifest,
    functions: Mapping[str, FunctionDocumentation],
    types: Mapping[str, TypeDocumentation],
) -> ProjectDocumentation:
    """Combine manifest data and extracted declarations into one record."""
    return ProjectDocumentation(
        metadata=manifest.metadata,
        dependencies=list(manifest.dependencies),
        types=dict(types),
        functions=dict(functions),
    )


def document_project(
    project_dir: Path | str, config: Optional[DokgenConfig] = None
) -> ProjectDocumentation:
    """Run the full extraction pass over a Cargo project.

    The manifest is read once, then each source file is extracted in turn.
    Errors from either stage propagate unchanged; nothing is returned on
    failure.
    """
    root = Path(project_dir).expanduser().resolve()
    if config is None:
        config = load_config(root)

    _logger.info("Reading manifest for %s", root)
    manifest = read_manifest(root)

    declarations = ExtractedDeclarations()
    file_count = 0
    for source in iter_source_files(root, config.source_dir, recursive=config.recursive):
        found = extract_declarations(source.text, config.comment_scope)
        _logger.debug(
            "%s: %d functions, %d types",
            source.relative_path,
            len(found.functions),
            len(found.types),
        )
        declarations.update(found)
        file_count += 1

    _logger.info(
        "Documented %d functions and %d types from %d files",
        len(declarations.functions),
        len(declarations.types),
        file_count,
    )
    return assemble(manifest, declarations.functions, declarations.types)


__all__ = ["assemble", "document_project"]
