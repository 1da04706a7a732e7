"""Documentation extraction for Cargo projects."""

from .assembler import assemble, document_project
from .models import (
    FunctionDocumentation,
    FunctionExample,
    FunctionParameter,
    PackageMetadata,
    ProjectDocumentation,
    TypeDocumentation,
)

__all__ = [
    "FunctionDocumentation",
    "FunctionExample",
    "FunctionParameter",
    "PackageMetadata",
    "ProjectDocumentation",
    "TypeDocumentation",
    "assemble",
    "document_project",
]
