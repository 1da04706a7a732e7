"""Core data models for the documentation record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

PROJECT_TYPE_RUST = "rust-project"


@dataclass(frozen=True)
class PackageMetadata:
    """Package-level metadata read from the manifest."""

    author: str = ""
    type: str = PROJECT_TYPE_RUST
    name: str = ""
    version: str = ""
    description: str = ""
    license: str = ""
    repository: Optional[str] = None
    distributor: Optional[str] = None


@dataclass(frozen=True)
class FunctionParameter:
    """A single parameter of a public function signature."""

    name: str
    type: Optional[str] = None
    description: Optional[str] = None
    default: Optional[str] = None


@dataclass(frozen=True)
class FunctionExample:
    """Usage example attached to a function."""

    name: str
    description: str
    code: str


@dataclass(frozen=True)
class FunctionDocumentation:
    """Documentation for a public function."""

    definition: str
    description: Optional[str] = None
    params: List[FunctionParameter] = field(default_factory=list)
    examples: List[FunctionExample] = field(default_factory=list)


@dataclass(frozen=True)
class TypeDocumentation:
    """Documentation for a public struct, enum or trait."""

    definition: str
    description: Optional[str] = None
    usage: Optional[str] = None
    implementations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectDocumentation:
    """Top-level documentation record emitted for a project."""

    metadata: PackageMetadata
    dependencies: List[str] = field(default_factory=list)
    types: Dict[str, TypeDocumentation] = field(default_factory=dict)
    functions: Dict[str, FunctionDocumentation] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible view of the record."""
        return {
            "metadata": _metadata_to_dict(self.metadata),
            "dependencies": list(self.dependencies),
            "types": {name: _type_to_dict(doc) for name, doc in self.types.items()},
            "functions": {
                name: _function_to_dict(doc) for name, doc in self.functions.items()
            },
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProjectDocumentation":
        """Rebuild a record from the structure produced by :meth:`to_dict`.

        Raises ``TypeError`` or ``KeyError`` when the payload does not have
        the expected shape; callers translate these into their own errors.
        """
        metadata = payload["metadata"]
        if not isinstance(metadata, Mapping):
            raise TypeError("metadata must be a mapping")
        types = payload.get("types") or {}
        functions = payload.get("functions") or {}
        if not isinstance(types, Mapping) or not isinstance(functions, Mapping):
            raise TypeError("types and functions must be mappings")
        return cls(
            metadata=PackageMetadata(
                author=str(metadata.get("author", "")),
                type=str(metadata.get("type", PROJECT_TYPE_RUST)),
                name=str(metadata.get("name", "")),
                version=str(metadata.get("version", "")),
                description=str(metadata.get("description", "")),
                license=str(metadata.get("license", "")),
                repository=_opt_str(metadata.get("repository")),
                distributor=_opt_str(metadata.get("distributor")),
            ),
            dependencies=[str(dep) for dep in payload.get("dependencies") or []],
            types={str(name): _type_from_dict(raw) for name, raw in types.items()},
            functions={
                str(name): _function_from_dict(raw) for name, raw in functions.items()
            },
        )


def _metadata_to_dict(metadata: PackageMetadata) -> Dict[str, Any]:
    return {
        "author": metadata.author,
        "type": metadata.type,
        "name": metadata.name,
        "version": metadata.version,
        "description": metadata.description,
        "license": metadata.license,
        "repository": metadata.repository,
        "distributor": metadata.distributor,
    }


def _param_to_dict(param: FunctionParameter) -> Dict[str, Any]:
    return {
        "name": param.name,
        "type": param.type,
        "description": param.description,
        "default": param.default,
    }


def _function_to_dict(doc: FunctionDocumentation) -> Dict[str, Any]:
    return {
        "definition": doc.definition,
        "description": doc.description,
        "params": [_param_to_dict(param) for param in doc.params],
        "examples": [
            {"name": ex.name, "description": ex.description, "code": ex.code}
            for ex in doc.examples
        ],
    }


def _type_to_dict(doc: TypeDocumentation) -> Dict[str, Any]:
    return {
        "definition": doc.definition,
        "description": doc.description,
        "usage": doc.usage,
        "implementations": list(doc.implementations),
    }


def _function_from_dict(raw: Mapping[str, Any]) -> FunctionDocumentation:
    params = [
        FunctionParameter(
            name=str(item["name"]),
            type=_opt_str(item.get("type")),
            description=_opt_str(item.get("description")),
            default=_opt_str(item.get("default")),
        )
        for item in raw.get("params") or []
    ]
    examples = [
        FunctionExample(
            name=str(item.get("name", "")),
            description=str(item.get("description", "")),
            code=str(item.get("code", "")),
        )
        for item in raw.get("examples") or []
    ]
    return FunctionDocumentation(
        definition=str(raw["definition"]),
        description=_opt_str(raw.get("description")),
        params=params,
        examples=examples,
    )


def _type_from_dict(raw: Mapping[str, Any]) -> TypeDocumentation:
    return TypeDocumentation(
        definition=str(raw["definition"]),
        description=_opt_str(raw.get("description")),
        usage=_opt_str(raw.get("usage")),
        implementations=[str(item) for item in raw.get("implementations") or []],
    )


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
