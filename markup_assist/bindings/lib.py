"""Tag bindings and type resolution beyond the built-in table.

Two external inputs can extend a registry before compilation:
- A bindings file of ``tag=type.Identity`` lines (read with python-dotenv)
- A search path holding ``*.json`` type definition files, exposed as a
  fallback `TypeResolver` so types are only pulled in when referenced

Example:
    >>> registry = build_registry(
    ...     bindings_file=Path("bindings.properties"),
    ...     search_path=Path("lib"),
    ... )
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from markup_assist.core import get_logger
from markup_assist.schema import (
    NAME_PATTERN,
    ROOT_TYPE,
    EnumConstant,
    EnumDomain,
    PropertyDef,
    PropertyType,
    TypeNode,
    TypeRegistry,
    UnresolvedTypeError,
    default_registry,
)

logger = get_logger("bindings")


class BindingError(Exception):
    """Base exception for bindings and type definition errors."""


class TypeDefinitionError(BindingError):
    """Raised when a type definition file cannot be loaded.

    Attributes:
        path: The offending file or directory.
    """

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


# =============================================================================
# Type Definition Files
# =============================================================================


class PropertyDefinition(BaseModel):
    """A property declared by a plug-in type."""

    name: str = Field(
        ..., pattern=NAME_PATTERN, description="Property/attribute name"
    )
    type: PropertyType = Field(..., description="Declared value type")
    domain: str | None = Field(
        None, description="Enum domain key (required for enum properties)"
    )

    @model_validator(mode="after")
    def _check_domain(self) -> PropertyDefinition:
        if self.type == PropertyType.ENUM and not self.domain:
            raise ValueError(f"enum property '{self.name}' must name a domain")
        return self

    def to_property(self) -> PropertyDef:
        return PropertyDef(self.name, self.type, self.domain)


class ConstantDefinition(BaseModel):
    """A single enum constant."""

    name: str = Field(..., pattern=NAME_PATTERN, description="Constant name")
    key: str | None = Field(
        None,
        pattern=NAME_PATTERN,
        description="Selector key (defaults to the derived token)",
    )


class DomainDefinition(BaseModel):
    """An enumerated value domain."""

    key: str = Field(..., min_length=1, description="Symbolic domain key")
    constants: list[ConstantDefinition] = Field(..., min_length=1)

    def to_domain(self) -> EnumDomain:
        constants = []
        for constant in self.constants:
            token = constant.name.lower().replace("_", "-")
            constants.append(EnumConstant(constant.name, constant.key or token))
        return EnumDomain(self.key, tuple(constants))


class TypeDefinition(BaseModel):
    """A component type supplied from outside the built-in table."""

    identity: str = Field(
        ..., pattern=NAME_PATTERN, description="Fully qualified name"
    )
    base: str = Field(
        ROOT_TYPE, pattern=NAME_PATTERN, description="Immediate ancestor"
    )
    properties: list[PropertyDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_properties(self) -> TypeDefinition:
        names = [p.name for p in self.properties]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate properties: {', '.join(duplicates)}")
        if self.identity == ROOT_TYPE:
            raise ValueError(f"'{ROOT_TYPE}' cannot be redefined")
        return self

    def to_node(self) -> TypeNode:
        return TypeNode(
            self.identity,
            self.base,
            tuple(p.to_property() for p in self.properties),
        )


class TypeDefinitionFile(BaseModel):
    """Contents of one ``*.json`` file on the search path."""

    types: list[TypeDefinition] = Field(default_factory=list)
    domains: list[DomainDefinition] = Field(default_factory=list)


class SearchPathResolver:
    """Resolve types from JSON definition files under a directory.

    Every ``*.json`` file below the search path is validated up front; types
    and domains are handed out on demand through `resolve` and
    `resolve_domain`, so only referenced types end up in a grammar.
    """

    def __init__(self, search_path: Path | str):
        self.search_path = Path(search_path)
        self._types: dict[str, TypeNode] = {}
        self._domains: dict[str, EnumDomain] = {}
        self._load()

    def _load(self) -> None:
        if not self.search_path.is_dir():
            raise TypeDefinitionError(self.search_path, "search path does not exist")

        for path in sorted(self.search_path.rglob("*.json")):
            try:
                definitions = TypeDefinitionFile.model_validate_json(
                    path.read_text(encoding="utf-8")
                )
            except (OSError, UnicodeDecodeError) as e:
                raise TypeDefinitionError(path, f"cannot read file: {e}") from e
            except PydanticValidationError as e:
                raise TypeDefinitionError(path, str(e)) from e

            for definition in definitions.types:
                if definition.identity in self._types:
                    raise TypeDefinitionError(
                        path, f"type '{definition.identity}' is already defined"
                    )
                self._types[definition.identity] = definition.to_node()
            for domain in definitions.domains:
                if domain.key in self._domains:
                    raise TypeDefinitionError(
                        path, f"domain '{domain.key}' is already defined"
                    )
                self._domains[domain.key] = domain.to_domain()

            logger.debug(
                f"Loaded {len(definitions.types)} types, "
                f"{len(definitions.domains)} domains from {path}"
            )

    def identities(self) -> list[str]:
        """All type identities available on the search path."""
        return sorted(self._types)

    def resolve(self, identity: str) -> TypeNode:
        try:
            return self._types[identity]
        except KeyError:
            raise UnresolvedTypeError(identity) from None

    def resolve_domain(self, key: str) -> EnumDomain:
        try:
            return self._domains[key]
        except KeyError:
            raise UnresolvedTypeError(key, "enum domain") from None


# =============================================================================
# Bindings Files
# =============================================================================


def load_bindings(path: Path | str) -> dict[str, str]:
    """Read ``tag=type.Identity`` bindings from a file.

    Blank lines and ``#`` comments are ignored. Order is preserved.

    Args:
        path: Bindings file path.

    Returns:
        Mapping of tag to type identity.

    Raises:
        BindingError: If the file is missing or a binding has no type.
    """
    path = Path(path)
    if not path.is_file():
        raise BindingError(f"Bindings file not found: {path}")

    bindings: dict[str, str] = {}
    for tag, identity in dotenv_values(path, interpolate=False).items():
        if not identity or not identity.strip():
            raise BindingError(f"{path}: binding for '{tag}' has no type")
        bindings[tag] = identity.strip()
    return bindings


def apply_bindings(registry: TypeRegistry, bindings: Mapping[str, str]) -> None:
    """Bind each tag in order, replacing existing bindings.

    Raises:
        UnresolvedTypeError: If a bound type cannot be resolved.
    """
    for tag, identity in bindings.items():
        registry.bind(tag, identity)
        logger.debug(f"Bound <{tag}> to {identity}")


def build_registry(
    bindings_file: Path | str | None = None,
    search_path: Path | str | None = None,
) -> TypeRegistry:
    """Build the registry a compilation runs against.

    Args:
        bindings_file: Optional file of extra ``tag=type`` bindings.
        search_path: Optional directory of JSON type definitions.

    Returns:
        A default registry extended with the given inputs.

    Raises:
        BindingError: If an input file is missing or malformed.
        UnresolvedTypeError: If a binding names an unknown type.
    """
    fallback = SearchPathResolver(search_path) if search_path is not None else None
    registry = default_registry(fallback=fallback)

    if bindings_file is not None:
        bindings = load_bindings(bindings_file)
        apply_bindings(registry, bindings)
        logger.info(f"Applied {len(bindings)} bindings from {bindings_file}")

    return registry


__all__ = [
    "BindingError",
    "TypeDefinitionError",
    "PropertyDefinition",
    "ConstantDefinition",
    "DomainDefinition",
    "TypeDefinition",
    "TypeDefinitionFile",
    "SearchPathResolver",
    "load_bindings",
    "apply_bindings",
    "build_registry",
]
