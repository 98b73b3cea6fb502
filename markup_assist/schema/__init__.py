"""Schema module - authoritative source for the markup vocabulary.

This module provides:
- The component type table with each type's own properties
- Enumerated value domains for selector and enum attributes
- The universal base attributes and container types
- An explicit tag/type registry

Example usage:
    >>> from markup_assist.schema import default_registry
    >>> registry = default_registry()
    >>> "button" in registry.tags()
    True
"""

from .lib import (
    BASE_ATTRIBUTES,
    BASE_FRAGMENT,
    BOOLEAN_TOKENS,
    BUILTIN_BINDINGS,
    BUILTIN_DOMAINS,
    BUILTIN_TYPES,
    CONTAINER_TYPES,
    NAME_PATTERN,
    ROOT_TYPE,
    SELECTOR_ATTRIBUTES,
    SELECTOR_PROPERTY_TYPES,
    TEXT_INPUT_ATTRIBUTES,
    TEXT_INPUT_TYPE,
    TEXT_PROPERTY_TYPES,
    AttributeDeclaration,
    ContentModel,
    ElementDeclaration,
    EnumConstant,
    EnumDomain,
    PropertyDef,
    PropertyType,
    TypeNode,
    TypeRegistry,
    TypeResolver,
    UnresolvedTypeError,
    ValueKind,
    default_registry,
)

__all__ = [
    # Enums
    "ValueKind",
    "PropertyType",
    "ContentModel",
    # Data model
    "EnumConstant",
    "EnumDomain",
    "PropertyDef",
    "TypeNode",
    "AttributeDeclaration",
    "ElementDeclaration",
    "TypeResolver",
    "UnresolvedTypeError",
    # Vocabulary
    "ROOT_TYPE",
    "NAME_PATTERN",
    "BASE_FRAGMENT",
    "BASE_ATTRIBUTES",
    "BOOLEAN_TOKENS",
    "TEXT_INPUT_TYPE",
    "TEXT_INPUT_ATTRIBUTES",
    "CONTAINER_TYPES",
    "SELECTOR_ATTRIBUTES",
    "TEXT_PROPERTY_TYPES",
    "SELECTOR_PROPERTY_TYPES",
    "BUILTIN_DOMAINS",
    "BUILTIN_TYPES",
    "BUILTIN_BINDINGS",
    # Registry
    "TypeRegistry",
    "default_registry",
]
