"""Bindings module - extend the tag/type registry from external inputs."""

from .lib import (
    BindingError,
    ConstantDefinition,
    DomainDefinition,
    PropertyDefinition,
    SearchPathResolver,
    TypeDefinition,
    TypeDefinitionError,
    TypeDefinitionFile,
    apply_bindings,
    build_registry,
    load_bindings,
)

__all__ = [
    # Errors
    "BindingError",
    "TypeDefinitionError",
    # Definition file models
    "PropertyDefinition",
    "ConstantDefinition",
    "DomainDefinition",
    "TypeDefinition",
    "TypeDefinitionFile",
    # Resolution
    "SearchPathResolver",
    "load_bindings",
    "apply_bindings",
    "build_registry",
]
