"""Grammar compilation from tag/type metadata.

The compiler turns a registry snapshot into grammar text made of three
statement shapes:

    <!ENTITY % javax.swing.JLabel "%javax.swing.JComponent; text CDATA ...">
    <!ELEMENT label EMPTY>
    <!ATTLIST label %javax.swing.JLabel;>

Each type gets one fragment holding only the attributes it declares itself;
inheritance is expressed by chaining to the ancestor's fragment. The
universal base fragment comes first, then one fragment per collected type
(ancestors before descendants), then an element and attribute list
declaration per tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from markup_assist.collector import collect_types
from markup_assist.config import get_grammar_path
from markup_assist.core import get_logger
from markup_assist.schema import (
    BASE_ATTRIBUTES,
    BASE_FRAGMENT,
    BOOLEAN_TOKENS,
    CONTAINER_TYPES,
    ROOT_TYPE,
    SELECTOR_ATTRIBUTES,
    SELECTOR_PROPERTY_TYPES,
    TEXT_INPUT_ATTRIBUTES,
    TEXT_INPUT_TYPE,
    TEXT_PROPERTY_TYPES,
    AttributeDeclaration,
    ContentModel,
    ElementDeclaration,
    PropertyDef,
    PropertyType,
    TypeNode,
    TypeRegistry,
    ValueKind,
)

logger = get_logger("compiler")


class GrammarWriteError(OSError):
    """Raised when the grammar file cannot be written.

    Whatever reached the file is incomplete.

    Attributes:
        path: The grammar file being written.
    """

    def __init__(self, path: Path, error: OSError):
        super().__init__(f"Could not write {path}: {error}")
        self.path = path


@dataclass
class CompilationResult:
    """Outcome of a grammar compilation.

    Attributes:
        text: The complete grammar text.
        type_count: Number of type fragments emitted (base excluded).
        tag_count: Number of element declarations emitted.
        path: Where the grammar was written, if it was.
    """

    text: str
    type_count: int
    tag_count: int
    path: Path | None = None


# =============================================================================
# Statement Rendering
# =============================================================================


def render_fragment(
    identity: str,
    base: str | None,
    attributes: list[AttributeDeclaration] | tuple[AttributeDeclaration, ...],
) -> str:
    """Render a fragment (parameter entity) declaration."""
    parts: list[str] = []
    if base is not None:
        parts.append(f"%{base};")
    for attribute in attributes:
        parts.append(f"{attribute.name} {attribute.definition}")
    return f'<!ENTITY % {identity} "{" ".join(parts)}">'


def render_element(element: ElementDeclaration) -> str:
    """Render an element declaration."""
    return f"<!ELEMENT {element.tag} {element.content.value}>"


def render_attribute_list(element: ElementDeclaration) -> str:
    """Render an attribute list declaration referencing a type fragment."""
    return f"<!ATTLIST {element.tag} %{element.type_identity};>"


# =============================================================================
# Compiler
# =============================================================================


class SchemaCompiler:
    """Compiles a registry snapshot into grammar text.

    Example:
        >>> compiler = SchemaCompiler(default_registry())
        >>> result = compiler.compile()
        >>> result.text.splitlines()[0][:40]
        '<!ENTITY % org.httprpc.sierra.UILoader "'
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry

    def derive_attribute(self, prop: PropertyDef) -> AttributeDeclaration | None:
        """Derive the attribute declaration for a property.

        Returns None when the property's type cannot be written in markup.
        """
        if prop.type in SELECTOR_PROPERTY_TYPES and prop.name in SELECTOR_ATTRIBUTES:
            domain = self.registry.resolve_domain(SELECTOR_ATTRIBUTES[prop.name])
            return AttributeDeclaration(prop.name, ValueKind.TOKENS, domain.keys())

        if prop.type == PropertyType.BOOLEAN:
            return AttributeDeclaration(prop.name, ValueKind.BOOLEAN, BOOLEAN_TOKENS)

        if prop.type == PropertyType.ENUM:
            if prop.domain is None:
                return None
            domain = self.registry.resolve_domain(prop.domain)
            return AttributeDeclaration(prop.name, ValueKind.TOKENS, domain.tokens())

        if prop.type in TEXT_PROPERTY_TYPES:
            return AttributeDeclaration(prop.name, ValueKind.TEXT)

        return None

    def fragment_attributes(self, node: TypeNode) -> list[AttributeDeclaration]:
        """Attributes a type's own fragment declares."""
        attributes = []
        for prop in node.properties:
            attribute = self.derive_attribute(prop)
            if attribute is None:
                logger.debug(f"Skipping {node.simple_name}.{prop.name} ({prop.type.value})")
                continue
            attributes.append(attribute)

        if node.identity == TEXT_INPUT_TYPE:
            attributes.extend(TEXT_INPUT_ATTRIBUTES)

        return attributes

    def content_model(self, identity: str) -> ContentModel:
        """ANY for container types and their descendants, EMPTY otherwise."""
        lineage = {node.identity for node in self.registry.lineage(identity)}
        if lineage.intersection(CONTAINER_TYPES):
            return ContentModel.ANY
        return ContentModel.EMPTY

    def element_declarations(self) -> list[ElementDeclaration]:
        """One element declaration per bound tag, in binding order."""
        return [
            ElementDeclaration(tag, identity, self.content_model(identity))
            for tag, identity in self.registry.bindings.items()
        ]

    def compile(self) -> CompilationResult:
        """Compile the registry into grammar text.

        Raises:
            UnresolvedTypeError: If a type or enum domain cannot be resolved.
        """
        types = collect_types(self.registry)

        base = [AttributeDeclaration(name, ValueKind.TEXT) for name in BASE_ATTRIBUTES]
        lines = [render_fragment(BASE_FRAGMENT, None, base)]

        for node in types:
            parent = BASE_FRAGMENT if node.base == ROOT_TYPE else node.base
            lines.append(
                render_fragment(node.identity, parent, self.fragment_attributes(node))
            )

        elements = self.element_declarations()
        for element in elements:
            lines.append(render_element(element))
            lines.append(render_attribute_list(element))

        logger.info(f"Compiled {len(types)} type fragments and {len(elements)} elements")
        return CompilationResult(
            text="\n".join(lines) + "\n",
            type_count=len(types),
            tag_count=len(elements),
        )


# =============================================================================
# Entry Points
# =============================================================================


def compile_grammar(registry: TypeRegistry) -> str:
    """Compile a registry into grammar text."""
    return SchemaCompiler(registry).compile().text


def write_grammar(text: str, path: Path | str) -> Path:
    """Write grammar text in a single write.

    Write errors propagate unchanged; whatever reached the file must be
    treated as invalid by the caller.
    """
    path = Path(path)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
        f.flush()
    return path


def compile_grammar_file(
    bindings_file: Path | str | None = None,
    search_path: Path | str | None = None,
    output: Path | str | None = None,
) -> CompilationResult:
    """Build a registry from the given inputs, compile it and write it.

    The grammar is rendered completely before the output file is opened,
    so resolution failures never leave a file behind.

    Args:
        bindings_file: Optional extra ``tag=type`` bindings.
        search_path: Optional directory of JSON type definitions.
        output: Grammar file to write. Defaults to the configured grammar
            path (``sierra.dtd`` in the working directory).

    Returns:
        CompilationResult with the written path.

    Raises:
        BindingError: If an input file is missing or malformed.
        UnresolvedTypeError: If a binding or ancestor cannot be resolved.
        GrammarWriteError: If writing the grammar fails.
    """
    from markup_assist.bindings import build_registry

    registry = build_registry(bindings_file=bindings_file, search_path=search_path)
    result = SchemaCompiler(registry).compile()
    path = get_grammar_path(output)
    try:
        result.path = write_grammar(result.text, path)
    except OSError as e:
        raise GrammarWriteError(path, e) from e
    logger.info(f"Wrote grammar to {result.path}")
    return result


__all__ = [
    "GrammarWriteError",
    "CompilationResult",
    "SchemaCompiler",
    "render_fragment",
    "render_element",
    "render_attribute_list",
    "compile_grammar",
    "write_grammar",
    "compile_grammar_file",
]
