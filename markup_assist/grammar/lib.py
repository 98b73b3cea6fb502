"""Grammar parsing into an immutable tag/attribute schema.

The recognizer is line oriented and accepts exactly the statement shapes
the compiler produces:

    <!ENTITY % <fragment> "[%<base>; ]<attr> <TYPE> ...">
    <!ELEMENT <tag> EMPTY|ANY>
    <!ATTLIST <tag> %<fragment>;>

where ``<TYPE>`` is ``CDATA`` or ``(tok|tok|...)``. Blank lines are skipped;
anything else is a `GrammarFormatError`. Each tag's attribute set is the
transitive union of its fragment chain.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from markup_assist.core import get_logger

logger = get_logger("grammar")

FRAGMENT_PATTERN = re.compile(r'^<!ENTITY\s+%\s+([^\s"%;<>]+)\s+"([^"]*)"\s*>$')
ELEMENT_PATTERN = re.compile(r"^<!ELEMENT\s+([^\s<>]+)\s+(EMPTY|ANY)\s*>$")
ATTLIST_PATTERN = re.compile(r"^<!ATTLIST\s+([^\s<>]+)\s+%([^\s\"%;<>]+);\s*>$")

REFERENCE_PATTERN = re.compile(r"^%([^\s\"%;<>]+);$")
NAME_PATTERN = re.compile(r"^[^\s\"%;<>()|]+$")
TOKENS_PATTERN = re.compile(r"^\(([^\s\"%;<>()|]+(?:\|[^\s\"%;<>()|]+)*)\)$")

TEXT_DEFINITION = "CDATA"


class GrammarFormatError(ValueError):
    """Raised when grammar text is not in the recognized format.

    Attributes:
        line_number: 1-based line of the offending construct.
        construct: The offending text.
    """

    def __init__(self, message: str, line_number: int, construct: str):
        super().__init__(f"line {line_number}: {message}: {construct}")
        self.line_number = line_number
        self.construct = construct


@dataclass(frozen=True)
class Schema:
    """Parsed grammar: the tag vocabulary and each tag's attributes.

    Attributes:
        tags: Every declared tag.
        attributes: Tag to its flattened attribute names.
        definitions: Tag to attribute value definitions (``CDATA`` or a
            token group), the nearest fragment's definition winning.
        content: Tag to content model (``EMPTY`` or ``ANY``).
    """

    tags: frozenset[str]
    attributes: Mapping[str, frozenset[str]]
    definitions: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    content: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def attributes_for(self, tag: str) -> frozenset[str]:
        """Attribute names valid on a tag (empty if the tag is unknown)."""
        return self.attributes.get(tag, frozenset())

    def describe(self, tag: str) -> list[tuple[str, str]]:
        """Describe each attribute of a tag, sorted by name.

        Free-text attributes read ``Type: String``; token attributes list
        their values, e.g. ``Values: true, false``.

        Raises:
            KeyError: If the tag is not declared.
        """
        if tag not in self.tags:
            raise KeyError(tag)

        definitions = self.definitions.get(tag, {})
        described = []
        for name in sorted(self.attributes[tag]):
            definition = definitions.get(name, TEXT_DEFINITION)
            if definition == TEXT_DEFINITION:
                described.append((name, "Type: String"))
            else:
                values = definition[1:-1].split("|")
                described.append((name, f"Values: {', '.join(values)}"))
        return described


@dataclass
class _Fragment:
    line_number: int
    text: str
    base: str | None
    definitions: dict[str, str]


# =============================================================================
# Parsing
# =============================================================================


def _parse_fragment_body(body: str, line_number: int, line: str):
    """Split a fragment body into its base reference and attribute pairs."""
    tokens = body.split()
    base = None
    if tokens and tokens[0].startswith("%"):
        match = REFERENCE_PATTERN.match(tokens[0])
        if not match:
            raise GrammarFormatError("malformed fragment reference", line_number, line)
        base = match.group(1)
        tokens = tokens[1:]

    if len(tokens) % 2:
        raise GrammarFormatError("attribute without a type", line_number, line)

    definitions: dict[str, str] = {}
    for name, definition in zip(tokens[::2], tokens[1::2]):
        if not NAME_PATTERN.match(name):
            raise GrammarFormatError(f"invalid attribute name '{name}'", line_number, line)
        if definition != TEXT_DEFINITION and not TOKENS_PATTERN.match(definition):
            raise GrammarFormatError(
                f"invalid type '{definition}' for '{name}'", line_number, line
            )
        if name in definitions:
            raise GrammarFormatError(f"duplicate attribute '{name}'", line_number, line)
        definitions[name] = definition

    return base, definitions


def _flatten(
    name: str,
    fragments: dict[str, _Fragment],
    resolved: dict[str, dict[str, str]],
    visiting: set[str],
) -> dict[str, str]:
    """Resolve a fragment's full attribute set through its chain."""
    if name in resolved:
        return resolved[name]

    fragment = fragments[name]
    if name in visiting:
        raise GrammarFormatError(
            f"fragment chain cycle through '{name}'", fragment.line_number, fragment.text
        )

    visiting.add(name)
    definitions: dict[str, str] = {}
    if fragment.base is not None:
        if fragment.base not in fragments:
            raise GrammarFormatError(
                f"undeclared fragment '{fragment.base}'",
                fragment.line_number,
                fragment.text,
            )
        definitions.update(_flatten(fragment.base, fragments, resolved, visiting))
    definitions.update(fragment.definitions)
    visiting.discard(name)

    resolved[name] = definitions
    return definitions


def parse_grammar(text: str) -> Schema:
    """Parse grammar text into a Schema.

    Args:
        text: Grammar text as produced by the compiler.

    Returns:
        Immutable Schema with one entry per declared tag.

    Raises:
        GrammarFormatError: On any unrecognized construct, duplicate
            declaration, undeclared reference, chaining cycle, attribute list
            for an undeclared element or element without an attribute list.
    """
    fragments: dict[str, _Fragment] = {}
    elements: dict[str, tuple[int, str, str]] = {}
    attlists: dict[str, tuple[int, str, str]] = {}

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if match := FRAGMENT_PATTERN.match(line):
            name, body = match.groups()
            if name in fragments:
                raise GrammarFormatError(f"duplicate fragment '{name}'", line_number, line)
            base, definitions = _parse_fragment_body(body, line_number, line)
            fragments[name] = _Fragment(line_number, line, base, definitions)
        elif match := ELEMENT_PATTERN.match(line):
            tag, content = match.groups()
            if tag in elements:
                raise GrammarFormatError(f"duplicate element '{tag}'", line_number, line)
            elements[tag] = (line_number, line, content)
        elif match := ATTLIST_PATTERN.match(line):
            tag, fragment = match.groups()
            if tag in attlists:
                raise GrammarFormatError(
                    f"duplicate attribute list for '{tag}'", line_number, line
                )
            attlists[tag] = (line_number, line, fragment)
        else:
            raise GrammarFormatError("unrecognized construct", line_number, line)

    resolved: dict[str, dict[str, str]] = {}
    for name in fragments:
        _flatten(name, fragments, resolved, set())

    for tag, (line_number, line, fragment) in attlists.items():
        if tag not in elements:
            raise GrammarFormatError(f"undeclared element '{tag}'", line_number, line)
        if fragment not in fragments:
            raise GrammarFormatError(
                f"undeclared fragment '{fragment}'", line_number, line
            )

    attributes: dict[str, frozenset[str]] = {}
    definitions: dict[str, Mapping[str, str]] = {}
    content: dict[str, str] = {}
    for tag, (line_number, line, model) in elements.items():
        if tag not in attlists:
            raise GrammarFormatError(
                f"element '{tag}' has no attribute list", line_number, line
            )
        flattened = resolved[attlists[tag][2]]
        attributes[tag] = frozenset(flattened)
        definitions[tag] = MappingProxyType(dict(flattened))
        content[tag] = model

    logger.debug(f"Parsed {len(fragments)} fragments and {len(elements)} elements")
    return Schema(
        tags=frozenset(elements),
        attributes=MappingProxyType(attributes),
        definitions=MappingProxyType(definitions),
        content=MappingProxyType(content),
    )


def load_grammar(path: Path | str) -> Schema:
    """Read and parse a grammar file.

    Raises:
        OSError: If the file cannot be read.
        GrammarFormatError: If the contents are malformed.
    """
    path = Path(path)
    schema = parse_grammar(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded {len(schema.tags)} tags from {path}")
    return schema


__all__ = [
    "GrammarFormatError",
    "Schema",
    "parse_grammar",
    "load_grammar",
]
