"""Caret-aware tag and attribute name completion.

Completion is a pure function of the buffer text and caret offset: the
engine infers whether the caret sits in a tag name or in a tag's attribute
area, then filters the schema's candidates by the typed prefix.

Example:
    >>> engine = CompletionEngine(schema)
    >>> [c.text for c in engine.complete("<button n", 9)]
    ['name']
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from markup_assist.core import get_logger
from markup_assist.grammar import Schema, load_grammar

logger = get_logger("completion")

QUOTE_CHARACTERS = ('"', "'")
LEADING_TOKEN_PATTERN = re.compile(r"\S*")
TRAILING_TOKEN_PATTERN = re.compile(r"\S*\Z")


class ContextKind(str, Enum):
    """Where the caret sits relative to the enclosing tag."""

    TAG_NAME = "tag_name"
    ATTRIBUTE_NAME = "attribute_name"
    NONE = "none"


@dataclass(frozen=True)
class CompletionContext:
    """Caret context for a single completion request.

    Attributes:
        kind: Position kind.
        tag: Tag whose attributes are being completed (ATTRIBUTE_NAME only).
        prefix: Text already typed for the candidate.
    """

    kind: ContextKind
    tag: str | None = None
    prefix: str = ""


@dataclass(frozen=True)
class Completion:
    """A completion candidate."""

    text: str


NO_CONTEXT = CompletionContext(ContextKind.NONE)


def _inside_quotes(tag_text: str) -> bool:
    """Whether the text since ``<`` ends inside an open quoted value."""
    open_quote = None
    for char in tag_text:
        if open_quote is None:
            if char in QUOTE_CHARACTERS:
                open_quote = char
        elif char == open_quote:
            open_quote = None
    return open_quote is not None


def find_context(text: str, caret: int) -> CompletionContext:
    """Infer the completion context at a caret offset.

    Args:
        text: Full buffer text.
        caret: Offset into the buffer, ``0 <= caret <= len(text)``.

    Returns:
        The caret's CompletionContext; NONE outside any tag, inside a quoted
        attribute value or for an out-of-range caret.
    """
    if not 0 <= caret <= len(text):
        return NO_CONTEXT

    before = text[:caret]
    start = before.rfind("<")
    if start == -1 or before.rfind(">") > start:
        return NO_CONTEXT

    tag_text = before[start + 1 :]
    if _inside_quotes(tag_text):
        return NO_CONTEXT

    tag = LEADING_TOKEN_PATTERN.match(tag_text).group()
    if tag == tag_text:
        return CompletionContext(ContextKind.TAG_NAME, prefix=tag)

    prefix = TRAILING_TOKEN_PATTERN.search(tag_text).group()
    return CompletionContext(ContextKind.ATTRIBUTE_NAME, tag=tag or None, prefix=prefix)


def _filter(candidates, prefix: str) -> list[Completion]:
    folded = prefix.casefold()
    matches = [c for c in candidates if c.casefold().startswith(folded)]
    return [Completion(text) for text in sorted(matches)]


class CompletionEngine:
    """Suggests tag and attribute names from a parsed Schema.

    The engine holds nothing but the immutable Schema, so a single instance
    may serve any number of requests.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    @classmethod
    def from_grammar_file(cls, path: Path | str) -> CompletionEngine:
        """Create an engine from a compiled grammar file.

        Raises:
            OSError: If the file cannot be read.
            GrammarFormatError: If the grammar is malformed.
        """
        return cls(load_grammar(path))

    def candidates(self, context: CompletionContext) -> frozenset[str]:
        """Unfiltered candidate pool for a context."""
        if context.kind == ContextKind.TAG_NAME:
            return self.schema.tags
        if context.kind == ContextKind.ATTRIBUTE_NAME and context.tag is not None:
            return self.schema.attributes_for(context.tag)
        return frozenset()

    def complete(self, text: str, caret: int) -> list[Completion]:
        """Completion candidates at a caret offset.

        Candidates are filtered by the typed prefix case-insensitively, keep
        their own casing and are sorted by ordinal comparison. Never raises;
        unknown tags and carets outside any tag give an empty list.

        Args:
            text: Full buffer text.
            caret: Caret offset into the buffer.

        Returns:
            Ordered list of Completion candidates.
        """
        context = find_context(text, caret)
        completions = _filter(self.candidates(context), context.prefix)
        logger.debug(
            f"{context.kind.value} completion for {context.tag or '-'} "
            f"prefix '{context.prefix}': {len(completions)} candidates"
        )
        return completions


def complete(schema: Schema, text: str, caret: int) -> list[Completion]:
    """Complete against a schema without keeping an engine around."""
    return CompletionEngine(schema).complete(text, caret)


__all__ = [
    "ContextKind",
    "CompletionContext",
    "Completion",
    "CompletionEngine",
    "find_context",
    "complete",
]
