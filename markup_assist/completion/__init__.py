"""Completion module - suggest tag and attribute names at a caret.

Example:
    >>> from markup_assist.completion import CompletionEngine
    >>> engine = CompletionEngine.from_grammar_file("sierra.dtd")
    >>> [c.text for c in engine.complete("<bu", 3)]
    ['button']
"""

from .lib import (
    Completion,
    CompletionContext,
    CompletionEngine,
    ContextKind,
    complete,
    find_context,
)

__all__ = [
    "ContextKind",
    "CompletionContext",
    "Completion",
    "CompletionEngine",
    "find_context",
    "complete",
]
