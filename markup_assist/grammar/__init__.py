"""Grammar module - parse compiled grammar text into a Schema."""

from .lib import GrammarFormatError, Schema, load_grammar, parse_grammar

__all__ = ["GrammarFormatError", "Schema", "parse_grammar", "load_grammar"]
