"""markup-assist: grammar compiler and completion engine for UI markup."""

from markup_assist.compiler import SchemaCompiler, compile_grammar, compile_grammar_file
from markup_assist.completion import Completion, CompletionEngine, ContextKind
from markup_assist.grammar import GrammarFormatError, Schema, load_grammar, parse_grammar
from markup_assist.schema import TypeRegistry, default_registry

__all__ = [
    # Registry
    "TypeRegistry",
    "default_registry",
    # Compiler
    "SchemaCompiler",
    "compile_grammar",
    "compile_grammar_file",
    # Grammar
    "Schema",
    "GrammarFormatError",
    "parse_grammar",
    "load_grammar",
    # Completion
    "CompletionEngine",
    "Completion",
    "ContextKind",
]
