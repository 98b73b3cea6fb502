"""Compiler module - derive grammar text from tag/type metadata.

Example:
    >>> from markup_assist.compiler import compile_grammar
    >>> from markup_assist.schema import default_registry
    >>> text = compile_grammar(default_registry())
    >>> "<!ELEMENT button EMPTY>" in text
    True
"""

from .lib import (
    CompilationResult,
    GrammarWriteError,
    SchemaCompiler,
    compile_grammar,
    compile_grammar_file,
    render_attribute_list,
    render_element,
    render_fragment,
    write_grammar,
)

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
