"""Centralized configuration management for markup-assist.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from markup_assist.config import EnvVar, get_environment
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> grammar = get_environment(EnvVar.MARKUP_GRAMMAR_FILE)  # Path("sierra.dtd")
    >>>
    >>> # Override at runtime
    >>> grammar = get_environment(EnvVar.MARKUP_GRAMMAR_FILE, override=Path("ui.dtd"))

Environment Variable Categories:
    grammar: Location of the compiled grammar file
    compiler: Bindings file and type definition search path
    logging: Log verbosity
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_bindings_file,
    get_environment,
    get_environment_info,
    get_grammar_path,
    get_log_level,
    get_type_path,
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_grammar_path",
    "get_bindings_file",
    "get_type_path",
    "get_log_level",
    # Introspection
    "list_environment_variables",
]
