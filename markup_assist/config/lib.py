"""Centralized environment configuration management for markup-assist.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from markup_assist.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.MARKUP_LOG_LEVEL)  # Returns str
    >>> bindings = get_environment(EnvVar.MARKUP_BINDINGS_FILE)  # Path | None
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "MARKUP_GRAMMAR_FILE").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by markup-assist.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - grammar: Compiled grammar location
        - compiler: Schema compiler inputs
        - logging: Log configuration
    """

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------
    MARKUP_GRAMMAR_FILE = EnvConfig(
        name="MARKUP_GRAMMAR_FILE",
        default=Path("sierra.dtd"),
        var_type=Path,
        description="Compiled grammar file, relative to the working directory",
        category="grammar",
    )

    # -------------------------------------------------------------------------
    # Compiler Inputs
    # -------------------------------------------------------------------------
    MARKUP_BINDINGS_FILE = EnvConfig(
        name="MARKUP_BINDINGS_FILE",
        default=None,
        var_type=Path,
        description="Extra tag=type bindings applied before compiling",
        category="compiler",
    )
    MARKUP_TYPE_PATH = EnvConfig(
        name="MARKUP_TYPE_PATH",
        default=None,
        var_type=Path,
        description="Directory searched for *.json type definitions",
        category="compiler",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    MARKUP_LOG_LEVEL = EnvConfig(
        name="MARKUP_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the command line tools",
        category="logging",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None or value == "":
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value)

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, bool, or Path).

    Example:
        >>> get_environment(EnvVar.MARKUP_GRAMMAR_FILE)
        PosixPath('sierra.dtd')
        >>> get_environment(EnvVar.MARKUP_LOG_LEVEL, override="DEBUG")
        'DEBUG'
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)

    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_grammar_path(override: Path | str | None = None) -> Path:
    """Get the compiled grammar path.

    Relative paths resolve against the current working directory.

    Resolution: override > MARKUP_GRAMMAR_FILE > ./sierra.dtd
    """
    if override is not None:
        path = Path(override)
    else:
        path = get_environment(EnvVar.MARKUP_GRAMMAR_FILE)

    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def get_bindings_file(override: Path | str | None = None) -> Path | None:
    """Get the optional bindings file path."""
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.MARKUP_BINDINGS_FILE)


def get_type_path(override: Path | str | None = None) -> Path | None:
    """Get the optional type definition search path."""
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.MARKUP_TYPE_PATH)


def get_log_level(override: str | None = None) -> str:
    """Get the configured log level name, upper-cased."""
    return str(get_environment(EnvVar.MARKUP_LOG_LEVEL, override=override)).upper()


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (grammar, compiler, logging).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


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
