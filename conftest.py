"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Built-in registry, compiled grammar and parsed schema fixtures
- A completion engine over the built-in grammar
"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

from markup_assist.completion import CompletionEngine
from markup_assist.compiler import compile_grammar
from markup_assist.grammar import Schema, parse_grammar
from markup_assist.schema import TypeRegistry, default_registry

# Load environment variables from .env file
load_dotenv()


@pytest.fixture
def registry() -> TypeRegistry:
    """Fresh registry with the built-in types and tags."""
    return default_registry()


@pytest.fixture(scope="session")
def grammar_text() -> str:
    """Grammar compiled from the built-in registry."""
    return compile_grammar(default_registry())


@pytest.fixture(scope="session")
def schema(grammar_text: str) -> Schema:
    """Schema parsed from the built-in grammar."""
    return parse_grammar(grammar_text)


@pytest.fixture(scope="session")
def engine(schema: Schema) -> CompletionEngine:
    """Completion engine over the built-in schema."""
    return CompletionEngine(schema)
