"""CLI entry point for markup-assist.

This module acts as the central entry point for the project's CLI tools.
It delegates each command to its handler, which parses the remaining
arguments and returns a process exit code.
"""

import argparse
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

from markup_assist.bindings import BindingError
from markup_assist.compiler import GrammarWriteError, compile_grammar_file
from markup_assist.completion import CompletionEngine
from markup_assist.config import (
    get_bindings_file,
    get_environment,
    get_environment_info,
    get_grammar_path,
    get_log_level,
    get_type_path,
    list_environment_variables,
)
from markup_assist.core import get_logger, setup_logging
from markup_assist.grammar import GrammarFormatError, load_grammar
from markup_assist.schema import UnresolvedTypeError

logger = get_logger("cli")


# =============================================================================
# Compile Command
# =============================================================================


def cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile command."""
    output = get_grammar_path(args.output)
    bindings_file = get_bindings_file(args.bindings)
    search_path = get_type_path(args.search_path)

    try:
        result = compile_grammar_file(
            bindings_file=bindings_file,
            search_path=search_path,
            output=output,
        )
    except GrammarWriteError as e:
        logger.error(str(e))
        e.path.unlink(missing_ok=True)
        return 1
    except (BindingError, UnresolvedTypeError, ValueError, OSError) as e:
        logger.error(f"Compilation failed: {e}")
        return 1

    logger.info(
        f"Grammar: {result.path} ({result.type_count} types, {result.tag_count} tags)"
    )
    return 0


def handle_compile_command(argv: list[str]) -> int:
    """Handle compile-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m markup_assist compile",
        description="Compile the markup grammar from tag/type bindings",
    )
    parser.add_argument(
        "bindings",
        type=Path,
        nargs="?",
        default=None,
        help="Bindings file of tag=type lines (default: MARKUP_BINDINGS_FILE)",
    )
    parser.add_argument(
        "search_path",
        type=Path,
        nargs="?",
        default=None,
        help="Directory of JSON type definitions (default: MARKUP_TYPE_PATH)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Grammar file to write (default: MARKUP_GRAMMAR_FILE or sierra.dtd)",
    )
    args = parser.parse_args(argv)
    return cmd_compile(args)


# =============================================================================
# Complete & Describe Commands
# =============================================================================


def _load_engine(grammar: Path | None) -> CompletionEngine | None:
    path = get_grammar_path(grammar)
    try:
        return CompletionEngine.from_grammar_file(path)
    except OSError as e:
        logger.error(f"Could not read grammar {path}: {e}")
        logger.info("Run 'python -m markup_assist compile' first")
    except GrammarFormatError as e:
        logger.error(f"Invalid grammar {path}: {e}")
    return None


def cmd_complete(args: argparse.Namespace) -> int:
    """Handle the complete command."""
    engine = _load_engine(args.grammar)
    if engine is None:
        return 1

    try:
        text = args.file.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not read {args.file}: {e}")
        return 1

    for completion in engine.complete(text, args.offset):
        print(completion.text)
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    """Handle the describe command."""
    path = get_grammar_path(args.grammar)
    try:
        schema = load_grammar(path)
    except (OSError, GrammarFormatError) as e:
        logger.error(f"Could not load grammar {path}: {e}")
        return 1

    if args.tag not in schema.tags:
        logger.error(f"Unknown tag: {args.tag}")
        return 1

    print(f"<{args.tag}> ({schema.content[args.tag]})")
    for name, description in schema.describe(args.tag):
        print(f"  {name:<32} {description}")
    return 0


def handle_complete_command(argv: list[str]) -> int:
    """Handle complete-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m markup_assist complete",
        description="Suggest tag or attribute names at a caret offset",
    )
    parser.add_argument("file", type=Path, help="Markup file to complete in")
    parser.add_argument("offset", type=int, help="Caret offset (characters)")
    parser.add_argument(
        "--grammar",
        "-g",
        type=Path,
        default=None,
        help="Grammar file (default: MARKUP_GRAMMAR_FILE or sierra.dtd)",
    )
    args = parser.parse_args(argv)
    return cmd_complete(args)


def handle_describe_command(argv: list[str]) -> int:
    """Handle describe-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m markup_assist describe",
        description="List a tag's attributes and their values",
    )
    parser.add_argument("tag", type=str, help="Tag name, e.g. button")
    parser.add_argument(
        "--grammar",
        "-g",
        type=Path,
        default=None,
        help="Grammar file (default: MARKUP_GRAMMAR_FILE or sierra.dtd)",
    )
    args = parser.parse_args(argv)
    return cmd_describe(args)


# =============================================================================
# Env & Test Commands
# =============================================================================


def handle_env_command(argv: list[str]) -> int:
    """List configuration variables and their current values."""
    parser = argparse.ArgumentParser(
        prog="python -m markup_assist env",
        description="Show configuration variables",
    )
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        choices=["grammar", "compiler", "logging"],
        help="Only show one category",
    )
    args = parser.parse_args(argv)

    for var in list_environment_variables(args.category):
        info = get_environment_info(var)
        value = get_environment(var)
        print(f"{info.name:<22} {str(value):<28} {info.description}")
    return 0


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments.

    Usage:
        python -m markup_assist test          # Run all tests
        python -m markup_assist test --unit   # Run only unit tests
        python -m markup_assist test -k grammar
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []
    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python -m markup_assist {command} [args]")
    print("\n=== Grammar ===")
    print("  compile    Compile the markup grammar file")
    print("  describe   List a tag's attributes and values")
    print("\n=== Editing ===")
    print("  complete   Suggest names at a caret offset")
    print("\n=== Development ===")
    print("  env        Show configuration variables")
    print("  test       Run the test suite")
    print("\nExamples:")
    print("  python -m markup_assist compile                      # Write ./sierra.dtd")
    print("  python -m markup_assist compile bindings.properties lib")
    print("  python -m markup_assist complete form.xml 118")
    print("  python -m markup_assist describe text-field")
    print("  python -m markup_assist test --unit")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        show_help()
        return 1

    command = argv[0]
    rest_args = argv[1:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "compile": lambda: handle_compile_command(rest_args),
        "complete": lambda: handle_complete_command(rest_args),
        "describe": lambda: handle_describe_command(rest_args),
        "env": lambda: handle_env_command(rest_args),
        "test": lambda: cmd_test(rest_args),
    }

    if command in commands:
        # Load environment variables from .env file
        load_dotenv()
        setup_logging(get_log_level())
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
