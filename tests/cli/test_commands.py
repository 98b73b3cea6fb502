"""Tests for the markup-assist CLI commands."""

import subprocess
import sys
from pathlib import Path

import pytest

from markup_assist.__main__ import main

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer configuration out of CLI runs."""
    for name in (
        "MARKUP_GRAMMAR_FILE",
        "MARKUP_BINDINGS_FILE",
        "MARKUP_TYPE_PATH",
        "MARKUP_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def grammar_file(tmp_path):
    """Grammar compiled through the CLI."""
    path = tmp_path / "sierra.dtd"
    assert main(["compile", "--output", str(path)]) == 0
    return path


@pytest.mark.unit
def test_no_command_shows_help(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.unit
def test_unknown_command(capsys):
    assert main(["frobnicate"]) == 1
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.unit
def test_compile_writes_grammar(grammar_file):
    text = grammar_file.read_text(encoding="utf-8")
    assert "<!ELEMENT button EMPTY>" in text


@pytest.mark.unit
def test_compile_default_output(tmp_path, monkeypatch):
    """Without --output the grammar lands in the working directory."""
    monkeypatch.chdir(tmp_path)
    assert main(["compile"]) == 0
    assert (tmp_path / "sierra.dtd").is_file()


@pytest.mark.unit
def test_compile_unresolved_binding(tmp_path):
    """An unknown bound type fails the command and writes nothing."""
    bindings = tmp_path / "bindings.properties"
    bindings.write_text("gauge=com.example.Gauge\n", encoding="utf-8")
    output = tmp_path / "sierra.dtd"
    assert main(["compile", str(bindings), "--output", str(output)]) == 1
    assert not output.exists()


@pytest.mark.unit
def test_compile_missing_search_path(tmp_path):
    """A search path that does not exist fails the command."""
    output = tmp_path / "sierra.dtd"
    bindings = tmp_path / "bindings.properties"
    bindings.write_text("label=javax.swing.JLabel\n", encoding="utf-8")
    assert (
        main(["compile", str(bindings), str(tmp_path / "missing"), "--output", str(output)])
        == 1
    )


@pytest.mark.unit
def test_compile_write_failure(tmp_path):
    """Write errors fail the command."""
    output = tmp_path / "missing" / "sierra.dtd"
    assert main(["compile", "--output", str(output)]) == 1
    assert not output.exists()


@pytest.mark.unit
def test_compile_unreadable_input_keeps_grammar(tmp_path, grammar_file):
    """Input read failures leave the previous grammar in place."""
    previous = grammar_file.read_text(encoding="utf-8")
    lib = tmp_path / "lib"
    (lib / "broken.json").mkdir(parents=True)
    bindings = tmp_path / "bindings.properties"
    bindings.write_text("label=javax.swing.JLabel\n", encoding="utf-8")
    assert (
        main(["compile", str(bindings), str(lib), "--output", str(grammar_file)]) == 1
    )
    assert grammar_file.read_text(encoding="utf-8") == previous


@pytest.mark.unit
def test_compile_invalid_property_name_keeps_grammar(tmp_path, grammar_file):
    """A plug-in property the grammar cannot hold fails before writing."""
    previous = grammar_file.read_text(encoding="utf-8")
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "acme.json").write_text(
        '{"types": [{"identity": "acme.Widget", "base": "javax.swing.JComponent", '
        '"properties": [{"name": "display name", "type": "string"}]}]}',
        encoding="utf-8",
    )
    bindings = tmp_path / "bindings.properties"
    bindings.write_text("widget=acme.Widget\n", encoding="utf-8")
    assert (
        main(["compile", str(bindings), str(lib), "--output", str(grammar_file)]) == 1
    )
    assert grammar_file.read_text(encoding="utf-8") == previous


@pytest.mark.unit
def test_complete_prints_candidates(tmp_path, grammar_file, capsys):
    markup = tmp_path / "form.xml"
    markup.write_text("<column-panel>\n  <bu", encoding="utf-8")
    capsys.readouterr()
    assert main(["complete", str(markup), "20", "--grammar", str(grammar_file)]) == 0
    assert capsys.readouterr().out.splitlines() == ["button"]


@pytest.mark.unit
def test_complete_missing_grammar(tmp_path):
    markup = tmp_path / "form.xml"
    markup.write_text("<", encoding="utf-8")
    missing = tmp_path / "missing.dtd"
    assert main(["complete", str(markup), "1", "--grammar", str(missing)]) == 1


@pytest.mark.unit
def test_complete_missing_file(tmp_path, grammar_file):
    missing = tmp_path / "missing.xml"
    assert main(["complete", str(missing), "0", "--grammar", str(grammar_file)]) == 1


@pytest.mark.unit
def test_describe(grammar_file, capsys):
    capsys.readouterr()
    assert main(["describe", "check-box", "--grammar", str(grammar_file)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "<check-box> (EMPTY)"
    assert "Values: true, false" in out
    assert "Type: String" in out


@pytest.mark.unit
def test_describe_unknown_tag(grammar_file):
    assert main(["describe", "gauge", "--grammar", str(grammar_file)]) == 1


@pytest.mark.unit
def test_describe_invalid_grammar(tmp_path):
    grammar = tmp_path / "broken.dtd"
    grammar.write_text("<!DOCTYPE ui>\n", encoding="utf-8")
    assert main(["describe", "button", "--grammar", str(grammar)]) == 1


@pytest.mark.unit
def test_env_lists_variables(capsys):
    assert main(["env"]) == 0
    out = capsys.readouterr().out
    assert "MARKUP_GRAMMAR_FILE" in out
    assert "sierra.dtd" in out


@pytest.mark.unit
def test_env_category(capsys):
    assert main(["env", "--category", "logging"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("MARKUP_LOG_LEVEL")


@pytest.mark.unit
def test_test_command_forwards_markers(monkeypatch):
    """The test command maps tier flags to pytest markers."""
    calls = []
    monkeypatch.setattr(subprocess, "call", lambda cmd: calls.append(cmd) or 0)
    assert main(["test", "--unit", "-k", "grammar"]) == 0
    assert calls[0][1:] == ["-m", "pytest", "-m", "unit", "-k", "grammar"]


def test_module_help_runs():
    """python -m markup_assist --help exits cleanly."""
    result = subprocess.run(
        [sys.executable, "-m", "markup_assist", "--help"],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
        timeout=30,
    )
    assert result.returncode == 0
    assert "compile" in result.stdout
