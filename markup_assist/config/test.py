"""Tests for configuration management."""

from pathlib import Path

import pytest

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

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("MARKUP_GRAMMAR_FILE", raising=False)
        result = get_environment(EnvVar.MARKUP_GRAMMAR_FILE)
        assert result == Path("sierra.dtd")

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("MARKUP_LOG_LEVEL", "WARNING")
        result = get_environment(EnvVar.MARKUP_LOG_LEVEL, override="DEBUG")
        assert result == "DEBUG"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("MARKUP_LOG_LEVEL", "ERROR")
        assert get_environment(EnvVar.MARKUP_LOG_LEVEL) == "ERROR"

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch):
        """Path variables are converted from strings."""
        monkeypatch.setenv("MARKUP_TYPE_PATH", "plugins/types")
        result = get_environment(EnvVar.MARKUP_TYPE_PATH)
        assert result == Path("plugins/types")
        assert isinstance(result, Path)

    @pytest.mark.unit
    def test_empty_value_falls_back_to_default(self, monkeypatch):
        """An empty variable is treated as unset."""
        monkeypatch.setenv("MARKUP_BINDINGS_FILE", "")
        assert get_environment(EnvVar.MARKUP_BINDINGS_FILE) is None


class TestConvenienceFunctions:
    """Tests for path and level helpers."""

    @pytest.mark.unit
    def test_grammar_path_is_relative_to_cwd(self, monkeypatch, tmp_path):
        """Default grammar file lives in the working directory."""
        monkeypatch.delenv("MARKUP_GRAMMAR_FILE", raising=False)
        monkeypatch.chdir(tmp_path)
        assert get_grammar_path() == tmp_path / "sierra.dtd"

    @pytest.mark.unit
    def test_grammar_path_absolute_override(self, tmp_path):
        """Absolute overrides are returned unchanged."""
        target = tmp_path / "custom.dtd"
        assert get_grammar_path(target) == target

    @pytest.mark.unit
    def test_optional_paths_default_to_none(self, monkeypatch):
        """Bindings file and type path are optional."""
        monkeypatch.delenv("MARKUP_BINDINGS_FILE", raising=False)
        monkeypatch.delenv("MARKUP_TYPE_PATH", raising=False)
        assert get_bindings_file() is None
        assert get_type_path() is None

    @pytest.mark.unit
    def test_optional_path_override(self):
        """Overrides are converted to Path."""
        assert get_bindings_file("bindings.properties") == Path("bindings.properties")
        assert get_type_path("lib") == Path("lib")

    @pytest.mark.unit
    def test_log_level_upper_cased(self, monkeypatch):
        """Log level names are normalised to upper case."""
        monkeypatch.setenv("MARKUP_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"


class TestIntrospection:
    """Tests for metadata access."""

    @pytest.mark.unit
    def test_environment_info(self):
        """Metadata is exposed as EnvConfig."""
        info = get_environment_info(EnvVar.MARKUP_TYPE_PATH)
        assert isinstance(info, EnvConfig)
        assert info.name == "MARKUP_TYPE_PATH"
        assert info.var_type is Path
        assert info.description

    @pytest.mark.unit
    def test_list_by_category(self):
        """Variables can be filtered by category."""
        compiler_vars = list_environment_variables("compiler")
        assert set(compiler_vars) == {
            EnvVar.MARKUP_BINDINGS_FILE,
            EnvVar.MARKUP_TYPE_PATH,
        }

    @pytest.mark.unit
    def test_list_all(self):
        """All variables are listed without a category."""
        assert len(list_environment_variables()) == len(EnvVar)

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's config name equals the member name."""
        for var in EnvVar:
            assert var.value.name == var.name
