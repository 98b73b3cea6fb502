"""Unit tests for bindings and search path resolution."""

import json

import pytest

from markup_assist.bindings import (
    BindingError,
    SearchPathResolver,
    TypeDefinitionError,
    apply_bindings,
    build_registry,
    load_bindings,
)
from markup_assist.schema import PropertyType, UnresolvedTypeError

CHART_PANEL = {
    "types": [
        {
            "identity": "org.jfree.chart.ChartPanel",
            "base": "javax.swing.JPanel",
            "properties": [
                {"name": "mouseWheelEnabled", "type": "boolean"},
                {"name": "zoomFillPaint", "type": "color"},
                {"name": "renderMode", "type": "enum", "domain": "RenderMode"},
            ],
        }
    ],
    "domains": [
        {
            "key": "RenderMode",
            "constants": [{"name": "BUFFERED"}, {"name": "DIRECT_DRAW", "key": "direct"}],
        }
    ],
}


@pytest.fixture
def type_path(tmp_path):
    """Search path with a single chart panel definition."""
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "jfreechart.json").write_text(json.dumps(CHART_PANEL), encoding="utf-8")
    return lib


class TestLoadBindings:
    """Tests for bindings file parsing."""

    @pytest.mark.unit
    def test_reads_bindings_in_order(self, tmp_path):
        """Bindings keep file order and ignore comments."""
        path = tmp_path / "bindings.properties"
        path.write_text(
            "# Test Bindings\nchart-panel=org.jfree.chart.ChartPanel\n\nbutton=javax.swing.JToggleButton\n",
            encoding="utf-8",
        )
        assert load_bindings(path) == {
            "chart-panel": "org.jfree.chart.ChartPanel",
            "button": "javax.swing.JToggleButton",
        }

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """A missing bindings file raises BindingError."""
        with pytest.raises(BindingError, match="not found"):
            load_bindings(tmp_path / "missing.properties")

    @pytest.mark.unit
    def test_empty_type(self, tmp_path):
        """A binding without a type raises BindingError."""
        path = tmp_path / "bindings.properties"
        path.write_text("chart-panel=\n", encoding="utf-8")
        with pytest.raises(BindingError, match="chart-panel"):
            load_bindings(path)


class TestSearchPathResolver:
    """Tests for JSON type definitions."""

    @pytest.mark.unit
    def test_resolves_defined_type(self, type_path):
        """Types load with their properties."""
        resolver = SearchPathResolver(type_path)
        node = resolver.resolve("org.jfree.chart.ChartPanel")
        assert node.base == "javax.swing.JPanel"
        assert [p.name for p in node.properties] == [
            "mouseWheelEnabled",
            "zoomFillPaint",
            "renderMode",
        ]
        assert node.properties[0].type == PropertyType.BOOLEAN

    @pytest.mark.unit
    def test_domain_keys_default_to_tokens(self, type_path):
        """Constants without a key use their derived token."""
        domain = SearchPathResolver(type_path).resolve_domain("RenderMode")
        assert domain.keys() == ("buffered", "direct")

    @pytest.mark.unit
    def test_unknown_type(self, type_path):
        """Unknown identities raise UnresolvedTypeError."""
        with pytest.raises(UnresolvedTypeError):
            SearchPathResolver(type_path).resolve("org.example.Missing")

    @pytest.mark.unit
    def test_missing_directory(self, tmp_path):
        """A missing search path is reported."""
        with pytest.raises(TypeDefinitionError):
            SearchPathResolver(tmp_path / "nope")

    @pytest.mark.unit
    def test_invalid_file(self, tmp_path):
        """Malformed definitions name the offending file."""
        bad = tmp_path / "bad.json"
        bad.write_text(
            json.dumps({"types": [{"identity": "a.B", "properties": [{"name": "x", "type": "enum"}]}]}),
            encoding="utf-8",
        )
        with pytest.raises(TypeDefinitionError) as exc_info:
            SearchPathResolver(tmp_path)
        assert exc_info.value.path == bad

    @pytest.mark.unit
    def test_duplicate_type_across_files(self, type_path):
        """The same identity in two files is rejected."""
        (type_path / "copy.json").write_text(json.dumps(CHART_PANEL), encoding="utf-8")
        with pytest.raises(TypeDefinitionError, match="already defined"):
            SearchPathResolver(type_path)

    @pytest.mark.unit
    def test_duplicate_property(self, tmp_path):
        """Duplicate property names are rejected."""
        (tmp_path / "dup.json").write_text(
            json.dumps(
                {
                    "types": [
                        {
                            "identity": "a.B",
                            "properties": [
                                {"name": "x", "type": "int"},
                                {"name": "x", "type": "string"},
                            ],
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        with pytest.raises(TypeDefinitionError, match="duplicate"):
            SearchPathResolver(tmp_path)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "definition",
        [
            {"identity": "acme.Widget", "properties": [{"name": "display name", "type": "string"}]},
            {"identity": "acme.Widget", "properties": [{"name": 'say"hi', "type": "string"}]},
            {"identity": "acme.Widget", "properties": [{"name": "a|b", "type": "boolean"}]},
            {"identity": "acme.Widget", "properties": [{"name": "", "type": "int"}]},
            {"identity": "acme Widget"},
            {"identity": "acme.Widget;"},
            {"identity": "acme.Widget", "base": "%javax.swing.JPanel"},
        ],
    )
    def test_names_outside_grammar_rejected(self, tmp_path, definition):
        """Names the grammar cannot hold fail when the file is loaded."""
        path = tmp_path / "acme.json"
        path.write_text(json.dumps({"types": [definition]}), encoding="utf-8")
        with pytest.raises(TypeDefinitionError) as exc_info:
            SearchPathResolver(tmp_path)
        assert exc_info.value.path == path

    @pytest.mark.unit
    def test_constant_names_outside_grammar_rejected(self, tmp_path):
        """Enum constants become tokens and follow the same rule."""
        (tmp_path / "acme.json").write_text(
            json.dumps({"domains": [{"key": "Mode", "constants": [{"name": "ON|OFF"}]}]}),
            encoding="utf-8",
        )
        with pytest.raises(TypeDefinitionError):
            SearchPathResolver(tmp_path)

    @pytest.mark.unit
    def test_unreadable_file(self, tmp_path):
        """Read failures are reported as definition errors."""
        (tmp_path / "broken.json").mkdir()
        with pytest.raises(TypeDefinitionError) as exc_info:
            SearchPathResolver(tmp_path)
        assert exc_info.value.path == tmp_path / "broken.json"


class TestBuildRegistry:
    """Tests for assembling a compilation registry."""

    @pytest.mark.unit
    def test_defaults(self):
        """Without inputs the built-in vocabulary is used."""
        registry = build_registry()
        assert len(registry.tags()) == 42

    @pytest.mark.unit
    def test_bindings_and_search_path(self, tmp_path, type_path):
        """Bindings may reference types from the search path."""
        bindings = tmp_path / "bindings.properties"
        bindings.write_text("chart-panel=org.jfree.chart.ChartPanel\n", encoding="utf-8")
        registry = build_registry(bindings_file=bindings, search_path=type_path)
        assert registry.tags()[-1] == "chart-panel"
        assert registry.type_for("chart-panel").identity == "org.jfree.chart.ChartPanel"

    @pytest.mark.unit
    def test_unresolvable_binding_aborts(self, tmp_path):
        """A binding to an unknown type raises UnresolvedTypeError."""
        bindings = tmp_path / "bindings.properties"
        bindings.write_text("chart-panel=org.jfree.chart.ChartPanel\n", encoding="utf-8")
        with pytest.raises(UnresolvedTypeError):
            build_registry(bindings_file=bindings)

    @pytest.mark.unit
    def test_apply_bindings_overrides(self, registry):
        """Applied bindings replace existing ones."""
        apply_bindings(registry, {"label": "org.httprpc.sierra.TextPane"})
        assert registry.type_for("label").identity == "org.httprpc.sierra.TextPane"
