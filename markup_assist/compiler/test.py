"""Unit tests for the compiler module."""

import json

import pytest

from markup_assist.compiler import (
    GrammarWriteError,
    SchemaCompiler,
    compile_grammar,
    compile_grammar_file,
    render_fragment,
    write_grammar,
)
from markup_assist.grammar import parse_grammar
from markup_assist.schema import (
    BASE_FRAGMENT,
    ROOT_TYPE,
    AttributeDeclaration,
    ContentModel,
    EnumConstant,
    EnumDomain,
    PropertyDef,
    PropertyType,
    TypeNode,
    TypeRegistry,
    UnresolvedTypeError,
    ValueKind,
)


def _lines(text: str) -> list[str]:
    return text.splitlines()


class TestRendering:
    """Tests for statement rendering."""

    @pytest.mark.unit
    def test_fragment_with_base(self):
        """Chained fragments start with the base reference."""
        line = render_fragment(
            "a.Widget",
            "a.Base",
            [
                AttributeDeclaration("text", ValueKind.TEXT),
                AttributeDeclaration("wrap", ValueKind.BOOLEAN, ("true", "false")),
            ],
        )
        assert line == '<!ENTITY % a.Widget "%a.Base; text CDATA wrap (true|false)">'

    @pytest.mark.unit
    def test_fragment_without_attributes(self):
        """A type with no markup-expressible properties still chains."""
        assert render_fragment("a.Widget", "a.Base", []) == '<!ENTITY % a.Widget "%a.Base;">'


class TestSchemaCompiler:
    """Tests for SchemaCompiler against the built-in registry."""

    @pytest.mark.unit
    def test_base_fragment_first(self, grammar_text):
        """The universal base fragment leads the grammar."""
        assert _lines(grammar_text)[0] == (
            f'<!ENTITY % {BASE_FRAGMENT} "name CDATA group CDATA border CDATA '
            "padding CDATA title CDATA weight CDATA size CDATA tab-title CDATA "
            'tab-icon CDATA style CDATA style-class CDATA">'
        )

    @pytest.mark.unit
    def test_top_type_chains_to_base(self, grammar_text):
        """Types derived from the root chain to the base fragment."""
        line = _lines(grammar_text)[1]
        assert line.startswith(f'<!ENTITY % java.awt.Component "%{BASE_FRAGMENT}; ')

    @pytest.mark.unit
    def test_fragment_lists_own_attributes_only(self, grammar_text):
        """Inherited attributes are not repeated."""
        assert (
            '<!ENTITY % javax.swing.JButton "%javax.swing.AbstractButton; '
            'defaultCapable (true|false)">'
        ) in _lines(grammar_text)

    @pytest.mark.unit
    def test_selector_attribute_tokens(self, grammar_text):
        """Integer selector properties list the domain keys."""
        (label,) = [
            line
            for line in _lines(grammar_text)
            if line.startswith("<!ENTITY % javax.swing.JLabel ")
        ]
        assert "horizontalAlignment (left|right|center|leading|trailing)" in label
        assert "verticalAlignment (top|bottom|center)" in label
        # Plain integers stay free text
        assert "iconTextGap CDATA" in label
        assert "labelFor" not in label

    @pytest.mark.unit
    def test_enum_attribute_tokens(self, grammar_text):
        """Enum properties list lower-cased, hyphenated constant names."""
        (box,) = [
            line
            for line in _lines(grammar_text)
            if line.startswith("<!ENTITY % org.httprpc.sierra.BoxPanel ")
        ]
        assert "horizontalAlignment (left|right|center|leading|trailing)" in box
        assert "spacing CDATA" in box

    @pytest.mark.unit
    def test_text_input_extras_appended(self, grammar_text):
        """The text input fragment ends with the extra attributes."""
        (field,) = [
            line
            for line in _lines(grammar_text)
            if line.startswith("<!ENTITY % javax.swing.JTextField ")
        ]
        assert field.endswith(
            "placeholderText CDATA showClearButton (true|false) "
            'leadingIcon CDATA trailingIcon CDATA">'
        )

    @pytest.mark.unit
    def test_element_declarations_in_binding_order(self, registry, grammar_text):
        """Each tag gets an element then an attribute list, in order."""
        declarations = [
            line for line in _lines(grammar_text) if not line.startswith("<!ENTITY")
        ]
        assert len(declarations) == 2 * len(registry.tags())
        assert declarations[0] == "<!ELEMENT label EMPTY>"
        assert declarations[1] == "<!ATTLIST label %javax.swing.JLabel;>"
        tags = [line.split()[1] for line in declarations[::2]]
        assert tags == registry.tags()

    @pytest.mark.unit
    def test_fragments_precede_declarations(self, grammar_text):
        """All fragments come before the first element declaration."""
        kinds = [line.split()[0] for line in _lines(grammar_text)]
        first_element = kinds.index("<!ELEMENT")
        assert "<!ENTITY" not in kinds[first_element:]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("label", ContentModel.EMPTY),
            ("button", ContentModel.EMPTY),
            ("row-panel", ContentModel.ANY),
            ("scroll-pane", ContentModel.ANY),
            ("tabbed-pane", ContentModel.ANY),
            ("menu", ContentModel.ANY),
            ("menu-button", ContentModel.ANY),
            ("menu-item", ContentModel.EMPTY),
        ],
    )
    def test_content_model(self, registry, tag, expected):
        """Containers and their descendants accept content."""
        compiler = SchemaCompiler(registry)
        assert compiler.content_model(registry.bindings[tag]) == expected

    @pytest.mark.unit
    def test_compile_result_counts(self, registry):
        """Result reports fragment and element counts."""
        result = SchemaCompiler(registry).compile()
        assert result.tag_count == len(registry.tags())
        assert result.type_count == len(_lines(result.text)) - 1 - 2 * result.tag_count
        assert result.path is None


class TestDeriveAttribute:
    """Tests for property to attribute derivation."""

    @pytest.fixture
    def compiler(self):
        registry = TypeRegistry(
            domains=[
                EnumDomain(
                    "Mode",
                    (EnumConstant("FAST_PATH", "fast"), EnumConstant("SLOW", "slow")),
                )
            ]
        )
        return SchemaCompiler(registry)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "prop_type",
        [
            PropertyType.INT,
            PropertyType.DOUBLE,
            PropertyType.CHAR,
            PropertyType.STRING,
            PropertyType.COLOR,
            PropertyType.FONT,
            PropertyType.ICON,
            PropertyType.IMAGE,
            PropertyType.KEY_STROKE,
        ],
    )
    def test_text_types(self, compiler, prop_type):
        attribute = compiler.derive_attribute(PropertyDef("value", prop_type))
        assert attribute.definition == "CDATA"

    @pytest.mark.unit
    def test_boolean(self, compiler):
        attribute = compiler.derive_attribute(PropertyDef("wrap", PropertyType.BOOLEAN))
        assert attribute.definition == "(true|false)"

    @pytest.mark.unit
    def test_enum_uses_constant_names(self, compiler):
        """Enum tokens come from constant names, not keys."""
        attribute = compiler.derive_attribute(
            PropertyDef("mode", PropertyType.ENUM, "Mode")
        )
        assert attribute.tokens == ("fast-path", "slow")

    @pytest.mark.unit
    def test_object_omitted(self, compiler):
        assert compiler.derive_attribute(PropertyDef("model", PropertyType.OBJECT)) is None

    @pytest.mark.unit
    def test_selector_name_on_non_integer_is_text(self, compiler):
        """Only integer properties become selectors."""
        attribute = compiler.derive_attribute(
            PropertyDef("orientation", PropertyType.STRING)
        )
        assert attribute.kind == ValueKind.TEXT

    @pytest.mark.unit
    def test_unknown_domain_fails(self, compiler):
        with pytest.raises(UnresolvedTypeError):
            compiler.derive_attribute(PropertyDef("mode", PropertyType.ENUM, "Missing"))


class TestCompileGrammarFile:
    """Tests for writing grammar files."""

    @pytest.mark.unit
    def test_writes_grammar(self, tmp_path, registry):
        """The written file holds exactly the compiled text."""
        output = tmp_path / "sierra.dtd"
        result = compile_grammar_file(output=output)
        assert result.path == output
        assert output.read_text(encoding="utf-8") == compile_grammar(registry)

    @pytest.mark.unit
    def test_default_output_in_working_directory(self, tmp_path, monkeypatch):
        """Without an output path the grammar lands in the working directory."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MARKUP_GRAMMAR_FILE", raising=False)
        result = compile_grammar_file()
        assert result.path == tmp_path / "sierra.dtd"
        assert result.path.is_file()

    @pytest.mark.unit
    def test_unresolved_binding_writes_nothing(self, tmp_path):
        """Resolution failures abort before the output is opened."""
        bindings = tmp_path / "bindings.properties"
        bindings.write_text("chart-panel=org.jfree.chart.ChartPanel\n", encoding="utf-8")
        output = tmp_path / "sierra.dtd"
        with pytest.raises(UnresolvedTypeError):
            compile_grammar_file(bindings_file=bindings, output=output)
        assert not output.exists()

    @pytest.mark.unit
    def test_write_error_propagates(self, tmp_path):
        """Writing into a missing directory raises OSError."""
        with pytest.raises(OSError):
            write_grammar("<!ELEMENT a EMPTY>\n", tmp_path / "missing" / "out.dtd")

    @pytest.mark.unit
    def test_write_failure_names_output(self, tmp_path):
        """Write failures are distinct from input failures."""
        output = tmp_path / "missing" / "sierra.dtd"
        with pytest.raises(GrammarWriteError) as exc_info:
            compile_grammar_file(output=output)
        assert exc_info.value.path == output
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    @pytest.mark.unit
    def test_small_registry(self, tmp_path):
        """A hand-built registry compiles to the expected statements."""
        registry = TypeRegistry(
            [
                TypeNode("a.Base", ROOT_TYPE, (PropertyDef("text", PropertyType.STRING),)),
                TypeNode("a.Leaf", "a.Base", (PropertyDef("on", PropertyType.BOOLEAN),)),
            ]
        )
        registry.bind("leaf", "a.Leaf")
        lines = _lines(compile_grammar(registry))
        assert lines[1:] == [
            f'<!ENTITY % a.Base "%{BASE_FRAGMENT}; text CDATA">',
            '<!ENTITY % a.Leaf "%a.Base; on (true|false)">',
            "<!ELEMENT leaf EMPTY>",
            "<!ATTLIST leaf %a.Leaf;>",
        ]

    @pytest.mark.unit
    def test_plugin_type_from_search_path(self, tmp_path):
        """Bound plug-in types are compiled like built-in ones."""
        lib = tmp_path / "lib"
        lib.mkdir()
        (lib / "gauge.json").write_text(
            json.dumps(
                {
                    "types": [
                        {
                            "identity": "com.example.Gauge",
                            "base": "javax.swing.JPanel",
                            "properties": [
                                {"name": "needleColor", "type": "color"},
                                {"name": "scale", "type": "enum", "domain": "Scale"},
                                {"name": "model", "type": "object"},
                            ],
                        }
                    ],
                    "domains": [
                        {"key": "Scale", "constants": [{"name": "LINEAR"}, {"name": "LOG_10"}]}
                    ],
                }
            ),
            encoding="utf-8",
        )
        bindings = tmp_path / "bindings.properties"
        bindings.write_text("gauge=com.example.Gauge\n", encoding="utf-8")

        result = compile_grammar_file(
            bindings_file=bindings, search_path=lib, output=tmp_path / "sierra.dtd"
        )
        lines = _lines(result.text)
        assert (
            '<!ENTITY % com.example.Gauge "%javax.swing.JPanel; '
            'needleColor CDATA scale (linear|log-10)">'
        ) in lines
        assert lines[-2:] == ["<!ELEMENT gauge ANY>", "<!ATTLIST gauge %com.example.Gauge;>"]
        attributes = parse_grammar(result.text).attributes_for("gauge")
        assert {"needleColor", "scale", "name"} <= attributes
