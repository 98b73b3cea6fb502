"""Unit tests for the grammar module."""

from types import MappingProxyType

import pytest

from markup_assist.grammar import GrammarFormatError, Schema, load_grammar, parse_grammar
from markup_assist.schema import BASE_ATTRIBUTES

SMALL_GRAMMAR = """\
<!ENTITY % ui.Base "name CDATA style CDATA">
<!ENTITY % ui.Widget "%ui.Base; enabled (true|false) text CDATA">
<!ENTITY % ui.Panel "%ui.Widget; text (left|right) spacing CDATA">

<!ELEMENT widget EMPTY>
<!ATTLIST widget %ui.Widget;>
<!ELEMENT panel ANY>
<!ATTLIST panel %ui.Panel;>
"""


class TestParseGrammar:
    """Tests for parsing well-formed grammars."""

    @pytest.mark.unit
    def test_tags(self):
        schema = parse_grammar(SMALL_GRAMMAR)
        assert schema.tags == frozenset({"widget", "panel"})

    @pytest.mark.unit
    def test_flattened_attributes(self):
        """Attributes include every fragment in the chain."""
        schema = parse_grammar(SMALL_GRAMMAR)
        assert schema.attributes["widget"] == {"name", "style", "enabled", "text"}
        assert schema.attributes["panel"] == {
            "name",
            "style",
            "enabled",
            "text",
            "spacing",
        }

    @pytest.mark.unit
    def test_nearest_definition_wins(self):
        """A redeclared attribute keeps the most derived definition."""
        schema = parse_grammar(SMALL_GRAMMAR)
        assert schema.definitions["widget"]["text"] == "CDATA"
        assert schema.definitions["panel"]["text"] == "(left|right)"

    @pytest.mark.unit
    def test_content_models(self):
        schema = parse_grammar(SMALL_GRAMMAR)
        assert schema.content == {"widget": "EMPTY", "panel": "ANY"}

    @pytest.mark.unit
    def test_schema_is_immutable(self):
        """Schema mappings are read-only."""
        schema = parse_grammar(SMALL_GRAMMAR)
        assert isinstance(schema.attributes, MappingProxyType)
        assert isinstance(schema.attributes["panel"], frozenset)
        with pytest.raises(TypeError):
            schema.attributes["extra"] = frozenset()

    @pytest.mark.unit
    def test_empty_text(self):
        """An empty grammar declares nothing."""
        schema = parse_grammar("")
        assert schema.tags == frozenset()
        assert schema.attributes_for("anything") == frozenset()

    @pytest.mark.unit
    def test_surrounding_whitespace_ignored(self):
        schema = parse_grammar('  <!ENTITY % a "x CDATA">\n<!ELEMENT t EMPTY>  \n<!ATTLIST t %a;>')
        assert schema.attributes["t"] == {"x"}


class TestDescribe:
    """Tests for Schema.describe."""

    @pytest.mark.unit
    def test_describe_sorted_with_values(self):
        schema = parse_grammar(SMALL_GRAMMAR)
        assert schema.describe("panel") == [
            ("enabled", "Values: true, false"),
            ("name", "Type: String"),
            ("spacing", "Type: String"),
            ("style", "Type: String"),
            ("text", "Values: left, right"),
        ]

    @pytest.mark.unit
    def test_describe_unknown_tag(self):
        with pytest.raises(KeyError):
            parse_grammar(SMALL_GRAMMAR).describe("missing")


class TestMalformedGrammar:
    """Tests for GrammarFormatError reporting."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,line_number,message",
        [
            ("<!DOCTYPE ui>", 1, "unrecognized construct"),
            ('<!ENTITY % a "x CDATA">\n<!ENTITY % a "y CDATA">', 2, "duplicate fragment"),
            ('<!ENTITY % a "x">', 1, "attribute without a type"),
            ('<!ENTITY % a "x NMTOKEN">', 1, "invalid type"),
            ('<!ENTITY % a "x (a|)">', 1, "invalid type"),
            ('<!ENTITY % a "x CDATA x CDATA">', 1, "duplicate attribute"),
            ('<!ENTITY % a "%b; x CDATA">', 1, "undeclared fragment 'b'"),
            ('<!ENTITY % a "%b x CDATA">', 1, "malformed fragment reference"),
            ("<!ELEMENT t EMPTY>\n<!ELEMENT t ANY>", 2, "duplicate element"),
            ("<!ELEMENT t (#PCDATA)>", 1, "unrecognized construct"),
            ('<!ENTITY % a "">\n<!ATTLIST t %a;>', 2, "undeclared element 't'"),
            ("<!ELEMENT t EMPTY>\n<!ATTLIST t %a;>", 2, "undeclared fragment 'a'"),
            ('<!ENTITY % a "">\n<!ELEMENT t EMPTY>', 2, "has no attribute list"),
            ('<!ATTLIST t CDATA>', 1, "unrecognized construct"),
        ],
    )
    def test_rejected(self, text, line_number, message):
        with pytest.raises(GrammarFormatError, match=message) as excinfo:
            parse_grammar(text)
        assert excinfo.value.line_number == line_number

    @pytest.mark.unit
    def test_duplicate_attribute_list(self):
        text = '<!ENTITY % a "">\n<!ELEMENT t EMPTY>\n<!ATTLIST t %a;>\n<!ATTLIST t %a;>'
        with pytest.raises(GrammarFormatError, match="duplicate attribute list"):
            parse_grammar(text)

    @pytest.mark.unit
    def test_cycle(self):
        """Fragments chaining back to themselves are rejected."""
        text = '<!ENTITY % a "%b; x CDATA">\n<!ENTITY % b "%a; y CDATA">'
        with pytest.raises(GrammarFormatError, match="cycle"):
            parse_grammar(text)

    @pytest.mark.unit
    def test_error_carries_construct(self):
        with pytest.raises(GrammarFormatError) as excinfo:
            parse_grammar("\n\n<!-- comment -->")
        assert excinfo.value.line_number == 3
        assert excinfo.value.construct == "<!-- comment -->"
        assert isinstance(excinfo.value, ValueError)


class TestCompiledGrammar:
    """Tests against the compiled built-in grammar."""

    @pytest.mark.unit
    def test_tags_match_bindings(self, registry, schema):
        """Every bound tag is declared and nothing else."""
        assert schema.tags == frozenset(registry.tags())

    @pytest.mark.unit
    def test_base_attributes_everywhere(self, schema):
        """Every tag carries the universal base attributes."""
        for tag in schema.tags:
            assert set(BASE_ATTRIBUTES) <= schema.attributes_for(tag)

    @pytest.mark.unit
    def test_inherited_attributes(self, schema):
        """Attributes from every ancestor are flattened in."""
        button = schema.attributes_for("button")
        assert {"defaultCapable", "text", "toolTipText", "background"} <= button

    @pytest.mark.unit
    def test_text_field_extras(self, schema):
        """Text input extras reach text-field descendants."""
        for tag in ("text-field", "password-field", "date-picker", "number-field"):
            assert {"placeholderText", "showClearButton"} <= schema.attributes_for(tag)

    @pytest.mark.unit
    def test_describe_selector(self, schema):
        described = dict(schema.describe("label"))
        assert described["horizontalAlignment"] == (
            "Values: left, right, center, leading, trailing"
        )
        assert described["text"] == "Type: String"

    @pytest.mark.unit
    def test_load_grammar(self, tmp_path, grammar_text, schema):
        path = tmp_path / "sierra.dtd"
        path.write_text(grammar_text, encoding="utf-8")
        assert load_grammar(path) == schema

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_grammar(tmp_path / "missing.dtd")

    @pytest.mark.unit
    def test_schema_type(self, schema):
        assert isinstance(schema, Schema)
