"""Unit tests for the Schema module."""

import pytest

from markup_assist.schema import (
    BASE_ATTRIBUTES,
    BUILTIN_BINDINGS,
    BUILTIN_DOMAINS,
    BUILTIN_TYPES,
    CONTAINER_TYPES,
    ROOT_TYPE,
    SELECTOR_ATTRIBUTES,
    AttributeDeclaration,
    EnumConstant,
    EnumDomain,
    PropertyDef,
    PropertyType,
    TypeNode,
    TypeRegistry,
    UnresolvedTypeError,
    ValueKind,
    default_registry,
)


class TestBuiltinTable:
    """Tests for the built-in type table completeness."""

    @pytest.mark.unit
    def test_type_identities_unique(self):
        """No type is declared twice."""
        identities = [node.identity for node in BUILTIN_TYPES]
        assert len(identities) == len(set(identities))

    @pytest.mark.unit
    def test_property_names_unique_per_type(self):
        """A type never declares the same property twice."""
        for node in BUILTIN_TYPES:
            names = [p.name for p in node.properties]
            assert len(names) == len(set(names)), node.identity

    @pytest.mark.unit
    def test_every_base_resolves(self):
        """Every ancestor is either the root or a declared type."""
        identities = {node.identity for node in BUILTIN_TYPES}
        for node in BUILTIN_TYPES:
            assert node.base == ROOT_TYPE or node.base in identities

    @pytest.mark.unit
    def test_enum_properties_reference_known_domains(self):
        """ENUM properties name a registered domain."""
        keys = {domain.key for domain in BUILTIN_DOMAINS}
        for node in BUILTIN_TYPES:
            for prop in node.properties:
                if prop.type == PropertyType.ENUM:
                    assert prop.domain in keys, f"{node.identity}.{prop.name}"

    @pytest.mark.unit
    def test_selector_attributes_reference_known_domains(self):
        """Every selector attribute maps to a registered domain."""
        keys = {domain.key for domain in BUILTIN_DOMAINS}
        assert set(SELECTOR_ATTRIBUTES.values()) <= keys

    @pytest.mark.unit
    def test_bindings_have_42_tags(self):
        """The built-in vocabulary binds 42 tags."""
        tags = [tag for tag, _ in BUILTIN_BINDINGS]
        assert len(tags) == 42
        assert len(set(tags)) == 42

    @pytest.mark.unit
    def test_container_types_declared(self):
        """Container capability types exist in the table."""
        identities = {node.identity for node in BUILTIN_TYPES}
        assert set(CONTAINER_TYPES) <= identities

    @pytest.mark.unit
    def test_base_attributes(self):
        """Universal base attribute list is fixed."""
        assert BASE_ATTRIBUTES[0] == "name"
        assert "style-class" in BASE_ATTRIBUTES
        assert len(BASE_ATTRIBUTES) == 11


class TestDataModel:
    """Tests for small value types."""

    @pytest.mark.unit
    def test_constant_token(self):
        """Constant names become lower-case hyphenated tokens."""
        assert EnumConstant("COMMIT_OR_REVERT", "x").token == "commit-or-revert"

    @pytest.mark.unit
    def test_domain_keys_and_tokens_keep_order(self):
        """Keys and tokens are listed in declaration order."""
        domain = EnumDomain(
            "Mode", (EnumConstant("FILL_WIDTH", "fw"), EnumConstant("NONE", "n"))
        )
        assert domain.keys() == ("fw", "n")
        assert domain.tokens() == ("fill-width", "none")

    @pytest.mark.unit
    def test_attribute_definition(self):
        """Attribute declarations render their grammar type."""
        assert AttributeDeclaration("text", ValueKind.TEXT).definition == "CDATA"
        decl = AttributeDeclaration("wrap", ValueKind.BOOLEAN, ("true", "false"))
        assert decl.definition == "(true|false)"

    @pytest.mark.unit
    def test_simple_name(self):
        """Simple name strips the package."""
        assert TypeNode("a.b.Widget", ROOT_TYPE).simple_name == "Widget"


class TestTypeRegistry:
    """Tests for the explicit registry value."""

    @pytest.mark.unit
    def test_default_registries_are_independent(self):
        """Each call builds a new registry."""
        first = default_registry()
        second = default_registry()
        first.bind("custom", "javax.swing.JButton")
        assert "custom" in first.tags()
        assert "custom" not in second.tags()

    @pytest.mark.unit
    def test_binding_order_preserved(self, registry):
        """Tags are listed in binding order."""
        assert registry.tags()[:2] == ["label", "button"]

    @pytest.mark.unit
    def test_rebinding_keeps_position(self, registry):
        """Rebinding replaces the type in place."""
        registry.bind("label", "org.httprpc.sierra.TextPane")
        assert registry.tags()[0] == "label"
        assert registry.type_for("label").identity == "org.httprpc.sierra.TextPane"

    @pytest.mark.unit
    def test_bind_unknown_type_fails(self, registry):
        """Binding an unknown type raises UnresolvedTypeError."""
        with pytest.raises(UnresolvedTypeError) as exc_info:
            registry.bind("chart", "org.example.Missing")
        assert exc_info.value.identity == "org.example.Missing"

    @pytest.mark.unit
    @pytest.mark.parametrize("tag", ["", "two words", 'say"hi', "a|b", "x;", "<row>"])
    def test_bind_invalid_tag_fails(self, registry, tag):
        """Tags the grammar cannot hold are rejected."""
        with pytest.raises(ValueError):
            registry.bind(tag, "javax.swing.JButton")

    @pytest.mark.unit
    def test_type_for_unknown_tag(self, registry):
        """Unknown tags raise KeyError."""
        with pytest.raises(KeyError):
            registry.type_for("nope")

    @pytest.mark.unit
    def test_lineage_excludes_root(self, registry):
        """Lineage walks up to, but not including, the root."""
        lineage = [node.identity for node in registry.lineage("javax.swing.JButton")]
        assert lineage == [
            "javax.swing.JButton",
            "javax.swing.AbstractButton",
            "javax.swing.JComponent",
            "java.awt.Container",
            "java.awt.Component",
        ]

    @pytest.mark.unit
    def test_depth(self, registry):
        """Depth counts steps to the root."""
        assert registry.depth("java.awt.Component") == 1
        assert registry.depth("javax.swing.JComponent") == 3

    @pytest.mark.unit
    def test_is_subtype(self, registry):
        """Subtype check includes the type itself."""
        assert registry.is_subtype("org.httprpc.sierra.RowPanel", "javax.swing.JPanel")
        assert registry.is_subtype("javax.swing.JPanel", "javax.swing.JPanel")
        assert not registry.is_subtype("javax.swing.JLabel", "javax.swing.JPanel")

    @pytest.mark.unit
    def test_cycle_detected(self):
        """A looping ancestor chain is reported."""
        registry = TypeRegistry(
            [TypeNode("a.A", "a.B"), TypeNode("a.B", "a.A")],
        )
        with pytest.raises(ValueError, match="cycle"):
            registry.lineage("a.A")

    @pytest.mark.unit
    def test_root_cannot_be_registered(self):
        """The universal root is implicit."""
        with pytest.raises(ValueError):
            TypeRegistry([TypeNode(ROOT_TYPE, None)])

    @pytest.mark.unit
    def test_unknown_domain(self, registry):
        """Unknown domains raise UnresolvedTypeError."""
        with pytest.raises(UnresolvedTypeError):
            registry.resolve_domain("Missing")

    @pytest.mark.unit
    def test_fallback_resolver_consulted_and_cached(self):
        """Misses are delegated to the fallback and cached."""

        class Fallback:
            calls = 0

            def resolve(self, identity):
                Fallback.calls += 1
                return TypeNode(
                    identity, ROOT_TYPE, (PropertyDef("zoom", PropertyType.INT),)
                )

            def resolve_domain(self, key):
                raise UnresolvedTypeError(key, "enum domain")

        registry = TypeRegistry(fallback=Fallback())
        registry.bind("chart", "org.example.Chart")
        assert registry.resolve("org.example.Chart").properties[0].name == "zoom"
        assert Fallback.calls == 1

    @pytest.mark.unit
    def test_bindings_view_is_read_only(self, registry):
        """The bindings view cannot be mutated."""
        with pytest.raises(TypeError):
            registry.bindings["x"] = "y"  # type: ignore[index]
