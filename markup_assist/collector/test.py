"""Unit tests for the collector module."""

import pytest

from markup_assist.collector import collect_types, type_depth
from markup_assist.schema import (
    ROOT_TYPE,
    TypeNode,
    TypeRegistry,
    UnresolvedTypeError,
)


class TestCollectTypes:
    """Tests for collect_types."""

    @pytest.mark.unit
    def test_includes_bound_types_and_ancestors(self, registry):
        """Every bound type and its ancestors are collected."""
        identities = {node.identity for node in collect_types(registry)}
        assert "javax.swing.JButton" in identities
        assert "javax.swing.AbstractButton" in identities
        assert "java.awt.Component" in identities
        assert "org.httprpc.sierra.BoxPanel" in identities

    @pytest.mark.unit
    def test_excludes_root(self, registry):
        """The universal root never appears."""
        identities = [node.identity for node in collect_types(registry)]
        assert ROOT_TYPE not in identities

    @pytest.mark.unit
    def test_unique(self, registry):
        """Shared ancestors are collected once."""
        identities = [node.identity for node in collect_types(registry)]
        assert len(identities) == len(set(identities))

    @pytest.mark.unit
    def test_ancestors_precede_descendants(self, registry):
        """Each type's base appears before it."""
        types = collect_types(registry)
        position = {node.identity: i for i, node in enumerate(types)}
        for node in types:
            if node.base != ROOT_TYPE:
                assert position[node.base] < position[node.identity]

    @pytest.mark.unit
    def test_sorted_by_depth_then_name(self, registry):
        """Ordering key is (depth, identity)."""
        types = collect_types(registry)
        keys = [(type_depth(registry, n.identity), n.identity) for n in types]
        assert keys == sorted(keys)
        assert types[0].identity == "java.awt.Component"

    @pytest.mark.unit
    def test_unbound_types_not_collected(self):
        """Types without a bound descendant are left out."""
        registry = TypeRegistry(
            [
                TypeNode("a.Base", ROOT_TYPE),
                TypeNode("a.Used", "a.Base"),
                TypeNode("a.Unused", "a.Base"),
            ]
        )
        registry.bind("used", "a.Used")
        assert [n.identity for n in collect_types(registry)] == ["a.Base", "a.Used"]

    @pytest.mark.unit
    def test_empty_registry(self):
        """No bindings means no types."""
        assert collect_types(TypeRegistry()) == []

    @pytest.mark.unit
    def test_unresolvable_ancestor_fails(self):
        """A missing ancestor aborts collection."""
        registry = TypeRegistry([TypeNode("a.Orphan", "a.Missing")])
        registry.bind("orphan", "a.Orphan")
        with pytest.raises(UnresolvedTypeError):
            collect_types(registry)
