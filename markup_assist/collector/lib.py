"""Metadata collection for grammar compilation.

Walks every tag binding in a registry and gathers the bound types together
with all of their ancestors, so the compiler can emit one fragment per type
and chain each fragment to its parent's.
"""

from markup_assist.core import get_logger
from markup_assist.schema import TypeNode, TypeRegistry

logger = get_logger("collector")


def type_depth(registry: TypeRegistry, identity: str) -> int:
    """Distance from a type to the universal root.

    Args:
        registry: Registry used to resolve ancestors.
        identity: Type identity.

    Returns:
        1 for direct descendants of the root, 2 for their children, etc.
    """
    return registry.depth(identity)


def collect_types(registry: TypeRegistry) -> list[TypeNode]:
    """Collect every bound type and its ancestors, root excluded.

    The result is ordered by depth, then identity, so each ancestor comes
    before all of its descendants.

    Args:
        registry: Registry holding the tag bindings.

    Returns:
        Ordered list of unique TypeNodes.

    Raises:
        UnresolvedTypeError: If a bound type or ancestor cannot be resolved.
    """
    collected: dict[str, TypeNode] = {}

    for tag in registry.tags():
        for node in registry.lineage(registry.bindings[tag]):
            if node.identity in collected:
                break
            collected[node.identity] = node

    ordered = sorted(
        collected.values(),
        key=lambda node: (type_depth(registry, node.identity), node.identity),
    )
    logger.debug(
        f"Collected {len(ordered)} types for {len(registry.tags())} bound tags"
    )
    return ordered
