"""Nested and duplicate match detection.

Item selectors on profile pages often match both a grouping entry (one
company with several roles) and the entries nested inside it. Both checks
below are always evaluated; the ``CompositePolicy`` decides which of the
two nodes survives.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from career_scraper.extraction.dom import DomNode, dispose_all
from career_scraper.extraction.models import CompositePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeRelationship:
    """How an item relates to other matches of its own selector.

    Attributes:
        nested: An ancestor of the item matches the selector.
        composite: The item contains at least one descendant match.
    """

    nested: bool
    composite: bool

    def skip(self, policy: CompositePolicy) -> bool:
        if policy is CompositePolicy.INNERMOST:
            return self.composite
        return self.nested

    def reason(self, policy: CompositePolicy) -> str | None:
        if not self.skip(policy):
            return None
        if policy is CompositePolicy.INNERMOST:
            return "contains nested items"
        return "nested inside another item"


async def nesting_depth(node: DomNode, selector: str) -> int:
    """Count the ancestors of ``node`` that match ``selector``."""
    ancestors = await node.ancestors()
    try:
        depth = 0
        for ancestor in ancestors:
            if await ancestor.matches(selector):
                depth += 1
        return depth
    finally:
        await dispose_all(ancestors)


async def has_matching_ancestor(item: DomNode, selector: str) -> bool:
    """Descendant check. Fails open (False) when the node cannot be inspected."""
    try:
        return await nesting_depth(item, selector) > 0
    except Exception as e:
        logger.debug(f"Ancestor check failed, treating as top-level: {e}")
        return False


async def contains_match(item: DomNode, selector: str) -> bool:
    """Containment check. Fails open (False) when the node cannot be inspected."""
    try:
        matches = await item.query_selector_all(selector)
    except Exception as e:
        logger.debug(f"Containment check failed, treating as leaf: {e}")
        return False
    await dispose_all(matches)
    return len(matches) > 0


async def own_nodes(
    item: DomNode, nodes: Sequence[DomNode], selector: str
) -> list[DomNode]:
    """Keep the nodes that belong to ``item`` rather than to an item nested in it.

    A node belongs to ``item`` when ``item`` is its nearest ancestor matching
    ``selector``. If depths cannot be read, every node is kept.
    """
    try:
        expected = await nesting_depth(item, selector) + 1
        owned: list[DomNode] = []
        foreign: list[DomNode] = []
        for node in nodes:
            if await nesting_depth(node, selector) == expected:
                owned.append(node)
            else:
                foreign.append(node)
    except Exception as e:
        logger.debug(f"Ownership check failed, keeping all nodes: {e}")
        return list(nodes)
    await dispose_all(foreign)
    return owned


async def inspect_relationship(item: DomNode, selector: str) -> NodeRelationship:
    """Run both duplicate checks for ``item``."""
    return NodeRelationship(
        nested=await has_matching_ancestor(item, selector),
        composite=await contains_match(item, selector),
    )


async def should_skip(
    item: DomNode,
    selector: str,
    policy: CompositePolicy = CompositePolicy.OUTERMOST,
) -> bool:
    """Return True when ``item`` is an unwanted duplicate under ``policy``."""
    relationship = await inspect_relationship(item, selector)
    return relationship.skip(policy)
