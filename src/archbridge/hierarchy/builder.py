"""Hierarchy reconstruction from a flat component list."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from archbridge.contracts.exceptions import HierarchyValidationError
from archbridge.contracts.hierarchy import (
    NODE_TYPE_ORDER,
    PARENT_TYPE,
    DomainNode,
    InitiativeNode,
    Node,
    NodeType,
    ParentNode,
    UserStoryNode,
)


class HierarchyBuilder:
    """Build the Domain → Initiative → Epic → Feature → User Story forest.

    The build is all-or-nothing: the first node whose parent is missing or of
    the wrong kind aborts it with :class:`HierarchyValidationError`. Input
    nodes are copied, never mutated.
    """

    def build(self, nodes: Sequence[Node], root_id: str | None = None) -> list[DomainNode]:
        index = self._index(nodes)

        domains = [
            node
            for node in index.values()
            if isinstance(node, DomainNode) and (not node.parent or node.parent == root_id)
        ]

        for node_type in NODE_TYPE_ORDER[1:]:
            expected_parent = PARENT_TYPE[node_type]
            for node in index.values():
                if node.type != node_type:
                    continue
                parent = index.get(node.parent) if node.parent else None
                if parent is None or parent.type != expected_parent:
                    actual = parent.type if parent is not None else None
                    raise HierarchyValidationError(
                        f"{node_type} {node.id} cannot have parent {actual or 'none'} (expected {expected_parent})",
                        node_id=node.id,
                        expected_parent=str(expected_parent),
                        actual_parent=str(actual) if actual is not None else None,
                    )
                parent.children.append(node)  # type: ignore[union-attr,arg-type]

        return domains

    @staticmethod
    def _index(nodes: Sequence[Node]) -> dict[str, Node]:
        duplicates = sorted(node_id for node_id, count in Counter(node.id for node in nodes).items() if count > 1)
        if duplicates:
            raise HierarchyValidationError(f"duplicate component ids: {duplicates}", node_id=duplicates[0])

        index: dict[str, Node] = {}
        for node in nodes:
            copy = node.model_copy()
            if node.type != NodeType.USER_STORY:
                copy.children = []  # type: ignore[union-attr]
            index[copy.id] = copy
        return index


def build_hierarchy(nodes: Sequence[Node], root_id: str | None = None) -> list[DomainNode]:
    """Build the typed forest; see :class:`HierarchyBuilder`."""
    return HierarchyBuilder().build(nodes, root_id)


def find_initiative(forest: Iterable[DomainNode], initiative_id: str) -> InitiativeNode | None:
    for domain in forest:
        for initiative in domain.children:
            if initiative.id == initiative_id:
                return initiative
    return None


def list_domains(nodes: Iterable[Node]) -> list[DomainNode]:
    return [node for node in nodes if isinstance(node, DomainNode)]


def list_initiatives(nodes: Iterable[Node], domain_id: str) -> list[InitiativeNode]:
    return [node for node in nodes if isinstance(node, InitiativeNode) and node.parent == domain_id]


def count_descendants(node: ParentNode) -> int:
    total = 0
    for child in node.children:
        total += 1
        if not isinstance(child, UserStoryNode):
            total += count_descendants(child)
    return total
