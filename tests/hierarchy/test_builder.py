from __future__ import annotations

from typing import Any

import pytest

from archbridge.contracts.exceptions import HierarchyValidationError
from archbridge.contracts.hierarchy import DomainNode, EpicNode, InitiativeNode, parse_nodes
from archbridge.hierarchy import (
    HierarchyBuilder,
    build_hierarchy,
    count_descendants,
    find_initiative,
    list_domains,
    list_initiatives,
)


def test_build_links_domain_initiative_and_epic() -> None:
    nodes = parse_nodes(
        [
            {"_id": "D1", "name": "Domain", "type": "Domain", "parent": "root"},
            {"_id": "I1", "name": "Initiative", "type": "Initiative", "parent": "D1"},
            {"_id": "E1", "name": "Epic", "type": "Epic", "parent": "I1"},
        ]
    )

    forest = HierarchyBuilder().build(nodes, "root")

    assert [domain.id for domain in forest] == ["D1"]
    assert [initiative.id for initiative in forest[0].children] == ["I1"]
    assert [epic.id for epic in forest[0].children[0].children] == ["E1"]


def test_children_keep_input_order_when_interleaved_or_listed_before_parents() -> None:
    nodes = parse_nodes(
        [
            {"_id": "S2", "name": "Second story", "type": "User Story", "parent": "F1"},
            {"_id": "F2", "name": "Second feature", "type": "Feature", "parent": "E1"},
            {"_id": "S1", "name": "First story", "type": "User Story", "parent": "F1"},
            {"_id": "E2", "name": "Second epic", "type": "Epic", "parent": "I1"},
            {"_id": "F1", "name": "First feature", "type": "Feature", "parent": "E1"},
            {"_id": "E1", "name": "First epic", "type": "Epic", "parent": "I1"},
            {"_id": "S3", "name": "Third story", "type": "User Story", "parent": "F1"},
            {"_id": "I1", "name": "Initiative", "type": "Initiative", "parent": "D1"},
            {"_id": "D1", "name": "Domain", "type": "Domain"},
        ]
    )

    (domain,) = build_hierarchy(nodes, "ws-1")

    epics = domain.children[0].children
    assert [epic.id for epic in epics] == ["E2", "E1"]
    assert [feature.id for feature in epics[1].children] == ["F2", "F1"]
    assert [story.id for story in epics[1].children[1].children] == ["S2", "S1", "S3"]


def test_build_full_five_level_tree(component_records: list[dict[str, Any]]) -> None:
    forest = build_hierarchy(parse_nodes(component_records), "ws-1")

    domain = forest[0]
    assert [initiative.id for initiative in domain.children] == ["I-1", "I-2"]
    epic = domain.children[0].children[0]
    feature = epic.children[0]
    assert feature.id == "F-1"
    assert [story.id for story in feature.children] == ["S-1", "S-2"]
    assert domain.children[1].children == []


def test_every_attached_child_has_expected_parent_kind(component_records: list[dict[str, Any]]) -> None:
    forest = build_hierarchy(parse_nodes(component_records), "ws-1")

    def _walk(node: Any) -> None:
        for child in getattr(node, "children", []):
            assert child.parent == node.id
            _walk(child)

    for domain in forest:
        _walk(domain)
    assert count_descendants(forest[0]) == len(component_records) - 1


def test_domain_without_parent_is_a_root() -> None:
    nodes = parse_nodes([{"_id": "D1", "name": "Domain", "type": "Domain"}])

    forest = build_hierarchy(nodes, "ws-1")

    assert [domain.id for domain in forest] == ["D1"]


def test_domain_under_another_root_is_not_returned() -> None:
    nodes = parse_nodes([{"_id": "D1", "name": "Domain", "type": "Domain", "parent": "other"}])

    assert build_hierarchy(nodes, "ws-1") == []


def test_build_does_not_mutate_input_nodes(component_records: list[dict[str, Any]]) -> None:
    nodes = parse_nodes(component_records)

    build_hierarchy(nodes, "ws-1")

    for node in nodes:
        assert getattr(node, "children", []) == []


def test_build_resets_preexisting_children() -> None:
    initiative = InitiativeNode(_id="I1", name="Initiative", parent="D1", children=[EpicNode(_id="X", parent="I1")])
    domain = DomainNode(_id="D1", name="Domain")

    forest = build_hierarchy([domain, initiative])

    assert forest[0].children[0].children == []


def test_missing_parent_raises() -> None:
    nodes = parse_nodes(
        [
            {"_id": "D1", "type": "Domain"},
            {"_id": "E1", "type": "Epic", "parent": "I-missing"},
        ]
    )

    with pytest.raises(HierarchyValidationError, match="Epic E1 cannot have parent none") as exc:
        build_hierarchy(nodes)

    assert exc.value.node_id == "E1"
    assert exc.value.expected_parent == "Initiative"
    assert exc.value.actual_parent is None


def test_wrong_kind_parent_raises() -> None:
    nodes = parse_nodes(
        [
            {"_id": "D1", "type": "Domain"},
            {"_id": "I1", "type": "Initiative", "parent": "D1"},
            {"_id": "F1", "type": "Feature", "parent": "I1"},
        ]
    )

    with pytest.raises(HierarchyValidationError) as exc:
        build_hierarchy(nodes)

    assert exc.value.node_id == "F1"
    assert exc.value.expected_parent == "Epic"
    assert exc.value.actual_parent == "Initiative"


def test_duplicate_ids_raise() -> None:
    nodes = parse_nodes(
        [
            {"_id": "D1", "type": "Domain"},
            {"_id": "D1", "type": "Domain"},
        ]
    )

    with pytest.raises(HierarchyValidationError, match="duplicate"):
        build_hierarchy(nodes)


def test_parse_nodes_rejects_unknown_kind() -> None:
    with pytest.raises(HierarchyValidationError):
        parse_nodes([{"_id": "X1", "type": "Application"}])


def test_parse_nodes_requires_parent_below_domain() -> None:
    with pytest.raises(HierarchyValidationError):
        parse_nodes([{"_id": "E1", "type": "Epic"}])


def test_find_initiative_and_listing_helpers(component_records: list[dict[str, Any]]) -> None:
    nodes = parse_nodes(component_records)
    forest = build_hierarchy(nodes, "ws-1")

    initiative = find_initiative(forest, "I-1")

    assert initiative is not None
    assert [epic.id for epic in initiative.children] == ["E-1"]
    assert find_initiative(forest, "I-404") is None
    assert [domain.id for domain in list_domains(nodes)] == ["D-1"]
    assert [item.id for item in list_initiatives(nodes, "D-1")] == ["I-1", "I-2"]
    assert list_initiatives(nodes, "D-2") == []
