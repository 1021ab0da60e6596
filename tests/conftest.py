"""Shared test fixtures for archbridge tests."""

from __future__ import annotations

from typing import Any

import pytest

from archbridge.contracts.hierarchy import EpicNode
from tests.fakes.nodes import make_epic, make_feature, make_story


@pytest.fixture
def component_records() -> list[dict[str, Any]]:
    """A flat Ardoq workspace with one branch per level and a second initiative."""
    return [
        {"_id": "D-1", "name": "Payments", "type": "Domain", "parent": "ws-1"},
        {"_id": "I-1", "name": "Instant Payouts", "type": "Initiative", "parent": "D-1"},
        {"_id": "I-2", "name": "Fraud Scoring", "type": "Initiative", "parent": "D-1"},
        {"_id": "E-1", "name": "Payout API", "type": "Epic", "parent": "I-1", "priority": 2},
        {"_id": "F-1", "name": "Payout endpoint", "type": "Feature", "parent": "E-1", "purpose": "Expose payouts"},
        {"_id": "S-1", "name": "Create payout", "type": "User Story", "parent": "F-1", "risk": 1},
        {"_id": "S-2", "name": "Cancel payout", "type": "User Story", "parent": "F-1"},
    ]


@pytest.fixture
def sample_epics() -> list[EpicNode]:
    """Epic 1 with one Feature and one User Story, Epic 2 on its own."""
    story = make_story("S-1", "Create payout")
    feature = make_feature("F-1", "Payout endpoint", [story])
    return [make_epic("E-1", "Payout API", [feature]), make_epic("E-2", "Ledger export")]
