"""Sync run summary contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from archbridge.contracts.hierarchy import NodeType


class KindCounts(BaseModel):
    total: int = 0
    created: int = 0
    failed: int = 0

    def record_created(self) -> None:
        self.total += 1
        self.created += 1

    def record_failed(self) -> None:
        self.total += 1
        self.failed += 1


class SyncSummary(BaseModel):
    """Aggregate counts of one sync run.

    Only attempted nodes are counted: a node skipped because its parent failed
    never appears in any ``total``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = 0
    created: int = 0
    failed: int = 0
    epics: KindCounts = Field(default_factory=KindCounts)
    features: KindCounts = Field(default_factory=KindCounts)
    user_stories: KindCounts = Field(default_factory=KindCounts)
    deleted: int | None = None

    def counts_for(self, node_type: NodeType | str) -> KindCounts:
        node_type = NodeType(node_type)
        if node_type is NodeType.EPIC:
            return self.epics
        if node_type is NodeType.FEATURE:
            return self.features
        if node_type is NodeType.USER_STORY:
            return self.user_stories
        raise ValueError(f"{node_type} is not a synced kind")

    def record_created(self, node_type: NodeType | str) -> None:
        self.counts_for(node_type).record_created()
        self.total += 1
        self.created += 1

    def record_failed(self, node_type: NodeType | str) -> None:
        self.counts_for(node_type).record_failed()
        self.total += 1
        self.failed += 1

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)
