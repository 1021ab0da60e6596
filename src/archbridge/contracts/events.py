"""Progress events streamed while a sync runs.

Each event class carries its wire tag in ``event_type`` and renders a
camelCase JSON payload through :meth:`ProgressEvent.payload`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from archbridge.contracts.hierarchy import NodeType
from archbridge.contracts.sync import SyncSummary


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProgressEvent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    event_type: ClassVar[str]

    timestamp: str = Field(default_factory=utc_timestamp)

    def payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class OverwriteStarted(ProgressEvent):
    event_type: ClassVar[str] = "overwrite:started"

    message: str = "Overwrite mode enabled. Checking for existing work items..."


class OverwriteNoItems(ProgressEvent):
    event_type: ClassVar[str] = "overwrite:no-items"

    message: str = "No existing work items found. Proceeding with creation."


class OverwriteDeleting(ProgressEvent):
    event_type: ClassVar[str] = "overwrite:deleting"

    message: str
    count: int


class OverwriteProgress(ProgressEvent):
    event_type: ClassVar[str] = "overwrite:progress"

    message: str
    deleted: int
    total: int
    current_chunk: int
    total_chunks: int


class OverwriteDeleted(ProgressEvent):
    event_type: ClassVar[str] = "overwrite:deleted"

    message: str
    count: int


class OverwriteError(ProgressEvent):
    event_type: ClassVar[str] = "overwrite:error"

    error: str
    message: str = "Overwrite operation failed. Aborting work item creation."


class ItemCreated(ProgressEvent):
    ardoq_id: str
    name: str
    azure_dev_ops_id: int
    azure_dev_ops_url: str


class ItemFailed(ProgressEvent):
    ardoq_id: str
    name: str
    error: str


class EpicCreated(ItemCreated):
    event_type: ClassVar[str] = "epic:created"


class FeatureCreated(ItemCreated):
    event_type: ClassVar[str] = "feature:created"


class UserStoryCreated(ItemCreated):
    event_type: ClassVar[str] = "userstory:created"


class EpicFailed(ItemFailed):
    event_type: ClassVar[str] = "epic:failed"


class FeatureFailed(ItemFailed):
    event_type: ClassVar[str] = "feature:failed"


class UserStoryFailed(ItemFailed):
    event_type: ClassVar[str] = "userstory:failed"


class SyncComplete(ProgressEvent):
    event_type: ClassVar[str] = "sync:complete"

    summary: SyncSummary

    def payload(self) -> dict[str, Any]:
        return {"summary": self.summary.to_payload(), "timestamp": self.timestamp}


class SyncFailed(ProgressEvent):
    event_type: ClassVar[str] = "sync:error"

    error: str


CREATED_EVENTS: dict[NodeType, type[ItemCreated]] = {
    NodeType.EPIC: EpicCreated,
    NodeType.FEATURE: FeatureCreated,
    NodeType.USER_STORY: UserStoryCreated,
}

FAILED_EVENTS: dict[NodeType, type[ItemFailed]] = {
    NodeType.EPIC: EpicFailed,
    NodeType.FEATURE: FeatureFailed,
    NodeType.USER_STORY: UserStoryFailed,
}


__all__ = [
    "CREATED_EVENTS",
    "FAILED_EVENTS",
    "EpicCreated",
    "EpicFailed",
    "FeatureCreated",
    "FeatureFailed",
    "ItemCreated",
    "ItemFailed",
    "OverwriteDeleted",
    "OverwriteDeleting",
    "OverwriteError",
    "OverwriteNoItems",
    "OverwriteProgress",
    "OverwriteStarted",
    "ProgressEvent",
    "SyncComplete",
    "SyncFailed",
    "UserStoryCreated",
    "UserStoryFailed",
    "utc_timestamp",
]
