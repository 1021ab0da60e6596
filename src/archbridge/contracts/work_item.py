"""Remote work item contracts."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from archbridge.contracts.hierarchy import NodeType


class WorkItemType(StrEnum):
    EPIC = "Epic"
    FEATURE = "Feature"
    USER_STORY = "User Story"

    @classmethod
    def for_node_type(cls, node_type: NodeType | str) -> WorkItemType:
        return _WORK_ITEM_TYPE_BY_NODE_TYPE[NodeType(node_type)]


_WORK_ITEM_TYPE_BY_NODE_TYPE = {
    NodeType.EPIC: WorkItemType.EPIC,
    NodeType.FEATURE: WorkItemType.FEATURE,
    NodeType.USER_STORY: WorkItemType.USER_STORY,
}


class PatchOperation(BaseModel):
    """One JSON Patch operation of a work item document."""

    op: str = "add"
    path: str
    value: Any = None

    @classmethod
    def field(cls, reference_name: str, value: Any) -> PatchOperation:
        return cls(path=f"/fields/{reference_name}", value=value)


class WorkItem(BaseModel):
    id: int
    url: str
    work_item_type: WorkItemType
    local_id: str | None = None
