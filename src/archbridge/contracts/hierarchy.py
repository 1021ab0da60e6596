"""Architecture component contracts.

Components arrive as a flat list of loosely-typed records. Each record is
parsed into one of five kind-tagged variants sharing ``_id``, ``name``,
``type``, ``parent`` and the optional ``_meta`` audit block; any other key
is kept as a free-form attribute for field mapping. Parents are referenced
by id only, children are owned by the parent.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from archbridge.contracts.exceptions import HierarchyValidationError


class NodeType(StrEnum):
    DOMAIN = "Domain"
    INITIATIVE = "Initiative"
    EPIC = "Epic"
    FEATURE = "Feature"
    USER_STORY = "User Story"


# Level order; each kind's required parent is the kind before it.
NODE_TYPE_ORDER: tuple[NodeType, ...] = (
    NodeType.DOMAIN,
    NodeType.INITIATIVE,
    NodeType.EPIC,
    NodeType.FEATURE,
    NodeType.USER_STORY,
)

PARENT_TYPE: dict[NodeType, NodeType] = {
    NodeType.INITIATIVE: NodeType.DOMAIN,
    NodeType.EPIC: NodeType.INITIATIVE,
    NodeType.FEATURE: NodeType.EPIC,
    NodeType.USER_STORY: NodeType.FEATURE,
}

_CORE_FIELDS = frozenset({"_id", "id", "name", "type", "parent", "children", "_meta", "meta"})


class BaseNode(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    name: str = ""
    parent: str | None = None
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")

    @property
    def attributes(self) -> dict[str, Any]:
        """Free-form descriptive attributes beyond the structural fields."""
        extra = self.model_extra or {}
        return {key: value for key, value in extra.items() if key not in _CORE_FIELDS}

    def attribute(self, path: str) -> Any:
        """Resolve a dot-separated attribute path; ``None`` when any segment is missing."""
        value: Any = self.attributes
        for part in path.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return None
        return value


class UserStoryNode(BaseNode):
    type: Literal["User Story"] = "User Story"
    parent: str


class FeatureNode(BaseNode):
    type: Literal["Feature"] = "Feature"
    parent: str
    children: list[UserStoryNode] = Field(default_factory=list)


class EpicNode(BaseNode):
    type: Literal["Epic"] = "Epic"
    parent: str
    children: list[FeatureNode] = Field(default_factory=list)


class InitiativeNode(BaseNode):
    type: Literal["Initiative"] = "Initiative"
    parent: str
    children: list[EpicNode] = Field(default_factory=list)


class DomainNode(BaseNode):
    type: Literal["Domain"] = "Domain"
    children: list[InitiativeNode] = Field(default_factory=list)


Node = Annotated[
    DomainNode | InitiativeNode | EpicNode | FeatureNode | UserStoryNode,
    Field(discriminator="type"),
]
ParentNode = DomainNode | InitiativeNode | EpicNode | FeatureNode

_NODE_LIST_ADAPTER: TypeAdapter[list[Node]] = TypeAdapter(list[Node])


def parse_nodes(raw: Iterable[dict[str, Any]]) -> list[Node]:
    """Parse raw component records into kind-tagged nodes.

    Raises:
        HierarchyValidationError: A record has an unknown kind or misses a required field.
    """
    records = list(raw)
    try:
        return _NODE_LIST_ADAPTER.validate_python(records)
    except ValidationError as exc:
        raise HierarchyValidationError(f"invalid component records: {exc}") from exc


__all__ = [
    "NODE_TYPE_ORDER",
    "PARENT_TYPE",
    "BaseNode",
    "DomainNode",
    "EpicNode",
    "FeatureNode",
    "InitiativeNode",
    "Node",
    "NodeType",
    "ParentNode",
    "UserStoryNode",
    "parse_nodes",
]
