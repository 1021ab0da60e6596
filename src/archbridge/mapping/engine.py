"""Field mapping from architecture component attributes to work item fields."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from archbridge.contracts.config import FieldMapping
from archbridge.contracts.hierarchy import BaseNode
from archbridge.contracts.work_item import PatchOperation, WorkItemType

_LOG = logging.getLogger(__name__)

TITLE_FIELD = "System.Title"
DESCRIPTION_FIELD = "System.Description"
PRIORITY_FIELD = "Microsoft.VSTS.Common.Priority"
TAGS_FIELD = "System.Tags"
RISK_FIELD = "Custom.Risk"
_IDENTITY_FIELDS = frozenset({"System.ChangedBy", "System.AssignedTo"})

_DEFAULT_PRIORITY = 3
_RISK_LABELS = {1: "High", 2: "Medium", 3: "Low"}

_DESCRIPTION_KEYS = ("description", "context", "desc")
_OUTPUT_KEYS = ("output_definition_of_done", "output", "definitionOfDone")
_FEATURE_SECTIONS = (
    ("Purpose", ("purpose",)),
    ("Input", ("input",)),
    ("Output (Definition of Done)", _OUTPUT_KEYS),
    ("Approach", ("approach",)),
)
# customFields keys consulted for Feature attributes, in order; matched case-insensitively.
_CUSTOM_FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "description": ("context_description", "description"),
    "purpose": ("purpose",),
    "input": ("input",),
    "output": _OUTPUT_KEYS,
    "approach": ("approach",),
    "priority": ("priority",),
}
_META_KEYS: dict[str, tuple[str, ...]] = {
    "lastUpdatedBy": ("lastModifiedBy", "lastModifiedByName", "lastModifiedByEmail"),
    "lastUpdatedDate": ("lastUpdated",),
}
_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "description": ("desc",),
    "acceptanceCriteria": ("acceptance", "criteria"),
    "lastUpdatedBy": ("updatedBy", "changedBy"),
    "lastUpdatedDate": ("updatedDate", "changedDate"),
}


def _mappings(work_item_type: WorkItemType, pairs: Sequence[tuple[str, str]]) -> list[FieldMapping]:
    return [
        FieldMapping(ardoq_field=ardoq_field, azure_devops_field=azure_field, work_item_type=work_item_type)
        for ardoq_field, azure_field in pairs
    ]


DEFAULT_FIELD_MAPPINGS: dict[WorkItemType, list[FieldMapping]] = {
    WorkItemType.EPIC: _mappings(
        WorkItemType.EPIC,
        [
            ("description", DESCRIPTION_FIELD),
            ("priority", PRIORITY_FIELD),
            ("tags", TAGS_FIELD),
            ("componentKey", TAGS_FIELD),
            ("lastUpdatedBy", "System.ChangedBy"),
            ("lastUpdatedDate", "System.ChangedDate"),
        ],
    ),
    WorkItemType.FEATURE: _mappings(
        WorkItemType.FEATURE,
        [
            ("description", DESCRIPTION_FIELD),
            ("tags", TAGS_FIELD),
            ("componentKey", TAGS_FIELD),
            ("priority", PRIORITY_FIELD),
        ],
    ),
    WorkItemType.USER_STORY: _mappings(
        WorkItemType.USER_STORY,
        [
            ("description", DESCRIPTION_FIELD),
            ("acceptanceCriteria", "Microsoft.VSTS.Common.AcceptanceCriteria"),
            ("priority", PRIORITY_FIELD),
            ("classification", "Microsoft.VSTS.Common.Category"),
            ("risk", RISK_FIELD),
            ("tags", TAGS_FIELD),
            ("componentKey", TAGS_FIELD),
        ],
    ),
}


class FieldMappingEngine:
    """Translate a component into the JSON Patch field operations of its work item.

    Uses the configured mappings for the component's work item type when
    given, the default tables otherwise. The title is always set. A mapping
    that cannot be applied is logged and skipped.
    """

    def __init__(self, mappings: Sequence[FieldMapping] | None = None) -> None:
        self._mappings = list(mappings) if mappings is not None else None

    def __call__(self, node: BaseNode) -> list[PatchOperation]:
        return self.apply(node)

    def mappings_for(self, work_item_type: WorkItemType) -> list[FieldMapping]:
        if self._mappings is None:
            return list(DEFAULT_FIELD_MAPPINGS[work_item_type])
        return [mapping for mapping in self._mappings if mapping.work_item_type == work_item_type]

    def apply(self, node: BaseNode) -> list[PatchOperation]:
        work_item_type = WorkItemType.for_node_type(node.type)  # type: ignore[attr-defined]
        operations = [PatchOperation.field(TITLE_FIELD, node.name or "Untitled")]
        tags: list[str] = []

        for mapping in self.mappings_for(work_item_type):
            try:
                value = self._field_value(node, mapping.ardoq_field, work_item_type)
                if value is None:
                    continue
                transformed = self.transform(value, mapping.azure_devops_field, work_item_type)
            except (TypeError, ValueError) as exc:
                _LOG.warning(
                    "Failed to map field %s to %s: %s", mapping.ardoq_field, mapping.azure_devops_field, exc
                )
                continue
            if transformed is None:
                continue
            if mapping.azure_devops_field == TAGS_FIELD:
                tag = str(transformed).strip()
                if tag:
                    tags.append(tag)
                continue
            operations.append(PatchOperation.field(mapping.azure_devops_field, transformed))

        # Every tag source lands in one combined op.
        if tags:
            operations.append(PatchOperation.field(TAGS_FIELD, ", ".join(tags)))
        return operations

    @staticmethod
    def _field_value(node: BaseNode, ardoq_field: str, work_item_type: WorkItemType) -> Any:
        if work_item_type is WorkItemType.FEATURE and ardoq_field == "description":
            return build_feature_description(node)
        return lookup_field(node, ardoq_field, work_item_type)

    def transform(self, value: Any, azure_field: str, work_item_type: WorkItemType) -> Any:
        if azure_field == PRIORITY_FIELD:
            return convert_priority(value)
        if azure_field == TAGS_FIELD:
            return convert_tags(value)
        if "Date" in azure_field:
            return convert_date(value)
        if azure_field in _IDENTITY_FIELDS:
            return value if isinstance(value, str) else str(value)
        if azure_field == RISK_FIELD and work_item_type is WorkItemType.USER_STORY:
            if isinstance(value, int) and value in _RISK_LABELS:
                return _RISK_LABELS[value]
            return str(value)
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return value


def lookup_field(node: BaseNode, ardoq_field: str, work_item_type: WorkItemType) -> Any:
    """Find an attribute value the way Ardoq records actually carry it.

    Tried in order: the exact dot path, ``customFields`` (Feature sections and
    priority), the ``_meta`` audit block, then case-insensitive and
    alternative spellings of the name. Returns ``None`` when nothing matches.
    """
    value = node.attribute(ardoq_field)
    if value is not None:
        return value

    custom_fields = node.attribute("customFields")
    if isinstance(custom_fields, dict):
        if work_item_type is WorkItemType.FEATURE:
            keys = _CUSTOM_FIELD_KEYS.get(ardoq_field, ())
        elif ardoq_field == "priority":
            keys = ("priority",)
        else:
            keys = ()
        value = _first_filled(custom_fields, keys)
        if value is not None:
            return value

    if node.meta:
        value = _first_filled(node.meta, _META_KEYS.get(ardoq_field, ()))
        if value is not None:
            return value

    return find_attribute(node.attributes, (ardoq_field, *_name_variations(ardoq_field)))


def find_attribute(attributes: Mapping[str, Any], names: Iterable[str]) -> Any:
    """First non-null value among ``names``, each tried exactly then case-insensitively."""
    for name in names:
        value = attributes.get(name)
        if value is not None:
            return value
        lower = name.lower()
        for key, candidate in attributes.items():
            if key.lower() == lower and candidate is not None:
                return candidate
    return None


def _first_filled(values: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = values.get(key)
        if value not in (None, ""):
            return value
        lower = key.lower()
        for name, candidate in values.items():
            if name.lower() == lower and candidate not in (None, ""):
                return candidate
    return None


def _name_variations(name: str) -> list[str]:
    variations = [name, name[:1].upper() + name[1:], name.lower(), name.upper(), *_ABBREVIATIONS.get(name, ())]
    return list(dict.fromkeys(variations))


def build_feature_description(node: BaseNode) -> str | None:
    """Description (or context) followed by the Purpose/Input/Output/Approach sections."""
    parts: list[str] = []
    custom_fields = node.attribute("customFields")
    if not isinstance(custom_fields, dict):
        custom_fields = {}

    description = custom_fields.get("context_description") or custom_fields.get("description")
    if not description:
        description = find_attribute(node.attributes, _DESCRIPTION_KEYS)
    if description:
        parts.append(str(description))

    sections: list[str] = []
    for label, keys in _FEATURE_SECTIONS:
        value = _first_filled(custom_fields, keys)
        if value is None:
            value = find_attribute(node.attributes, keys)
        if value not in (None, ""):
            sections.append(f"{label}: {value}")
    if sections:
        if parts:
            parts.append("")
        parts.extend(sections)

    return "\n".join(parts) or None


def convert_priority(value: Any) -> int:
    """Normalise a priority to the 1 (critical) .. 4 (low) scale; unknown values become 3."""
    if isinstance(value, bool):
        value = str(value)
    if isinstance(value, (int, float)) and 1 <= value <= 4 and int(value) == value:
        return int(value)
    if isinstance(value, str):
        lower = value.lower().strip()
        if "critical" in lower or lower == "1":
            return 1
        if "high" in lower or lower == "2":
            return 2
        if "med" in lower or lower == "3":
            return 3
        if "low" in lower or lower == "4":
            return 4
    _LOG.warning("Unable to convert priority value %r, using default %d (Medium)", value, _DEFAULT_PRIORITY)
    return _DEFAULT_PRIORITY


def convert_tags(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(tag) for tag in value if tag is not None)
    if isinstance(value, str):
        return value
    return str(value or "")


def convert_date(value: Any) -> str:
    if isinstance(value, datetime):
        return _iso(value)
    if isinstance(value, str):
        try:
            return _iso(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _iso(datetime.fromtimestamp(value / 1000, tz=UTC))
    return str(value)


def _iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_field_mapper(mappings: Sequence[FieldMapping] | None = None) -> FieldMappingEngine:
    return FieldMappingEngine(mappings)


__all__ = [
    "DEFAULT_FIELD_MAPPINGS",
    "FieldMappingEngine",
    "build_feature_description",
    "convert_date",
    "convert_priority",
    "convert_tags",
    "create_field_mapper",
    "find_attribute",
    "lookup_field",
]
