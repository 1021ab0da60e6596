"""Contracts-domain exports."""

from archbridge.contracts.config import ArchBridgeConfig, ArdoqConfig, AzureDevOpsConfig, FieldMapping
from archbridge.contracts.exceptions import (
    ArchBridgeError,
    AuthenticationError,
    ConfigError,
    HierarchyValidationError,
    OverwriteAbortedError,
    ProviderError,
    RemoteCallError,
    SyncCancelledError,
    SyncError,
)
from archbridge.contracts.hierarchy import (
    DomainNode,
    EpicNode,
    FeatureNode,
    InitiativeNode,
    Node,
    NodeType,
    UserStoryNode,
    parse_nodes,
)
from archbridge.contracts.provider import Provider
from archbridge.contracts.source import ComponentSource
from archbridge.contracts.sync import KindCounts, SyncSummary
from archbridge.contracts.work_item import PatchOperation, WorkItem, WorkItemType

__all__ = [
    "ArchBridgeConfig",
    "ArchBridgeError",
    "ArdoqConfig",
    "AuthenticationError",
    "AzureDevOpsConfig",
    "ComponentSource",
    "ConfigError",
    "DomainNode",
    "EpicNode",
    "FeatureNode",
    "FieldMapping",
    "HierarchyValidationError",
    "InitiativeNode",
    "KindCounts",
    "Node",
    "NodeType",
    "OverwriteAbortedError",
    "PatchOperation",
    "Provider",
    "ProviderError",
    "RemoteCallError",
    "SyncCancelledError",
    "SyncError",
    "SyncSummary",
    "UserStoryNode",
    "WorkItem",
    "WorkItemType",
    "parse_nodes",
]
