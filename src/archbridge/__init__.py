"""Public API surface for ArchBridge."""

from archbridge.config import load_config
from archbridge.contracts.config import ArchBridgeConfig, ArdoqConfig, AzureDevOpsConfig, FieldMapping
from archbridge.contracts.events import ProgressEvent
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
from archbridge.engine import BatchDeleter, CollectingProgressSink, NullProgressSink, ProgressSink, SyncOrchestrator
from archbridge.hierarchy import HierarchyBuilder, build_hierarchy, find_initiative
from archbridge.mapping import FieldMappingEngine, create_field_mapper
from archbridge.providers import AzureDevOpsProvider, DryRunProvider, create_provider
from archbridge.sdk import ArchBridge
from archbridge.sources import ArdoqComponentSource
from archbridge.transport import ServerSentEventSink, stream_sync

__version__ = "0.1.0"

__all__ = [
    "ArchBridge",
    "ArchBridgeConfig",
    "ArchBridgeError",
    "ArdoqComponentSource",
    "ArdoqConfig",
    "AuthenticationError",
    "AzureDevOpsConfig",
    "AzureDevOpsProvider",
    "BatchDeleter",
    "CollectingProgressSink",
    "ComponentSource",
    "ConfigError",
    "DomainNode",
    "DryRunProvider",
    "EpicNode",
    "FeatureNode",
    "FieldMapping",
    "FieldMappingEngine",
    "HierarchyBuilder",
    "HierarchyValidationError",
    "InitiativeNode",
    "KindCounts",
    "Node",
    "NodeType",
    "NullProgressSink",
    "OverwriteAbortedError",
    "PatchOperation",
    "ProgressEvent",
    "ProgressSink",
    "Provider",
    "ProviderError",
    "RemoteCallError",
    "ServerSentEventSink",
    "SyncCancelledError",
    "SyncError",
    "SyncOrchestrator",
    "SyncSummary",
    "UserStoryNode",
    "WorkItem",
    "WorkItemType",
    "__version__",
    "build_hierarchy",
    "create_field_mapper",
    "create_provider",
    "find_initiative",
    "load_config",
    "parse_nodes",
    "stream_sync",
]
