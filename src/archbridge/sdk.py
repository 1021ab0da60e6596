"""SDK composition root for ArchBridge."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from archbridge.contracts.config import ArchBridgeConfig
from archbridge.contracts.exceptions import ConfigError, HierarchyValidationError
from archbridge.contracts.hierarchy import DomainNode, EpicNode
from archbridge.contracts.provider import Provider
from archbridge.contracts.source import ComponentSource
from archbridge.contracts.sync import SyncSummary
from archbridge.engine import FieldMapper, ProgressSink, SyncOrchestrator
from archbridge.hierarchy import build_hierarchy, find_initiative
from archbridge.mapping import create_field_mapper
from archbridge.providers.dry_run import DryRunProvider
from archbridge.providers.factory import create_provider
from archbridge.sources.ardoq import ArdoqComponentSource

_LOG = logging.getLogger(__name__)


class ArchBridge:
    """ArchBridge SDK public API.

    Reads an Ardoq workspace into a typed hierarchy and replicates the Epic
    subtree of one Initiative into an Azure DevOps project. The source and
    provider are built from the config on demand; tests and embedding
    applications may inject their own.
    """

    def __init__(
        self,
        *,
        config: ArchBridgeConfig,
        source: ComponentSource | None = None,
        provider: Provider | None = None,
        field_mapper: FieldMapper | None = None,
        progress: ProgressSink | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._provider = provider
        self._field_mapper = field_mapper or create_field_mapper(config.field_mappings)
        self._progress = progress
        self._cancel_event = cancel_event

    @classmethod
    async def from_config(
        cls,
        config: ArchBridgeConfig,
        *,
        progress: ProgressSink | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ArchBridge:
        return cls(config=config, progress=progress, cancel_event=cancel_event)

    @property
    def config(self) -> ArchBridgeConfig:
        return self._config

    async def fetch_hierarchy(self, workspace_id: str) -> list[DomainNode]:
        source = self._resolve_source()
        async with source:
            nodes = await source.fetch_components(workspace_id)
        forest = build_hierarchy(nodes, workspace_id)
        _LOG.info("Workspace %s: %d component(s), %d domain(s)", workspace_id, len(nodes), len(forest))
        return forest

    async def initiative_epics(self, workspace_id: str, initiative_id: str) -> list[EpicNode]:
        initiative = find_initiative(await self.fetch_hierarchy(workspace_id), initiative_id)
        if initiative is None:
            raise HierarchyValidationError(f"Initiative with id {initiative_id} not found", node_id=initiative_id)
        return list(initiative.children)

    async def sync(
        self,
        project: str,
        epics: Sequence[EpicNode],
        *,
        overwrite: bool = False,
        dry_run: bool = False,
    ) -> SyncSummary:
        provider = self._resolve_provider(dry_run=dry_run)
        orchestrator = SyncOrchestrator(
            provider,
            self._field_mapper,
            self._progress,
            chunk_size=self._config.delete_chunk_size,
            cancel_event=self._cancel_event,
        )
        async with provider:
            return await orchestrator.sync(project, epics, overwrite=overwrite)

    async def sync_initiative(
        self,
        workspace_id: str,
        initiative_id: str,
        project: str,
        *,
        overwrite: bool = False,
        dry_run: bool = False,
    ) -> SyncSummary:
        epics = await self.initiative_epics(workspace_id, initiative_id)
        return await self.sync(project, epics, overwrite=overwrite, dry_run=dry_run)

    def _resolve_source(self) -> ComponentSource:
        if self._source is not None:
            return self._source
        ardoq = self._config.ardoq
        if not ardoq.api_token:
            raise ConfigError("ardoq.api_token is required (or set ARDOQ_API_TOKEN)")
        return ArdoqComponentSource(token=ardoq.api_token, api_host=ardoq.api_host, org_label=ardoq.org_label)

    def _resolve_provider(self, *, dry_run: bool) -> Provider:
        if dry_run:
            return DryRunProvider()
        if self._provider is not None:
            return self._provider
        if self._config.provider == "dry-run":
            return create_provider("dry-run")

        azure = self._config.azure_devops
        if not azure.organization:
            raise ConfigError("azure_devops.organization is required (or set AZURE_DEVOPS_ORGANIZATION)")
        if not azure.pat_token:
            raise ConfigError("azure_devops.pat_token is required (or set AZURE_DEVOPS_PAT_TOKEN)")
        try:
            return create_provider(
                self._config.provider,
                organization=azure.organization,
                token=azure.pat_token,
                api_version=azure.api_version,
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
