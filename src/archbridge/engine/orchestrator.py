"""Sync orchestrator: replicate an Epic tree into the remote work-item system."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import NoReturn

from archbridge.contracts.events import (
    CREATED_EVENTS,
    FAILED_EVENTS,
    OverwriteError,
    OverwriteStarted,
    SyncComplete,
    SyncFailed,
)
from archbridge.contracts.exceptions import (
    OverwriteAbortedError,
    ProviderError,
    SyncCancelledError,
    SyncError,
)
from archbridge.contracts.hierarchy import EpicNode, FeatureNode, NodeType, UserStoryNode
from archbridge.contracts.provider import Provider
from archbridge.contracts.sync import SyncSummary
from archbridge.contracts.work_item import PatchOperation, WorkItem, WorkItemType
from archbridge.engine.deleter import DELETE_CHUNK_SIZE, BatchDeleter
from archbridge.engine.progress import NullProgressSink, ProgressSink

_LOG = logging.getLogger(__name__)

SyncableNode = EpicNode | FeatureNode | UserStoryNode
FieldMapper = Callable[[SyncableNode], list[PatchOperation]]


class SyncOrchestrator:
    """Create remote work items for Epics, their Features and User Stories.

    Work is strictly sequential and depth-first, parents before children, so
    the event stream follows the tree order. A failed node is counted and
    reported, and its whole subtree is skipped without being counted. The
    optional overwrite pre-phase deletes every existing work item of the
    project first; if it fails nothing is created.

    Cancellation is cooperative: ``cancel_event`` is checked before each
    remote call is started, an in-flight call always completes.
    """

    def __init__(
        self,
        provider: Provider,
        field_mapper: FieldMapper,
        progress: ProgressSink | None = None,
        *,
        chunk_size: int = DELETE_CHUNK_SIZE,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self._provider = provider
        self._field_mapper = field_mapper
        self._progress: ProgressSink = progress or NullProgressSink()
        self._chunk_size = chunk_size
        self._cancel_event = cancel_event

    async def sync(self, project: str, epics: Sequence[EpicNode], *, overwrite: bool = False) -> SyncSummary:
        if not project or not project.strip():
            self._fail("Project parameter is required and must be a non-empty string")
        if not epics:
            self._fail("epics array is required and must not be empty")

        summary = SyncSummary()
        _LOG.info("Syncing %d epic(s) into project %s (overwrite=%s)", len(epics), project, overwrite)
        try:
            if overwrite:
                summary.deleted = await self._overwrite(project)
            for epic in epics:
                if epic.type != NodeType.EPIC:
                    _LOG.warning("Skipping non-epic root %s (%s)", epic.id, epic.type)
                    continue
                await self._sync_epic(project, epic, summary)
        except OverwriteAbortedError:
            raise
        except SyncCancelledError as exc:
            self._progress.emit(SyncFailed(error=str(exc)))
            raise
        except Exception as exc:
            self._progress.emit(SyncFailed(error=str(exc) or "Failed to sync work items"))
            raise SyncError(f"sync of project {project} failed: {exc}") from exc

        _LOG.info(
            "Sync of project %s finished: %d created, %d failed", project, summary.created, summary.failed
        )
        self._progress.emit(SyncComplete(summary=summary.model_copy(deep=True)))
        return summary

    async def _overwrite(self, project: str) -> int:
        self._progress.emit(OverwriteStarted())
        self._check_cancelled()
        try:
            ids = await self._provider.query_work_item_ids(project)
        except ProviderError as exc:
            self._progress.emit(OverwriteError(error=str(exc) or "Failed to query existing work items"))
            raise OverwriteAbortedError(f"overwrite of project {project} failed: {exc}") from exc

        deleter = BatchDeleter(
            self._provider,
            self._progress,
            chunk_size=self._chunk_size,
            cancel_event=self._cancel_event,
        )
        try:
            return await deleter.delete_all(project, ids)
        except SyncCancelledError:
            raise
        except Exception as exc:
            raise OverwriteAbortedError(f"overwrite of project {project} failed: {exc}") from exc

    async def _sync_epic(self, project: str, epic: EpicNode, summary: SyncSummary) -> None:
        epic_item = await self._create(project, epic, None, summary)
        if epic_item is None:
            return
        for feature in epic.children:
            if feature.type != NodeType.FEATURE:
                _LOG.warning("Skipping %s %s under epic %s", feature.type, feature.id, epic.id)
                continue
            await self._sync_feature(project, feature, epic_item, summary)

    async def _sync_feature(
        self, project: str, feature: FeatureNode, epic_item: WorkItem, summary: SyncSummary
    ) -> None:
        feature_item = await self._create(project, feature, epic_item.id, summary)
        if feature_item is None:
            return
        for user_story in feature.children:
            if user_story.type != NodeType.USER_STORY:
                _LOG.warning("Skipping %s %s under feature %s", user_story.type, user_story.id, feature.id)
                continue
            await self._create(project, user_story, feature_item.id, summary)

    async def _create(
        self,
        project: str,
        node: SyncableNode,
        parent_id: int | None,
        summary: SyncSummary,
    ) -> WorkItem | None:
        self._check_cancelled()
        node_type = NodeType(node.type)
        # Mapping and creation errors of any kind fail this node only.
        try:
            fields = self._field_mapper(node)
            work_item = await self._provider.create_work_item(
                project,
                WorkItemType.for_node_type(node_type),
                fields,
                parent_id=parent_id,
            )
        except Exception as exc:
            _LOG.warning("Failed to create %s %s: %s", node_type, node.id, exc)
            summary.record_failed(node_type)
            error = str(exc) or f"Failed to create {node_type.value.lower()}"
            self._progress.emit(FAILED_EVENTS[node_type](ardoq_id=node.id, name=node.name, error=error))
            return None

        summary.record_created(node_type)
        _LOG.debug("Created %s %s as work item %d", node_type, node.id, work_item.id)
        self._progress.emit(
            CREATED_EVENTS[node_type](
                ardoq_id=node.id,
                name=node.name,
                azure_dev_ops_id=work_item.id,
                azure_dev_ops_url=work_item.url,
            )
        )
        return work_item.model_copy(update={"local_id": node.id})

    def _check_cancelled(self) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise SyncCancelledError("Sync cancelled by caller")

    def _fail(self, message: str) -> NoReturn:
        self._progress.emit(SyncFailed(error=message))
        raise SyncError(message)
