"""Chunked deletion of remote work items."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Iterator, Sequence
from typing import TypeVar

from archbridge.contracts.events import (
    OverwriteDeleted,
    OverwriteDeleting,
    OverwriteError,
    OverwriteNoItems,
    OverwriteProgress,
)
from archbridge.contracts.exceptions import SyncCancelledError
from archbridge.contracts.provider import Provider
from archbridge.engine.progress import NullProgressSink, ProgressSink

_LOG = logging.getLogger(__name__)

T = TypeVar("T")

# Azure DevOps rejects larger workitemsdelete batches.
DELETE_CHUNK_SIZE = 20


def chunked(values: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield ordered, non-overlapping chunks of at most *size* values."""
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    for start in range(0, len(values), size):
        yield list(values[start : start + size])


class BatchDeleter:
    """Delete work item ids chunk by chunk, stopping at the first failing chunk."""

    def __init__(
        self,
        provider: Provider,
        progress: ProgressSink | None = None,
        *,
        chunk_size: int = DELETE_CHUNK_SIZE,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk size must be >= 1, got {chunk_size}")
        self._provider = provider
        self._progress: ProgressSink = progress or NullProgressSink()
        self._chunk_size = chunk_size
        self._cancel_event = cancel_event

    async def delete_all(self, project: str, ids: Sequence[int]) -> int:
        """Permanently delete *ids* from *project*; return the number deleted.

        Raises:
            ProviderError: A chunk failed; an ``overwrite:error`` event was emitted first.
            SyncCancelledError: Cancellation was requested between chunks (no event emitted).
        """
        total = len(ids)
        if total == 0:
            self._progress.emit(OverwriteNoItems())
            return 0

        total_chunks = math.ceil(total / self._chunk_size)
        self._progress.emit(
            OverwriteDeleting(
                message=f"Found {total} existing work items. Deleting in chunks of {self._chunk_size}...",
                count=total,
            )
        )

        deleted = 0
        for index, chunk in enumerate(chunked(ids, self._chunk_size), start=1):
            if self._cancel_event is not None and self._cancel_event.is_set():
                raise SyncCancelledError(f"cancelled before chunk {index} of {total_chunks}")
            try:
                await self._provider.delete_work_items(project, chunk, destroy=True)
            except Exception as exc:
                _LOG.error("Deleting chunk %d/%d of project %s failed: %s", index, total_chunks, project, exc)
                self._progress.emit(OverwriteError(error=str(exc) or "Failed to delete work items"))
                raise
            deleted += len(chunk)
            _LOG.debug("Deleted chunk %d/%d (%d items)", index, total_chunks, len(chunk))
            self._progress.emit(
                OverwriteProgress(
                    message=f"Deleted chunk {index} of {total_chunks} ({len(chunk)} items)",
                    deleted=deleted,
                    total=total,
                    current_chunk=index,
                    total_chunks=total_chunks,
                )
            )

        self._progress.emit(OverwriteDeleted(message=f"Successfully deleted {total} existing work items", count=total))
        return deleted
