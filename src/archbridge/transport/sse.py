"""Server-Sent Events delivery of sync progress.

A web handler creates a :class:`ServerSentEventSink`, passes it to the
orchestrator as its progress sink and writes the frames yielded by
:meth:`ServerSentEventSink.stream` to the response. :func:`stream_sync` wires
both halves together for the common case.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Sequence

from archbridge.contracts.events import ProgressEvent, SyncFailed
from archbridge.contracts.exceptions import ArchBridgeError, SyncError
from archbridge.contracts.hierarchy import EpicNode
from archbridge.contracts.provider import Provider
from archbridge.engine.deleter import DELETE_CHUNK_SIZE
from archbridge.engine.orchestrator import FieldMapper, SyncOrchestrator
from archbridge.engine.progress import ProgressSink

_LOG = logging.getLogger(__name__)

SSE_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_frame(event: ProgressEvent) -> str:
    data = json.dumps({"type": event.event_type, "data": event.payload()})
    return f"event: {event.event_type}\ndata: {data}\n\n"


class ServerSentEventSink(ProgressSink):
    """Queues one SSE frame per event until the stream is closed."""

    def __init__(self, cancel_event: asyncio.Event | None = None) -> None:
        self.cancel_event = cancel_event if cancel_event is not None else asyncio.Event()
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._closed = False

    @property
    def disconnected(self) -> bool:
        return self.cancel_event.is_set()

    def emit(self, event: ProgressEvent) -> None:
        if self._closed or self.disconnected:
            _LOG.debug("Dropping %s event, stream is no longer open", event.event_type)
            return
        self._queue.put_nowait(format_frame(event))

    def close(self) -> None:
        """End the stream after the frames already queued."""
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    def disconnect(self) -> None:
        """Record that the client went away; the running sync stops at its next checkpoint."""
        self.cancel_event.set()
        self.close()

    async def stream(self) -> AsyncIterator[str]:
        while True:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame


async def stream_sync(
    provider: Provider,
    field_mapper: FieldMapper,
    project: str,
    epics: Sequence[EpicNode],
    *,
    overwrite: bool = False,
    chunk_size: int = DELETE_CHUNK_SIZE,
) -> AsyncIterator[str]:
    """Run one sync and yield its SSE frames.

    The stream always ends, whether the run completes, aborts or is cancelled.
    Closing the generator early (client disconnect) cancels the run
    cooperatively and waits for the in-flight remote call to finish.
    """
    sink = ServerSentEventSink()
    orchestrator = SyncOrchestrator(
        provider,
        field_mapper,
        sink,
        chunk_size=chunk_size,
        cancel_event=sink.cancel_event,
    )

    async def _run() -> None:
        try:
            async with provider:
                await orchestrator.sync(project, epics, overwrite=overwrite)
        except SyncError as exc:
            _LOG.info("Streamed sync for %s ended early: %s", project, exc)
        except ArchBridgeError as exc:
            _LOG.error("Streamed sync for %s could not start: %s", project, exc)
            sink.emit(SyncFailed(error=str(exc)))
        finally:
            sink.close()

    task = asyncio.create_task(_run())
    try:
        async for frame in sink.stream():
            yield frame
    finally:
        if not task.done():
            sink.disconnect()
        await task
