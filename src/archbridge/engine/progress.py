"""Progress sink protocol for the sync pipeline.

The orchestrator and deleter push structured events; transport adapters
(the SSE stream, the CLI's Rich display) implement ``ProgressSink`` to
deliver them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from archbridge.contracts.events import ProgressEvent


class ProgressSink(ABC):
    """Push-based receiver of sync run events, in emission order."""

    @abstractmethod
    def emit(self, event: ProgressEvent) -> None:
        """Deliver one *event*."""
        ...  # pragma: no cover


class NullProgressSink(ProgressSink):
    """No-op implementation used when no progress reporting is requested."""

    def emit(self, event: ProgressEvent) -> None:
        pass


class CollectingProgressSink(ProgressSink):
    """Keeps every event in memory."""

    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    def emit(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[str]:
        return [event.event_type for event in self.events]

    def of_type(self, event_type: str) -> list[ProgressEvent]:
        return [event for event in self.events if event.event_type == event_type]
