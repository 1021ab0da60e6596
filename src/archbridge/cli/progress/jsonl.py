"""JSON-lines progress output for machine consumers."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from archbridge.contracts.events import ProgressEvent
from archbridge.engine.progress import ProgressSink


class JsonLinesProgressSink(ProgressSink):
    """Writes one ``{"type": ..., "data": ...}`` object per line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def emit(self, event: ProgressEvent) -> None:
        self._stream.write(json.dumps({"type": event.event_type, "data": event.payload()}) + "\n")
        self._stream.flush()
