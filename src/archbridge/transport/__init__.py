"""Progress transports."""

from archbridge.transport.sse import SSE_HEADERS, ServerSentEventSink, format_frame, stream_sync

__all__ = ["SSE_HEADERS", "ServerSentEventSink", "format_frame", "stream_sync"]
