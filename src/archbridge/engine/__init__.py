"""Engine-domain exports."""

from .deleter import DELETE_CHUNK_SIZE, BatchDeleter, chunked
from .orchestrator import FieldMapper, SyncOrchestrator
from .progress import CollectingProgressSink, NullProgressSink, ProgressSink

__all__ = [
    "DELETE_CHUNK_SIZE",
    "BatchDeleter",
    "CollectingProgressSink",
    "FieldMapper",
    "NullProgressSink",
    "ProgressSink",
    "SyncOrchestrator",
    "chunked",
]
