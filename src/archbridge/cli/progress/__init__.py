"""CLI progress sinks."""

from archbridge.cli.progress.jsonl import JsonLinesProgressSink
from archbridge.cli.progress.rich import RichProgressSink

__all__ = ["JsonLinesProgressSink", "RichProgressSink"]
