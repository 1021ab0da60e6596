"""Rich-based sync progress display."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from archbridge.contracts.events import (
    ItemCreated,
    ItemFailed,
    OverwriteDeleted,
    OverwriteDeleting,
    OverwriteError,
    OverwriteNoItems,
    OverwriteProgress,
    OverwriteStarted,
    ProgressEvent,
    SyncComplete,
    SyncFailed,
)
from archbridge.engine.progress import ProgressSink


class RichProgressSink(ProgressSink):
    """Live terminal progress bars powered by Rich.

    One bar tracks the overwrite deletions, another the work items created.
    Use as a context manager so the live display is properly started/stopped::

        with RichProgressSink(total_items=42) as progress:
            summary = await orchestrator.sync(project, epics)
    """

    def __init__(self, *, total_items: int | None = None, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>14}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._total_items = total_items
        self._overwrite_task: RichTaskID | None = None
        self._create_task: RichTaskID | None = None

    def __enter__(self) -> RichProgressSink:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def emit(self, event: ProgressEvent) -> None:
        if isinstance(event, OverwriteStarted):
            self._overwrite_task = self._progress.add_task("[magenta]Overwrite[/]", total=None)
        elif isinstance(event, OverwriteNoItems):
            self._finish(self._overwrite_task, total=1)
        elif isinstance(event, OverwriteDeleting):
            self._update(self._overwrite_task, total=event.count, completed=0)
        elif isinstance(event, OverwriteProgress):
            self._update(self._overwrite_task, total=event.total, completed=event.deleted)
        elif isinstance(event, OverwriteDeleted):
            self._finish(self._overwrite_task, total=event.count)
        elif isinstance(event, OverwriteError):
            self._mark_failed(self._overwrite_task, "Overwrite")
            self._console.print(f"[red]✗[/red] overwrite failed: {escape(event.error)}")
        elif isinstance(event, ItemCreated):
            self._progress.advance(self._ensure_create_task())
        elif isinstance(event, ItemFailed):
            self._progress.advance(self._ensure_create_task())
            label = escape(f"{event.event_type} {event.name}")
            self._console.print(f"[red]✗[/red] {label}: {escape(event.error)}")
        elif isinstance(event, SyncComplete):
            task_id = self._ensure_create_task()
            self._finish(task_id, total=self._progress.tasks[task_id].completed)
        elif isinstance(event, SyncFailed):
            self._mark_failed(self._create_task, "Create")

    def _ensure_create_task(self) -> RichTaskID:
        if self._create_task is None:
            self._create_task = self._progress.add_task("[green]Create[/]", total=self._total_items)
        return self._create_task

    def _update(self, task_id: RichTaskID | None, **kwargs: float | None) -> None:
        if task_id is not None:
            self._progress.update(task_id, **kwargs)

    def _finish(self, task_id: RichTaskID | None, *, total: float) -> None:
        if task_id is not None:
            self._progress.update(task_id, total=total, completed=total)

    def _mark_failed(self, task_id: RichTaskID | None, label: str) -> None:
        if task_id is not None:
            self._progress.update(task_id, description=f"[red]✗[/red] {label:>10}")
