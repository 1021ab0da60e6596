"""In-memory dry-run provider."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from types import TracebackType

from archbridge.contracts.exceptions import RemoteCallError
from archbridge.contracts.provider import Provider
from archbridge.contracts.work_item import PatchOperation, WorkItem, WorkItemType


@dataclass
class DryRunCreate:
    """A create call recorded by DryRunProvider."""

    project: str
    work_item_type: WorkItemType
    fields: list[PatchOperation]
    parent_id: int | None
    work_item_id: int | None = None


@dataclass
class DryRunDelete:
    project: str
    ids: list[int]
    destroy: bool


@dataclass
class _Store:
    next_id: int = 1
    items: dict[str, list[int]] = field(default_factory=dict)


class DryRunProvider(Provider):
    """Provider that assigns sequential ids without network calls.

    ``existing`` seeds each project with work item ids returned by
    ``query_work_item_ids``. ``fail_titles`` makes creates of items with those
    ``System.Title`` values fail, ``fail_delete_chunks`` makes the n-th delete
    call (1-based) fail, and ``fail_query`` makes the id query fail.
    """

    def __init__(
        self,
        *,
        existing: dict[str, Sequence[int]] | None = None,
        fail_titles: Iterable[str] = (),
        fail_delete_chunks: Iterable[int] = (),
        fail_query: bool = False,
        first_id: int = 1,
        url_template: str = "dry-run://workitems/{id}",
    ) -> None:
        self._store = _Store(next_id=first_id, items={k: list(v) for k, v in (existing or {}).items()})
        self._fail_titles = set(fail_titles)
        self._fail_delete_chunks = set(fail_delete_chunks)
        self._fail_query = fail_query
        self._url_template = url_template
        self.creates: list[DryRunCreate] = []
        self.deletes: list[DryRunDelete] = []
        self.queries: list[str] = []

    async def __aenter__(self) -> DryRunProvider:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    def work_item_ids(self, project: str) -> list[int]:
        return list(self._store.items.get(project, []))

    async def create_work_item(
        self,
        project: str,
        work_item_type: WorkItemType,
        fields: Sequence[PatchOperation],
        *,
        parent_id: int | None = None,
    ) -> WorkItem:
        record = DryRunCreate(project=project, work_item_type=work_item_type, fields=list(fields), parent_id=parent_id)
        self.creates.append(record)
        title = _title_of(fields)
        if title in self._fail_titles:
            raise RemoteCallError(f"Dry-run create rejected for {work_item_type} {title!r}", status_code=400)

        work_item_id = self._store.next_id
        self._store.next_id += 1
        self._store.items.setdefault(project, []).append(work_item_id)
        record.work_item_id = work_item_id
        return WorkItem(
            id=work_item_id,
            url=self._url_template.format(id=work_item_id),
            work_item_type=work_item_type,
        )

    async def query_work_item_ids(self, project: str) -> list[int]:
        self.queries.append(project)
        if self._fail_query:
            raise RemoteCallError("Dry-run work item query failed", status_code=500)
        return self.work_item_ids(project)

    async def delete_work_items(self, project: str, ids: Sequence[int], *, destroy: bool = True) -> None:
        self.deletes.append(DryRunDelete(project=project, ids=list(ids), destroy=destroy))
        if len(self.deletes) in self._fail_delete_chunks:
            raise RemoteCallError(f"Dry-run delete of {len(ids)} work item(s) failed", status_code=500)
        removed = set(ids)
        self._store.items[project] = [item for item in self._store.items.get(project, []) if item not in removed]


def _title_of(fields: Sequence[PatchOperation]) -> str | None:
    for operation in fields:
        if operation.path == "/fields/System.Title":
            return str(operation.value)
    return None
