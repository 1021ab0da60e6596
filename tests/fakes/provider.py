"""In-memory provider fake for engine and SDK tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import TracebackType

from archbridge.contracts.exceptions import ProviderError, RemoteCallError
from archbridge.contracts.provider import Provider
from archbridge.contracts.work_item import PatchOperation, WorkItem, WorkItemType


@dataclass
class CreateCall:
    project: str
    work_item_type: WorkItemType
    fields: list[PatchOperation]
    parent_id: int | None

    @property
    def title(self) -> str | None:
        for operation in self.fields:
            if operation.path == "/fields/System.Title":
                return str(operation.value)
        return None


class FakeProvider(Provider):
    """In-memory provider with deterministic ids and spy tracking."""

    def __init__(
        self,
        *,
        existing_ids: Sequence[int] = (),
        first_id: int = 100,
        fail_titles: Sequence[str] = (),
        fail_delete_calls: Sequence[int] = (),
        query_error: ProviderError | None = None,
        create_error: Exception | None = None,
        on_create: Callable[[CreateCall], None] | None = None,
    ) -> None:
        self.existing_ids = list(existing_ids)
        self._next_id = first_id
        self._fail_titles = set(fail_titles)
        self._fail_delete_calls = set(fail_delete_calls)
        self._query_error = query_error
        self._create_error = create_error
        self._on_create = on_create

        self.create_calls: list[CreateCall] = []
        self.query_calls: list[str] = []
        self.delete_calls: list[tuple[str, list[int], bool]] = []
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> FakeProvider:
        self.entered += 1
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.exited += 1

    async def create_work_item(
        self,
        project: str,
        work_item_type: WorkItemType,
        fields: Sequence[PatchOperation],
        *,
        parent_id: int | None = None,
    ) -> WorkItem:
        call = CreateCall(project=project, work_item_type=work_item_type, fields=list(fields), parent_id=parent_id)
        self.create_calls.append(call)
        if self._on_create is not None:
            self._on_create(call)
        await asyncio.sleep(0)
        if self._create_error is not None:
            raise self._create_error
        if call.title in self._fail_titles:
            raise RemoteCallError(f"TF401320: rule error for {call.title}", status_code=400)

        work_item_id = self._next_id
        self._next_id += 1
        return WorkItem(
            id=work_item_id,
            url=f"https://dev.azure.com/acme/{project}/_workitems/edit/{work_item_id}",
            work_item_type=work_item_type,
        )

    async def query_work_item_ids(self, project: str) -> list[int]:
        self.query_calls.append(project)
        if self._query_error is not None:
            raise self._query_error
        return list(self.existing_ids)

    async def delete_work_items(self, project: str, ids: Sequence[int], *, destroy: bool = True) -> None:
        self.delete_calls.append((project, list(ids), destroy))
        await asyncio.sleep(0)
        if len(self.delete_calls) in self._fail_delete_calls:
            raise RemoteCallError("VS402371: delete batch rejected", status_code=500)
        removed = set(ids)
        self.existing_ids = [item for item in self.existing_ids if item not in removed]

    @property
    def created_titles(self) -> list[str | None]:
        return [call.title for call in self.create_calls]
