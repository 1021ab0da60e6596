"""Remote work-item provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import TracebackType

from archbridge.contracts.work_item import PatchOperation, WorkItem, WorkItemType


class Provider(ABC):
    @abstractmethod
    async def __aenter__(self) -> Provider: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def create_work_item(
        self,
        project: str,
        work_item_type: WorkItemType,
        fields: Sequence[PatchOperation],
        *,
        parent_id: int | None = None,
    ) -> WorkItem: ...  # pragma: no cover

    @abstractmethod
    async def query_work_item_ids(self, project: str) -> list[int]: ...  # pragma: no cover

    @abstractmethod
    async def delete_work_items(
        self,
        project: str,
        ids: Sequence[int],
        *,
        destroy: bool = True,
    ) -> None: ...  # pragma: no cover
