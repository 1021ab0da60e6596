"""Component source contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from archbridge.contracts.hierarchy import Node


class ComponentSource(ABC):
    """Supplies the flat component list of an architecture workspace."""

    @abstractmethod
    async def __aenter__(self) -> ComponentSource: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def fetch_components(self, workspace_id: str) -> list[Node]: ...  # pragma: no cover
