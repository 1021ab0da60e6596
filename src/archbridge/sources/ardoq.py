"""Ardoq component source."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from archbridge._http import USER_AGENT, parse_json_response
from archbridge.contracts.exceptions import ProviderError, RemoteCallError
from archbridge.contracts.hierarchy import Node, NodeType, parse_nodes
from archbridge.contracts.source import ComponentSource

_LOG = logging.getLogger(__name__)

_SERVICE = "Ardoq"
DEFAULT_API_HOST = "https://app.ardoq.com"
_KNOWN_TYPES = frozenset(kind.value for kind in NodeType)


class ArdoqComponentSource(ComponentSource):
    """Reads the components of one Ardoq workspace through the v2 REST API."""

    def __init__(
        self,
        *,
        token: str,
        api_host: str = DEFAULT_API_HOST,
        org_label: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise ProviderError("Ardoq API token is required")
        self._token = token
        self._api_host = api_host.rstrip("/")
        self._org_label = org_label
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ArdoqComponentSource:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self._org_label:
            headers["X-org"] = self._org_label
        self._client = httpx.AsyncClient(
            base_url=self._api_host,
            headers=headers,
            timeout=httpx.Timeout(30.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_components(self, workspace_id: str) -> list[Node]:
        if self._client is None:
            raise ProviderError("Source is not initialized. Use 'async with'.")
        try:
            response = await self._client.get("/api/v2/components", params={"rootWorkspace": workspace_id})
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"{_SERVICE} component request failed: {exc}") from exc

        payload = parse_json_response(response, service=_SERVICE)
        values = _component_values(payload)
        known = [value for value in values if isinstance(value, dict) and value.get("type") in _KNOWN_TYPES]
        _LOG.debug(
            "Fetched %d component(s) from workspace %s, %d of a hierarchy kind",
            len(values),
            workspace_id,
            len(known),
        )
        return parse_nodes(known)


def _component_values(payload: dict[str, Any]) -> list[Any]:
    values = payload.get("values")
    if values is None:
        data = payload.get("data")
        if isinstance(data, dict):
            values = data.get("values")
    if values is None:
        return []
    if not isinstance(values, list):
        raise RemoteCallError(f"{_SERVICE} response 'values' is not a list")
    return values
