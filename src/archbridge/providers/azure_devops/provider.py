"""Azure DevOps work item provider."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from archbridge._http import USER_AGENT, parse_json_response
from archbridge.contracts.exceptions import ProviderError, RemoteCallError
from archbridge.contracts.provider import Provider
from archbridge.contracts.work_item import PatchOperation, WorkItem, WorkItemType

_LOG = logging.getLogger(__name__)

_SERVICE = "Azure DevOps"
HIERARCHY_REVERSE_LINK = "System.LinkTypes.Hierarchy-Reverse"


class AzureDevOpsProvider(Provider):
    """Work item client for one Azure DevOps organization (REST API, PAT basic auth)."""

    def __init__(
        self,
        *,
        organization: str,
        token: str,
        api_version: str = "7.1",
        host: str = "https://dev.azure.com",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not organization:
            raise ProviderError("Azure DevOps organization is required")
        if not token:
            raise ProviderError("Azure DevOps PAT token is required")
        self._organization = organization
        self._token = token
        self._api_version = api_version
        self._host = host.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def organization(self) -> str:
        return self._organization

    async def __aenter__(self) -> AzureDevOpsProvider:
        await self._open_transport()
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

    def work_item_api_url(self, work_item_id: int) -> str:
        return f"{self._host}/{quote(self._organization)}/_apis/wit/workitems/{work_item_id}"

    async def create_work_item(
        self,
        project: str,
        work_item_type: WorkItemType,
        fields: Sequence[PatchOperation],
        *,
        parent_id: int | None = None,
    ) -> WorkItem:
        document: list[dict[str, Any]] = [operation.model_dump() for operation in fields]
        if parent_id is not None:
            document.append(
                {
                    "op": "add",
                    "path": "/relations/-",
                    "value": {"rel": HIERARCHY_REVERSE_LINK, "url": self.work_item_api_url(parent_id)},
                }
            )

        path = f"{self._project_path(project)}/_apis/wit/workitems/{quote('$' + work_item_type.value, safe='$')}"
        payload = await self._request("POST", path, document, content_type="application/json-patch+json")

        raw_id = payload.get("id")
        if not isinstance(raw_id, int):
            raise RemoteCallError(f"{_SERVICE} create response is missing the work item id")
        _LOG.debug("Created %s work item %d in %s", work_item_type, raw_id, project)
        return WorkItem(id=raw_id, url=self._work_item_url(payload), work_item_type=work_item_type)

    async def query_work_item_ids(self, project: str) -> list[int]:
        escaped = project.replace("'", "''")
        wiql = f"SELECT [System.Id] FROM WorkItems WHERE [System.TeamProject] = '{escaped}'"
        payload = await self._request("POST", f"{self._project_path(project)}/_apis/wit/wiql", {"query": wiql})
        work_items = payload.get("workItems") or []
        if not isinstance(work_items, list):
            raise RemoteCallError(f"{_SERVICE} WIQL response has no workItems list")
        try:
            return [int(item["id"]) for item in work_items if isinstance(item, dict) and "id" in item]
        except (TypeError, ValueError) as exc:
            raise RemoteCallError(f"{_SERVICE} WIQL response has a malformed work item id: {exc}") from exc

    async def delete_work_items(self, project: str, ids: Sequence[int], *, destroy: bool = True) -> None:
        body = {"ids": list(ids), "destroy": destroy}
        await self._request("POST", f"{self._project_path(project)}/_apis/wit/workitemsdelete", body)
        _LOG.debug("Deleted %d work item(s) from %s (destroy=%s)", len(ids), project, destroy)

    async def _open_transport(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=f"{self._host}/{quote(self._organization)}/",
            auth=httpx.BasicAuth("", self._token),
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=httpx.Timeout(30.0),
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        body: Any,
        *,
        content_type: str = "application/json",
    ) -> dict[str, Any]:
        if self._client is None:
            raise ProviderError("Provider is not initialized. Use 'async with'.")
        try:
            response = await self._client.request(
                method,
                path,
                params={"api-version": self._api_version},
                content=json.dumps(body),
                headers={"Content-Type": content_type},
            )
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"{_SERVICE} {method} {path} failed: {exc}") from exc
        return parse_json_response(response, service=_SERVICE)

    @staticmethod
    def _project_path(project: str) -> str:
        return quote(project, safe="")

    @staticmethod
    def _work_item_url(payload: dict[str, Any]) -> str:
        links = payload.get("_links")
        if isinstance(links, dict):
            html = links.get("html")
            if isinstance(html, dict) and isinstance(html.get("href"), str):
                return html["href"]
        url = payload.get("url")
        return url if isinstance(url, str) else ""
