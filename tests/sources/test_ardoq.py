from __future__ import annotations

from typing import Any

import httpx
import pytest

from archbridge.contracts.exceptions import AuthenticationError, HierarchyValidationError, ProviderError
from archbridge.contracts.hierarchy import DomainNode, UserStoryNode
from archbridge.sources import ArdoqComponentSource


def _source(handler, **kwargs: Any) -> ArdoqComponentSource:
    return ArdoqComponentSource(token="ardoq-token", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_fetch_components_sends_workspace_query_and_headers(component_records: list[dict[str, Any]]) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"values": component_records})

    async with _source(handler, org_label="acme") as source:
        nodes = await source.fetch_components("ws-1")

    request = seen[0]
    assert str(request.url) == "https://app.ardoq.com/api/v2/components?rootWorkspace=ws-1"
    assert request.headers["Authorization"] == "Bearer ardoq-token"
    assert request.headers["X-org"] == "acme"
    assert isinstance(nodes[0], DomainNode)
    assert isinstance(nodes[-1], UserStoryNode)
    assert len(nodes) == len(component_records)


@pytest.mark.asyncio
async def test_values_may_be_nested_under_data() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"values": [{"_id": "D-1", "type": "Domain", "name": "Payments"}]}})

    async with _source(handler, api_host="https://acme.ardoq.com/") as source:
        nodes = await source.fetch_components("ws-1")

    assert [node.id for node in nodes] == ["D-1"]


@pytest.mark.asyncio
async def test_missing_values_yield_no_components_and_no_org_header() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "X-org" not in request.headers
        return httpx.Response(200, json={})

    async with _source(handler) as source:
        assert await source.fetch_components("ws-1") == []


@pytest.mark.asyncio
async def test_components_of_other_kinds_are_ignored() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "values": [
                    {"_id": "D-1", "type": "Domain"},
                    {"_id": "A-1", "type": "Application", "parent": "D-1"},
                ]
            },
        )

    async with _source(handler) as source:
        nodes = await source.fetch_components("ws-1")

    assert [node.id for node in nodes] == ["D-1"]


@pytest.mark.asyncio
async def test_malformed_component_is_a_validation_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"values": [{"_id": "E-1", "type": "Epic"}]})

    async with _source(handler) as source:
        with pytest.raises(HierarchyValidationError):
            await source.fetch_components("ws-1")


@pytest.mark.asyncio
async def test_html_login_page_is_an_authentication_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html><body>Login</body></html>", headers={"content-type": "text/html"})

    async with _source(handler) as source:
        with pytest.raises(AuthenticationError):
            await source.fetch_components("ws-1")


def test_token_is_required() -> None:
    with pytest.raises(ProviderError):
        ArdoqComponentSource(token="")
