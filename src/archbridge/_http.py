"""Shared httpx response handling for the remote adapters."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from archbridge.contracts.exceptions import AuthenticationError, RemoteCallError

_LOG = logging.getLogger(__name__)

USER_AGENT = "ArchBridge-SyncFlow"
_PREVIEW_CHARS = 500


def is_html_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    if "text/html" in content_type:
        return True
    text = response.text.lstrip()[:64].lower()
    return text.startswith("<!") or text.startswith("<html")


def parse_json_response(response: httpx.Response, *, service: str) -> dict[str, Any]:
    """Return the JSON object of a successful response or raise the matching provider error.

    Raises:
        AuthenticationError: HTML login page instead of JSON, or HTTP 401/403.
        RemoteCallError: Any other HTTP error or a malformed body.
    """
    if is_html_response(response):
        preview = " ".join(response.text[:_PREVIEW_CHARS].split())
        _LOG.error("%s returned HTML instead of JSON (status %d): %s", service, response.status_code, preview)
        raise AuthenticationError(
            f"{service} returned HTML instead of JSON (status {response.status_code}); "
            "verify the access token is valid and not expired"
        )
    if response.status_code in {401, 403}:
        raise AuthenticationError(f"{service} rejected the credentials (HTTP {response.status_code})")
    if response.is_error:
        raise RemoteCallError(
            f"{service} HTTP {response.status_code}: {_error_message(response)}",
            status_code=response.status_code,
        )
    if not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError as exc:
        raise RemoteCallError(f"{service} returned invalid JSON", status_code=response.status_code) from exc
    if not isinstance(payload, dict):
        raise RemoteCallError(f"{service} returned a non-object JSON payload", status_code=response.status_code)
    return payload


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:_PREVIEW_CHARS] or response.reason_phrase
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return response.reason_phrase
