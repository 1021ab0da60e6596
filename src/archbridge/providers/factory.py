"""Provider creation by name.

The CLI and SDK select providers through this factory so they never import a
concrete provider directly.
"""

from __future__ import annotations

from typing import Any

from archbridge.contracts.provider import Provider
from archbridge.providers.azure_devops import AzureDevOpsProvider
from archbridge.providers.dry_run import DryRunProvider

_REGISTRY: dict[str, type[Provider]] = {
    "azure-devops": AzureDevOpsProvider,
    "dry-run": DryRunProvider,
}


def register(name: str, provider_cls: type[Provider]) -> None:
    _REGISTRY[name] = provider_cls


def create_provider(name: str, **kwargs: Any) -> Provider:
    """Create a provider instance by name.

    The returned provider is an async context manager::

        async with create_provider("azure-devops", organization="acme", token=pat) as provider:
            ids = await provider.query_work_item_ids("Payments")

    Raises:
        ValueError: If the provider name is not registered.
    """
    provider_cls = _REGISTRY.get(name)
    if provider_cls is None:
        available = ", ".join(sorted(_REGISTRY)) or "(none registered)"
        raise ValueError(f"Unknown provider: {name!r}. Available: {available}")
    return provider_cls(**kwargs)
