from __future__ import annotations

from typing import Any

import pytest

from archbridge import ArchBridge, ArchBridgeConfig, ConfigError, HierarchyValidationError
from archbridge.contracts.config import AzureDevOpsConfig
from archbridge.engine import CollectingProgressSink
from tests.fakes.provider import FakeProvider
from tests.fakes.source import FakeComponentSource


def _config(**kwargs: Any) -> ArchBridgeConfig:
    return ArchBridgeConfig(azure_devops=AzureDevOpsConfig(organization="acme", pat_token="pat"), **kwargs)


@pytest.mark.asyncio
async def test_fetch_hierarchy_builds_forest(component_records: list[dict[str, Any]]) -> None:
    source = FakeComponentSource(component_records)
    bridge = ArchBridge(config=_config(), source=source)

    forest = await bridge.fetch_hierarchy("ws-1")

    assert [domain.id for domain in forest] == ["D-1"]
    assert source.fetch_calls == ["ws-1"]


@pytest.mark.asyncio
async def test_initiative_epics_returns_children(component_records: list[dict[str, Any]]) -> None:
    bridge = ArchBridge(config=_config(), source=FakeComponentSource(component_records))

    epics = await bridge.initiative_epics("ws-1", "I-1")

    assert [epic.id for epic in epics] == ["E-1"]
    assert [feature.id for feature in epics[0].children] == ["F-1"]


@pytest.mark.asyncio
async def test_initiative_epics_missing_initiative_raises(component_records: list[dict[str, Any]]) -> None:
    bridge = ArchBridge(config=_config(), source=FakeComponentSource(component_records))

    with pytest.raises(HierarchyValidationError, match="I-404"):
        await bridge.initiative_epics("ws-1", "I-404")


@pytest.mark.asyncio
async def test_sync_initiative_uses_injected_provider(component_records: list[dict[str, Any]]) -> None:
    provider = FakeProvider(existing_ids=list(range(1, 31)))
    progress = CollectingProgressSink()
    bridge = ArchBridge(
        config=_config(delete_chunk_size=10),
        source=FakeComponentSource(component_records),
        provider=provider,
        progress=progress,
    )

    summary = await bridge.sync_initiative("ws-1", "I-1", "Payments", overwrite=True)

    assert summary.deleted == 30
    assert len(provider.delete_calls) == 3
    assert summary.created == 4
    assert provider.created_titles == ["Payout API", "Payout endpoint", "Create payout", "Cancel payout"]
    assert provider.entered == provider.exited == 1
    assert progress.event_types[-1] == "sync:complete"


@pytest.mark.asyncio
async def test_dry_run_never_touches_configured_provider(component_records: list[dict[str, Any]]) -> None:
    provider = FakeProvider()
    bridge = ArchBridge(config=_config(), source=FakeComponentSource(component_records), provider=provider)

    summary = await bridge.sync_initiative("ws-1", "I-1", "Payments", dry_run=True)

    assert summary.created == 4
    assert provider.create_calls == []


@pytest.mark.asyncio
async def test_sync_requires_azure_credentials(component_records: list[dict[str, Any]]) -> None:
    bridge = await ArchBridge.from_config(ArchBridgeConfig())
    epics = await ArchBridge(config=_config(), source=FakeComponentSource(component_records)).initiative_epics(
        "ws-1", "I-1"
    )

    with pytest.raises(ConfigError, match="organization"):
        await bridge.sync("Payments", epics)


@pytest.mark.asyncio
async def test_fetch_requires_ardoq_token() -> None:
    bridge = await ArchBridge.from_config(_config())

    with pytest.raises(ConfigError, match="ardoq.api_token"):
        await bridge.fetch_hierarchy("ws-1")


@pytest.mark.asyncio
async def test_dry_run_provider_from_config(component_records: list[dict[str, Any]]) -> None:
    bridge = ArchBridge(config=ArchBridgeConfig(provider="dry-run"), source=FakeComponentSource(component_records))

    summary = await bridge.sync_initiative("ws-1", "I-1", "Payments")

    assert summary.user_stories.created == 2
