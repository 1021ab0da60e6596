import pytest
from pydantic import ValidationError

from archbridge.contracts.config import ArchBridgeConfig, ArdoqConfig, FieldMapping
from archbridge.contracts.work_item import WorkItemType


def test_defaults() -> None:
    config = ArchBridgeConfig()

    assert config.provider == "azure-devops"
    assert config.delete_chunk_size == 20
    assert config.azure_devops.api_version == "7.1"
    assert config.ardoq.api_host == "https://app.ardoq.com"
    assert config.field_mappings is None


def test_ardoq_host_trailing_slash_is_stripped() -> None:
    assert ArdoqConfig(api_host="https://acme.ardoq.com/").api_host == "https://acme.ardoq.com"


@pytest.mark.parametrize("size", [0, 201])
def test_delete_chunk_size_bounds(size: int) -> None:
    with pytest.raises(ValidationError):
        ArchBridgeConfig(delete_chunk_size=size)


def test_unknown_provider_is_rejected() -> None:
    with pytest.raises(ValidationError, match="provider must be one of"):
        ArchBridgeConfig(provider="jira")


def test_config_is_frozen() -> None:
    config = ArchBridgeConfig()

    with pytest.raises(ValidationError):
        config.provider = "dry-run"  # type: ignore[misc]


def test_field_mapping_parses_work_item_type() -> None:
    mapping = FieldMapping.model_validate(
        {"ardoq_field": "riskLevel", "azure_devops_field": "Custom.Risk", "work_item_type": "User Story"}
    )

    assert mapping.work_item_type is WorkItemType.USER_STORY
