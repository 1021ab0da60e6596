"""Configuration contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from archbridge.contracts.work_item import WorkItemType


class AzureDevOpsConfig(BaseModel):
    organization: str = ""
    pat_token: str | None = None
    api_version: str = "7.1"

    model_config = {"frozen": True}


class ArdoqConfig(BaseModel):
    api_host: str = "https://app.ardoq.com"
    api_token: str | None = None
    org_label: str | None = None

    model_config = {"frozen": True}

    @field_validator("api_host")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class FieldMapping(BaseModel):
    ardoq_field: str
    azure_devops_field: str
    work_item_type: WorkItemType

    model_config = {"frozen": True}


class ArchBridgeConfig(BaseModel):
    provider: str = "azure-devops"
    azure_devops: AzureDevOpsConfig = Field(default_factory=AzureDevOpsConfig)
    ardoq: ArdoqConfig = Field(default_factory=ArdoqConfig)
    delete_chunk_size: int = Field(default=20, ge=1, le=200)
    field_mappings: list[FieldMapping] | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_provider(self) -> ArchBridgeConfig:
        if self.provider not in {"azure-devops", "dry-run"}:
            raise ValueError("provider must be one of: azure-devops, dry-run")
        return self
