"""Azure DevOps provider exports."""

from archbridge.providers.azure_devops.provider import HIERARCHY_REVERSE_LINK, AzureDevOpsProvider

__all__ = ["HIERARCHY_REVERSE_LINK", "AzureDevOpsProvider"]
