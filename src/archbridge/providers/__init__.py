"""Provider implementations and factory."""

from archbridge.providers.azure_devops import AzureDevOpsProvider
from archbridge.providers.dry_run import DryRunCreate, DryRunDelete, DryRunProvider
from archbridge.providers.factory import create_provider, register

__all__ = ["AzureDevOpsProvider", "DryRunCreate", "DryRunDelete", "DryRunProvider", "create_provider", "register"]
