"""Exception hierarchy for ArchBridge."""

from __future__ import annotations


class ArchBridgeError(Exception):
    """Base exception for all ArchBridge errors."""


class ConfigError(ArchBridgeError):
    """Configuration loading or validation failure."""


class HierarchyValidationError(ArchBridgeError):
    """Component hierarchy is malformed (missing or wrong-kind parent, duplicate id)."""

    def __init__(
        self,
        message: str,
        *,
        node_id: str | None = None,
        expected_parent: str | None = None,
        actual_parent: str | None = None,
    ) -> None:
        super().__init__(message)
        self.node_id = node_id
        self.expected_parent = expected_parent
        self.actual_parent = actual_parent


class ProviderError(ArchBridgeError):
    """Base remote operation failure."""


class AuthenticationError(ProviderError):
    """Authentication/authorization failure."""


class RemoteCallError(ProviderError):
    """A single remote call was rejected or could not be completed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SyncError(ArchBridgeError):
    """Engine-level synchronization failure."""


class OverwriteAbortedError(SyncError):
    """Overwrite pre-phase failed; the run ended before any creation."""


class SyncCancelledError(SyncError):
    """The run was cancelled between remote calls."""
