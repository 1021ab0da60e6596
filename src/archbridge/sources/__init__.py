"""Component sources."""

from archbridge.sources.ardoq import DEFAULT_API_HOST, ArdoqComponentSource

__all__ = ["DEFAULT_API_HOST", "ArdoqComponentSource"]
