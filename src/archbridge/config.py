"""Configuration loading."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from archbridge.contracts.config import ArchBridgeConfig
from archbridge.contracts.exceptions import ConfigError

_LOG = logging.getLogger(__name__)

# (section, key) -> environment variable consulted when the file leaves the key unset.
ENV_OVERRIDES: dict[tuple[str, str], str] = {
    ("azure_devops", "organization"): "AZURE_DEVOPS_ORGANIZATION",
    ("azure_devops", "pat_token"): "AZURE_DEVOPS_PAT_TOKEN",
    ("ardoq", "api_token"): "ARDOQ_API_TOKEN",
    ("ardoq", "api_host"): "ARDOQ_API_HOST",
    ("ardoq", "org_label"): "ARDOQ_ORG_LABEL",
}


def apply_env_overrides(raw: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Fill unset secrets and endpoints of *raw* from *environ*; values in the file win."""
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in raw.items()}
    for (section, key), variable in ENV_OVERRIDES.items():
        value = environ.get(variable)
        if not value:
            continue
        current = merged.get(section)
        if current is None:
            current = merged[section] = {}
        if not isinstance(current, dict):
            continue
        if current.get(key) in (None, ""):
            _LOG.debug("Using %s for %s.%s", variable, section, key)
            current[key] = value
    return merged


def load_config(path: str | Path, *, environ: Mapping[str, str] | None = None) -> ArchBridgeConfig:
    """Load and validate config from JSON, filling secrets from the environment."""
    config_path = Path(path).expanduser().resolve()
    env = os.environ if environ is None else environ

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc

    if not isinstance(raw_payload, dict):
        raise ConfigError(f"config file must contain a JSON object: {config_path}")

    try:
        return ArchBridgeConfig.model_validate(apply_env_overrides(raw_payload, env))
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
