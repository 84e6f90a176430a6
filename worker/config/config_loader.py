"""Load runtime configuration for the stats worker."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .settings import RuntimeConfig

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).with_name("rules.yaml")

# Matches env("VAR") and env("VAR", "default")
ENV_PATTERN = re.compile(r'^env\("([^"]+)"(?:\s*,\s*"([^"]*)")?\)$')


def _resolve_env_placeholders(value: Any) -> Any:
    """Recursively resolve env("VAR") placeholders in YAML values."""
    if isinstance(value, str):
        match = ENV_PATTERN.match(value.strip())
        if not match:
            return value
        var_name, default = match.group(1), match.group(2)
        env_value = os.getenv(var_name)
        if env_value is not None:
            return env_value
        if default is not None:
            return default
        logger.warning(f"Environment variable {var_name} not set and has no default")
        raise ValueError(f"Environment variable {var_name} not set (required by config)")
    if isinstance(value, dict):
        return {k: _resolve_env_placeholders(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env_placeholders(item) for item in value]
    return value


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge override dict into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _compute_config_version(yaml_content: str, override_content: Dict[str, Any]) -> str:
    """Short SHA256 of the YAML text plus overrides, for tracing which config produced a snapshot."""
    combined = {
        "yaml": yaml_content,
        "override": json.dumps(override_content, sort_keys=True, default=str),
    }
    combined_str = json.dumps(combined, sort_keys=True)
    return hashlib.sha256(combined_str.encode("utf-8")).hexdigest()[:16]


def load_runtime_config(
    path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> RuntimeConfig:
    """Load runtime configuration from YAML with optional overrides.

    Args:
        path: Optional path to a rules.yaml file. Defaults to CONFIG_PATH.
        overrides: Optional nested dict deep-merged over the file contents.

    Returns:
        RuntimeConfig with env placeholders resolved and overrides applied.
    """
    target = path or CONFIG_PATH

    with target.open("r", encoding="utf-8") as handle:
        yaml_content = handle.read()
    data = yaml.safe_load(yaml_content) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {target} must contain a mapping")

    data = _resolve_env_placeholders(data)

    overrides = overrides or {}
    if overrides:
        data = _deep_merge(data, overrides)

    metadata = data.setdefault("metadata", {}) or {}
    metadata["config_version"] = _compute_config_version(yaml_content, overrides)
    data["metadata"] = metadata

    return RuntimeConfig.model_validate(data)
