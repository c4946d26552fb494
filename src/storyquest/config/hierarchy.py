"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.storyquest/config.yaml)
  3. Project config   (./storyquest.yaml)
  4. Environment variables (OPENAI_API_KEY, STORYQUEST_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from storyquest.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".storyquest" / "config.yaml"
_PROJECT_CONFIG_NAME = "storyquest.yaml"

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


# Settings read from STORYQUEST_<KEY>, each with its parser
_ENV_SETTINGS: dict[str, Callable[[str], Any]] = {
    "text_model": str,
    "story_max_tokens": int,
    "quiz_max_tokens": int,
    "image_model": str,
    "image_size": str,
    "image_quality": str,
    "store_path": str,
    "cache_disabled": _parse_bool,
    "story_cache_probability": float,
    "max_retries": int,
    "log_level": str,
}

_ENV_MAP: dict[str, str] = {
    "OPENAI_API_KEY": "api_key",
    "OPENAI_BASE_URL": "base_url",
    **{f"STORYQUEST_{key.upper()}": key for key in _ENV_SETTINGS},
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()
    for path in (_GLOBAL_CONFIG_PATH, _find_project_config()):
        if path is not None:
            config.update(_load_yaml_config(path) or {})
    config.update(_load_env_vars())
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for storyquest.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read STORYQUEST_* and OPENAI_* environment variables.

    Values that fail to parse are skipped so a lower layer still applies.
    """
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        coerced = _coerce_env_value(config_key, value)
        if coerced is not None:
            result[config_key] = coerced
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Parse an environment string for ``key``; None if it does not parse."""
    parse = _ENV_SETTINGS.get(key, str)
    try:
        return parse(value)
    except ValueError:
        logger.warning("Ignoring env value for '%s', cannot parse: %r", key, value)
        return None
