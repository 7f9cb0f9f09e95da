"""Shared config loading helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .constants import DEFAULT_LOG_LEVEL
from .errors import ConfigError
from .models import RunnerSettings
from .paths import get_config_path

logger = logging.getLogger(__name__)


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """
    Load gocovtest.yml if present; return empty dict when missing.

    Parse/IO errors are logged and surfaced to callers to prevent silent fallbacks.
    """
    config_path = Path(path) if path is not None else get_config_path()
    if config_path is None or not config_path.exists():
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except Exception as exc:
        logger.error("Failed to load config from %s: %s", config_path, exc)
        raise ConfigError(f"Failed to load config at {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config at {config_path} must be a mapping, got {type(data).__name__}")
    return data


def get_runner_settings(config: Optional[Dict[str, Any]] = None) -> RunnerSettings:
    """Return the runner section as validated settings (defaults when missing)."""
    cfg = config if config is not None else load_config()
    section = cfg.get("runner") or {}
    try:
        return RunnerSettings(**section)
    except (TypeError, ValidationError) as exc:
        raise ConfigError(f"Invalid runner config: {exc}") from exc


def get_log_level(config: Optional[Dict[str, Any]] = None) -> str:
    """Return configured log level name, upper-cased."""
    cfg = config if config is not None else load_config()
    level = cfg.get("log_level") or DEFAULT_LOG_LEVEL
    return str(level).upper()
