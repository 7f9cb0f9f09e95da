"""Config path resolution for gocovtest.

The config file is optional; when neither the environment override nor a
file in the working directory exists, callers get ``None`` and fall back to
built-in defaults.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional

from .constants import CONFIG_ENV_VAR, CONFIG_FILENAME


def _cacheable(fn: Callable) -> Callable:
    """Decorator to cache path helpers when GOCOVTEST_CONFIG is not set."""

    cached = lru_cache(maxsize=None)(fn)

    def wrapper(*args, **kwargs):
        if os.environ.get(CONFIG_ENV_VAR):
            # Explicit override: compute fresh so tests and --config take effect
            return fn(*args, **kwargs)
        return cached(*args, **kwargs)

    wrapper.cache_clear = getattr(cached, "cache_clear", lambda: None)  # type: ignore[attr-defined]
    return wrapper


@_cacheable
def get_config_path() -> Optional[Path]:
    """Get the gocovtest.yml config file path.

    Resolution order:
      1) Environment variable GOCOVTEST_CONFIG (if set)
      2) Current working directory gocovtest.yml (if exists)
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser().resolve()

    cwd_path = Path.cwd() / CONFIG_FILENAME
    if cwd_path.exists():
        return cwd_path.resolve()
    return None


def reset_paths_cache() -> None:
    """Clear cached path resolutions (useful for tests/fixtures)."""
    if hasattr(get_config_path, "cache_clear"):
        get_config_path.cache_clear()  # type: ignore[attr-defined]
