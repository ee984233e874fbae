"""XDG-compliant path helpers for bitbucket-lifecycle configuration."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "bitbucket-lifecycle"


def get_config_dir() -> Path:
    """Get the config directory (config.toml)."""
    override = os.environ.get("BITBUCKET_LIFECYCLE_CONFIG_DIR")
    if override:
        return Path(override).resolve()
    return Path(user_config_dir(APP_NAME))


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.toml"


__all__ = ["APP_NAME", "get_config_dir", "get_config_path"]
