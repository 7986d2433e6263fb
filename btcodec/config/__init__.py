"""Configuration package for btcodec."""

from __future__ import annotations

from btcodec.config.config import (
    ConfigManager,
    get_codec_config,
    get_config,
    get_observability_config,
    init_config,
    reload_config,
    reset_config,
    set_config,
)

__all__ = [
    "ConfigManager",
    "get_codec_config",
    "get_config",
    "get_observability_config",
    "init_config",
    "reload_config",
    "reset_config",
    "set_config",
]
