"""Utility modules for btcodec."""

from __future__ import annotations

from btcodec.utils import exceptions, logging_config

__all__ = [
    "exceptions",
    "logging_config",
]
