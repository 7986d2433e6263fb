"""Pydantic models for btcodec.

Provides validated configuration models for the codec and its logging.
"""

from __future__ import annotations

import codecs
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from btcodec.core.decoder import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CodecConfig(BaseModel):
    """Decoder configuration."""

    strict: bool = Field(
        default=True,
        description="Reject duplicate or unsorted dictionary keys",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Maximum container nesting depth",
    )
    allow_trailing: bool = Field(
        default=False,
        description="Ignore bytes after the top-level value",
    )
    text_encoding: str = Field(
        default="utf-8",
        description="Encoding used to render byte strings as text",
    )

    @field_validator("text_encoding")
    @classmethod
    def validate_text_encoding(cls, v: str) -> str:
        """Validate that the text encoding is known to Python."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            msg = f"Unknown text encoding: {v}"
            raise ValueError(msg) from e
        return v


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(default=None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Emit console logs as JSON lines",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )


class Config(BaseModel):
    """Main configuration model."""

    codec: CodecConfig = Field(default_factory=CodecConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
