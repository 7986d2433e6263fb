"""Exception hierarchy for btcodec.

Every error raised by the codec derives from :class:`BtcodecError`, which
carries a human readable message plus a ``details`` mapping for diagnostics.
Decode failures additionally record the byte offset where parsing stopped.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class BtcodecError(Exception):
    """Base exception for all btcodec errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize btcodec error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(BtcodecError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class BencodeError(ValidationError):
    """Bencode encoding/decoding errors."""


class TypeMismatchError(BencodeError, TypeError):
    """A value was viewed as a variant it is not."""

    def __init__(self, expected: str, actual: str):
        """Initialize type mismatch error."""
        super().__init__(
            f"Expected {expected}, got {actual}",
            {"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class BencodeEncodeError(BencodeError):
    """A native object has no bencode representation."""


class DecodeErrorKind(str, Enum):
    """Decode failure kinds."""

    MALFORMED_LENGTH = "MalformedLength"
    TRUNCATED_INPUT = "TruncatedInput"
    MALFORMED_INTEGER = "MalformedInteger"
    UNKNOWN_MARKER = "UnknownMarker"
    INVALID_KEY_TYPE = "InvalidKeyType"
    KEY_ORDER_VIOLATION = "KeyOrderViolation"
    NESTING_TOO_DEEP = "NestingTooDeep"
    TRAILING_DATA = "TrailingData"


class BencodeDecodeError(BencodeError):
    """Malformed bencode input.

    Subclasses set :attr:`kind`; ``offset`` is the position in the input
    buffer at which the failure was detected.
    """

    kind: DecodeErrorKind

    def __init__(
        self,
        message: str,
        offset: int,
        details: dict[str, Any] | None = None,
    ):
        """Initialize decode error."""
        merged = {"offset": offset}
        if details:
            merged.update(details)
        super().__init__(message, merged)
        self.offset = offset

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.kind.value} at offset {self.offset}: {self.message}"


class MalformedLengthError(BencodeDecodeError):
    """Byte string length prefix is missing, non-numeric or non-canonical."""

    kind = DecodeErrorKind.MALFORMED_LENGTH


class TruncatedInputError(BencodeDecodeError):
    """Input ended before the grammar was satisfied."""

    kind = DecodeErrorKind.TRUNCATED_INPUT


class MalformedIntegerError(BencodeDecodeError):
    """Integer token violates sign, digit or leading-zero rules."""

    kind = DecodeErrorKind.MALFORMED_INTEGER


class UnknownMarkerError(BencodeDecodeError):
    """Leading byte matches no value marker."""

    kind = DecodeErrorKind.UNKNOWN_MARKER


class InvalidKeyTypeError(BencodeDecodeError):
    """Dictionary key is not a byte string."""

    kind = DecodeErrorKind.INVALID_KEY_TYPE


class KeyOrderViolationError(BencodeDecodeError):
    """Dictionary keys are duplicated or not strictly increasing."""

    kind = DecodeErrorKind.KEY_ORDER_VIOLATION


class NestingTooDeepError(BencodeDecodeError):
    """Containers are nested deeper than the configured limit."""

    kind = DecodeErrorKind.NESTING_TOO_DEEP


class TrailingDataError(BencodeDecodeError):
    """Bytes remain after a complete top-level value."""

    kind = DecodeErrorKind.TRAILING_DATA
