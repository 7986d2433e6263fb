"""Bencode decoder.

Each grammar rule is a method taking ``(buffer, offset, depth)`` and
returning ``(value, new_offset)``, so container rules compose sub-parses
without sharing a cursor and any caller can learn exactly how many bytes
one value occupied.

Trailing data policy: :func:`decode` never looks past the value it parsed
and reports the consumed byte count. :func:`decode_value` is the top-level
entry point and rejects leftover bytes with :class:`TrailingDataError`
unless ``allow_trailing`` is set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Union

from btcodec.core.value import (
    INT64_MAX,
    INT64_MIN,
    ByteString,
    Dictionary,
    Integer,
    List,
    Value,
)
from btcodec.utils.exceptions import (
    InvalidKeyTypeError,
    KeyOrderViolationError,
    MalformedIntegerError,
    MalformedLengthError,
    NestingTooDeepError,
    TrailingDataError,
    TruncatedInputError,
    UnknownMarkerError,
)

if TYPE_CHECKING:  # pragma: no cover
    from btcodec.models import CodecConfig

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "BencodeDecoder",
    "decode",
    "decode_value",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

# Each nesting level costs two interpreter frames while decoding, so the
# ceiling stays well under the default recursion limit of 1000.
MAX_DEPTH_LIMIT = 300

# Decimal digits of 2**63, the largest magnitude an int64 token can carry
_MAX_INT_DIGITS = 19

Buffer = Union[bytes, bytearray, memoryview]

_DIGITS = b"0123456789"
_ZERO = ord("0")
_COLON = ord(":")
_MINUS = ord("-")
_INT = ord("i")
_LIST = ord("l")
_DICT = ord("d")
_END = ord("e")


def _marker_repr(byte: int) -> str:
    return repr(bytes([byte]))


class BencodeDecoder:
    """Configured bencode decoder.

    Args:
        strict: Reject dictionaries whose keys are duplicated or not in
            strictly increasing byte order. When False such dictionaries
            are accepted with a logged warning.
        max_depth: Maximum container nesting depth, between 1 and
            :data:`MAX_DEPTH_LIMIT`.
        allow_trailing: Let :meth:`decode_value` ignore bytes after the
            top-level value.

    """

    def __init__(
        self,
        strict: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
        allow_trailing: bool = False,
    ):
        """Initialize decoder."""
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            msg = f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
            raise ValueError(msg)
        self.strict = strict
        self.max_depth = max_depth
        self.allow_trailing = allow_trailing

    @classmethod
    def from_config(cls, config: CodecConfig) -> BencodeDecoder:
        """Create a decoder from the codec configuration section."""
        return cls(
            strict=config.strict,
            max_depth=config.max_depth,
            allow_trailing=config.allow_trailing,
        )

    def decode(self, data: Buffer, offset: int = 0) -> tuple[Value, int]:
        """Decode one value starting at ``offset``.

        Returns:
            The value and the number of bytes it occupied.

        """
        buf = _as_bytes(data)
        if offset < 0 or offset > len(buf):
            msg = f"offset {offset} outside buffer of length {len(buf)}"
            raise ValueError(msg)
        value, end = self._decode_at(buf, offset, 0)
        return value, end - offset

    def decode_value(self, data: Buffer) -> Value:
        """Decode a complete document."""
        buf = _as_bytes(data)
        value, consumed = self.decode(buf)
        if consumed != len(buf) and not self.allow_trailing:
            leftover = len(buf) - consumed
            raise TrailingDataError(
                f"{leftover} unexpected byte(s) after the top-level value",
                consumed,
                {"trailing": leftover},
            )
        return value

    def iter_decode(self, data: Buffer) -> Iterator[tuple[int, Value]]:
        """Yield ``(offset, value)`` for each value concatenated in ``data``."""
        buf = _as_bytes(data)
        pos = 0
        while pos < len(buf):
            value, end = self._decode_at(buf, pos, 0)
            yield pos, value
            pos = end

    def _decode_at(self, buf: bytes, offset: int, depth: int) -> tuple[Value, int]:
        if offset >= len(buf):
            raise TruncatedInputError("Expected a value, reached end of input", offset)

        marker = buf[offset]
        if marker in _DIGITS:
            return self._decode_bytes(buf, offset)
        if marker == _INT:
            return self._decode_int(buf, offset)
        if marker == _LIST:
            return self._decode_list(buf, offset, depth)
        if marker == _DICT:
            return self._decode_dict(buf, offset, depth)
        if marker == _COLON:
            raise MalformedLengthError("Byte string length prefix has no digits", offset)
        raise UnknownMarkerError(
            f"Unknown value marker {_marker_repr(marker)}",
            offset,
            {"marker": bytes([marker])},
        )

    def _decode_bytes(self, buf: bytes, offset: int) -> tuple[ByteString, int]:
        end = len(buf)
        pos = offset
        while pos < end and buf[pos] in _DIGITS:
            pos += 1
        if pos == end:
            raise TruncatedInputError("Input ended inside byte string length prefix", pos)
        if buf[pos] != _COLON:
            raise MalformedLengthError(
                f"Expected ':' after length prefix, found {_marker_repr(buf[pos])}",
                pos,
            )

        digits = buf[offset:pos]
        if len(digits) > 1 and digits[0] == _ZERO:
            raise MalformedLengthError("Length prefix has a leading zero", offset)

        start = pos + 1
        available = end - start
        # A prefix longer than the buffer size in digits can never be satisfied
        if len(digits) > len(str(end)):
            raise TruncatedInputError(
                "Byte string length exceeds input size",
                start,
                {"available": available},
            )
        length = int(digits)
        if length > available:
            raise TruncatedInputError(
                f"Byte string declares {length} bytes but only {available} remain",
                start,
                {"declared": length, "available": available},
            )
        return ByteString(buf[start : start + length]), start + length

    def _decode_int(self, buf: bytes, offset: int) -> tuple[Integer, int]:
        end = len(buf)
        pos = offset + 1
        negative = pos < end and buf[pos] == _MINUS
        if negative:
            pos += 1

        start = pos
        while pos < end and buf[pos] in _DIGITS:
            pos += 1
        if pos == end:
            raise TruncatedInputError("Input ended inside integer", pos)

        digits = buf[start:pos]
        if not digits:
            raise MalformedIntegerError("Integer has no digits", pos)
        if buf[pos] != _END:
            raise MalformedIntegerError(
                f"Unexpected {_marker_repr(buf[pos])} in integer",
                pos,
            )
        if len(digits) > 1 and digits[0] == _ZERO:
            raise MalformedIntegerError("Integer has a leading zero", start)
        if negative and digits == b"0":
            raise MalformedIntegerError("Negative zero is not allowed", offset)

        number = 0
        if len(digits) <= _MAX_INT_DIGITS:
            number = -int(digits) if negative else int(digits)
        if len(digits) > _MAX_INT_DIGITS or not INT64_MIN <= number <= INT64_MAX:
            raise MalformedIntegerError(
                "Integer is outside the signed 64-bit range",
                start,
                {"digits": len(digits)},
            )
        return Integer(number), pos + 1

    def _enter(self, offset: int, depth: int) -> int:
        depth += 1
        if depth > self.max_depth:
            raise NestingTooDeepError(
                f"Nesting exceeds maximum depth of {self.max_depth}",
                offset,
                {"max_depth": self.max_depth},
            )
        return depth

    def _decode_list(self, buf: bytes, offset: int, depth: int) -> tuple[List, int]:
        depth = self._enter(offset, depth)
        items: list[Value] = []
        pos = offset + 1
        while True:
            if pos >= len(buf):
                raise TruncatedInputError("List is not terminated", pos)
            if buf[pos] == _END:
                return List(items), pos + 1
            item, pos = self._decode_at(buf, pos, depth)
            items.append(item)

    def _decode_dict(self, buf: bytes, offset: int, depth: int) -> tuple[Dictionary, int]:
        depth = self._enter(offset, depth)
        entries: dict[bytes, Value] = {}
        previous: bytes | None = None
        pos = offset + 1
        while True:
            if pos >= len(buf):
                raise TruncatedInputError("Dictionary is not terminated", pos)
            if buf[pos] == _END:
                return Dictionary(entries), pos + 1

            key_offset = pos
            key, pos = self._decode_at(buf, pos, depth)
            if not isinstance(key, ByteString):
                raise InvalidKeyTypeError(
                    f"Dictionary key must be a byte string, not {key.kind.value}",
                    key_offset,
                )
            raw = key.data
            if previous is not None and (raw <= previous or raw in entries):
                self._key_out_of_order(raw, previous, key_offset, raw in entries)
            previous = raw

            value, pos = self._decode_at(buf, pos, depth)
            entries[raw] = value

    def _key_out_of_order(
        self,
        key: bytes,
        previous: bytes,
        offset: int,
        duplicate: bool,
    ) -> None:
        if duplicate:
            reason = f"Duplicate dictionary key {key!r}"
        else:
            reason = f"Dictionary key {key!r} sorts before previous key {previous!r}"
        if self.strict:
            raise KeyOrderViolationError(
                reason,
                offset,
                {"key": key, "previous": previous},
            )
        logger.warning("%s at offset %d, accepting", reason, offset)


def _as_bytes(data: Buffer) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    msg = f"Bencode input must be bytes-like, not {type(data).__name__}"
    raise TypeError(msg)


def decode(
    data: Buffer,
    offset: int = 0,
    *,
    strict: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[Value, int]:
    """Decode one value at ``offset`` and return it with its consumed length."""
    return BencodeDecoder(strict=strict, max_depth=max_depth).decode(data, offset)


def decode_value(
    data: Buffer,
    *,
    strict: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
    allow_trailing: bool = False,
) -> Value:
    """Decode a complete bencoded document."""
    decoder = BencodeDecoder(
        strict=strict,
        max_depth=max_depth,
        allow_trailing=allow_trailing,
    )
    return decoder.decode_value(data)
