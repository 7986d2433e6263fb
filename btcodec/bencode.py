"""Bencoding module for the BitTorrent serialization format.

This module provides a convenient interface to the core bencode functionality,
plus :func:`dumps` and :func:`loads` for callers working with plain Python
objects instead of value trees.
"""

from __future__ import annotations

from typing import Any

from btcodec.core.decoder import (
    DEFAULT_MAX_DEPTH,
    BencodeDecoder,
    Buffer,
    decode,
    decode_value,
)
from btcodec.core.encoder import BencodeEncoder, encode
from btcodec.core.native import Native, from_native, to_json_compatible, to_native
from btcodec.utils.exceptions import BencodeDecodeError, BencodeEncodeError, BencodeError

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "BencodeDecodeError",
    "BencodeDecoder",
    "BencodeEncodeError",
    "BencodeEncoder",
    "BencodeError",
    "decode",
    "decode_value",
    "dumps",
    "encode",
    "from_native",
    "loads",
    "to_json_compatible",
    "to_native",
]


def dumps(obj: Any, encoding: str = "utf-8") -> bytes:
    """Bencode a plain Python object."""
    return encode(from_native(obj, encoding))


def loads(data: Buffer, **options: Any) -> Native:
    """Decode a complete document into plain Python objects.

    Keyword options are passed to :func:`decode_value`.
    """
    return to_native(decode_value(data, **options))
