"""Core bencode value model, decoder and encoder."""

from __future__ import annotations

from btcodec.core.decoder import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    BencodeDecoder,
    decode,
    decode_value,
)
from btcodec.core.encoder import BencodeEncoder, encode
from btcodec.core.native import from_native, to_json_compatible, to_native
from btcodec.core.value import ByteString, Dictionary, Integer, List, Value, ValueKind

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "BencodeDecoder",
    "BencodeEncoder",
    "ByteString",
    "Dictionary",
    "Integer",
    "List",
    "Value",
    "ValueKind",
    "decode",
    "decode_value",
    "encode",
    "from_native",
    "to_json_compatible",
    "to_native",
]
