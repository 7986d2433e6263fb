"""btcodec - Bencode decoder and encoder for the BitTorrent format."""

from __future__ import annotations

__version__ = "0.1.0"

from btcodec.core import (
    BencodeDecoder,
    BencodeEncoder,
    ByteString,
    Dictionary,
    Integer,
    List,
    Value,
    ValueKind,
    decode,
    decode_value,
    encode,
)
from btcodec.utils.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    DecodeErrorKind,
    TypeMismatchError,
)

__all__ = [
    "BencodeDecodeError",
    "BencodeDecoder",
    "BencodeEncodeError",
    "BencodeEncoder",
    "BencodeError",
    "ByteString",
    "DecodeErrorKind",
    "Dictionary",
    "Integer",
    "List",
    "TypeMismatchError",
    "Value",
    "ValueKind",
    "__version__",
    "decode",
    "decode_value",
    "encode",
]
