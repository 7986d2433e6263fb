"""Conversion between bencode values and plain Python objects."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from btcodec.core.value import (
    INT64_MAX,
    INT64_MIN,
    ByteString,
    Dictionary,
    Integer,
    List,
    Value,
)
from btcodec.utils.exceptions import BencodeEncodeError

__all__ = ["from_native", "to_json_compatible", "to_native"]

logger = logging.getLogger(__name__)

Native = Union[bytes, int, list, dict]
JSONValue = Union[str, int, list["JSONValue"], dict[str, "JSONValue"]]


def from_native(obj: Any, encoding: str = "utf-8") -> Value:
    """Build a value tree from bytes, str, int, list/tuple and dict objects.

    ``str`` values and keys are encoded with ``encoding``. Existing values
    are returned unchanged.
    """
    if isinstance(obj, (ByteString, Integer, List, Dictionary)):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteString(bytes(obj))
    if isinstance(obj, str):
        return ByteString(obj.encode(encoding))
    if isinstance(obj, int) and not isinstance(obj, bool):
        if not INT64_MIN <= obj <= INT64_MAX:
            msg = f"Integer {obj} is outside the signed 64-bit range"
            raise BencodeEncodeError(msg, {"value": obj})
        return Integer(obj)
    if isinstance(obj, (list, tuple)):
        return List(from_native(item, encoding) for item in obj)
    if isinstance(obj, Mapping):
        entries: dict[bytes, Value] = {}
        for key, val in obj.items():
            if isinstance(key, str):
                raw = key.encode(encoding)
            elif isinstance(key, (bytes, bytearray)):
                raw = bytes(key)
            else:
                msg = f"Dictionary keys must be str or bytes, not {type(key).__name__}"
                raise BencodeEncodeError(msg, {"key": repr(key)})
            if raw in entries:
                msg = f"Duplicate dictionary key {raw!r}"
                raise BencodeEncodeError(msg, {"key": raw})
            entries[raw] = from_native(val, encoding)
        return Dictionary(entries)

    msg = f"Cannot bencode {type(obj).__name__}"
    raise BencodeEncodeError(msg, {"type": type(obj).__name__})


def to_native(value: Value) -> Native:
    """Convert a value tree to bytes, int, list and dict objects."""
    match value:
        case ByteString(data=data):
            return data
        case Integer(value=number):
            return number
        case List(items=items):
            return [to_native(item) for item in items]
        case Dictionary(entries=entries):
            return {key: to_native(item) for key, item in entries.items()}
    msg = f"Expected a bencode value, not {type(value).__name__}"
    raise TypeError(msg)


def to_json_compatible(
    value: Value,
    encoding: str = "utf-8",
    errors: str = "replace",
    key_errors: str = "backslashreplace",
) -> JSONValue:
    """Convert a value tree to a JSON-serializable structure.

    Byte strings become text decoded with ``encoding``; undecodable bytes
    are handled according to ``errors``. Dictionary keys are decoded with
    ``key_errors`` so that distinct keys stay distinct, and come out in
    canonical order. If two keys still render to the same text the later
    one wins and a warning is logged.
    """
    match value:
        case ByteString(data=data):
            return data.decode(encoding, errors)
        case Integer(value=number):
            return number
        case List(items=items):
            return [to_json_compatible(item, encoding, errors, key_errors) for item in items]
        case Dictionary():
            rendered: dict[str, JSONValue] = {}
            for key, item in value.sorted_items():
                text = key.decode(encoding, key_errors)
                if text in rendered:
                    logger.warning(
                        "Dictionary key %r renders as %r, replacing an earlier entry",
                        key,
                        text,
                    )
                rendered[text] = to_json_compatible(item, encoding, errors, key_errors)
            return rendered
    msg = f"Expected a bencode value, not {type(value).__name__}"
    raise TypeError(msg)
