"""Bencode encoder.

Encoding is total over :data:`~btcodec.core.value.Value` trees and always
produces canonical output: minimal integers and dictionary keys sorted by
their raw bytes, whatever order the dictionary stores them in.
"""

from __future__ import annotations

from typing import BinaryIO, Callable

from btcodec.core.value import ByteString, Dictionary, Integer, List, Value
from btcodec.utils.exceptions import BencodeEncodeError

__all__ = ["BencodeEncoder", "encode"]


class BencodeEncoder:
    """Canonical bencode encoder."""

    def encode(self, value: Value) -> bytes:
        """Encode a value to bytes."""
        chunks: list[bytes] = []
        self._encode_into(value, chunks.append)
        return b"".join(chunks)

    def encode_to(self, value: Value, stream: BinaryIO) -> None:
        """Write the encoding of ``value`` to a binary stream."""
        self._encode_into(value, stream.write)

    def _encode_into(self, value: Value, write: Callable[[bytes], object]) -> None:
        if not isinstance(value, (ByteString, Integer, List, Dictionary)):
            msg = f"Cannot encode {type(value).__name__}, expected a bencode value"
            raise BencodeEncodeError(msg, {"type": type(value).__name__})

        # Values still to encode, interleaved with raw key and terminator chunks
        pending: list[Value | bytes] = [value]
        while pending:
            match pending.pop():
                case bytes() as chunk:
                    write(chunk)
                case ByteString(data=data):
                    write(b"%d:" % len(data))
                    write(data)
                case Integer(value=number):
                    write(b"i%de" % number)
                case List(items=items):
                    write(b"l")
                    pending.append(b"e")
                    pending.extend(reversed(items))
                case Dictionary() as dictionary:
                    write(b"d")
                    pending.append(b"e")
                    for key, item in reversed(dictionary.sorted_items()):
                        pending.append(item)
                        pending.append(b"%d:%s" % (len(key), key))


_encoder = BencodeEncoder()


def encode(value: Value) -> bytes:
    """Encode a value to its canonical bencode representation."""
    return _encoder.encode(value)
