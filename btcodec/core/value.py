"""Bencode value model.

A decoded document is a tree of four immutable variants. ``Value`` is the
closed union of them, so consumers branch with ``match``::

    match value:
        case ByteString(data=data): ...
        case Integer(value=number): ...
        case List(items=items): ...
        case Dictionary(entries=entries): ...
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Union, final

from btcodec.utils.exceptions import TypeMismatchError

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "ByteString",
    "Dictionary",
    "Integer",
    "List",
    "Value",
    "ValueKind",
]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """Bencode value variants."""

    BYTE_STRING = "ByteString"
    INTEGER = "Integer"
    LIST = "List"
    DICTIONARY = "Dictionary"


class _Accessors:
    """Shape accessors shared by every variant."""

    __slots__ = ()

    kind: ValueKind

    def as_bytes(self) -> bytes:
        """Return the payload of a ByteString."""
        raise TypeMismatchError(ValueKind.BYTE_STRING.value, self.kind.value)

    def as_int(self) -> int:
        """Return the payload of an Integer."""
        raise TypeMismatchError(ValueKind.INTEGER.value, self.kind.value)

    def as_list(self) -> tuple[Value, ...]:
        """Return the items of a List."""
        raise TypeMismatchError(ValueKind.LIST.value, self.kind.value)

    def as_dict(self) -> Mapping[bytes, Value]:
        """Return the entries of a Dictionary."""
        raise TypeMismatchError(ValueKind.DICTIONARY.value, self.kind.value)


@final
@dataclass(frozen=True, slots=True)
class ByteString(_Accessors):
    """Arbitrary binary data."""

    data: bytes

    kind = ValueKind.BYTE_STRING

    def __post_init__(self) -> None:
        if isinstance(self.data, (bytearray, memoryview)):
            object.__setattr__(self, "data", bytes(self.data))
        elif not isinstance(self.data, bytes):
            msg = f"ByteString expects bytes, not {type(self.data).__name__}"
            raise TypeError(msg)

    def as_bytes(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


@final
@dataclass(frozen=True, slots=True)
class Integer(_Accessors):
    """Signed 64-bit integer."""

    value: int

    kind = ValueKind.INTEGER

    def __post_init__(self) -> None:
        # bool is an int subclass but has no bencode meaning
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"Integer expects int, not {type(self.value).__name__}"
            raise TypeError(msg)
        if not INT64_MIN <= self.value <= INT64_MAX:
            msg = f"Integer {self.value} is outside the signed 64-bit range"
            raise ValueError(msg)

    def as_int(self) -> int:
        return self.value


def _check_value(obj: Any, where: str) -> None:
    if not isinstance(obj, (ByteString, Integer, List, Dictionary)):
        msg = f"{where} expects bencode values, not {type(obj).__name__}"
        raise TypeError(msg)


@final
@dataclass(frozen=True, slots=True)
class List(_Accessors):
    """Ordered sequence of values."""

    items: tuple[Value, ...] = ()

    kind = ValueKind.LIST

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            _check_value(item, "List")
        object.__setattr__(self, "items", items)

    def as_list(self) -> tuple[Value, ...]:
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


@final
@dataclass(frozen=True, slots=True, eq=False)
class Dictionary(_Accessors):
    """Mapping from byte string keys to values.

    Entries keep the order they were supplied in. Equality and hashing
    ignore that order, and the encoder always emits keys sorted.
    """

    entries: Mapping[bytes, Value] = field(default_factory=dict)

    kind = ValueKind.DICTIONARY

    def __post_init__(self) -> None:
        source: Iterable[tuple[Any, Any]]
        if isinstance(self.entries, Mapping):
            source = self.entries.items()
        else:
            source = self.entries
        entries: dict[bytes, Value] = {}
        for key, val in source:
            if isinstance(key, ByteString):
                key = key.data
            elif isinstance(key, (bytearray, memoryview)):
                key = bytes(key)
            elif not isinstance(key, bytes):
                msg = f"Dictionary keys must be bytes, not {type(key).__name__}"
                raise TypeError(msg)
            _check_value(val, "Dictionary")
            entries[key] = val
        object.__setattr__(self, "entries", MappingProxyType(entries))

    def as_dict(self) -> Mapping[bytes, Value]:
        return self.entries

    def sorted_items(self) -> list[tuple[bytes, Value]]:
        """Return entries in canonical (byte-lexicographic) key order."""
        return sorted(self.entries.items(), key=lambda item: item[0])

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def get(self, key: bytes, default: Value | None = None) -> Value | None:
        return self.entries.get(key, default)

    def __getitem__(self, key: bytes) -> Value:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return dict(self.entries) == dict(other.entries)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __repr__(self) -> str:
        return f"Dictionary({dict(self.entries)!r})"


Value = Union[ByteString, Integer, List, Dictionary]
