"""Unit tests for the bencode encoder."""

from __future__ import annotations

import io

import pytest

from btcodec.core.encoder import BencodeEncoder, encode
from btcodec.core.value import ByteString, Dictionary, Integer, List
from btcodec.utils.exceptions import BencodeEncodeError

pytestmark = [pytest.mark.unit, pytest.mark.core]


class TestEncode:
    """Tests for canonical encoding."""

    def test_byte_string(self):
        assert encode(ByteString(b"hello")) == b"5:hello"

    def test_integers(self):
        assert encode(Integer(0)) == b"i0e"
        assert encode(Integer(-42)) == b"i-42e"
        assert encode(Integer(2**63 - 1)) == b"i9223372036854775807e"
        assert encode(Integer(-(2**63))) == b"i-9223372036854775808e"

    def test_list(self):
        assert encode(List([ByteString(b"hello"), Integer(42)])) == b"l5:helloi42ee"

    def test_dictionary_sorted_by_raw_bytes(self):
        value = Dictionary(
            [
                (b"name", ByteString(b"Alice")),
                (b"age", Integer(30)),
                (b"Zed", Integer(1)),
                (b"a", Integer(2)),
            ]
        )

        assert encode(value) == b"d3:Zedi1e1:ai2e3:agei30e4:name5:Alicee"

    def test_binary_keys(self):
        value = Dictionary({b"\xff": Integer(1), b"\x00": Integer(2)})

        assert encode(value) == b"d1:\x00i2e1:\xffi1ee"

    def test_nested_containers(self):
        value = Dictionary(
            {
                b"info": Dictionary(
                    {b"pieces": List([ByteString(b"")]), b"length": Integer(5)}
                )
            }
        )

        assert encode(value) == b"d4:infod6:lengthi5e6:piecesl0:eeee"

    def test_empty_containers(self):
        assert encode(List()) == b"le"
        assert encode(Dictionary()) == b"de"

    def test_deeply_nested_list(self):
        value = List()
        for _ in range(2999):
            value = List([value])

        assert encode(value) == b"l" * 3000 + b"e" * 3000

    def test_deeply_nested_dictionary(self):
        value = Integer(1)
        for _ in range(3000):
            value = Dictionary({b"k": value})

        assert encode(value) == b"d1:k" * 3000 + b"i1e" + b"e" * 3000

    def test_sibling_order_preserved(self):
        value = List(
            [
                Dictionary({b"b": List([Integer(1), Integer(2)]), b"a": ByteString(b"x")}),
                Integer(3),
            ]
        )

        assert encode(value) == b"ld1:a1:x1:bli1ei2eeei3ee"

    def test_rejects_non_values(self):
        with pytest.raises(BencodeEncodeError) as exc_info:
            encode({b"a": 1})  # type: ignore[arg-type]

        assert exc_info.value.details["type"] == "dict"


class TestEncodeTo:
    """Tests for streaming output."""

    def test_writes_to_binary_stream(self):
        stream = io.BytesIO()
        value = List([Integer(1), Dictionary({b"k": ByteString(b"v")})])

        BencodeEncoder().encode_to(value, stream)

        assert stream.getvalue() == b"li1ed1:k1:vee"
        assert stream.getvalue() == encode(value)
