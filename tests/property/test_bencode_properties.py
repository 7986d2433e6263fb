"""Property-based tests for bencode encoding/decoding.

Tests invariants and properties of the bencode implementation
using Hypothesis for automatic test case generation.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from btcodec.core.decoder import BencodeDecoder, decode, decode_value
from btcodec.core.encoder import encode
from btcodec.core.native import from_native, to_native
from btcodec.core.value import INT64_MAX, INT64_MIN, ByteString, Dictionary, Integer, List
from btcodec.utils.exceptions import BencodeDecodeError

pytestmark = [pytest.mark.property]

byte_strings = st.binary(max_size=64).map(ByteString)
int64s = st.integers(min_value=INT64_MIN, max_value=INT64_MAX)
integers = int64s.map(Integer)

values = st.recursive(
    st.one_of(byte_strings, integers),
    lambda children: st.one_of(
        st.lists(children, max_size=5).map(List),
        st.dictionaries(st.binary(max_size=16), children, max_size=5).map(Dictionary),
    ),
    max_leaves=30,
)


class TestBencodeProperties:
    """Property-based tests for bencode operations."""

    @given(values)
    def test_value_roundtrip(self, value):
        """Test that decoding an encoded value gives the value back."""
        encoded = encode(value)
        decoded, consumed = decode(encoded)
        assert decoded == value
        assert consumed == len(encoded)

    @given(values)
    def test_canonical_idempotence(self, value):
        """Test that re-encoding canonical bytes reproduces them exactly."""
        canonical = encode(value)
        assert encode(decode_value(canonical)) == canonical

    @given(st.binary())
    def test_string_encoding_properties(self, data):
        """Test properties of binary string encoding."""
        encoded = encode(ByteString(data))

        colon_pos = encoded.find(b":")
        length_part = encoded[:colon_pos]

        # Length part is canonical decimal of the byte count
        assert length_part == str(len(data)).encode("ascii")
        assert encoded[colon_pos + 1 :] == data

    @given(int64s)
    def test_integer_encoding_properties(self, i):
        """Test properties of integer encoding."""
        encoded = encode(Integer(i))

        assert encoded.startswith(b"i")
        assert encoded.endswith(b"e")
        assert encoded[1:-1] == str(i).encode("ascii")

    @given(st.dictionaries(st.binary(max_size=16), integers, max_size=10))
    def test_dict_keys_emitted_sorted(self, entries):
        """Test that encoding sorts keys whatever the insertion order."""
        forward = Dictionary(entries)
        backward = Dictionary(list(reversed(list(entries.items()))))

        assert encode(forward) == encode(backward)

    @given(
        st.one_of(
            st.integers(min_value=-(2**200), max_value=INT64_MIN - 1),
            st.integers(min_value=INT64_MAX + 1, max_value=2**200),
        )
    )
    def test_out_of_range_integers_rejected(self, i):
        """Test that integer tokens beyond 64 bits never decode."""
        with pytest.raises(BencodeDecodeError):
            decode_value(b"i%de" % i)

    @given(values, st.binary(min_size=1, max_size=16))
    def test_consumed_ignores_trailing_bytes(self, value, trailer):
        """Test that consumed length stops at the end of the first value."""
        encoded = encode(value)
        decoded, consumed = decode(encoded + trailer)

        assert decoded == value
        assert consumed == len(encoded)

    @given(values, st.binary(max_size=8), st.binary(max_size=8))
    def test_decode_at_offset(self, value, prefix, trailer):
        """Test decoding a value embedded at an offset."""
        encoded = encode(value)
        decoded, consumed = decode(prefix + encoded + trailer, len(prefix))

        assert decoded == value
        assert consumed == len(encoded)

    @given(st.binary(max_size=64))
    def test_arbitrary_input_never_crashes(self, data):
        """Test that garbage either decodes or raises a decode error."""
        try:
            value = decode_value(data)
        except BencodeDecodeError:
            return
        # Anything accepted in strict mode is canonical
        assert encode(value) == data

    @given(st.integers(min_value=1, max_value=50), st.integers(min_value=0, max_value=60))
    def test_depth_limit(self, max_depth, nesting):
        """Test that nesting is accepted exactly up to the limit."""
        data = b"l" * nesting + b"e" * nesting
        if nesting == 0:
            data = b"le"
            nesting = 1
        decoder = BencodeDecoder(max_depth=max_depth)
        if nesting <= max_depth:
            assert decoder.decode_value(data) is not None
        else:
            with pytest.raises(BencodeDecodeError):
                decoder.decode_value(data)

    @given(values)
    def test_native_roundtrip(self, value):
        """Test that converting to plain objects and back preserves the value."""
        assert from_native(to_native(value)) == value
