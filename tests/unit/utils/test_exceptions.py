"""Tests for the exception hierarchy and console helpers."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from btcodec.utils.console_utils import print_error, print_success
from btcodec.utils.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    BtcodecError,
    ConfigurationError,
    DecodeErrorKind,
    NestingTooDeepError,
    TrailingDataError,
    ValidationError,
)

pytestmark = [pytest.mark.unit]


class TestExceptions:
    """Tests for btcodec exceptions."""

    def test_base_error_str(self):
        assert str(BtcodecError("plain")) == "plain"
        assert str(BtcodecError("with", {"a": 1})) == "with (Details: {'a': 1})"

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, ValidationError)
        assert issubclass(BencodeError, ValidationError)
        assert issubclass(BencodeDecodeError, BencodeError)
        assert issubclass(BencodeEncodeError, BencodeError)

    def test_decode_error_offset_in_details(self):
        error = TrailingDataError("2 unexpected byte(s)", 5, {"trailing": 2})

        assert error.offset == 5
        assert error.details == {"offset": 5, "trailing": 2}
        assert error.kind is DecodeErrorKind.TRAILING_DATA
        assert str(error) == "TrailingData at offset 5: 2 unexpected byte(s)"

    def test_kind_values(self):
        assert NestingTooDeepError.kind.value == "NestingTooDeep"
        assert DecodeErrorKind("KeyOrderViolation") is DecodeErrorKind.KEY_ORDER_VIOLATION


class TestConsoleUtils:
    """Tests for Rich console helpers."""

    def test_print_error_escapes_markup(self):
        buffer = io.StringIO()

        print_error("bad [key]", console=Console(file=buffer))

        assert buffer.getvalue() == "✗ bad [key]\n"

    def test_print_success(self):
        buffer = io.StringIO()

        print_success("Wrote 4 bytes", console=Console(file=buffer))

        assert buffer.getvalue() == "✓ Wrote 4 bytes\n"
