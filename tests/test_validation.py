"""Tests for input parsing and validation."""

import pytest

from powersum_solver.solver.errors import InputError
from powersum_solver.solver.validation import (
    parse_field_text, encode_hex, validate_inputs, required_buffer_size,
)
from powersum_solver.common.field import PrimeField


@pytest.mark.parametrize("text,expected", [
    ("ff", 255),
    ("FF", 255),
    ("0", 0),
    (b"1f", 31),
    (b"1f\0garbage", 31),
    (bytearray(b"a"), 10),
    (17, 17),
])
def test_parse_valid(text, expected):
    assert parse_field_text(text) == expected


@pytest.mark.parametrize("text", [
    "", "0x", "0x1f", "0X1F", "xyz", "-1", "+1", " 1", "1 ", "1.5", "g", b"\xff", None, True, -3, 1.0,
])
def test_parse_invalid(text):
    with pytest.raises(InputError):
        parse_field_text(text)


def test_input_error_is_value_error():
    with pytest.raises(ValueError):
        parse_field_text("zz")


def test_encode_hex():
    assert encode_hex(0) == "0"
    assert encode_hex(255) == "ff"


def test_required_buffer_size():
    assert required_buffer_size(PrimeField(7)) == 2
    assert required_buffer_size(PrimeField(PrimeField.MERSENNE_127)) == 33


def test_validate_minimal():
    inputs = validate_inputs("7", "1", ["4", "3"])
    assert inputs.field == PrimeField(7)
    assert inputs.my_message == 1
    assert inputs.sums == [4, 3]
    assert inputs.n == 2


def test_validate_explicit_n():
    assert validate_inputs("7", "1", ["4", "3"], n=2).n == 2


def test_n_too_small():
    with pytest.raises(InputError, match="at least 2"):
        validate_inputs("7", "1", ["4"])


def test_n_larger_than_prime():
    with pytest.raises(InputError, match="exceeds"):
        validate_inputs("3", "1", ["0", "0", "0", "0"])


def test_n_equal_to_prime_passes_validation():
    assert validate_inputs("3", "1", ["0", "0", "0"]).n == 3


def test_n_mismatch():
    with pytest.raises(InputError):
        validate_inputs("7", "1", ["4", "3"], n=3)


def test_n_not_an_int():
    with pytest.raises(InputError):
        validate_inputs("7", "1", ["4", "3"], n="2")


def test_prime_too_small():
    with pytest.raises(InputError):
        validate_inputs("1", "0", ["0", "0"])


def test_sum_out_of_range():
    with pytest.raises(InputError, match=r"sums\[1\]"):
        validate_inputs("7", "1", ["4", "7"])


def test_my_message_out_of_range():
    with pytest.raises(InputError, match="my_message"):
        validate_inputs("7", "7", ["4", "3"])


def test_malformed_sum():
    with pytest.raises(InputError):
        validate_inputs("7", "1", ["4", "q"])


def test_sums_as_single_string():
    with pytest.raises(InputError):
        validate_inputs("7", "1", "43")


def test_buffers_accepted():
    validate_inputs("7", "1", ["4", "3"], out_messages=[bytearray(2), bytearray(5)])


def test_buffer_count_mismatch():
    with pytest.raises(InputError):
        validate_inputs("7", "1", ["4", "3"], out_messages=[bytearray(2)])


def test_buffer_too_small():
    with pytest.raises(InputError, match="required"):
        validate_inputs("61", "1", ["4", "3"], out_messages=[bytearray(3), bytearray(2)])


def test_buffer_wrong_type():
    with pytest.raises(InputError):
        validate_inputs("7", "1", ["4", "3"], out_messages=[bytes(2), bytearray(2)])
