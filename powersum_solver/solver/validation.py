"""
Input validation for the solver (stage 1).

All numeric inputs arrive as base-16 text, the way peers exchange them.
This module parses and range-checks them before any arithmetic runs;
every violation is an ``InputError`` and nothing downstream is touched.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
import logging

from ..common.field import PrimeField
from .errors import InputError

logger = logging.getLogger(__name__)

FieldText = Union[str, bytes, bytearray, int]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass
class ValidatedInputs:
    """Inputs that passed every check, already converted to integers."""
    field: PrimeField
    my_message: int
    sums: List[int]
    n: int


def parse_field_text(text: FieldText, name: str = "value") -> int:
    """
    Parse a hexadecimal field value.

    Accepts ``str`` or ASCII ``bytes`` (a C-style NUL terminator ends the
    bytes) holding bare base-16 digits, or a non-negative ``int``.

    Raises:
        InputError: For any other type, an empty string, a sign,
                    a ``0x`` prefix, whitespace or a non-hexadecimal digit
    """
    if isinstance(text, bool):
        raise InputError(f"{name}: expected hexadecimal text, got bool")
    if isinstance(text, int):
        if text < 0:
            raise InputError(f"{name}: negative value {text}")
        return text
    if isinstance(text, (bytes, bytearray)):
        raw = bytes(text).split(b"\0", 1)[0]
        try:
            text = raw.decode("ascii")
        except UnicodeDecodeError as e:
            raise InputError(f"{name}: not ASCII text") from e
    if not isinstance(text, str):
        raise InputError(f"{name}: expected hexadecimal text, "
                         f"got {type(text).__name__}")

    if not text or any(c not in _HEX_DIGITS for c in text):
        raise InputError(f"{name}: {text!r} is not a hexadecimal number")
    return int(text, 16)


def encode_hex(value: int) -> str:
    """Lowercase hexadecimal without prefix or padding."""
    return format(value, "x")


def parse_element(field: PrimeField, text: FieldText, name: str) -> int:
    """Parse a value and check that it is a canonical element of the field."""
    value = parse_field_text(text, name)
    if not field.contains(value):
        raise InputError(f"{name}: {value:#x} is not below the prime {field.prime:#x}")
    return value


def required_buffer_size(field: PrimeField) -> int:
    """Bytes an output buffer needs: the prime's hex width plus a terminator."""
    return field.hex_width + 1


def validate_inputs(prime: FieldText,
                    my_message: FieldText,
                    sums: Sequence[FieldText],
                    n: Optional[int] = None,
                    out_messages: Optional[Sequence[bytearray]] = None) -> ValidatedInputs:
    """
    Check the well-formedness of a solve request.

    Args:
        prime: The field modulus (not checked for primality)
        my_message: The caller's own message
        sums: The n power sums p_1..p_n
        n: Number of peers; defaults to len(sums)
        out_messages: Optional caller-allocated output buffers

    Returns:
        ValidatedInputs with the field context and the parsed integers

    Raises:
        InputError: If any of the checks fails
    """
    if isinstance(sums, (str, bytes, bytearray)):
        raise InputError("sums must be a sequence of values, not a single string")
    try:
        sums = list(sums)
    except TypeError as e:
        raise InputError(f"sums must be a sequence of values, "
                         f"got {type(sums).__name__}") from e
    if n is None:
        n = len(sums)
    if isinstance(n, bool) or not isinstance(n, int):
        raise InputError(f"n must be an integer, got {type(n).__name__}")
    if n < 2:
        raise InputError(f"n must be at least 2, got {n}")
    if len(sums) != n:
        raise InputError(f"expected {n} power sums, got {len(sums)}")

    prime_value = parse_field_text(prime, "prime")
    if prime_value < 2:
        raise InputError(f"prime must be at least 2, got {prime_value}")
    if n > prime_value:
        raise InputError(f"n = {n} exceeds the prime {prime_value}")
    field = PrimeField(prime_value)

    message = parse_element(field, my_message, "my_message")
    values = [parse_element(field, s, f"sums[{i}]") for i, s in enumerate(sums)]

    if out_messages is not None:
        _check_buffers(field, out_messages, n)

    logger.debug("validated %d power sums over a %d-bit prime",
                 n, prime_value.bit_length())
    return ValidatedInputs(field=field, my_message=message, sums=values, n=n)


def _check_buffers(field: PrimeField, out_messages: Sequence[bytearray], n: int):
    if isinstance(out_messages, (str, bytes, bytearray)) or not hasattr(out_messages, "__len__"):
        raise InputError(f"out_messages must be a sequence of buffers, "
                         f"got {type(out_messages).__name__}")
    if len(out_messages) != n:
        raise InputError(f"expected {n} output buffers, got {len(out_messages)}")
    needed = required_buffer_size(field)
    for i, buf in enumerate(out_messages):
        if not isinstance(buf, bytearray):
            raise InputError(f"out_messages[{i}] must be a bytearray, "
                             f"got {type(buf).__name__}")
        if len(buf) < needed:
            raise InputError(f"out_messages[{i}] holds {len(buf)} bytes, "
                             f"{needed} required")
