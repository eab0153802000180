"""
Solution assembly (stage 4): membership check, ordering and encoding.
"""

from __future__ import annotations
from typing import List, Sequence
import logging

from ..common.field import PrimeField
from .errors import InputError, InvalidSolutionError
from .roots import RootMultiset
from .validation import encode_hex, required_buffer_size

logger = logging.getLogger(__name__)


def flatten_roots(roots: RootMultiset) -> List[int]:
    """Each root repeated by its multiplicity, in ascending order."""
    values = []
    for r in sorted(roots):
        values.extend([r] * roots[r])
    return values


def assemble(field: PrimeField, roots: RootMultiset, my_message: int, n: int) -> List[str]:
    """
    Turn the root multiset into the sorted, hex-encoded message list.

    Args:
        field: The prime field
        roots: Root multiset whose multiplicities sum to n
        my_message: The caller's own message, must be among the roots
        n: Number of peers

    Returns:
        n lowercase hexadecimal strings in ascending numeric order

    Raises:
        InvalidSolutionError: If my_message is not a root
    """
    values = flatten_roots(roots)
    if len(values) != n:
        raise InvalidSolutionError(f"expected {n} messages, assembled {len(values)}")

    if roots.get(my_message, 0) < 1:
        raise InvalidSolutionError(f"own message {my_message:#x} is not in the solution")

    return [encode_hex(v) for v in values]


def write_buffers(field: PrimeField, messages: Sequence[str],
                  out_messages: Sequence[bytearray]):
    """
    Copy each message into its buffer as NUL-terminated ASCII.

    Bytes after the terminator are left as they were.
    """
    needed = required_buffer_size(field)
    if len(out_messages) != len(messages):
        raise InputError(f"expected {len(messages)} output buffers, got {len(out_messages)}")
    for buf, message in zip(out_messages, messages):
        if len(buf) < needed:
            raise InputError(f"output buffer holds {len(buf)} bytes, {needed} required")
        data = message.encode("ascii") + b"\0"
        buf[:len(data)] = data
