"""
Newton's identities over F_p (stage 2).

Power sums and elementary symmetric values of the same multiset are
related by

    k * e_k = sum_{i=1}^{k} (-1)^(i-1) * p_i * e_{k-i},    e_0 = 1

so e_1..e_n follow from p_1..p_n as long as 1..n are invertible mod p,
i.e. as long as n < p.

Example (p = 7, messages {1, 3}):
    p_1 = 4, p_2 = 10 = 3 (mod 7)
    e_1 = p_1 = 4
    e_2 = (p_1 * e_1 - p_2) / 2 = (16 - 3) / 2 = 3 (mod 7)
    x^2 - 4x + 3 = (x - 1)(x - 3)
"""

from __future__ import annotations
from typing import List, Iterable, Optional
import logging

from ..common.field import PrimeField, BatchInverter
from .errors import InternalSolverError

logger = logging.getLogger(__name__)


def elementary_symmetric(field: PrimeField, sums: List[int]) -> List[int]:
    """
    Convert power sums p_1..p_n into elementary symmetric values e_1..e_n.

    Args:
        field: The prime field
        sums: sums[i] = p_(i+1), each in [0, p)

    Returns:
        [e_1, ..., e_n]

    Raises:
        InternalSolverError: If some k <= n has no inverse mod p
    """
    n = len(sums)
    try:
        inverses = BatchInverter(field).invert_batch_raw(list(range(1, n + 1)))
    except ValueError as e:
        raise InternalSolverError(
            f"cannot invert 1..{n} modulo {field.prime}: {e}") from e

    p = field.prime
    e = [1]
    for k in range(1, n + 1):
        acc = 0
        for i in range(1, k + 1):
            term = sums[i - 1] * e[k - i]
            acc = acc + term if i % 2 == 1 else acc - term
        e.append(acc % p * inverses[k - 1] % p)

    logger.debug("computed %d elementary symmetric values", n)
    return e[1:]


def power_sums(field: PrimeField, messages: Iterable[int], count: Optional[int] = None) -> List[int]:
    """
    Compute the power sums p_1..p_count of a multiset of field elements.

    This is the value the peers publish; the solver inverts it.

    Args:
        field: The prime field
        messages: The multiset (any iterable of integers)
        count: Number of power sums; defaults to the number of messages
    """
    messages = [m % field.prime for m in messages]
    if count is None:
        count = len(messages)
    sums = [0] * count
    for m in messages:
        power = 1
        for k in range(count):
            power = power * m % field.prime
            sums[k] += power
    return [s % field.prime for s in sums]
