"""
Finite Field Arithmetic for the Power-Sum Solver.

This module implements modular arithmetic over prime fields F_p. Every
stage of the solver works on integers in [0, p) and receives the field
as an explicit, immutable context value - there is no global modulus.

Key Concepts:
    - All arithmetic is done modulo a prime p
    - Multiplication: (a * b) mod p
    - Negation: (p - a) mod p
    - Inversion: Find b such that a * b = 1 mod p

Example:
    >>> field = PrimeField(97)
    >>> field.mul(45, 67)
    8
    >>> field.inv(45)
    69

Primality of the modulus is assumed, never checked.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List


@dataclass
class FieldElement:
    """
    An element of a prime field Z_p.

    Attributes:
        value: The integer value (always in range [0, p-1])
        field: Reference to the parent PrimeField
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        """Ensure value is reduced modulo p."""
        self.value = self.value % self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __mul__(self, other: FieldElement) -> FieldElement:
        """Multiplication in the field: (a * b) mod p"""
        return FieldElement((self.value * other.value) % self.field.prime, self.field)

    def inverse(self) -> FieldElement:
        """
        Compute modular inverse using the Extended Euclidean Algorithm.

        Finds b such that a * b = 1 (mod p).

        Raises:
            ValueError: If self.value is 0 (no inverse exists)
        """
        if self.value == 0:
            raise ValueError("Cannot invert zero")

        # a*x + p*y = gcd(a, p) = 1
        old_r, r = self.value, self.field.prime
        old_s, s = 1, 0

        while r != 0:
            quotient = old_r // r
            old_r, r = r, old_r - quotient * r
            old_s, s = s, old_s - quotient * s

        if old_r != 1:
            raise ValueError(f"No inverse exists (gcd = {old_r})")

        return FieldElement(old_s % self.field.prime, self.field)

    def is_zero(self) -> bool:
        """Check if this element is zero."""
        return self.value == 0


@dataclass(frozen=True)
class PrimeField:
    """
    A prime field Z_p for modular arithmetic.

    The field is an immutable value: it is created once per solve call
    (or shared read-only between calls) and threaded through every stage.
    Besides the modulus it exposes the derived constants the solver needs.

    Attributes:
        prime: The prime modulus p

    Common Primes:
        - 7, 97: Good for testing (small, easy to verify by hand)
        - 2^61 - 1, 2^127 - 1: Mersenne primes used for DC-net payloads

    Example:
        >>> field = PrimeField(97)
        >>> field.hex_width
        2
        >>> field.legendre_exponent
        48
    """
    prime: int

    MERSENNE_61 = (1 << 61) - 1
    MERSENNE_127 = (1 << 127) - 1

    def __post_init__(self):
        if self.prime < 2:
            raise ValueError("Prime must be at least 2")

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    @property
    def hex_width(self) -> int:
        """Number of hexadecimal digits needed for any element (and for p itself)."""
        return len(format(self.prime, "x"))

    @property
    def legendre_exponent(self) -> int:
        """(p - 1) / 2, the exponent of Euler's criterion."""
        return (self.prime - 1) // 2

    def contains(self, value: int) -> bool:
        """Check if an integer is a canonical field element."""
        return 0 <= value < self.prime

    def element(self, value: int) -> FieldElement:
        """Create a field element from an integer."""
        return FieldElement(value % self.prime, self)

    def zero(self) -> FieldElement:
        """Return the additive identity (0)."""
        return FieldElement(0, self)

    # Direct arithmetic on raw integers, used by the polynomial code

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.prime

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.prime

    def neg(self, a: int) -> int:
        return (-a) % self.prime

    def inv(self, a: int) -> int:
        """Compute modular inverse of an integer."""
        return self.element(a).inverse().value


class BatchInverter:
    """
    Batch modular inversion using Montgomery's trick.

    Computes n inverses with a single field inversion plus O(n)
    multiplications. The Newton-identity stage needs 1/k for every
    k in 1..n and gets them all from here in one pass.

    Algorithm:
        1. Compute partial products: P[i] = a[0] * a[1] * ... * a[i]
        2. Invert final product: I = P[n-1]^(-1)
        3. Recover individual inverses by "peeling off" elements

    Example:
        >>> inverter = BatchInverter(PrimeField(7))
        >>> inverter.invert_batch_raw([1, 2, 3])
        [1, 4, 5]
    """

    def __init__(self, field: PrimeField):
        self.field = field

    def invert_batch(self, elements: List[FieldElement]) -> List[FieldElement]:
        """
        Compute inverses of all elements in a batch.

        Args:
            elements: List of field elements to invert

        Returns:
            List of inverses in the same order

        Raises:
            ValueError: If any element is zero
        """
        if not elements:
            return []

        n = len(elements)

        for i, e in enumerate(elements):
            if e.is_zero():
                raise ValueError(f"Cannot invert zero (element {i})")

        # products[i] = elements[0] * elements[1] * ... * elements[i]
        products = [elements[0]]
        for i in range(1, n):
            products.append(products[i-1] * elements[i])

        inv = products[n-1].inverse()

        inverses = [self.field.zero()] * n

        for i in range(n-1, 0, -1):
            # inv = (a[0]*...*a[i])^(-1), so inv * P[i-1] = a[i]^(-1)
            inverses[i] = inv * products[i-1]
            inv = inv * elements[i]

        inverses[0] = inv

        return inverses

    def invert_batch_raw(self, values: List[int]) -> List[int]:
        """
        Batch inversion on raw integers.

        Args:
            values: List of integers to invert (must be non-zero mod p)

        Returns:
            List of inverse integers
        """
        elements = [self.field.element(v) for v in values]
        inverses = self.invert_batch(elements)
        return [inv.value for inv in inverses]
