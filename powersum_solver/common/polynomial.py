"""
Dense Univariate Polynomials over a Prime Field.

This module provides the polynomial arithmetic used by the root
extractor: the symmetric polynomial built from the power sums is reduced,
divided and gcd'ed here until only its linear factors remain.

Representation:
    coeffs[i] is the coefficient of x^i, each reduced into [0, p).
    Trailing zero coefficients are trimmed, so the zero polynomial is
    the empty list and has degree -1.

Example:
    >>> field = PrimeField(7)
    >>> f = Polynomial.from_roots(field, [1, 3])   # (x - 1)(x - 3)
    >>> f.coeffs
    [3, 3, 1]
    >>> f.evaluate(3)
    0

Key Operations:
    - divmod by a non-zero polynomial (schoolbook long division)
    - powmod: base^e mod m by square-and-multiply, used for the
      Frobenius map x^p mod f and for (x + a)^((p-1)/2) mod h
    - gcd: monic Euclidean gcd
    - deflate: synthetic division by (x - r)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Iterable, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .field import PrimeField


@dataclass
class Polynomial:
    """
    A polynomial over F_p with coefficients stored low-to-high.

    Attributes:
        coeffs: Coefficient list, coeffs[0] = constant term
        field: The prime field the coefficients live in
    """
    coeffs: List[int]
    field: 'PrimeField'

    def __post_init__(self):
        p = self.field.prime
        coeffs = [c % p for c in self.coeffs]
        while coeffs and coeffs[-1] == 0:
            coeffs.pop()
        self.coeffs = coeffs

    # Constructors

    @classmethod
    def zero(cls, field: 'PrimeField') -> Polynomial:
        return cls([], field)

    @classmethod
    def constant(cls, field: 'PrimeField', value: int) -> Polynomial:
        return cls([value], field)

    @classmethod
    def x(cls, field: 'PrimeField') -> Polynomial:
        """The monomial x."""
        return cls([0, 1], field)

    @classmethod
    def from_roots(cls, field: 'PrimeField', roots: Iterable[int]) -> Polynomial:
        """Build the monic polynomial prod (x - r) over the given roots."""
        result = cls([1], field)
        for r in roots:
            result = result * cls([-r, 1], field)
        return result

    # Properties

    @property
    def degree(self) -> int:
        """Degree of the polynomial; -1 for the zero polynomial."""
        return len(self.coeffs) - 1

    @property
    def leading_coefficient(self) -> int:
        return self.coeffs[-1] if self.coeffs else 0

    def is_zero(self) -> bool:
        return not self.coeffs

    def is_monic(self) -> bool:
        return self.leading_coefficient == 1

    def monic(self) -> Polynomial:
        """
        Scale the polynomial so that its leading coefficient is 1.

        Raises:
            ValueError: For the zero polynomial
        """
        if self.is_zero():
            raise ValueError("The zero polynomial has no monic associate")
        if self.is_monic():
            return self
        inv = self.field.inv(self.leading_coefficient)
        return Polynomial([self.field.mul(c, inv) for c in self.coeffs], self.field)

    # Arithmetic

    def _check_field(self, other: Polynomial):
        if self.field != other.field:
            raise ValueError(f"Field mismatch: {self.field} vs {other.field}")

    def __add__(self, other: Polynomial) -> Polynomial:
        self._check_field(other)
        a, b = self.coeffs, other.coeffs
        if len(a) < len(b):
            a, b = b, a
        result = list(a)
        for i, c in enumerate(b):
            result[i] += c
        return Polynomial(result, self.field)

    def __neg__(self) -> Polynomial:
        return Polynomial([-c for c in self.coeffs], self.field)

    def __sub__(self, other: Polynomial) -> Polynomial:
        return self + (-other)

    def __mul__(self, other: Polynomial) -> Polynomial:
        self._check_field(other)
        if self.is_zero() or other.is_zero():
            return Polynomial.zero(self.field)
        result = [0] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == 0:
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] += a * b
        # Reduction happens once, in __post_init__
        return Polynomial(result, self.field)

    def scale(self, factor: int) -> Polynomial:
        return Polynomial([c * factor for c in self.coeffs], self.field)

    def __divmod__(self, divisor: Polynomial) -> Tuple[Polynomial, Polynomial]:
        """
        Long division: returns (q, r) with self = q * divisor + r and
        deg r < deg divisor.

        Raises:
            ZeroDivisionError: If divisor is the zero polynomial
        """
        self._check_field(divisor)
        if divisor.is_zero():
            raise ZeroDivisionError("Polynomial division by zero")

        p = self.field.prime
        dn = divisor.degree
        if self.degree < dn:
            return Polynomial.zero(self.field), self

        remainder = list(self.coeffs)
        quotient = [0] * (self.degree - dn + 1)
        lead_inv = self.field.inv(divisor.leading_coefficient)
        dcoeffs = divisor.coeffs

        for shift in range(self.degree - dn, -1, -1):
            coef = remainder[shift + dn] * lead_inv % p
            quotient[shift] = coef
            if coef == 0:
                continue
            for i, d in enumerate(dcoeffs):
                remainder[shift + i] = (remainder[shift + i] - coef * d) % p

        return (Polynomial(quotient, self.field),
                Polynomial(remainder[:dn], self.field))

    def __floordiv__(self, divisor: Polynomial) -> Polynomial:
        return divmod(self, divisor)[0]

    def __mod__(self, divisor: Polynomial) -> Polynomial:
        return divmod(self, divisor)[1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.field == other.field and self.coeffs == other.coeffs

    def powmod(self, exponent: int, modulus: Polynomial) -> Polynomial:
        """
        Compute self^exponent mod modulus by square-and-multiply.

        Every intermediate product is reduced, so the working size stays
        below 2 * deg(modulus) regardless of the exponent size.
        """
        if exponent < 0:
            raise ValueError("Negative exponents are not supported")
        result = Polynomial.constant(self.field, 1) % modulus
        base = self % modulus
        while exponent > 0:
            if exponent & 1:
                result = (result * base) % modulus
            base = (base * base) % modulus
            exponent >>= 1
        return result

    def deflate(self, root: int) -> Tuple[Polynomial, int]:
        """
        Synthetic division by (x - root).

        Returns:
            (quotient, remainder) where the remainder equals self(root)
        """
        if self.is_zero():
            return self, 0
        p = self.field.prime
        n = self.degree
        quotient = [0] * n
        carry = 0
        for i in range(n, 0, -1):
            carry = (carry * root + self.coeffs[i]) % p
            quotient[i - 1] = carry
        remainder = (carry * root + self.coeffs[0]) % p
        return Polynomial(quotient, self.field), remainder

    def evaluate(self, x: int) -> int:
        """Evaluate the polynomial at x using Horner's method."""
        p = self.field.prime
        result = 0
        for coeff in reversed(self.coeffs):
            result = (result * x + coeff) % p
        return result

    def __repr__(self) -> str:
        if self.is_zero():
            return "0"
        terms = []
        for i in range(self.degree, -1, -1):
            c = self.coeffs[i]
            if c == 0:
                continue
            if i == 0:
                terms.append(str(c))
            elif i == 1:
                terms.append("x" if c == 1 else f"{c}*x")
            else:
                terms.append(f"x^{i}" if c == 1 else f"{c}*x^{i}")
        return " + ".join(terms)


def poly_gcd(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Monic greatest common divisor of two polynomials.

    gcd(0, 0) is the zero polynomial; otherwise the result is monic.
    """
    while not b.is_zero():
        a, b = b, a % b
    if a.is_zero():
        return a
    return a.monic()
