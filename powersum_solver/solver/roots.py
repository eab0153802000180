"""
Root Extraction over F_p (stage 3).

The elementary symmetric values define the monic polynomial

    f(x) = x^n - e_1 x^(n-1) + e_2 x^(n-2) - ... + (-1)^n e_n

whose roots, with multiplicity, are exactly the unknown messages. The
power sums are consistent iff f splits into linear factors over F_p.

Root finding is hidden behind the RootFinder capability so the strategy
can be swapped without touching the pipeline:

    FrobeniusRootFinder:
        1. h = gcd(x^p - x, f), with x^p mod f computed by repeated
           squaring. h is the squarefree product of the distinct linear
           factors of f; irreducible factors of degree > 1 drop out.
        2. Equal-degree splitting: for a random shift a,
           gcd((x + a)^((p-1)/2) - 1, h) collects the roots r for which
           r + a is a non-zero square. Each attempt separates any two
           roots with probability about 1/2; recurse on both halves.
        3. Multiplicities by repeated synthetic division of f by (x - r).

    ExhaustiveRootFinder:
        Evaluates f at every element of a small field.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import logging
import random

from ..common.field import PrimeField
from ..common.polynomial import Polynomial, poly_gcd
from .config import SolverConfig
from .errors import InternalSolverError, InvalidSolutionError

logger = logging.getLogger(__name__)

RootMultiset = Dict[int, int]


def build_polynomial(field: PrimeField, symmetric: List[int]) -> Polynomial:
    """
    Build the monic polynomial with the given elementary symmetric values.

    Args:
        field: The prime field
        symmetric: [e_1, ..., e_n]

    Returns:
        Monic polynomial of degree exactly n
    """
    n = len(symmetric)
    coeffs = [0] * (n + 1)
    coeffs[n] = 1
    for k, e_k in enumerate(symmetric, start=1):
        coeffs[n - k] = e_k if k % 2 == 0 else -e_k
    return Polynomial(coeffs, field)


def count_multiplicities(poly: Polynomial, distinct_roots: List[int]) -> RootMultiset:
    """
    Multiplicity of each root, by dividing out (x - r) until it stops dividing.

    Raises:
        InternalSolverError: If a reported root does not divide poly
    """
    remaining = poly
    result: RootMultiset = {}
    for r in distinct_roots:
        multiplicity = 0
        while remaining.degree >= 1:
            quotient, remainder = remaining.deflate(r)
            if remainder != 0:
                break
            remaining = quotient
            multiplicity += 1
        if multiplicity == 0:
            raise InternalSolverError(f"reported root {r:#x} does not divide the polynomial")
        result[r] = multiplicity
    return result


class RootFinder(ABC):
    """Capability: find the roots of a polynomial over its prime field."""

    @abstractmethod
    def distinct_roots(self, poly: Polynomial) -> List[int]:
        """Every distinct root of poly in F_p, in any order."""

    def roots_with_multiplicity(self, poly: Polynomial) -> RootMultiset:
        """Map each root of poly to its multiplicity."""
        if poly.is_zero():
            raise ValueError("The zero polynomial has every element as a root")
        monic = poly.monic()
        return count_multiplicities(monic, sorted(self.distinct_roots(monic)))

    def splits_completely(self, poly: Polynomial) -> bool:
        """True iff poly is a product of linear factors over F_p."""
        return sum(self.roots_with_multiplicity(poly).values()) == poly.degree


class FrobeniusRootFinder(RootFinder):
    """
    Frobenius gcd followed by randomized equal-degree splitting.

    Args:
        rng: Random source private to the call; a fresh OS-seeded
             generator when omitted
        max_split_attempts: Shifts tried per split before giving up
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 max_split_attempts: int = 64):
        self.rng = rng or random.Random()
        self.max_split_attempts = max_split_attempts

    def linear_part(self, poly: Polynomial) -> Polynomial:
        """gcd(x^p - x, poly): the product of the distinct linear factors."""
        field = poly.field
        x = Polynomial.x(field)
        frobenius = x.powmod(field.prime, poly)
        return poly_gcd(frobenius - x, poly)

    def distinct_roots(self, poly: Polynomial) -> List[int]:
        field = poly.field
        if poly.degree < 1:
            return []
        h = self.linear_part(poly.monic())
        logger.debug("%d distinct roots in F_p out of degree %d", h.degree, poly.degree)
        if h.degree < 1:
            return []
        if field.prime == 2:
            # (p - 1) / 2 = 0, nothing to split with; h divides x^2 + x
            return [r for r in (0, 1) if h.evaluate(r) == 0]

        roots = []
        pending = [h]
        while pending:
            g = pending.pop()
            if g.degree == 1:
                roots.append(field.neg(g.coeffs[0]))
                continue
            part = self._split(g)
            pending.append(part)
            pending.append(g // part)
        return roots

    def _split(self, h: Polynomial) -> Polynomial:
        """Return a proper monic factor of the squarefree, fully split h."""
        field = h.field
        one = Polynomial.constant(field, 1)
        for attempt in range(1, self.max_split_attempts + 1):
            shift = self.rng.randrange(field.prime)
            probe = Polynomial([shift, 1], field).powmod(field.legendre_exponent, h) - one
            g = poly_gcd(probe, h)
            if 0 < g.degree < h.degree:
                return g
            logger.debug("split attempt %d with shift %#x did not separate roots",
                         attempt, shift)
        raise InternalSolverError(
            f"equal-degree splitting of a degree-{h.degree} factor did not "
            f"converge within {self.max_split_attempts} attempts")


class ExhaustiveRootFinder(RootFinder):
    """
    Evaluate the polynomial at every field element.

    Only meant for tiny fields, where it doubles as an independent check
    of the Frobenius finder.
    """

    def __init__(self, limit: int = 1 << 16):
        self.limit = limit

    def distinct_roots(self, poly: Polynomial) -> List[int]:
        field = poly.field
        if field.prime > self.limit:
            raise InternalSolverError(
                f"field of size {field.prime} exceeds the exhaustive search limit {self.limit}")
        roots = []
        for r in range(field.prime):
            if len(roots) == poly.degree:
                break
            if poly.evaluate(r) == 0:
                roots.append(r)
        return roots


def make_root_finder(config: SolverConfig, seed: Optional[int] = None) -> RootFinder:
    """
    Build the root finder a config asks for.

    Args:
        config: Solver configuration
        seed: Overrides config.seed for this call
    """
    if config.root_finder == "exhaustive":
        return ExhaustiveRootFinder(config.exhaustive_limit)
    if seed is None:
        seed = config.seed
    return FrobeniusRootFinder(random.Random(seed), config.max_split_attempts)


def extract_roots(field: PrimeField, symmetric: List[int],
                  finder: RootFinder) -> RootMultiset:
    """
    Build the polynomial from e_1..e_n and extract all of its roots.

    Returns:
        Root multiset with multiplicities summing to exactly n

    Raises:
        InvalidSolutionError: If the polynomial does not split over F_p
        InternalSolverError: If the finder returned a malformed multiset
    """
    n = len(symmetric)
    poly = build_polynomial(field, symmetric)
    if poly.degree != n or not poly.is_monic():
        raise InternalSolverError(f"built a malformed polynomial of degree {poly.degree}")

    roots = finder.roots_with_multiplicity(poly)

    for r, multiplicity in roots.items():
        if not field.contains(r) or multiplicity < 1:
            raise InternalSolverError(f"malformed root entry {r!r}: {multiplicity!r}")
    total = sum(roots.values())
    if total > n:
        raise InternalSolverError(f"{total} roots counted for a degree-{n} polynomial")
    if total < n:
        raise InvalidSolutionError(
            f"polynomial does not split over F_p: {total} of {n} roots found")

    logger.debug("extracted %d distinct roots", len(roots))
    return roots
