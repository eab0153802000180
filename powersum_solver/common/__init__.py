"""
Common utilities for the Power-Sum Solver.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement, BatchInverter)
    - Dense univariate polynomials over a prime field
"""

from .field import PrimeField, FieldElement, BatchInverter
from .polynomial import Polynomial, poly_gcd

__all__ = [
    "PrimeField",
    "FieldElement",
    "BatchInverter",
    "Polynomial",
    "poly_gcd",
]
