"""
Solver Configuration.

This module defines the knobs of the root extraction stage. None of them
change the mathematical result of a successful solve; they only choose
the factorization strategy and bound its randomized part.

Key Parameters:
    - root_finder: "frobenius" (gcd with x^p - x, then equal-degree
      splitting) or "exhaustive" (evaluate at every field element)
    - max_split_attempts: random shifts tried per splitting step before
      the call gives up with an internal error
    - exhaustive_limit: largest field the exhaustive finder accepts
    - seed: seed for the per-call random source (None = OS entropy)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

ROOT_FINDERS = ("frobenius", "exhaustive")


@dataclass
class SolverConfig:
    """
    Configuration for one or more solve calls.

    A config is read-only during a call; sharing one instance between
    concurrent calls is safe.

    Attributes:
        name: Configuration name for identification
        root_finder: Factorization strategy, one of ROOT_FINDERS
        max_split_attempts: Retry bound for each equal-degree split
        exhaustive_limit: Maximum prime the exhaustive finder handles
        seed: Default seed for the splitting shifts

    Example:
        >>> config = SolverConfig(name="reproducible", seed=42)
        >>> config.root_finder
        'frobenius'
    """

    name: str = "default"

    root_finder: str = "frobenius"

    # A random shift separates two given roots with probability ~1/2,
    # so 64 attempts fail with probability ~2^-64 per split.
    max_split_attempts: int = 64

    exhaustive_limit: int = 1 << 16

    seed: Optional[int] = None

    def __post_init__(self):
        """Validate configuration."""
        if self.root_finder not in ROOT_FINDERS:
            raise ValueError(f"root_finder must be one of {ROOT_FINDERS}, "
                             f"got {self.root_finder!r}")
        if self.max_split_attempts < 1:
            raise ValueError("max_split_attempts must be at least 1")
        if self.exhaustive_limit < 2:
            raise ValueError("exhaustive_limit must be at least 2")

    def summary(self) -> str:
        """Return configuration summary string."""
        return (
            f"SolverConfig '{self.name}':\n"
            f"  Root finder: {self.root_finder}\n"
            f"  Split attempts: {self.max_split_attempts}\n"
            f"  Exhaustive limit: {self.exhaustive_limit}\n"
            f"  Seed: {self.seed if self.seed is not None else 'OS entropy'}"
        )


def create_default_config() -> SolverConfig:
    """Frobenius root finder seeded from OS entropy."""
    return SolverConfig(name="default")


def create_test_config(seed: int = 42) -> SolverConfig:
    """Deterministic configuration for tests and benchmarks."""
    return SolverConfig(name="test", seed=seed)


def create_exhaustive_config(limit: int = 1 << 16) -> SolverConfig:
    """Brute-force root finding, only usable for small fields."""
    return SolverConfig(name="exhaustive", root_finder="exhaustive",
                        exhaustive_limit=limit)
