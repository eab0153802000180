"""
Power-Sum Solver
================

Given the first n power sums of n unknown elements of a prime field,
recover the multiset of those elements and confirm that the caller's own
element is among them. Peers in a DC-net style anonymous broadcast publish
only such aggregated power sums; every peer reconstructs all messages
locally and checks that its own survived.

Modules:
    - common: Field arithmetic and polynomials over F_p
    - solver: The four-stage solving pipeline, configuration, benchmark

Quick Start:
    >>> from powersum_solver import solve
    >>> solve("7", "1", ["4", "3"]).messages
    ['1', '3']
"""

__version__ = "0.1.0"

from . import common
from . import solver
from .solver import (
    solve,
    solve_power_sums,
    SolveResult,
    SolveStatus,
    SolverConfig,
)
