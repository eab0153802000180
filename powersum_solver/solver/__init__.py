"""
Power-Sum Solver

Recovers a multiset of n field elements from its first n power sums and
checks that the caller's own element is part of it.

Key Components:
    - validate_inputs: Parse and range-check a request
    - elementary_symmetric: Newton's identities over F_p
    - RootFinder: Capability interface for root extraction
        * FrobeniusRootFinder: gcd(x^p - x, f) + equal-degree splitting
        * ExhaustiveRootFinder: Evaluate at every element (small fields)
    - assemble: Membership check, sorting, hex encoding
    - solve: The whole pipeline, returning a SolveResult
    - SolverConfig: Root finder choice, retry bound, seed

Usage:
    >>> from powersum_solver.solver import solve, SolveStatus
    >>> result = solve("7", "1", ["4", "3"], seed=1)
    >>> result.status == SolveStatus.SUCCESS
    True
    >>> result.messages
    ['1', '3']
"""

from .config import (
    SolverConfig,
    create_default_config,
    create_test_config,
    create_exhaustive_config,
)
from .errors import (
    SolveStatus,
    SolverError,
    InputError,
    InvalidSolutionError,
    InternalSolverError,
)
from .validation import (
    ValidatedInputs,
    validate_inputs,
    parse_field_text,
    encode_hex,
    required_buffer_size,
)
from .newton import elementary_symmetric, power_sums
from .roots import (
    RootFinder,
    FrobeniusRootFinder,
    ExhaustiveRootFinder,
    build_polynomial,
    extract_roots,
    make_root_finder,
)
from .assembly import assemble, flatten_roots, write_buffers
from .core import SolveResult, SolveStage, solve, solve_power_sums

__all__ = [
    "SolverConfig",
    "create_default_config",
    "create_test_config",
    "create_exhaustive_config",
    "SolveStatus",
    "SolverError",
    "InputError",
    "InvalidSolutionError",
    "InternalSolverError",
    "ValidatedInputs",
    "validate_inputs",
    "parse_field_text",
    "encode_hex",
    "required_buffer_size",
    "elementary_symmetric",
    "power_sums",
    "RootFinder",
    "FrobeniusRootFinder",
    "ExhaustiveRootFinder",
    "build_polynomial",
    "extract_roots",
    "make_root_finder",
    "assemble",
    "flatten_roots",
    "write_buffers",
    "SolveResult",
    "SolveStage",
    "solve",
    "solve_power_sums",
]
