"""
Status codes and exceptions of the solver.

Inside the pipeline every failure is an exception; ``solve()`` is the only
place that turns them into a ``SolveStatus``. The numeric status values
match the ones the C solver library returned, so callers that already
switch on those integers keep working.
"""

from enum import IntEnum


class SolveStatus(IntEnum):
    """Outcome of a solve call."""
    SUCCESS = 0
    INVALID_SOLUTION = 1
    INTERNAL_ERROR = 100
    INPUT_ERROR = 101


class SolverError(Exception):
    """Base class of every solver failure."""
    status = SolveStatus.INTERNAL_ERROR


class InputError(SolverError, ValueError):
    """The caller violated the input contract (counts, parsing, buffers)."""
    status = SolveStatus.INPUT_ERROR


class InvalidSolutionError(SolverError):
    """
    Well-formed input without a matching solution.

    Either the power sums do not belong to any multiset of n field
    elements, or they do but the caller's own message is not among them.
    """
    status = SolveStatus.INVALID_SOLUTION


class InternalSolverError(SolverError, RuntimeError):
    """An arithmetic or factorization primitive failed on valid input."""
    status = SolveStatus.INTERNAL_ERROR
