"""
Power-Sum Solver Pipeline.

Solves the equation system

    forall 0 <= i < n:  sum_{j=0}^{n-1} messages[j]^(i+1) = sums[i]

in F_p for the multiset ``messages`` and checks that the caller's own
message is part of the solution.

Pipeline (data flows strictly forward):
    1. validate_inputs       - parse and range-check the request
    2. elementary_symmetric  - Newton's identities
    3. extract_roots         - build f(x) and find its roots
    4. assemble              - membership, sorting, hex encoding

State machine:
    START -> VALIDATED -> SYMMETRIC_VALUES_COMPUTED -> FACTORED -> ASSEMBLED
    A failure returns at once, reporting the last stage completed.
    No stage is re-entered.

Example:
    >>> result = solve("7", "1", ["4", "3"])
    >>> result.status
    <SolveStatus.SUCCESS: 0>
    >>> result.messages
    ['1', '3']
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence
import logging

from .config import SolverConfig, create_default_config
from .errors import SolveStatus, SolverError, InvalidSolutionError, InternalSolverError
from .validation import FieldText, validate_inputs, encode_hex
from .newton import elementary_symmetric
from .roots import extract_roots, make_root_finder
from .assembly import assemble, write_buffers

logger = logging.getLogger(__name__)


class SolveStage(Enum):
    """Stages of a solve call, in order."""
    START = "start"
    VALIDATED = "validated"
    SYMMETRIC_VALUES_COMPUTED = "symmetric_values_computed"
    FACTORED = "factored"
    ASSEMBLED = "assembled"


@dataclass
class SolveResult:
    """
    Outcome of a solve call.

    Attributes:
        status: One of the four SolveStatus codes
        messages: Sorted hex messages; empty unless status is SUCCESS
        stage: Last stage completed before returning
        error: Human-readable reason for a failure
    """
    status: SolveStatus
    messages: List[str] = field(default_factory=list)
    stage: SolveStage = SolveStage.START
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == SolveStatus.SUCCESS

    def values(self) -> List[int]:
        """The messages as integers."""
        return [int(m, 16) for m in self.messages]


def solve(prime: FieldText,
          my_message: FieldText,
          sums: Sequence[FieldText],
          n: Optional[int] = None,
          out_messages: Optional[Sequence[bytearray]] = None,
          seed: Optional[int] = None,
          config: Optional[SolverConfig] = None) -> SolveResult:
    """
    Recover the message multiset from its power sums.

    Args:
        prime: Prime modulus as bare base-16 text, no ``0x`` prefix
               (not checked for primality)
        my_message: The caller's own message as hex text
        sums: The n power sums as hex text
        n: Number of peers; defaults to len(sums)
        out_messages: Optional caller-allocated buffers, each at least
                      hex width of the prime + 1 bytes; written only on
                      success
        seed: Seed for the randomized splitting step (tests)
        config: Solver configuration; defaults to create_default_config()

    Returns:
        SolveResult. This function does not raise for bad input or
        inconsistent sums; the status carries the outcome.
    """
    config = config or create_default_config()
    stage = SolveStage.START
    try:
        inputs = validate_inputs(prime, my_message, sums, n, out_messages)
        stage = SolveStage.VALIDATED

        symmetric = elementary_symmetric(inputs.field, inputs.sums)
        stage = SolveStage.SYMMETRIC_VALUES_COMPUTED

        finder = make_root_finder(config, seed)
        roots = extract_roots(inputs.field, symmetric, finder)
        stage = SolveStage.FACTORED

        messages = assemble(inputs.field, roots, inputs.my_message, inputs.n)
        if out_messages is not None:
            write_buffers(inputs.field, messages, out_messages)
        stage = SolveStage.ASSEMBLED
    except InvalidSolutionError as e:
        logger.info("no valid solution after stage %s: %s", stage.value, e)
        return SolveResult(e.status, stage=stage, error=str(e))
    except InternalSolverError as e:
        logger.warning("internal error after stage %s: %s", stage.value, e)
        return SolveResult(e.status, stage=stage, error=str(e))
    except SolverError as e:
        logger.debug("rejected input: %s", e)
        return SolveResult(e.status, stage=stage, error=str(e))
    except (ArithmeticError, ValueError, TypeError) as e:
        logger.exception("unexpected fault after stage %s", stage.value)
        return SolveResult(SolveStatus.INTERNAL_ERROR, stage=stage, error=str(e))

    logger.debug("solved for %d messages", len(messages))
    return SolveResult(SolveStatus.SUCCESS, messages, stage)


def solve_power_sums(sums: Sequence[int], prime: int, my_message: int,
                     seed: Optional[int] = None,
                     config: Optional[SolverConfig] = None) -> Optional[List[int]]:
    """
    Integer front end for protocol code.

    Returns:
        The messages sorted in ascending numerical order, or None if the
        sums are not proper power sums or my_message is not a solution

    Raises:
        ValueError: On an input error
        RuntimeError: On an internal error
    """
    result = solve(encode_hex(prime), encode_hex(my_message),
                   [encode_hex(s) for s in sums], seed=seed, config=config)

    if result.status == SolveStatus.SUCCESS:
        return result.values()
    elif result.status == SolveStatus.INVALID_SOLUTION:
        return None
    elif result.status == SolveStatus.INPUT_ERROR:
        raise ValueError(result.error)
    else:
        raise RuntimeError(result.error)
