"""End-to-end tests of the solve pipeline."""

import logging
import random

import pytest

from powersum_solver import solve, solve_power_sums, SolveStatus
from powersum_solver.common.field import PrimeField
from powersum_solver.solver.config import create_exhaustive_config, create_test_config
from powersum_solver.solver.core import SolveStage
from powersum_solver.solver.newton import power_sums
from powersum_solver.solver.validation import encode_hex


def make_request(prime, messages, mine):
    field = PrimeField(prime)
    sums = power_sums(field, messages)
    return encode_hex(prime), encode_hex(mine), [encode_hex(s) for s in sums]


def test_minimum_example():
    result = solve("7", "1", ["4", "3"], seed=1)
    assert result.status == SolveStatus.SUCCESS
    assert result.ok
    assert result.messages == ["1", "3"]
    assert result.values() == [1, 3]
    assert result.stage == SolveStage.ASSEMBLED


def test_membership_failure():
    result = solve("7", "5", ["4", "3"], seed=1)
    assert result.status == SolveStatus.INVALID_SOLUTION
    assert result.messages == []
    assert result.stage == SolveStage.FACTORED


def test_malformed_sum_leaves_buffers_untouched():
    buffers = [bytearray(b"\xaa" * 4) for _ in range(2)]
    result = solve("7", "1", ["4", "zz"], out_messages=buffers)
    assert result.status == SolveStatus.INPUT_ERROR
    assert result.stage == SolveStage.START
    assert all(buf == bytearray(b"\xaa" * 4) for buf in buffers)


def test_invalid_solution_leaves_buffers_untouched():
    buffers = [bytearray(b"\xaa" * 4) for _ in range(2)]
    result = solve("7", "5", ["4", "3"], out_messages=buffers)
    assert result.status == SolveStatus.INVALID_SOLUTION
    assert all(buf == bytearray(b"\xaa" * 4) for buf in buffers)


def test_output_buffers_written():
    buffers = [bytearray(b"\xaa" * 3) for _ in range(2)]
    result = solve("7", "3", ["4", "3"], out_messages=buffers, seed=1)
    assert result.ok
    assert buffers[0] == bytearray(b"1\0\xaa")
    assert buffers[1] == bytearray(b"3\0\xaa")


def test_output_buffers_full_width():
    field = PrimeField(PrimeField.MERSENNE_127)
    messages = [field.prime - 1, 5]
    buffers = [bytearray(field.hex_width + 1) for _ in messages]
    result = solve(*make_request(field.prime, messages, 5), out_messages=buffers, seed=1)
    assert result.ok
    assert buffers[0] == bytearray(b"5\0") + bytearray(field.hex_width - 1)
    assert bytes(buffers[1]) == encode_hex(field.prime - 1).encode("ascii") + b"\0"


@pytest.mark.parametrize("prime,n", [
    (7, 2),
    (7, 6),
    (97, 5),
    (65537, 10),
    (PrimeField.MERSENNE_61, 8),
    (PrimeField.MERSENNE_127, 5),
    ((1 << 255) - 19, 4),
])
def test_round_trip(prime, n):
    rng = random.Random(prime * 31 + n)
    messages = [rng.randrange(prime) for _ in range(n)]
    for mine in set(messages):
        result = solve(*make_request(prime, messages, mine), seed=7)
        assert result.status == SolveStatus.SUCCESS
        assert result.values() == sorted(messages)


def test_repeated_messages_are_contiguous():
    result = solve(*make_request(97, [10, 3, 3, 3], 10), seed=2)
    assert result.messages == ["3", "3", "3", "a"]


def test_all_zero_sums():
    prime = encode_hex(PrimeField.MERSENNE_127)
    result = solve(prime, "0", ["0", "0", "0"], seed=1)
    assert result.ok
    assert result.messages == ["0", "0", "0"]


@pytest.mark.parametrize("seed", range(10))
def test_tamper_detection(seed):
    field = PrimeField(PrimeField.MERSENNE_61)
    rng = random.Random(seed)
    messages = [rng.randrange(field.prime) for _ in range(4)]
    sums = power_sums(field, messages)
    index = rng.randrange(len(sums))
    sums[index] = field.add(sums[index], rng.randrange(1, field.prime))
    mine = messages[0]

    result = solve(encode_hex(field.prime), encode_hex(mine),
                   [encode_hex(s) for s in sums], seed=seed)
    assert not result.ok or mine not in result.values()


def test_determinism():
    request = make_request(PrimeField.MERSENNE_61, [11, 22, 33, 44, 55], 33)
    first = solve(*request, seed=99)
    second = solve(*request, seed=99)
    assert first == second


def test_sort_invariant(rng):
    for _ in range(10):
        n = rng.randint(2, 8)
        messages = [rng.randrange(1000) for _ in range(n)]
        result = solve(*make_request(1009, messages, messages[-1]), seed=3)
        values = result.values()
        assert values == sorted(values)
        assert len(values) == n


def test_n_just_below_prime():
    rng = random.Random(11)
    messages = [rng.randrange(11) for _ in range(10)]
    result = solve(*make_request(11, messages, messages[0]), seed=1)
    assert result.ok
    assert result.values() == sorted(messages)


def test_n_equal_to_prime_is_internal_error():
    result = solve("b", "0", ["0"] * 11, seed=1)
    assert result.status == SolveStatus.INTERNAL_ERROR
    assert result.stage == SolveStage.VALIDATED


def test_n_above_prime_is_input_error():
    result = solve("b", "0", ["0"] * 12)
    assert result.status == SolveStatus.INPUT_ERROR


@pytest.mark.parametrize("sums", [None, 5, object()])
def test_sums_not_a_sequence_is_input_error(sums):
    result = solve("7", "1", sums)
    assert result.status == SolveStatus.INPUT_ERROR
    assert result.stage == SolveStage.START


@pytest.mark.parametrize("out_messages", [5, bytearray(4), "ab"])
def test_buffers_not_a_sequence_is_input_error(out_messages):
    result = solve("7", "1", ["4", "3"], out_messages=out_messages)
    assert result.status == SolveStatus.INPUT_ERROR


def test_prefixed_hex_is_input_error():
    assert solve("0x7", "1", ["4", "3"]).status == SolveStatus.INPUT_ERROR


def test_smallest_fields():
    # p = 3, two peers that collided on 2
    result = solve(*make_request(3, [2, 2], 2), seed=1)
    assert result.messages == ["2", "2"]
    # p = 2 admits only n = 2 = p, where 2 has no inverse
    assert solve("2", "1", ["1", "1"]).status == SolveStatus.INTERNAL_ERROR


def test_exhaustive_config_matches():
    request = make_request(101, [7, 50, 50, 99], 99)
    frobenius = solve(*request, config=create_test_config())
    exhaustive = solve(*request, config=create_exhaustive_config())
    assert frobenius.messages == exhaustive.messages == ["7", "32", "32", "63"]


def test_config_seed_used_when_no_seed_given():
    request = make_request(PrimeField.MERSENNE_61, [1, 2, 3], 2)
    assert solve(*request, config=create_test_config(5)).ok


def test_invalid_solution_logged(caplog):
    caplog.set_level(logging.INFO, logger="powersum_solver")
    solve("7", "5", ["4", "3"], seed=1)
    assert any("no valid solution" in r.getMessage() for r in caplog.records)


def test_solve_power_sums():
    assert solve_power_sums([4, 3], prime=7, my_message=1, seed=1) == [1, 3]
    assert solve_power_sums([4, 3], prime=7, my_message=5, seed=1) is None


def test_solve_power_sums_input_error():
    with pytest.raises(ValueError):
        solve_power_sums([4], prime=7, my_message=1)


def test_solve_power_sums_internal_error():
    with pytest.raises(RuntimeError):
        solve_power_sums([0, 0], prime=2, my_message=0)
