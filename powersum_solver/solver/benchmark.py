"""
Benchmark Inputs and Timing Harness.

Generates random solvable instances (a random prime of a given size,
n random messages and their power sums) and times the solver over a grid
of prime sizes and peer counts.

Instance text format (one hexadecimal value per line):
    line 1:     prime
    line 2:     my_message
    lines 3..:  the n power sums p_1..p_n
Blank lines and lines starting with '#' are ignored.

Example:
    >>> import random
    >>> inst = generate_instance(64, 5, random.Random(1))
    >>> result = solve(*parse_instance_text(inst.to_text()))
    >>> result.ok
    True
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging
import random
import time

import numpy as np

from ..common.field import PrimeField
from .config import SolverConfig, create_test_config
from .core import solve
from .newton import power_sums
from .validation import encode_hex

logger = logging.getLogger(__name__)

DEFAULT_BIT_SIZES = (64, 128, 192, 256, 320, 384, 448, 512, 1024)
DEFAULT_PEER_COUNTS = (5, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100)

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_probable_prime(candidate: int, rng: Optional[random.Random] = None,
                      rounds: int = 32) -> bool:
    """Miller-Rabin test; error probability at most 4^-rounds."""
    if candidate < 2:
        return False
    for q in _SMALL_PRIMES:
        if candidate % q == 0:
            return candidate == q

    rng = rng or random.Random()
    d, s = candidate - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for _ in range(rounds):
        a = rng.randrange(2, candidate - 1)
        x = pow(a, d, candidate)
        if x == 1 or x == candidate - 1:
            continue
        for _ in range(s - 1):
            x = x * x % candidate
            if x == candidate - 1:
                break
        else:
            return False
    return True


def random_prime(bits: int, rng: random.Random) -> int:
    """A random prime with exactly the given bit length."""
    if bits < 2:
        raise ValueError("bits must be at least 2")
    if bits == 2:
        return rng.choice((2, 3))
    while True:
        candidate = rng.getrandbits(bits) | (1 << (bits - 1)) | 1
        if is_probable_prime(candidate, rng):
            return candidate


@dataclass
class BenchmarkInstance:
    """
    A solvable input: prime, hidden messages and their power sums.

    Attributes:
        prime: Field modulus
        messages: The n hidden messages
        sums: Power sums p_1..p_n of the messages
        my_message: The message the solving peer claims as its own
    """
    prime: int
    messages: List[int]
    sums: List[int]
    my_message: int

    @property
    def n(self) -> int:
        return len(self.messages)

    def to_text(self) -> str:
        """Serialize in the instance text format."""
        lines = [encode_hex(self.prime), encode_hex(self.my_message)]
        lines.extend(encode_hex(s) for s in self.sums)
        return "\n".join(lines) + "\n"


def generate_instance(bits: int, n: int, rng: random.Random,
                      prime: Optional[int] = None) -> BenchmarkInstance:
    """
    Draw a random instance.

    Args:
        bits: Bit length of the prime (ignored when prime is given)
        n: Number of messages
        rng: Random source
        prime: Use this modulus instead of drawing one
    """
    if prime is None:
        prime = random_prime(bits, rng)
    gf = PrimeField(prime)
    messages = [rng.randrange(prime) for _ in range(n)]
    return BenchmarkInstance(
        prime=prime,
        messages=messages,
        sums=power_sums(gf, messages),
        my_message=rng.choice(messages),
    )


def parse_instance_text(text: str) -> Tuple[str, str, List[str]]:
    """
    Split instance text into (prime, my_message, sums) hex strings.

    Raises:
        ValueError: If fewer than three values are present
    """
    values = [line.strip() for line in text.splitlines()]
    values = [v for v in values if v and not v.startswith("#")]
    if len(values) < 3:
        raise ValueError(f"expected a prime, a message and power sums, "
                         f"got {len(values)} values")
    return values[0], values[1], values[2:]


@dataclass
class BenchmarkResult:
    """
    Timings for one (bits, n) grid point.

    Attributes:
        bits: Prime size in bits
        n: Number of messages
        timings_s: Wall-clock seconds of each repetition
        failures: Repetitions that did not return the expected messages
    """
    bits: int
    n: int
    timings_s: np.ndarray = field(default_factory=lambda: np.zeros(0))
    failures: int = 0

    @property
    def mean_ms(self) -> float:
        return float(np.mean(self.timings_s) * 1e3) if self.timings_s.size else 0.0

    @property
    def median_ms(self) -> float:
        return float(np.median(self.timings_s) * 1e3) if self.timings_s.size else 0.0

    @property
    def std_ms(self) -> float:
        return float(np.std(self.timings_s) * 1e3) if self.timings_s.size else 0.0


def time_instance(instance: BenchmarkInstance,
                  config: Optional[SolverConfig] = None) -> Tuple[float, bool]:
    """Solve one instance; return (seconds, whether the result was correct)."""
    start = time.perf_counter()
    result = solve(encode_hex(instance.prime), encode_hex(instance.my_message),
                   [encode_hex(s) for s in instance.sums], config=config)
    elapsed = time.perf_counter() - start
    return elapsed, result.ok and result.values() == sorted(instance.messages)


def run_benchmark(bit_sizes: Sequence[int] = DEFAULT_BIT_SIZES,
                  peer_counts: Sequence[int] = DEFAULT_PEER_COUNTS,
                  repeats: int = 3,
                  seed: int = 0,
                  config: Optional[SolverConfig] = None) -> List[BenchmarkResult]:
    """
    Time the solver over every (bits, n) combination.

    Each grid point uses one random prime and `repeats` fresh message sets.
    """
    rng = random.Random(seed)
    config = config or create_test_config(seed)
    results = []
    for bits in bit_sizes:
        prime = random_prime(bits, rng)
        for n in peer_counts:
            if n > prime:
                logger.warning("skipping n=%d: larger than the %d-bit prime", n, bits)
                continue
            timings = []
            failures = 0
            for _ in range(repeats):
                instance = generate_instance(bits, n, rng, prime=prime)
                elapsed, correct = time_instance(instance, config)
                timings.append(elapsed)
                if not correct:
                    failures += 1
            result = BenchmarkResult(bits, n, np.array(timings), failures)
            logger.info("bits=%d n=%d mean=%.2fms median=%.2fms",
                        bits, n, result.mean_ms, result.median_ms)
            results.append(result)
    return results


def format_results_table(results: List[BenchmarkResult], sep: str = ";") -> str:
    """
    Render median milliseconds as a table: one row per prime size, one
    column per peer count. Missing grid points stay empty.
    """
    bit_sizes = sorted({r.bits for r in results})
    peer_counts = sorted({r.n for r in results})
    cells = {(r.bits, r.n): r for r in results}

    lines = [sep.join([""] + [str(n) for n in peer_counts])]
    for bits in bit_sizes:
        row = [str(bits)]
        for n in peer_counts:
            r = cells.get((bits, n))
            row.append(f"{r.median_ms:.2f}" if r is not None else "")
        lines.append(sep.join(row))
    return "\n".join(lines)
