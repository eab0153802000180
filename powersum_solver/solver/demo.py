"""
Power-Sum Solver Demo

This script walks through the solver with several examples, from a
hand-checkable toy field up to the 127-bit Mersenne prime.

Run with:
    python -m powersum_solver.solver.demo
"""

import random

from ..common.field import PrimeField
from .core import solve
from .newton import elementary_symmetric, power_sums
from .roots import build_polynomial, FrobeniusRootFinder
from .validation import encode_hex, required_buffer_size


def demo_tiny_example():
    """
    Minimal example: p = 7, two peers with messages 1 and 3.

    This is small enough to verify by hand.
    """
    print("\n" + "=" * 70)
    print("DEMO 1: TINY EXAMPLE (p = 7, messages {1, 3})")
    print("=" * 70)

    field = PrimeField(7)
    messages = [1, 3]
    sums = power_sums(field, messages)

    print(f"\nPower sums: p1 = 1 + 3 = {sums[0]}, p2 = 1 + 9 = 10 = {sums[1]} (mod 7)")

    e = elementary_symmetric(field, sums)
    print(f"Newton's identities: e1 = {e[0]}, e2 = {e[1]}")

    f = build_polynomial(field, e)
    print(f"Polynomial: f(x) = {f}")

    result = solve("7", "1", [encode_hex(s) for s in sums], seed=42)
    print(f"\nsolve(...) -> {result.status.name}, messages = {result.messages}")
    return result


def demo_tampering():
    """A single modified power sum no longer matches any message set."""
    print("\n" + "=" * 70)
    print("DEMO 2: TAMPER DETECTION")
    print("=" * 70)

    field = PrimeField(PrimeField.MERSENNE_61)
    rng = random.Random(7)
    messages = [rng.randrange(field.prime) for _ in range(4)]
    sums = power_sums(field, messages)
    mine = encode_hex(messages[0])
    prime = encode_hex(field.prime)

    honest = solve(prime, mine, [encode_hex(s) for s in sums], seed=42)
    print(f"\nHonest sums:   {honest.status.name}")

    sums[2] = field.add(sums[2], 1)
    tampered = solve(prime, mine, [encode_hex(s) for s in sums], seed=42)
    print(f"Tampered sums: {tampered.status.name} ({tampered.error})")
    return tampered


def demo_collision():
    """Two peers picked the same message: the root has multiplicity 2."""
    print("\n" + "=" * 70)
    print("DEMO 3: COLLIDING MESSAGES")
    print("=" * 70)

    field = PrimeField(97)
    messages = [5, 42, 42, 90]
    sums = power_sums(field, messages)

    f = build_polynomial(field, elementary_symmetric(field, sums))
    roots = FrobeniusRootFinder(random.Random(1)).roots_with_multiplicity(f)
    print(f"\nf(x) = {f}")
    print(f"Roots with multiplicity: {roots}")

    result = solve("61", "2a", [encode_hex(s) for s in sums], seed=1)
    print(f"solve(...) -> {result.status.name}, messages = {result.messages}")
    return result


def demo_large_field():
    """Five peers over the 127-bit Mersenne prime, with caller buffers."""
    print("\n" + "=" * 70)
    print("DEMO 4: 127-BIT FIELD WITH OUTPUT BUFFERS")
    print("=" * 70)

    field = PrimeField(PrimeField.MERSENNE_127)
    rng = random.Random(2024)
    messages = [rng.randrange(field.prime) for _ in range(5)]
    sums = power_sums(field, messages)

    size = required_buffer_size(field)
    buffers = [bytearray(size) for _ in messages]
    result = solve(encode_hex(field.prime), encode_hex(messages[3]),
                   [encode_hex(s) for s in sums], out_messages=buffers, seed=42)

    print(f"\nBuffer size: {size} bytes (hex width {field.hex_width} + terminator)")
    for buf in buffers:
        text = bytes(buf).split(b"\0", 1)[0].decode("ascii")
        print(f"  {text}")
    print(f"Matches sorted input: {result.values() == sorted(messages)}")
    return result


def main(interactive: bool = False):
    """Run all demos."""
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 18 + "POWER-SUM SOLVER DEMONSTRATION" + " " * 20 + "║")
    print("╚" + "═" * 68 + "╝")

    print("\nEach peer publishes nothing but power sums of the messages.")
    print("Newton's identities turn them into a polynomial whose roots")
    print("are exactly the messages, with multiplicity.")
    print("\n" + "─" * 70)

    demos = [
        ("Tiny Example", demo_tiny_example),
        ("Tamper Detection", demo_tampering),
        ("Colliding Messages", demo_collision),
        ("Large Field", demo_large_field),
    ]

    for name, demo_func in demos:
        try:
            demo_func()
        except Exception as e:
            print(f"\nError in {name}: {e}")
            import traceback
            traceback.print_exc()

        print("\n" + "─" * 70)
        if interactive:
            input("Press Enter to continue to next demo...")

    print("\n" + "═" * 70)
    print("DEMOS COMPLETE")
    print("═" * 70)
    print("\nKey takeaways:")
    print("  1. n power sums determine the n messages when n < p")
    print("  2. The sums are consistent iff f(x) splits into linear factors")
    print("  3. Colliding messages show up as repeated roots")
    print("  4. Any tampering breaks the split or drops the caller's message")


if __name__ == "__main__":
    main(interactive=True)
