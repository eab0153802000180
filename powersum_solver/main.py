"""
Power-Sum Solver - Command Line Entry Point

Commands:
    solve FILE        Solve an instance file ('-' for stdin) and print the
                      messages, one per line. The exit code is the status.
    generate          Print a random solvable instance.
    benchmark         Time the solver over a grid of prime sizes and peer
                      counts and print a table of median milliseconds.
    demo              Run the walkthrough demo.

Run with:
    python -m powersum_solver.main solve instance.txt
    powersum-solver generate --bits 128 -n 10 | powersum-solver solve -
"""

import argparse
import logging
import random
import sys

from .solver.config import SolverConfig
from .solver.core import solve
from .solver.errors import SolveStatus

logger = logging.getLogger("powersum_solver")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="powersum-solver",
        description="Recover a message multiset from its power sums over F_p.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", help="solve an instance file")
    p_solve.add_argument("file", help="instance file, '-' for stdin")
    p_solve.add_argument("--seed", type=int, default=None,
                         help="seed for the randomized splitting step")
    p_solve.add_argument("--root-finder", choices=("frobenius", "exhaustive"),
                         default="frobenius")
    p_solve.add_argument("--max-split-attempts", type=int, default=64)

    p_gen = sub.add_parser("generate", help="print a random solvable instance")
    p_gen.add_argument("--bits", type=int, default=127)
    p_gen.add_argument("-n", type=int, default=5, dest="n")
    p_gen.add_argument("--seed", type=int, default=None)

    p_bench = sub.add_parser("benchmark", help="time the solver")
    p_bench.add_argument("--bits", type=int, nargs="+", default=[64, 128, 256])
    p_bench.add_argument("-n", type=int, nargs="+", default=[5, 10, 20], dest="n")
    p_bench.add_argument("--repeats", type=int, default=3)
    p_bench.add_argument("--seed", type=int, default=0)

    sub.add_parser("demo", help="run the walkthrough demo")
    return parser


def run_solve(args) -> int:
    from .solver.benchmark import parse_instance_text

    if args.file == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(args.file, "r", encoding="ascii") as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"error: cannot read {args.file}: {e}", file=sys.stderr)
            return int(SolveStatus.INPUT_ERROR)

    try:
        prime, my_message, sums = parse_instance_text(text)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return int(SolveStatus.INPUT_ERROR)

    config = SolverConfig(name="cli", root_finder=args.root_finder,
                          max_split_attempts=args.max_split_attempts)
    result = solve(prime, my_message, sums, seed=args.seed, config=config)
    if result.ok:
        for message in result.messages:
            print(message)
    else:
        print(f"{result.status.name}: {result.error}", file=sys.stderr)
    return int(result.status)


def run_generate(args) -> int:
    from .solver.benchmark import generate_instance

    instance = generate_instance(args.bits, args.n, random.Random(args.seed))
    sys.stdout.write(instance.to_text())
    return 0


def run_benchmark(args) -> int:
    from .solver.benchmark import run_benchmark as bench, format_results_table

    results = bench(args.bits, args.n, repeats=args.repeats, seed=args.seed)
    print(format_results_table(results))
    failures = sum(r.failures for r in results)
    if failures:
        logger.error("%d benchmark runs returned a wrong solution", failures)
        return 1
    return 0


def run_demo(args) -> int:
    from .solver.demo import main as demo_main

    demo_main(interactive=False)
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    commands = {
        "solve": run_solve,
        "generate": run_generate,
        "benchmark": run_benchmark,
        "demo": run_demo,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
