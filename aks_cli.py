# Usage: python aks_cli.py test 31 [--timeout 10] [--float-threshold] [--plot out.pdf]
#        python aks_cli.py primes --count 20

import argparse
import logging
import os
import sys

from primality_test import (
    AKSPrimalityTest,
    CancellationToken,
    ComputationCancelled,
    MAX_PERFECT_POWER_EXPONENT,
)
from aks_visualization import AKSVisualizer, format_trace
from prime_sieve import take_primes, prime_gaps


def exponent_cap(text):
    value = int(text)
    if value < 2:
        raise argparse.ArgumentTypeError(f"must be at least 2, got {value}")
    return value


def run_test(args):
    tester = AKSPrimalityTest(max_exponent=args.max_exponent,
                              exact_threshold=not args.float_threshold)
    token = CancellationToken(deadline=args.timeout) if args.timeout is not None else None

    try:
        result = tester.test(args.number, token=token)
    except ComputationCancelled as e:
        print(f"Error: {e}", file=sys.stderr)
        return 3

    print(format_trace(result))

    if args.plot:
        output_dir, filename = os.path.split(os.path.abspath(args.plot))
        path = AKSVisualizer(output_dir=output_dir, tester=tester).plot_polynomial_coefficients(
            result, filename=filename)
        if path is None:
            print("No polynomial coefficients to plot (decided before the polynomial stage).")
        else:
            print(f"Coefficient chart written to {path}")

    return 0 if result.is_prime else 1


def run_primes(args):
    primes = take_primes(args.count)
    print("Primes:", primes)
    if args.gaps:
        print("Gaps:", prime_gaps(primes))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="AKS primality test with decision trace")
    parser.add_argument("--verbose", action="store_true", help="Log every stage at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    p_test = sub.add_parser("test", help="Test one number and print the trace")
    p_test.add_argument("number", type=str, help="Integer to test (decimal)")
    p_test.add_argument("--timeout", type=float, default=None,
                        help="Abort after this many seconds")
    p_test.add_argument("--float-threshold", action="store_true",
                        help="Use double precision log2 for the order bound")
    p_test.add_argument("--max-exponent", type=exponent_cap, default=MAX_PERFECT_POWER_EXPONENT,
                        help="Largest exponent tried by the perfect power check")
    p_test.add_argument("--plot", type=str, default=None,
                        help="Write the (X+1)^n coefficient chart to this file")
    p_test.set_defaults(func=run_test)

    p_primes = sub.add_parser("primes", help="Print the first primes")
    p_primes.add_argument("--count", type=int, default=20, help="Number of primes")
    p_primes.add_argument("--gaps", action="store_true", help="Also print the gaps")
    p_primes.set_defaults(func=run_primes)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
