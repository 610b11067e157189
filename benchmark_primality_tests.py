"""
Script to verify and benchmark the AKS implementation against reference
primality tests.

1. Verification: every n up to a bound is classified by each method and
   compared with sympy.isprime.
2. Benchmark: wall-clock time per method and input, with a per-call time
   budget enforced through the AKS cancellation token.
3. A LaTeX table of the averaged timings is written to the output directory.
"""

import time
import math
import os

from sympy import isprime, nextprime

from primality_test import AKSPrimalityTest, CancellationToken, ComputationCancelled, trial_division


def run_with_timeout(func, args, timeout_seconds=300):
    """
    Run func(*args, token=...) with a cancellation deadline.
    Returns (result, execution_time) or (None, float('inf')) if the deadline passes.
    """
    token = CancellationToken(deadline=timeout_seconds)

    start_time = time.perf_counter()
    try:
        result = func(*args, token=token)
    except ComputationCancelled:
        return None, float('inf')
    return result, time.perf_counter() - start_time


def optimized_trial_division(n, token=None):
    """Trial division over 6k +/- 1 candidates."""
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if token is not None and i % 65537 == 5:
            token.check("trial division")
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def build_methods():
    """Name -> callable(n, token=None) for every method under test."""
    exact = AKSPrimalityTest()
    approximate = AKSPrimalityTest(exact_threshold=False)
    return {
        "Trial Div.": lambda n, token=None: trial_division(n),
        "Opt. Trial Div.": optimized_trial_division,
        "AKS": exact.is_prime,
        "AKS (float log)": approximate.is_prime,
        "SymPy": lambda n, token=None: bool(isprime(n)),
    }


# Method properties (deterministic and theoretical basis)
PROPERTIES = {
    "Trial Div.": ("Yes", "Exhaus."),
    "Opt. Trial Div.": ("Yes", "Exhaus."),
    "AKS": ("Yes", "Poly."),
    "AKS (float log)": ("Yes", "Poly."),
    "SymPy": ("Yes*", "BPSW"),
}


def format_scientific(num):
    """Format number in LaTeX scientific notation."""
    if num == float('inf') or math.isnan(num):
        return r"$\infty$"
    if num == 0:
        return r"$0$"

    exponent = int(math.floor(math.log10(abs(num))))
    mantissa = num / 10**exponent
    return f"${mantissa:.2f} \\times 10^{{{exponent}}}$"


def create_latex_table(results, method_names, test_numbers, repetitions):
    """Create LaTeX table from benchmark results (method -> n -> seconds)."""
    # Fastest method for each test number
    fastest = {}
    for n in test_numbers:
        fastest[n] = min(method_names, key=lambda name: results[name][n])

    table = "\\begin{table}[h]\n"
    table += "\\centering\n"
    table += "\\small\n"
    table += "\\begin{tabular}{|l|" + "c|" * len(test_numbers) + "c|c|}\n"
    table += "\\hline\n"

    table += "\\textbf{Method}"
    for n in test_numbers:
        table += " & ${\\bf n \\approx 10^{" + str(int(math.log10(n))) + "}}$"
    table += " & \\textbf{Det.?} & \\textbf{Theory} \\\\\n"
    table += "\\hline\n"

    for name in method_names:
        table += name
        for n in test_numbers:
            formatted_time = format_scientific(results[name][n])
            if name == fastest[n] and math.isfinite(results[name][n]):
                formatted_time = "${\\bf " + formatted_time[1:-1] + "}$"
            table += " & " + formatted_time

        det, theory = PROPERTIES.get(name, ("N/A", "N/A"))
        table += " & " + det + " & " + theory + " \\\\\n"

    table += "\\hline\n"
    table += "\\end{tabular}\n"

    caption = "Comparative performance of primality testing algorithms (average of " + str(repetitions) + " runs). "
    caption += "Bold values indicate fastest performance. SymPy (*) is deterministic below $2^{64}$."
    table += "\\caption{" + caption + "}\n"
    table += "\\label{tab:performance}\n"
    table += "\\end{table}"

    return table


def run_benchmarks(test_numbers, repetitions=3, output_dir="figures", timeout_secs=120):
    """
    Time every method on every test number.
    Returns method -> n -> average seconds (inf when every run timed out).
    """
    os.makedirs(output_dir, exist_ok=True)
    methods = build_methods()
    method_names = list(methods)

    all_times = {name: {n: [] for n in test_numbers} for name in method_names}

    for rep in range(1, repetitions + 1):
        print(f"Repetition {rep}/{repetitions}")

        for n in test_numbers:
            print(f"Testing n = {n}")

            for name, method in methods.items():
                result, execution_time = run_with_timeout(method, [n], timeout_secs)
                if result is None:
                    print(f"  {name}: Timed out after {timeout_secs} seconds")
                else:
                    print(f"  {name}: {execution_time:.6f} seconds - Result: {result}")
                all_times[name][n].append(execution_time)

    avg_results = {name: {} for name in method_names}
    for name in method_names:
        for n in test_numbers:
            valid_times = [t for t in all_times[name][n] if math.isfinite(t)]
            avg_results[name][n] = sum(valid_times) / len(valid_times) if valid_times else float('inf')

    latex_table = create_latex_table(avg_results, method_names, test_numbers, repetitions)
    table_path = os.path.join(output_dir, "performance_table.tex")
    with open(table_path, "w") as f:
        f.write(latex_table)

    print(f"\nResults saved to {table_path}")
    return avg_results


def verify_primality_tests(max_n=50):
    """
    Check that every method agrees with sympy.isprime for 0 <= n <= max_n.
    Returns (results, disagreements) where disagreements holds
    (n, method, result, expected) tuples.
    """
    methods = build_methods()
    results = {}
    disagreements = []

    for n in range(0, max_n + 1):
        expected = bool(isprime(n))
        results[n] = {}
        for name, method in methods.items():
            outcome = method(n)
            results[n][name] = outcome
            if outcome != expected:
                disagreements.append((n, name, outcome, expected))

    print("\nVerification Results:")
    if disagreements:
        print(f"Found {len(disagreements)} disagreements:")
        for n, method, result, expected in disagreements:
            print(f"  n = {n}: {method} returned {result}, expected {expected}")
    else:
        print("All methods agree for numbers 0 to", max_n)

    return results, disagreements


if __name__ == "__main__":
    print("Verifying primality test implementations...")
    verify_results, disagreements = verify_primality_tests(200)

    if not disagreements:
        # One prime per magnitude
        test_numbers = [int(nextprime(10 ** k)) for k in range(2, 6)]

        print("\nRunning benchmarks on primality tests...")
        results = run_benchmarks(test_numbers, repetitions=3, timeout_secs=300)

        print("\nPerformance Table:")
        print(create_latex_table(results, list(results), test_numbers, 3))
    else:
        print("\nCannot run benchmarks due to disagreements in primality test implementations.")
