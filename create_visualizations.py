"""
Script to create all AKS figures.
This script serves as a convenience wrapper around AKSVisualizer and also
writes the text trace of every sample number next to the figures.
"""

import os

from aks_visualization import AKSVisualizer, format_trace
from prime_sieve import PrimeWindow


def main(output_dir="figures", n_values=None, sample_numbers=(31, 97, 561, 1009)):
    os.makedirs(output_dir, exist_ok=True)

    if n_values is None:
        n_values = list(range(2, 130))

    vis = AKSVisualizer(output_dir=output_dir)

    print("Generating AKS figures...")
    vis.plot_decision_stages(n_values, filename="decision_stages.pdf")
    vis.create_full_analysis(n_values, filename="full_analysis.pdf")

    window = PrimeWindow()
    window.advance(1000)
    vis.plot_primes(window, filename="primes.pdf")
    vis.plot_prime_gaps(window, filename="prime_gaps.pdf")

    for n in sample_numbers:
        result = vis.tester.test(n)
        with open(os.path.join(output_dir, f"trace_{n}.txt"), "w") as f:
            f.write(format_trace(result) + "\n")
        path = vis.plot_polynomial_coefficients(result, filename=f"polynomial_{n}.pdf")
        if path is None:
            print(f"  n = {n}: decided before the polynomial stage ({result.trace[-1].step})")

    print(f"\nOutput files saved to: {os.path.abspath(output_dir)}")

    print("\nGenerated files:")
    for filename in sorted(os.listdir(output_dir)):
        print(f"  - {filename}")


if __name__ == "__main__":
    main()
