"""
Rendering of AKS results: a plain text trace and matplotlib figures for the
polynomial coefficients, the stage that decided each input, the prime stream
and its gaps.
"""

import os

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
from matplotlib.patches import Patch
from sympy import isprime

from primality_test import AKSPrimalityTest, STEP_INPUT
from prime_sieve import PrimeWindow

PRIME_COLOR = '#2C7BB6'
COMPOSITE_COLOR = '#D7191C'


def format_trace(result, width=72):
    """
    Render a result as text: a header line with the verdict, then one
    labeled block per trace step in the order the steps ran.
    """
    lines = [f"Result: {result.classification.value}", "=" * width]
    for entry in result.trace:
        lines.append(f"[{entry.step}]")
        lines.append(f"  {entry.message}")
    return "\n".join(lines)


def coefficient_values(coefficients, modulus=None):
    """
    Chart y-values for a coefficient vector (index = degree).

    With a modulus the values are scaled into [0, 1), which keeps them
    representable as floats however large n is.
    """
    if modulus:
        return np.array([c / modulus for c in coefficients], dtype=float)
    return np.array([float(c) for c in coefficients], dtype=float)


def decided_by(result):
    """Label of the stage that produced the verdict (the last trace step)."""
    return result.trace[-1].step if result.trace else STEP_INPUT


class AKSVisualizer:
    """Writes AKS figures into output_dir."""

    def __init__(self, output_dir="./figures", tester=None):
        self.output_dir = output_dir
        self.tester = tester if tester is not None else AKSPrimalityTest()
        os.makedirs(output_dir, exist_ok=True)

    def _save(self, fig, filename, tight=True):
        path = os.path.join(self.output_dir, filename)
        if tight:
            fig.tight_layout()
        fig.savefig(path, bbox_inches='tight', dpi=150)
        plt.close(fig)
        return path

    def plot_polynomial_coefficients(self, value, filename="polynomial_coefficients.pdf"):
        """
        Plot the coefficients of (X+1)^n mod (n, X^r - 1).

        Parameters:
        value -- the number to test, or an AlgorithmResult already computed
        filename -- output filename

        Returns the written path, or None when the polynomial stage did not
        run for this input.
        """
        result = value if hasattr(value, "polynomial_coefficients") else self.tester.test(value)
        if not result.polynomial_coefficients:
            return None

        n = result.n
        coeffs = result.polynomial_coefficients
        scaled = n >= 2 ** 53
        y_vals = coefficient_values(coeffs, modulus=n if scaled else None)
        x_vals = np.arange(len(coeffs))

        fig, ax = plt.subplots(figsize=(10, 5))
        color = PRIME_COLOR if result.is_prime else COMPOSITE_COLOR
        ax.plot(x_vals, y_vals, 'o-', color=color, markersize=4, alpha=0.8,
                label=f"n={n} ({result.classification.value.title()})")

        ax.grid(True, alpha=0.3)
        ax.set_xlabel("Degree", fontsize=12)
        ax.set_ylabel("Coefficient / n" if scaled else "Coefficient", fontsize=12)
        ax.set_title("Coefficients of (X+1)^n mod (n, X^r - 1)", fontsize=14, pad=15)
        ax.legend(loc='best', fontsize=10)

        return self._save(fig, filename)

    def plot_decision_stages(self, n_values, filename="decision_stages.pdf"):
        """
        Bar chart of the stage that decided each n.

        Parameters:
        n_values -- list of integers to test
        filename -- output filename
        """
        stages = []
        labels = []
        colors = []
        for n in n_values:
            result = self.tester.test(n)
            stages.append(decided_by(result))
            labels.append(str(n))
            colors.append(PRIME_COLOR if result.is_prime else COMPOSITE_COLOR)

        # Stage labels in first-seen order, mapped to bar heights
        order = list(dict.fromkeys(stages))
        heights = [order.index(s) + 1 for s in stages]

        fig, ax = plt.subplots(figsize=(12, 6))
        x_pos = np.arange(len(heights))
        ax.bar(x_pos, heights, color=colors)

        tick_step = max(1, len(x_pos) // 30)
        ax.set_xticks(x_pos[::tick_step])
        ax.set_xticklabels(labels[::tick_step], rotation=90 if len(labels) > 20 else 0, fontsize=8)
        ax.set_yticks(range(1, len(order) + 1))
        ax.set_yticklabels(order, fontsize=9)
        ax.set_title("Deciding Stage of the AKS Test", fontsize=14, pad=15)

        legend_elements = [
            Patch(facecolor=PRIME_COLOR, label='Prime'),
            Patch(facecolor=COMPOSITE_COLOR, label='Composite')
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=10)

        return self._save(fig, filename)

    def plot_primes(self, window, filename="primes.pdf"):
        """Line chart of the primes held in a PrimeWindow against their index."""
        fig, ax = plt.subplots(figsize=(10, 5))
        self._plot_primes_inset(ax, window)
        return self._save(fig, filename)

    def plot_prime_gaps(self, window, filename="prime_gaps.pdf"):
        """Bar chart of the gaps between consecutive primes of a PrimeWindow."""
        fig, ax = plt.subplots(figsize=(10, 5))
        self._plot_gaps_inset(ax, window)
        return self._save(fig, filename)

    def create_full_analysis(self, n_values, prime_count=1000, filename="full_analysis.pdf"):
        """
        Combined figure: deciding stages on top, primes and gaps below.

        Parameters:
        n_values -- integers for the stage chart
        prime_count -- number of primes to pull into the window
        filename -- output filename
        """
        window = PrimeWindow()
        window.advance(prime_count)

        fig = plt.figure(figsize=(18, 10))
        gs = gridspec.GridSpec(2, 2, height_ratios=[1, 1], hspace=0.3, wspace=0.2)

        ax1 = fig.add_subplot(gs[0, :])
        self._plot_verdicts_inset(ax1, n_values)

        ax2 = fig.add_subplot(gs[1, 0])
        self._plot_primes_inset(ax2, window)

        ax3 = fig.add_subplot(gs[1, 1])
        self._plot_gaps_inset(ax3, window)

        # GridSpec spacing is set explicitly; tight_layout does not apply to it
        return self._save(fig, filename, tight=False)

    def _plot_verdicts_inset(self, ax, n_values):
        """AKS verdict per n, checked against sympy."""
        verdicts = [self.tester.is_prime(n) for n in n_values]
        mismatches = [n for n, v in zip(n_values, verdicts) if v != isprime(n)]

        x_pos = np.arange(len(n_values))
        colors = [PRIME_COLOR if v else COMPOSITE_COLOR for v in verdicts]
        ax.bar(x_pos, [1] * len(n_values), color=colors)

        tick_step = max(1, len(x_pos) // 20)
        ax.set_xticks(x_pos[::tick_step])
        ax.set_xticklabels([str(n) for n in n_values][::tick_step], fontsize=8)
        ax.set_yticks([])
        ax.set_title("AKS Verdicts", fontsize=12)

        note = "Agrees with sympy.isprime" if not mismatches else f"Mismatches: {mismatches}"
        ax.text(0.5, 0.5, note, transform=ax.transAxes, ha='center', fontsize=10,
                bbox=dict(facecolor='white', alpha=0.9, pad=5, edgecolor='lightgray'))

    def _plot_primes_inset(self, ax, window):
        primes = window.primes
        x_vals = np.arange(window.first_index, window.first_index + len(primes))
        ax.plot(x_vals, primes, color='#2c3e50', linewidth=1)
        ax.fill_between(x_vals, primes, color='#2c3e50', alpha=0.2)
        ax.grid(True, alpha=0.3)
        ax.set_xlabel("Prime Index", fontsize=10)
        ax.set_ylabel("Prime Number", fontsize=10)
        ax.set_title(f"Prime Index and Value (Last {len(primes)} Primes)", fontsize=12)

    def _plot_gaps_inset(self, ax, window):
        gaps = window.gaps()
        ax.bar(np.arange(1, len(gaps) + 1), gaps, color='#3498db', alpha=0.5,
               edgecolor='#3498db', linewidth=1)
        ax.set_xlabel("Gap Index", fontsize=10)
        ax.set_ylabel("Gap Size", fontsize=10)
        ax.set_title("Histogram of Prime Gaps", fontsize=12)
