#!/usr/bin/env python3
"""
Accuracy of HyperLogLog across precisions.

Runs repeated trials with differently seeded xxhash functions and plots the
distribution of relative errors for each precision against the theoretical
standard error 1.04/sqrt(m).
"""

import argparse
import numpy as np
import matplotlib.pyplot as plt
from cardinal import HyperLogLog, xxhash_function

def run_trials(precision, n_items, trials):
    """Return the relative error of each trial."""
    errors = []
    for seed in range(trials):
        sketch = HyperLogLog(precision=precision, hash_function=xxhash_function(seed=seed))
        sketch.add_batch(f"item_{i}" for i in range(n_items))
        errors.append((sketch.estimate_cardinality() - n_items) / n_items)
    return np.array(errors)

def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--items", type=int, default=5000, help="Distinct items per trial")
    parser.add_argument("--trials", type=int, default=100, help="Trials per precision")
    parser.add_argument("--output", default="hll_accuracy.png", help="Plot file")
    args = parser.parse_args()

    precisions = [6, 8, 10, 12]
    fig, axes = plt.subplots(1, len(precisions), figsize=(4 * len(precisions), 4), sharey=True)
    for ax, precision in zip(axes, precisions):
        errors = run_trials(precision, args.items, args.trials)
        expected = 1.04 / np.sqrt(2 ** precision)
        print(f"precision={precision}: mean error {errors.mean():+.4f}, "
              f"std {errors.std():.4f} (theory {expected:.4f})")
        ax.hist(errors, bins=20, color="steelblue", alpha=0.8)
        ax.axvline(-expected, color="red", linestyle="--")
        ax.axvline(expected, color="red", linestyle="--")
        ax.set_title(f"p={precision}, m={2 ** precision}")
        ax.set_xlabel("Relative error")
    axes[0].set_ylabel("Trials")
    plt.tight_layout()
    plt.savefig(args.output)
    print(f"Plot saved to {args.output}")

if __name__ == "__main__":
    main()
