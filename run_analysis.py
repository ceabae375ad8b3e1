"""
Run a Bayesian 2x2 Analysis

This script demonstrates the end-to-end workflow on a bundled table:
posterior cell probabilities, the two-group Beta-Binomial fit with credible
intervals, a sequential update, and the classical tests for comparison.

Usage:
    # Analyse the small aspirin trial with 95% HPD intervals
    uv run python run_analysis.py

    # Another dataset, equal-tailed 90% intervals
    uv run python run_analysis.py --dataset physicians_health --interval quantile --level 0.90

    # Run quietly
    uv run python run_analysis.py --quiet
"""

import argparse
import sys

from bayes2x2 import beta_binomial, multinomial, frequentist, summary, datasets
from bayes2x2.exceptions import InvalidInput, InsufficientSamples


def run_analysis(
    dataset: str = 'aspirin_mi',
    interval_type: str = 'hpd',
    level: float = 0.95,
    n_samples: int = 10000,
    seed: int = 42,
    verbose: bool = True,
):
    """Analyse one bundled table and return the fits and test results."""
    table = datasets.load_table(dataset)
    info = datasets.get_dataset_info(dataset)

    if verbose:
        print("\n" + "="*80)
        print(f" {info['name'].upper()}")
        print("="*80)
        print(f"\n{info['description']}\n")
        print(table.to_string())

    # Step 1: Cell probabilities
    cells = multinomial.estimate(table)
    if verbose:
        print("\n" + "-"*80)
        print("STEP 1: POSTERIOR CELL PROBABILITIES (Dirichlet-multinomial)")
        print("-"*80)
        print(cells.probabilities.round(4))

    # Step 2: Two-group Beta-Binomial fit
    fit = beta_binomial.fit(table)
    if verbose:
        print("\n" + "-"*80)
        print("STEP 2: BETA-BINOMIAL POSTERIOR SUMMARY")
        print("-"*80)
        print(summary.present(
            fit, interval_type=interval_type, level=level,
            n_samples=n_samples, random_state=seed,
        ))
        dq = fit.derive(n_samples=n_samples, random_state=seed)
        print(f"\nP({fit.group_labels[0]} > {fit.group_labels[1]}) = {dq.prob_greater():.2%}")

    # Step 3: Sequential update with a replicate batch of the same size
    successes, trials = [int(v) for v in table.iloc[:, 0]], [int(v) for v in table.sum(axis=1)]
    updated = fit.update(successes=successes, trials=trials)
    if verbose:
        print("\n" + "-"*80)
        print("STEP 3: SEQUENTIAL UPDATE (replicate batch)")
        print("-"*80)
        print(f"Posterior after {updated.n_updates} update(s):")
        for label, (a, b) in zip(updated.group_labels, updated.posterior):
            print(f"  {label}: Beta({a:g}, {b:g})")

    # Step 4: Classical comparison
    z = frequentist.z_test_proportions(successes[0], trials[0], successes[1], trials[1])
    fisher = frequentist.fisher_exact_test(table)
    if verbose:
        print("\n" + "-"*80)
        print("STEP 4: CLASSICAL TESTS")
        print("-"*80)
        print(f"Z-test difference: {z['difference']:.4f} "
              f"[{z['ci_lower']:.4f}, {z['ci_upper']:.4f}], p={z['p_value']:.4f}")
        print(f"Fisher exact: OR={fisher['odds_ratio']:.3f}, p={fisher['p_value']:.4f}")

    return {
        'cells': cells,
        'fit': fit,
        'updated': updated,
        'z_test': z,
        'fisher': fisher,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Bayesian analysis of a bundled 2x2 table")
    parser.add_argument('--dataset', default='aspirin_mi', choices=sorted(datasets.DATASETS))
    parser.add_argument('--interval', default='hpd', choices=['hpd', 'quantile'])
    parser.add_argument('--level', type=float, default=0.95)
    parser.add_argument('--samples', type=int, default=10000)
    parser.add_argument('--seed', type=int, default=42)
    parser.add_argument('--quiet', action='store_true', help="Suppress output")
    args = parser.parse_args(argv)

    try:
        run_analysis(
            dataset=args.dataset,
            interval_type=args.interval,
            level=args.level,
            n_samples=args.samples,
            seed=args.seed,
            verbose=not args.quiet,
        )
    except (InvalidInput, InsufficientSamples) as e:
        print(f"\n✗ Analysis failed: {e}\n")
        return 1

    if not args.quiet:
        print("\n✓ Analysis completed successfully\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
