#!/usr/bin/env python3
"""
Convergence vs Channel Error Rate

Sweeps the channel error rate, runs a batch of independent fixed-point
solves at each rate, and writes one CSV row per rate:

error_rate, success_rate, mean/median/max iterations, mean convergence
rate, mean correction efficiency, mean channel BER.
"""

import os
import sys
import argparse
import logging
from typing import List, Optional

import numpy as np
import pandas as pd

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.module2_fixed_point import (
    load_batch_settings,
    load_solver_config,
    run_batch,
)


DEFAULT_ERROR_RATES = [0.0, 0.01, 0.02, 0.05, 0.1, 0.15, 0.2, 0.3]


def setup_logging(verbose: bool = True):
    """Configure logging for the experiment script."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def sweep_error_rates(
    error_rates: List[float],
    config_path: Optional[str] = None,
    runs: Optional[int] = None,
    seed: Optional[int] = None,
    workers: int = 1
) -> pd.DataFrame:
    """
    Run one batch per error rate and collect summary rows.

    Args:
        error_rates: Channel error rates to evaluate
        config_path: YAML config (None = packaged default)
        runs: Solves per rate (None = value from config)
        seed: Root seed (None = value from config)
        workers: Thread pool size per batch

    Returns:
        DataFrame with one row per error rate
    """
    base_config = load_solver_config(config_path)
    batch_settings = load_batch_settings(config_path)

    runs = runs if runs is not None else batch_settings['runs']
    seed = seed if seed is not None else batch_settings['seed']

    rows = []
    for index, error_rate in enumerate(error_rates):
        logging.info(f"Error rate {error_rate:.3f}: {runs} runs")

        stats = run_batch(
            runs,
            base_config.replace(error_rate=error_rate),
            seed=None if seed is None else seed + index,
            error_rate_jitter=batch_settings['error_rate_jitter'],
            workers=workers,
        )

        rows.append({
            'error_rate': error_rate,
            'success_rate': stats.success_rate,
            'mean_iterations': stats.iteration_stats.mean,
            'median_iterations': stats.iteration_stats.median,
            'max_iterations': stats.iteration_stats.max,
            'mean_convergence_rate': stats.average_convergence_rate,
            'mean_correction_efficiency': float(np.mean([
                r.error_correction.correction_efficiency for r in stats.results
            ])),
            'mean_channel_ber': float(np.mean([
                r.error_correction.channel_ber for r in stats.results
            ])),
        })

    return pd.DataFrame(rows)


def parse_arguments():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Measure fixed-point convergence across channel error rates',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python experiments/exp1_convergence_vs_error_rate.py \\
      --output experiments/results_convergence_vs_error_rate.csv

  python experiments/exp1_convergence_vs_error_rate.py \\
      --rates 0.0 0.1 0.2 --runs 500 --workers 4
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to YAML config (default: packaged default_config.yaml)'
    )

    parser.add_argument(
        '--rates',
        type=float,
        nargs='+',
        default=DEFAULT_ERROR_RATES,
        help='Channel error rates to sweep'
    )

    parser.add_argument(
        '--runs',
        type=int,
        default=None,
        help='Solves per error rate (default: batch.runs from config)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Root random seed (default: batch.seed from config)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Thread pool size per batch'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='experiments/results_convergence_vs_error_rate.csv',
        help='CSV output path'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args()


def main():
    """Main entry point for the sweep."""
    args = parse_arguments()
    setup_logging(verbose=args.verbose)

    try:
        df = sweep_error_rates(
            args.rates,
            config_path=args.config,
            runs=args.runs,
            seed=args.seed,
            workers=args.workers,
        )
    except Exception as e:
        logging.error(f"Sweep failed: {e}", exc_info=True)
        return 1

    df.to_csv(args.output, index=False)
    logging.info(f"Saved results to {args.output}")

    print(df.to_string(index=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
