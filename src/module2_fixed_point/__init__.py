# file: src/module2_fixed_point/__init__.py

"""
Module 2: Fixed-Point Consistency Solver

Iterates encode -> inject noise -> decode (Module 1) on a 4-bit state until
successive states agree within tolerance, and aggregates many independent
solves into batch statistics.

This module does NOT:
- Implement the block code itself (handled by Module 1)
- Persist results or keep global statistics between calls

Public API:
    - solve(initial_state, config, rng) -> SolveResult
    - run_batch(count, base_config, seed=...) -> BatchStatistics
    - SolverConfig / load_solver_config(path)
"""

from .config import SolverConfig, load_batch_settings, load_solver_config
from .records import (
    BatchStatistics,
    DistributionStats,
    ErrorCorrectionStats,
    IterationRecord,
    SolveResult,
    SolverStatistics,
)
from .solver import (
    ConsistencySolver,
    analyze_error_correction,
    convergence_error,
    convergence_rate,
    solve,
)
from .batch import distribution_stats, run_batch, summarize

__all__ = [
    'SolverConfig',
    'load_solver_config',
    'load_batch_settings',
    'BatchStatistics',
    'DistributionStats',
    'ErrorCorrectionStats',
    'IterationRecord',
    'SolveResult',
    'SolverStatistics',
    'ConsistencySolver',
    'analyze_error_correction',
    'convergence_error',
    'convergence_rate',
    'solve',
    'distribution_stats',
    'run_batch',
    'summarize',
]

__version__ = '1.0.0'
