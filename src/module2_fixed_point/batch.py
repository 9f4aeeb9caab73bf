# file: src/module2_fixed_point/batch.py

"""
Batch statistics over independent solves.

Every run owns a child Generator spawned from a single SeedSequence, so a
batch is reproducible from one seed and gives the same results whether
runs execute sequentially or on a thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

import numpy as np

from ..module1_hamming.errors import InvalidParameterError
from ..module1_hamming.hamming_codec import HammingCodec
from ..module1_hamming.noise import random_data_word, validate_probability
from .config import SolverConfig
from .records import BatchStatistics, DistributionStats, SolveResult, SolverStatistics
from .solver import ConsistencySolver, resolve_config

logger = logging.getLogger(__name__)


def distribution_stats(values: Sequence[float]) -> DistributionStats:
    """
    Summarize a sample.

    Quantiles pick the element at floor(q * count) of the sorted sample, so
    the median of an even-sized sample is its upper middle element.
    """
    if len(values) == 0:
        return DistributionStats()

    data = np.sort(np.asarray(values, dtype=np.float64))
    count = len(data)

    return DistributionStats(
        count=count,
        mean=float(np.mean(data)),
        std=float(np.std(data)),
        min=float(data[0]),
        max=float(data[-1]),
        median=float(data[count // 2]),
        q25=float(data[int(count * 0.25)]),
        q75=float(data[int(count * 0.75)]),
    )


def _jittered_config(
    base: SolverConfig,
    jitter: float,
    rng: np.random.Generator
) -> SolverConfig:
    offset = (rng.random() - 0.5) * 2.0 * jitter
    error_rate = float(np.clip(base.error_rate + offset, 0.0, 1.0))
    return base.replace(error_rate=error_rate)


def _run_single(
    solver: ConsistencySolver,
    base: SolverConfig,
    jitter: float,
    seed: np.random.SeedSequence
) -> SolveResult:
    rng = np.random.default_rng(seed)
    initial_state = random_data_word(rng)
    config = _jittered_config(base, jitter, rng)
    return solver.solve(initial_state, config, rng)


def summarize(
    results: Sequence[SolveResult],
    statistics: Optional[SolverStatistics] = None
) -> BatchStatistics:
    """
    Reduce solve results into batch statistics without modifying them.

    Success rate counts every run; iteration and convergence-rate
    distributions only include runs that converged.
    """
    running = statistics if statistics is not None else SolverStatistics()
    for result in results:
        running = running.record(result)

    converged = [result for result in results if result.converged]
    iteration_stats = distribution_stats([r.iterations for r in converged])
    rate_stats = distribution_stats([r.convergence_rate for r in converged])
    total = len(results)

    return BatchStatistics(
        total_runs=total,
        successful_runs=len(converged),
        success_rate=len(converged) / total if total > 0 else 0.0,
        average_iterations=iteration_stats.mean,
        average_convergence_rate=rate_stats.mean,
        iteration_stats=iteration_stats,
        convergence_rate_stats=rate_stats,
        results=tuple(results),
        running=running,
    )


def run_batch(
    count: int,
    base_config: Optional[Any] = None,
    *,
    seed: Optional[int] = None,
    error_rate_jitter: float = 0.01,
    workers: int = 1,
    statistics: Optional[SolverStatistics] = None,
    codec: Optional[HammingCodec] = None
) -> BatchStatistics:
    """
    Solve ``count`` independent instances and aggregate the outcomes.

    Each instance starts from a random data word and uses the base error
    rate shifted by a uniform offset in [-error_rate_jitter, +error_rate_jitter],
    clipped into [0, 1].

    Args:
        count: Number of independent solves (> 0)
        base_config: SolverConfig, mapping of its fields, or None
        seed: Root seed; None draws fresh entropy
        error_rate_jitter: Half-width of the error-rate perturbation
        workers: Thread pool size; 1 runs sequentially
        statistics: Running accumulator to extend (never mutated)
        codec: Block code to use

    Returns:
        BatchStatistics with the updated running accumulator

    Raises:
        InvalidParameterError: On invalid count, jitter, workers or config
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count <= 0:
        raise InvalidParameterError(
            f"count must be a positive integer, got {count!r}", parameter="count", value=count
        )
    if isinstance(workers, bool) or not isinstance(workers, (int, np.integer)) or workers <= 0:
        raise InvalidParameterError(
            f"workers must be a positive integer, got {workers!r}", parameter="workers", value=workers
        )
    jitter = validate_probability(error_rate_jitter, "error_rate_jitter")
    base = resolve_config(base_config)

    solver = ConsistencySolver(codec)
    child_seeds = np.random.SeedSequence(seed).spawn(count)

    logger.info(
        f"Running batch of {count} solves (error_rate={base.error_rate}, "
        f"jitter={jitter}, workers={workers})"
    )

    results: List[SolveResult]
    if workers == 1:
        results = [_run_single(solver, base, jitter, s) for s in child_seeds]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(
                lambda s: _run_single(solver, base, jitter, s), child_seeds
            ))

    batch = summarize(results, statistics)
    logger.info(
        f"Batch finished: success_rate={batch.success_rate:.3f}, "
        f"mean iterations={batch.average_iterations:.2f}"
    )
    return batch
