# file: src/module2_fixed_point/records.py

"""Result records produced by the consistency solver."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..module1_hamming.hamming_codec import Codeword, DataWord
from .config import SolverConfig


@dataclass(frozen=True)
class IterationRecord:
    """Snapshot of one encode -> corrupt -> decode cycle."""
    iteration: int  # 1-based
    state_before: DataWord
    encoded: Codeword
    transmitted: Codeword  # After noise injection
    state_after: DataWord  # Decoded candidate
    error_detected: bool
    error_position: Optional[int]
    convergence_error: float  # Fractional Hamming distance in [0, 1]
    next_state: DataWord  # State carried forward (after damping, if any)


@dataclass(frozen=True)
class ErrorCorrectionStats:
    """
    Error correction effectiveness over one solve.

    Attributes
    ----------
    errors_detected:
        Iterations whose syndrome was nonzero.
    errors_corrected:
        Detections after which the decoded word equalled the cycle's input,
        i.e. the correction restored what was encoded.
    correction_efficiency:
        errors_corrected / errors_detected, 1.0 when nothing was detected.
    average_errors_per_iteration:
        errors_detected / number of iterations.
    channel_ber:
        Mean fraction of codeword bits flipped by the channel.
    """
    errors_detected: int = 0
    errors_corrected: int = 0
    correction_efficiency: float = 1.0
    average_errors_per_iteration: float = 0.0
    channel_ber: float = 0.0


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one fixed-point solve, owned by the caller."""
    final_state: DataWord
    converged: bool
    iterations: int
    final_error: float
    history: Tuple[IterationRecord, ...]
    convergence_rate: float
    error_correction: ErrorCorrectionStats
    config: SolverConfig
    initial_state: DataWord
    elapsed_seconds: float = 0.0

    def error_series(self) -> np.ndarray:
        """Convergence error per iteration as a float64 array."""
        return np.array([record.convergence_error for record in self.history], dtype=np.float64)

    def to_dict(self, include_history: bool = True) -> Dict[str, Any]:
        """Plain nested dict, suitable for JSON or DataFrame export."""
        report = {
            'initial_state': list(self.initial_state),
            'final_state': list(self.final_state),
            'converged': self.converged,
            'iterations': self.iterations,
            'final_error': self.final_error,
            'convergence_rate': self.convergence_rate,
            'error_correction': asdict(self.error_correction),
            'config': self.config.to_dict(),
            'elapsed_seconds': self.elapsed_seconds,
        }
        if include_history:
            report['history'] = [asdict(record) for record in self.history]
        return report


@dataclass(frozen=True)
class DistributionStats:
    """Summary of a sample of numbers (population std, lower-index quantiles)."""
    count: int = 0
    mean: float = 0.0
    std: float = 0.0
    min: float = 0.0
    max: float = 0.0
    median: float = 0.0
    q25: float = 0.0
    q75: float = 0.0


@dataclass(frozen=True)
class SolverStatistics:
    """
    Caller-owned running totals across solves.

    Immutable: ``record`` returns a new accumulator, so two callers never
    share counters by accident.
    """
    total_runs: int = 0
    successful_convergences: int = 0
    average_iterations: float = 0.0  # Exponential moving average
    smoothing: float = 0.1

    @property
    def success_rate(self) -> float:
        if self.total_runs == 0:
            return 0.0
        return self.successful_convergences / self.total_runs

    def record(self, result: SolveResult) -> "SolverStatistics":
        return SolverStatistics(
            total_runs=self.total_runs + 1,
            successful_convergences=self.successful_convergences + int(result.converged),
            average_iterations=(
                self.smoothing * result.iterations
                + (1.0 - self.smoothing) * self.average_iterations
            ),
            smoothing=self.smoothing,
        )


@dataclass(frozen=True)
class BatchStatistics:
    """Aggregate over independent solves."""
    total_runs: int
    successful_runs: int
    success_rate: float
    average_iterations: float
    average_convergence_rate: float
    iteration_stats: DistributionStats
    convergence_rate_stats: DistributionStats
    results: Tuple[SolveResult, ...] = field(repr=False, default=())
    running: SolverStatistics = field(default_factory=SolverStatistics)
