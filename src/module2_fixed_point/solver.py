# file: src/module2_fixed_point/solver.py

"""
Fixed-point consistency solver.

Repeats encode -> inject noise -> decode on a 4-bit state until two
successive states agree within tolerance, or the iteration limit is hit.

Pipeline per iteration:
    state
    → HammingCodec.encode
    → inject_errors (error_rate)
    → HammingCodec.decode (single-error correction)
    → convergence check against the previous state
    → optional probabilistic damping
"""

import logging
import math
import time
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from ..module1_hamming.hamming_codec import (
    DATA_LENGTH,
    Codeword,
    DataWord,
    DecodeResult,
    HammingCodec,
    hamming_distance,
    validate_bits,
)
from ..module1_hamming.metrics import compute_ber
from ..module1_hamming.noise import RandomSource, as_generator, inject_errors
from .config import SolverConfig
from .records import ErrorCorrectionStats, IterationRecord, SolveResult

logger = logging.getLogger(__name__)


def convergence_error(current: Sequence[int], previous: Sequence[int]) -> float:
    """Fraction of bits that differ between two states."""
    return hamming_distance(current, previous) / len(current)


def convergence_rate(history: Sequence[IterationRecord]) -> float:
    """
    Mean exponential rate at which the convergence error shrinks.

    Uses pairs of consecutive errors from the third iteration onward where
    both errors are nonzero and the error strictly decreased; each pair
    contributes -ln(e_i / e_{i-1}).

    Returns:
        Average rate (higher is faster), 0.0 when no pair qualifies
    """
    rates = []
    for i in range(2, len(history)):
        e_prev = history[i - 1].convergence_error
        e_curr = history[i].convergence_error
        if e_prev > 0 and e_curr > 0:
            rate = math.log(e_curr / e_prev)
            if math.isfinite(rate) and rate < 0:
                rates.append(-rate)

    return sum(rates) / len(rates) if rates else 0.0


def analyze_error_correction(history: Sequence[IterationRecord]) -> ErrorCorrectionStats:
    """Tally syndrome detections and how many restored the encoded word."""
    if not history:
        return ErrorCorrectionStats()

    detected = 0
    corrected = 0
    for record in history:
        if record.error_detected:
            detected += 1
            if record.state_after == record.state_before:
                corrected += 1

    channel_ber = float(np.mean([
        compute_ber(record.encoded, record.transmitted) for record in history
    ]))

    return ErrorCorrectionStats(
        errors_detected=detected,
        errors_corrected=corrected,
        correction_efficiency=corrected / detected if detected > 0 else 1.0,
        average_errors_per_iteration=detected / len(history),
        channel_ber=channel_ber,
    )


def resolve_config(config: Any) -> SolverConfig:
    """Accept a SolverConfig, a mapping of its fields, or None; always validated."""
    if config is None:
        return SolverConfig()
    if isinstance(config, SolverConfig):
        return config.validate()
    return SolverConfig.from_dict(config)


class ConsistencySolver:
    """
    Searches for a data word that survives the noisy round trip unchanged.

    The solver holds no per-run state: every call to solve() owns its own
    history and random stream, so one instance can serve many callers.
    """

    def __init__(self, codec: Optional[HammingCodec] = None):
        """
        Initialize solver.

        Args:
            codec: Block code used for each cycle (default Hamming(7,4))
        """
        self.codec = codec if codec is not None else HammingCodec()

    def solve(
        self,
        initial_state: Sequence[int],
        config: Optional[Any] = None,
        rng: RandomSource = None
    ) -> SolveResult:
        """
        Run the fixed-point iteration from an initial data word.

        Args:
            initial_state: 4-bit starting word
            config: SolverConfig, a mapping of its fields, or None for defaults
            rng: Generator or seed driving both noise and damping draws

        Returns:
            SolveResult; converged=False when max_iterations was exhausted

        Raises:
            InvalidInputError: If initial_state is not 4 bits
            InvalidParameterError: If any configuration value is out of range
        """
        config = resolve_config(config)
        current = validate_bits(initial_state, DATA_LENGTH, "initial state")
        generator = as_generator(rng)

        start_time = time.perf_counter()
        initial = current
        history = []
        converged = False
        error = math.inf

        for iteration in range(1, config.max_iterations + 1):
            previous = current
            encoded, transmitted, decoded = self.apply_cycle(previous, config.error_rate, generator)

            error = convergence_error(decoded.data_bits, previous)
            converged = error <= config.tolerance

            current = decoded.data_bits
            if not converged and config.adaptive_step:
                current = self.apply_damping(current, previous, config.damping_factor, generator)

            history.append(IterationRecord(
                iteration=iteration,
                state_before=previous,
                encoded=encoded,
                transmitted=transmitted,
                state_after=decoded.data_bits,
                error_detected=decoded.error_detected,
                error_position=decoded.error_position,
                convergence_error=error,
                next_state=current,
            ))
            logger.debug(
                f"Iteration {iteration}: {previous} -> {decoded.data_bits} "
                f"(error={error:.3f}, syndrome={decoded.syndrome_value})"
            )

            if converged:
                break

        history = tuple(history)
        final_state = current

        if converged:
            logger.info(f"Converged to {final_state} after {len(history)} iterations")
        else:
            logger.info(
                f"No convergence after {len(history)} iterations "
                f"(final error {error:.3f})"
            )

        return SolveResult(
            final_state=final_state,
            converged=converged,
            iterations=len(history),
            final_error=error,
            history=history,
            convergence_rate=convergence_rate(history),
            error_correction=analyze_error_correction(history),
            config=config,
            initial_state=initial,
            elapsed_seconds=time.perf_counter() - start_time,
        )

    def apply_cycle(
        self,
        state: DataWord,
        error_rate: float,
        rng: np.random.Generator
    ) -> Tuple[Codeword, Codeword, DecodeResult]:
        """
        One encode -> noisy channel -> decode pass.

        Returns:
            (encoded codeword, transmitted codeword, DecodeResult)
        """
        encoded = self.codec.encode(state)
        transmitted = inject_errors(encoded, error_rate, rng)
        return encoded, transmitted, self.codec.decode(transmitted)

    @staticmethod
    def apply_damping(
        current: DataWord,
        previous: DataWord,
        damping_factor: float,
        rng: np.random.Generator
    ) -> DataWord:
        """
        Probabilistically hold back a state transition.

        Each bit that changed keeps its new value with probability
        1 - damping_factor and reverts otherwise. Unchanged bits draw no
        randomness.
        """
        damped = []
        for new_bit, old_bit in zip(current, previous):
            if new_bit != old_bit and rng.random() >= 1.0 - damping_factor:
                damped.append(old_bit)
            else:
                damped.append(new_bit)
        return tuple(damped)


def solve(
    initial_state: Sequence[int],
    config: Optional[Any] = None,
    rng: RandomSource = None,
    codec: Optional[HammingCodec] = None
) -> SolveResult:
    """Convenience wrapper around ConsistencySolver(codec).solve()."""
    return ConsistencySolver(codec).solve(initial_state, config, rng)
