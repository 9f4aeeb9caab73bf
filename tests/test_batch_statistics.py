# file: tests/test_batch_statistics.py

"""
Tests for batch statistics over independent solves.

Test coverage:
    - Success rate and distributions on a clean channel
    - Error-rate jitter bounds
    - Determinism across seeds and worker counts
    - Caller-owned running accumulator
    - Parameter validation
"""

import math

import pytest

from src.module1_hamming import InvalidParameterError
from src.module2_fixed_point import (
    SolverConfig,
    SolverStatistics,
    distribution_stats,
    run_batch,
    solve,
    summarize,
)


class TestRunBatch:
    """Test the batch runner end to end."""

    def test_clean_channel_always_succeeds(self):
        stats = run_batch(100, {'error_rate': 0.0}, seed=42)

        assert stats.total_runs == 100
        assert stats.success_rate == 1.0
        assert stats.successful_runs == 100
        assert len(stats.results) == 100

    def test_clean_channel_without_jitter(self):
        """Test that every run converges on its first iteration."""
        stats = run_batch(20, SolverConfig(error_rate=0.0), seed=1, error_rate_jitter=0.0)

        assert stats.iteration_stats.count == 20
        assert stats.iteration_stats.mean == 1.0
        assert stats.iteration_stats.std == 0.0
        assert stats.iteration_stats.min == 1.0
        assert stats.iteration_stats.max == 1.0
        assert stats.average_convergence_rate == 0.0
        assert all(r.final_state == r.initial_state for r in stats.results)

    def test_jitter_bounds_error_rate(self):
        stats = run_batch(50, SolverConfig(error_rate=0.5, max_iterations=5), seed=3)

        rates = [r.config.error_rate for r in stats.results]
        assert all(0.49 <= rate <= 0.51 for rate in rates)
        assert len(set(rates)) > 1

    def test_jitter_is_clipped_at_zero(self):
        stats = run_batch(50, SolverConfig(error_rate=0.0), seed=4, error_rate_jitter=0.05)

        assert all(0.0 <= r.config.error_rate <= 0.05 for r in stats.results)

    def test_base_config_fields_preserved(self):
        base = SolverConfig(error_rate=0.1, max_iterations=7, damping_factor=0.25)
        stats = run_batch(10, base, seed=5)

        for result in stats.results:
            assert result.config.max_iterations == 7
            assert result.config.damping_factor == 0.25
            assert result.iterations <= 7

    def test_initial_states_vary(self):
        stats = run_batch(50, SolverConfig(error_rate=0.0), seed=6)

        assert len({r.initial_state for r in stats.results}) > 1

    def test_same_seed_same_batch(self):
        config = SolverConfig(error_rate=0.2)

        batch1 = run_batch(30, config, seed=7)
        batch2 = run_batch(30, config, seed=7)

        assert [r.history for r in batch1.results] == [r.history for r in batch2.results]
        assert batch1.success_rate == batch2.success_rate

    def test_thread_pool_matches_sequential(self):
        config = SolverConfig(error_rate=0.2)

        sequential = run_batch(30, config, seed=8, workers=1)
        parallel = run_batch(30, config, seed=8, workers=4)

        assert [r.history for r in sequential.results] == [r.history for r in parallel.results]
        assert sequential.iteration_stats == parallel.iteration_stats

    def test_noisy_channel_statistics_are_consistent(self):
        stats = run_batch(60, SolverConfig(error_rate=0.3, max_iterations=20), seed=9)

        converged = [r for r in stats.results if r.converged]
        assert stats.successful_runs == len(converged)
        assert stats.success_rate == len(converged) / 60
        assert stats.iteration_stats.count == len(converged)
        assert 1.0 <= stats.iteration_stats.min <= stats.iteration_stats.median
        assert stats.iteration_stats.median <= stats.iteration_stats.max <= 20
        assert stats.average_convergence_rate >= 0.0


class TestRunningStatistics:
    """Test the caller-owned accumulator."""

    def test_accumulator_threads_through_batches(self):
        start = SolverStatistics()

        first = run_batch(10, SolverConfig(error_rate=0.0), seed=10, statistics=start)
        second = run_batch(5, SolverConfig(error_rate=0.0), seed=11, statistics=first.running)

        assert start.total_runs == 0
        assert first.running.total_runs == 10
        assert second.running.total_runs == 15
        assert second.running.successful_convergences == 15
        assert second.running.success_rate == 1.0

    def test_record_moving_average(self):
        result = solve((1, 0, 0, 0), SolverConfig(error_rate=0.0), rng=0)

        stats = SolverStatistics().record(result)

        assert stats.total_runs == 1
        assert stats.successful_convergences == 1
        assert stats.average_iterations == pytest.approx(0.1)

    def test_empty_accumulator_success_rate(self):
        assert SolverStatistics().success_rate == 0.0


class TestSummaries:
    """Test reduction helpers."""

    def test_distribution_stats(self):
        stats = distribution_stats([4, 1, 3, 2])

        assert stats.count == 4
        assert stats.mean == 2.5
        assert stats.std == pytest.approx(math.sqrt(1.25))
        assert stats.min == 1.0
        assert stats.max == 4.0
        assert stats.median == 3.0
        assert stats.q25 == 2.0
        assert stats.q75 == 4.0

    def test_distribution_stats_empty(self):
        stats = distribution_stats([])

        assert stats.count == 0
        assert stats.mean == 0.0
        assert stats.median == 0.0

    def test_summarize_all_failures(self):
        config = SolverConfig(error_rate=1.0, max_iterations=2, adaptive_step=False)
        results = [solve((0, 1, 0, 1), config, rng=seed) for seed in range(5)]

        batch = summarize(results)

        assert batch.success_rate == 0.0
        assert batch.successful_runs == 0
        assert batch.iteration_stats.count == 0
        assert batch.average_iterations == 0.0
        assert batch.running.total_runs == 5

    def test_summarize_does_not_modify_results(self):
        results = [solve((1, 1, 0, 0), SolverConfig(error_rate=0.0), rng=1)]
        snapshot = [r.to_dict() for r in results]

        summarize(results)

        assert [r.to_dict() for r in results] == snapshot


class TestBatchValidation:
    """Test parameter validation."""

    @pytest.mark.parametrize("count", [0, -1, 2.5, True])
    def test_invalid_count(self, count):
        with pytest.raises(InvalidParameterError, match="count"):
            run_batch(count, SolverConfig())

    def test_invalid_jitter(self):
        with pytest.raises(InvalidParameterError, match="error_rate_jitter"):
            run_batch(5, SolverConfig(), error_rate_jitter=1.5)

    def test_invalid_workers(self):
        with pytest.raises(InvalidParameterError, match="workers"):
            run_batch(5, SolverConfig(), workers=0)

    def test_invalid_base_config(self):
        with pytest.raises(InvalidParameterError, match="max_iterations"):
            run_batch(5, {'max_iterations': -1})

    def test_non_mapping_base_config(self):
        with pytest.raises(InvalidParameterError, match="must be a mapping"):
            run_batch(5, 0.05)
