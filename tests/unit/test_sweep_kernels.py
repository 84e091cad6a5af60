"""Unit tests for sweep_kernels: bellman_sweep.

Compares the vectorised tile kernel against a triple-loop reference.
"""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from huggett_vfi.econ import INFEASIBLE_UTILITY
from huggett_vfi.vfi.kernels.bellman_kernels import compute_ev
from huggett_vfi.vfi.kernels.sweep_kernels import bellman_sweep, bellman_sweep_core


def _setup(na=12, seed=0, r=0.01, w=1.0, beta=0.96):
    rng = np.random.default_rng(seed)
    a_grid = np.linspace(0.0, 11.0, na)
    e_grid = np.array([0.25, 2.0])
    P = np.array([[0.55, 0.45], [0.15, 0.85]])
    V = rng.normal(scale=5.0, size=(na, 2))
    cash = (1.0 + r) * a_grid[:, None] + w * e_grid[None, :]
    ev = compute_ev(
        tf.constant(V), tf.constant(P), tf.constant(beta, tf.float64)
    )
    return a_grid, e_grid, P, V, cash, ev


class TestBellmanSweep:
    """Tests for the tile sweep kernel."""

    @pytest.mark.parametrize("kernel", [bellman_sweep, bellman_sweep_core])
    def test_matches_triple_loop(self, kernel, reference_sweep):
        a_grid, e_grid, P, V, cash, ev = _setup()
        v_ref, idx_ref = reference_sweep(
            a_grid, e_grid, P, V, beta=0.96, gamma=2.0, r=0.01, w=1.0
        )
        v, idx = kernel(
            tf.constant(cash), tf.constant(a_grid), ev, risk_aversion=2.0
        )
        np.testing.assert_allclose(v.numpy(), v_ref, rtol=1e-10)
        np.testing.assert_array_equal(idx.numpy(), idx_ref)

    def test_tile_of_rows_matches_full(self):
        """A tile of states reproduces the corresponding rows of a full sweep."""
        a_grid, _, _, _, cash, ev = _setup(na=15, seed=3)
        v_full, idx_full = bellman_sweep_core(
            tf.constant(cash), tf.constant(a_grid), ev, 2.0
        )
        v_tile, idx_tile = bellman_sweep_core(
            tf.constant(cash[4:9]), tf.constant(a_grid), ev, 2.0
        )
        np.testing.assert_array_equal(v_tile.numpy(), v_full.numpy()[4:9])
        np.testing.assert_array_equal(idx_tile.numpy(), idx_full.numpy()[4:9])

    def test_output_shapes_and_dtypes(self):
        a_grid, _, _, _, cash, ev = _setup(na=10)
        v, idx = bellman_sweep(
            tf.constant(cash[:3]), tf.constant(a_grid), ev, risk_aversion=2.0
        )
        assert v.shape == (3, 2)
        assert idx.shape == (3, 2)
        assert v.dtype == tf.float64
        assert idx.dtype == tf.int32

    def test_all_choices_infeasible(self):
        """No positive consumption anywhere → penalty value and index 0."""
        a_grid = tf.constant([0.0, 1.0, 2.0], dtype=tf.float64)
        cash = tf.zeros((3, 2), dtype=tf.float64)
        ev = tf.ones((3, 2), dtype=tf.float64)
        v, idx = bellman_sweep_core(cash, a_grid, ev, 2.0)
        np.testing.assert_array_equal(v.numpy(), INFEASIBLE_UTILITY)
        np.testing.assert_array_equal(idx.numpy(), 0)

    def test_zero_consumption_is_infeasible(self):
        """A choice leaving exactly zero consumption is never selected."""
        a_grid = tf.constant([0.0, 1.0, 2.0], dtype=tf.float64)
        cash = tf.constant([[1.0]], dtype=tf.float64)
        # Huge continuation value at a' = 1 where c == 0.
        ev = tf.constant([[0.0], [1e6], [0.0]], dtype=tf.float64)
        v, idx = bellman_sweep_core(cash, a_grid, ev, 2.0)
        assert int(idx[0, 0]) == 0
        assert float(v[0, 0]) == pytest.approx(-1.0)

    def test_penalty_override(self):
        a_grid = tf.constant([0.0, 1.0], dtype=tf.float64)
        cash = tf.zeros((1, 1), dtype=tf.float64)
        ev = tf.zeros((2, 1), dtype=tf.float64)
        v, _ = bellman_sweep_core(cash, a_grid, ev, 2.0, penalty=-123.0)
        assert float(v[0, 0]) == -123.0

    def test_log_utility(self):
        a_grid = tf.constant([0.0, 0.5], dtype=tf.float64)
        cash = tf.constant([[1.0]], dtype=tf.float64)
        ev = tf.zeros((2, 1), dtype=tf.float64)
        v, idx = bellman_sweep_core(cash, a_grid, ev, 1.0)
        # log(1) = 0 beats log(0.5)
        assert int(idx[0, 0]) == 0
        assert float(v[0, 0]) == pytest.approx(0.0, abs=1e-14)

    def test_penalty_not_rounded(self):
        """A penalty with no exact float32 form is returned unchanged."""
        a_grid = tf.constant([0.0, 1.0], dtype=tf.float64)
        cash = tf.zeros((1, 1), dtype=tf.float64)
        ev = tf.zeros((2, 1), dtype=tf.float64)
        v, _ = bellman_sweep_core(cash, a_grid, ev, 2.0, penalty=-1234567.891)
        assert float(v[0, 0]) == -1234567.891


class TestInfeasibleRanking:
    """Feasible choices always beat infeasible ones."""

    @pytest.mark.parametrize("kernel", [bellman_sweep, bellman_sweep_core])
    def test_feasible_utility_below_penalty_still_chosen(self, kernel):
        """c = 0.005 with γ=5 gives utility ≈ -4e8, far below the penalty."""
        a_grid = tf.constant([0.0, 0.1, 0.2], dtype=tf.float64)
        cash = tf.constant([[0.005]], dtype=tf.float64)
        ev = tf.zeros((3, 1), dtype=tf.float64)
        v, idx = kernel(cash, a_grid, ev, risk_aversion=5.0)
        assert int(idx[0, 0]) == 0
        assert float(v[0, 0]) == pytest.approx(0.005 ** -4 / -4.0, rel=1e-12)
        assert float(v[0, 0]) < INFEASIBLE_UTILITY

    def test_low_value_continuation_still_chosen(self):
        """A very negative continuation value does not lose to infeasibility."""
        a_grid = tf.constant([0.0, 1.0, 2.0], dtype=tf.float64)
        cash = tf.constant([[1.5]], dtype=tf.float64)
        ev = tf.constant([[-1e9], [-1e9], [0.0]], dtype=tf.float64)
        v, idx = bellman_sweep_core(cash, a_grid, ev, 2.0)
        assert int(idx[0, 0]) == 1
        assert float(v[0, 0]) == pytest.approx(-2.0 - 1e9)

    def test_matches_triple_loop_with_high_risk_aversion(self, reference_sweep):
        a_grid = np.linspace(0.0, 2.0, 9)
        e_grid = np.array([0.005, 2.0])
        P = np.array([[0.55, 0.45], [0.15, 0.85]])
        V = np.zeros((9, 2))
        cash = 1.01 * a_grid[:, None] + e_grid[None, :]
        ev = compute_ev(
            tf.constant(V), tf.constant(P), tf.constant(0.96, tf.float64)
        )
        v_ref, idx_ref = reference_sweep(
            a_grid, e_grid, P, V, beta=0.96, gamma=5.0, r=0.01, w=1.0
        )
        v, idx = bellman_sweep_core(
            tf.constant(cash), tf.constant(a_grid), ev, 5.0
        )
        np.testing.assert_allclose(v.numpy(), v_ref, rtol=1e-10)
        np.testing.assert_array_equal(idx.numpy(), idx_ref)
        assert idx_ref[0, 0] == 0
