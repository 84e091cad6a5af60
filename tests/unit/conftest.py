"""Shared test fixtures and helper utilities for VFI unit tests."""

from __future__ import annotations

import numpy as np
import pytest
import tensorflow as tf

# Force CPU for CI — must be called before any TF ops
tf.config.set_visible_devices([], 'GPU')


def brute_force_sweep(
    a_grid: np.ndarray,
    e_grid: np.ndarray,
    P: np.ndarray,
    V: np.ndarray,
    beta: float,
    gamma: float,
    r: float,
    w: float,
    penalty: float = -10_000_000.0,
):
    """Triple-loop Bellman sweep used as an independent reference.

    Infeasible choices rank below every feasible one; a state with no
    feasible choice gets *penalty* and index 0.
    """
    na, nz = V.shape
    v_new = np.empty_like(V)
    idx = np.empty((na, nz), dtype=np.int64)
    for ia in range(na):
        for ie in range(nz):
            util = np.empty(na)
            for ja in range(na):
                c = (1 + r) * a_grid[ia] + w * e_grid[ie] - a_grid[ja]
                if c > 0:
                    util[ja] = (
                        c ** (1 - gamma) / (1 - gamma)
                        + beta * np.dot(P[ie], V[ja])
                    )
                else:
                    util[ja] = -np.inf
            if np.all(np.isneginf(util)):
                idx[ia, ie] = 0
                v_new[ia, ie] = penalty
            else:
                idx[ia, ie] = int(np.argmax(util))
                v_new[ia, ie] = util[idx[ia, ie]]
    return v_new, idx


@pytest.fixture
def reference_sweep():
    """Expose :func:`brute_force_sweep` to test modules."""
    return brute_force_sweep
