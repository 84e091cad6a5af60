"""Brute-force Bellman sweep over a tile of asset states.

For every current state ``(a, z)`` in the tile, every next-period asset
``a'`` on the full grid is evaluated::

    c        = m(a, z) − a'
    RHS(a')  = u(c) + β E[V(a', z') | z]      if c > 0

and the leftmost maximiser among feasible choices is kept.  Infeasible
choices (c <= 0) never beat a feasible one; a state with no feasible
choice gets the penalty value and the grid minimum.  The search is
exhaustive; no monotonicity or concavity pruning is applied.
"""

from __future__ import annotations

from typing import Tuple

import tensorflow as tf

from huggett_vfi.core.types import TENSORFLOW_DTYPE
from huggett_vfi.econ.utility import INFEASIBLE_UTILITY, UtilityFunctions
from huggett_vfi.vfi.kernels.bellman_kernels import first_argmax_core

ACCUM_DTYPE: tf.DType = TENSORFLOW_DTYPE


def bellman_sweep_core(
    cash_on_hand: tf.Tensor,
    asset_grid: tf.Tensor,
    discounted_ev: tf.Tensor,
    risk_aversion: float,
    penalty: float = INFEASIBLE_UTILITY,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """Evaluate the Bellman maximisation for a tile of states (undecorated).

    Parameters
    ----------
    cash_on_hand : tf.Tensor
        ``(n_tile, nz)`` resources ``(1 + r) a + w e`` of the tile's states.
    asset_grid : tf.Tensor
        ``(na,)`` full asset grid (the choice set).
    discounted_ev : tf.Tensor
        ``(na, nz)`` β·E[V(a', z') | z] from :func:`compute_ev`.
    risk_aversion : float
        CRRA coefficient γ (Python float, fixed at trace time).
    penalty : float
        Value of a state whose choices all have non-positive consumption.

    Returns
    -------
    v_tile : tf.Tensor
        ``(n_tile, nz)`` maximised right-hand side.
    idx_tile : tf.Tensor
        ``(n_tile, nz)`` leftmost maximising grid index of a'.
    """
    # (n_tile, 1, nz) − (1, na, 1) → (n_tile, na, nz)
    consumption = (
        cash_on_hand[:, None, :] - asset_grid[None, :, None]
    )
    feasible = consumption > 0.0
    utility = UtilityFunctions.crra(consumption, risk_aversion, penalty)

    # Infeasible choices rank below every feasible one, however low.
    rhs = tf.where(
        feasible,
        utility + discounted_ev[None, :, :],
        tf.constant(-float("inf"), dtype=ACCUM_DTYPE),
    )
    v_best, idx_best = first_argmax_core(rhs, axis=1)

    any_feasible = tf.reduce_any(feasible, axis=1)
    v_tile = tf.where(
        any_feasible,
        v_best,
        tf.convert_to_tensor(penalty, dtype=ACCUM_DTYPE),
    )
    idx_tile = tf.where(any_feasible, idx_best, tf.zeros_like(idx_best))
    return v_tile, idx_tile


@tf.function(jit_compile=True)
def bellman_sweep(
    cash_on_hand: tf.Tensor,
    asset_grid: tf.Tensor,
    discounted_ev: tf.Tensor,
    risk_aversion: float,
    penalty: float = INFEASIBLE_UTILITY,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """Evaluate the Bellman maximisation for a tile of states (XLA).

    See :func:`bellman_sweep_core` for parameter documentation.
    """
    return bellman_sweep_core(
        cash_on_hand, asset_grid, discounted_ev, risk_aversion, penalty
    )
