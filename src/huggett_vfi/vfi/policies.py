"""Policy extraction and formatting for the VFI solver.

Contains pure functions that map the discrete policy indices of the last
Bellman sweep to asset and consumption policies, returned as read-only
NumPy snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import tensorflow as tf

from huggett_vfi.core.types import NUMPY_DTYPE, NUMPY_INDEX_DTYPE, Array
from huggett_vfi.econ.budget import BudgetConstraint


def freeze_array(values, dtype=None) -> Array:
    """Return a read-only NumPy copy of *values* (tensor or array)."""
    if isinstance(values, tf.Tensor):
        values = values.numpy()
    arr = np.array(values, dtype=dtype, copy=True)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class PolicyFunctions:
    """Immutable policy snapshot.

    Attributes
    ----------
    policy_assets : np.ndarray
        Optimal next-period assets ``a'(a, z)``, ``(na, nz)``.
    policy_consumption : np.ndarray
        Consumption implied by the budget constraint, ``(na, nz)``.
    policy_index : np.ndarray
        Grid index of ``a'(a, z)``, ``(na, nz)`` int32.
    """

    policy_assets: Array
    policy_consumption: Array
    policy_index: Array


def extract_asset_policy(
    asset_grid: tf.Tensor,
    policy_idx: tf.Tensor,
) -> tf.Tensor:
    """Map discrete policy indices to next-period asset values.

    Parameters
    ----------
    asset_grid : tf.Tensor
        Asset grid, shape ``(na,)``.
    policy_idx : tf.Tensor
        Grid indices of optimal a', shape ``(na, nz)``.

    Returns
    -------
    tf.Tensor
        Asset policy values, shape ``(na, nz)``.
    """
    return tf.gather(asset_grid, policy_idx)


def extract_policies(
    asset_grid: tf.Tensor,
    cash_on_hand: tf.Tensor,
    policy_idx: tf.Tensor,
) -> PolicyFunctions:
    """Package the final sweep's indices into asset/consumption policies.

    Parameters
    ----------
    asset_grid : tf.Tensor
        Asset grid, ``(na,)``.
    cash_on_hand : tf.Tensor
        ``(1 + r) a + w e`` for every state, ``(na, nz)``.
    policy_idx : tf.Tensor
        Leftmost maximising next-asset index, ``(na, nz)``.

    Returns
    -------
    PolicyFunctions
        Read-only policy arrays.
    """
    policy_assets = extract_asset_policy(asset_grid, policy_idx)
    policy_consumption = BudgetConstraint.consumption(
        cash_on_hand, policy_assets
    )
    return PolicyFunctions(
        policy_assets=freeze_array(policy_assets, NUMPY_DTYPE),
        policy_consumption=freeze_array(policy_consumption, NUMPY_DTYPE),
        policy_index=freeze_array(policy_idx, NUMPY_INDEX_DTYPE),
    )
