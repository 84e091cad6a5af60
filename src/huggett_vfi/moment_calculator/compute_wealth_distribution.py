# huggett_vfi/moment_calculator/compute_wealth_distribution.py
"""Compute the cross-sectional wealth distribution on the asset grid."""

import tensorflow as tf
from huggett_vfi.core.types import TENSORFLOW_DTYPE


def compute_wealth_distribution(
    asset_index: tf.Tensor,
    n_assets: int,
) -> tf.Tensor:
    """
    Compute the share of individuals at each asset grid point.

    Args:
        asset_index: Integer grid indices of one cross-section,
            shape (n_individuals,)
        n_assets: Number of asset grid points.

    Returns:
        Tensor of shape (n_assets,) summing to one.
    """
    idx = tf.cast(tf.reshape(asset_index, [-1]), tf.int32)
    counts = tf.math.bincount(
        idx, minlength=n_assets, maxlength=n_assets, dtype=TENSORFLOW_DTYPE
    )
    n = tf.cast(tf.size(idx), TENSORFLOW_DTYPE)
    return counts / tf.maximum(n, 1.0)
