# huggett_vfi/moment_calculator/compute_mean.py
"""Compute mean statistics."""

import tensorflow as tf
from huggett_vfi.core.types import TENSORFLOW_DTYPE


def compute_global_mean(data: tf.Tensor) -> tf.Tensor:
    """
    Compute the pooled mean of a panel, over individuals and periods.

    Non-finite entries are dropped before averaging; an empty selection
    gives zero.

    Args:
        data: Tensor of shape (n_individuals, n_periods)

    Returns:
        Scalar tensor with the pooled mean
    """
    panel = tf.cast(data, dtype=TENSORFLOW_DTYPE)
    values = tf.boolean_mask(panel, tf.math.is_finite(panel))
    count = tf.cast(tf.size(values), TENSORFLOW_DTYPE)
    return tf.reduce_sum(values) / tf.maximum(count, 1.0)


def compute_cross_section_mean(data: tf.Tensor) -> tf.Tensor:
    """
    Compute the mean across individuals for every period.

    Args:
        data: Tensor of shape (n_individuals, n_periods)

    Returns:
        Tensor of shape (n_periods,)
    """
    data_casted = tf.cast(data, dtype=TENSORFLOW_DTYPE)
    return tf.reduce_mean(data_casted, axis=0)
