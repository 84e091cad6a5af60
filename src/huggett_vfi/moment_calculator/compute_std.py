# huggett_vfi/moment_calculator/compute_std.py
"""Compute standard deviation statistics."""

import tensorflow as tf
from huggett_vfi.core.types import TENSORFLOW_DTYPE
from .compute_mean import compute_global_mean


def compute_global_std(data: tf.Tensor) -> tf.Tensor:
    """
    Compute the pooled sample standard deviation (ddof=1) of a panel.

    Non-finite entries are dropped; fewer than two finite entries give zero.

    Args:
        data: Tensor of shape (n_individuals, n_periods)

    Returns:
        Scalar tensor with the pooled standard deviation
    """
    panel = tf.cast(data, dtype=TENSORFLOW_DTYPE)
    values = tf.boolean_mask(panel, tf.math.is_finite(panel))
    count = tf.cast(tf.size(values), TENSORFLOW_DTYPE)
    deviation = values - compute_global_mean(values)
    return tf.sqrt(
        tf.reduce_sum(tf.square(deviation)) / tf.maximum(count - 1.0, 1.0)
    )


def compute_cross_section_std(data: tf.Tensor) -> tf.Tensor:
    """
    Compute the sample standard deviation (ddof=1) across individuals
    for every period.

    Args:
        data: Tensor of shape (n_individuals, n_periods)

    Returns:
        Tensor of shape (n_periods,); zero when there is one individual.
    """
    data = tf.cast(data, dtype=TENSORFLOW_DTYPE)
    n = tf.cast(tf.shape(data)[0], TENSORFLOW_DTYPE)
    mean = tf.reduce_mean(data, axis=0, keepdims=True)
    sum_sq = tf.reduce_sum(tf.square(data - mean), axis=0)
    return tf.sqrt(sum_sq / tf.maximum(n - 1.0, 1.0))
