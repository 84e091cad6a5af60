"""Bellman-iteration XLA kernels.

Contains three small XLA kernels:
- ``compute_ev`` — discounted expected continuation value
- ``first_argmax`` — maximum and leftmost maximising index
- ``sup_norm_diff`` — ‖a − b‖∞
"""

from __future__ import annotations

from typing import Tuple

import tensorflow as tf

from huggett_vfi.core.types import INDEX_DTYPE, TENSORFLOW_DTYPE

ACCUM_DTYPE: tf.DType = TENSORFLOW_DTYPE


def compute_ev_core(
    v_curr: tf.Tensor,
    P: tf.Tensor,
    beta: tf.Tensor,
) -> tf.Tensor:
    """Compute discounted expected continuation value (undecorated).

    Returns ``β · V @ Pᵀ``, i.e. entry ``[a', z]`` equals
    ``β Σ_{z'} P[z, z'] V[a', z']``.

    Parameters
    ----------
    v_curr : tf.Tensor
        Current value function, ``(na, nz)``.
    P : tf.Tensor
        Markov transition matrix, ``(nz, nz)``.
    beta : tf.Tensor
        Scalar discount factor.

    Returns
    -------
    tf.Tensor
        Discounted expected value, ``(na, nz)``.
    """
    ev = tf.matmul(v_curr, P, transpose_b=True)
    return beta * ev


@tf.function(jit_compile=True)
def compute_ev(
    v_curr: tf.Tensor,
    P: tf.Tensor,
    beta: tf.Tensor,
) -> tf.Tensor:
    """Compute discounted expected continuation value (XLA-compiled).

    See :func:`compute_ev_core` for parameter documentation.
    """
    return compute_ev_core(v_curr, P, beta)


def first_argmax_core(
    x: tf.Tensor,
    axis: int,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """Return the maximum along *axis* and the first index attaining it (undecorated).

    ``tf.argmax`` gives no guarantee about which index wins a tie.  Ties
    are systematic here (every infeasible choice is masked to the same
    value), so the leftmost index is selected explicitly.

    Parameters
    ----------
    x : tf.Tensor
        Values to maximise, static rank.
    axis : int
        Axis to reduce over.

    Returns
    -------
    max_val : tf.Tensor
        Maximum along *axis* (axis removed).
    idx : tf.Tensor
        Smallest index along *axis* at which the maximum is attained,
        ``INDEX_DTYPE``.
    """
    rank = x.shape.rank
    axis = axis % rank
    n = tf.shape(x, out_type=INDEX_DTYPE)[axis]

    max_keep = tf.reduce_max(x, axis=axis, keepdims=True)

    position_shape = [1] * rank
    position_shape[axis] = -1
    positions = tf.reshape(tf.range(n, dtype=INDEX_DTYPE), position_shape)

    candidates = tf.where(
        tf.equal(x, max_keep),
        tf.broadcast_to(positions, tf.shape(x)),
        tf.fill(tf.shape(x), n),
    )
    idx = tf.reduce_min(candidates, axis=axis)
    return tf.squeeze(max_keep, axis=axis), idx


@tf.function(jit_compile=True)
def first_argmax(
    x: tf.Tensor,
    axis: int,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """Return the maximum and leftmost maximising index (XLA-compiled).

    See :func:`first_argmax_core` for parameter documentation.
    """
    return first_argmax_core(x, axis)


def sup_norm_diff_core(a: tf.Tensor, b: tf.Tensor) -> tf.Tensor:
    """Compute the sup-norm ``‖a − b‖∞`` (undecorated)."""
    return tf.reduce_max(tf.abs(a - b))


@tf.function(jit_compile=True)
def sup_norm_diff(a: tf.Tensor, b: tf.Tensor) -> tf.Tensor:
    """Compute the sup-norm ``‖a − b‖∞`` (XLA-compiled)."""
    return sup_norm_diff_core(a, b)
