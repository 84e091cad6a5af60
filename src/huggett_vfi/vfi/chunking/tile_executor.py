"""Python tiling loop over current-asset states with kernel delegation.

Splits the current-asset axis into contiguous tiles, evaluates each tile
with the sweep kernel, and concatenates the results in order.  Tiles
read only the shared (immutable) cash-on-hand, grid and expected-value
tensors and produce disjoint output slices, so they may be evaluated on
a thread pool without locks.  ``pool.map`` returns only once every tile
has finished, which is the barrier before the convergence check.

A short last tile is padded with copies of its final row so that every
kernel call sees the same shape and the compiled kernel is traced once.
The padded rows are dropped from the output.

The executor receives the kernel as a callable, enabling substitution
with mocks in unit tests.
"""

from __future__ import annotations

from multiprocessing.pool import ThreadPool
from typing import Callable, List, Optional, Tuple

import tensorflow as tf

# Signature: (cash_on_hand_tile, asset_grid, discounted_ev) -> (v, idx)
SweepKernelFn = Callable[
    [tf.Tensor, tf.Tensor, tf.Tensor], Tuple[tf.Tensor, tf.Tensor]
]


def tile_bounds(n_states: int, chunk_size: int) -> List[Tuple[int, int]]:
    """Return ``[(start, end), ...]`` covering ``range(n_states)`` in order."""
    return [
        (start, min(start + chunk_size, n_states))
        for start in range(0, n_states, chunk_size)
    ]


def pad_tile(tile: tf.Tensor, n_rows: int) -> tf.Tensor:
    """Repeat the last row of *tile* until it has *n_rows* rows."""
    missing = n_rows - int(tile.shape[0])
    if missing <= 0:
        return tile
    filler = tf.repeat(tile[-1:], missing, axis=0)
    return tf.concat([tile, filler], axis=0)


def execute_state_tiles(
    cash_on_hand: tf.Tensor,
    asset_grid: tf.Tensor,
    discounted_ev: tf.Tensor,
    chunk_size: int,
    sweep_kernel: SweepKernelFn,
    pool: Optional[ThreadPool] = None,
) -> Tuple[tf.Tensor, tf.Tensor]:
    """Compute the Bellman maximisation for all states via tiled execution.

    Parameters
    ----------
    cash_on_hand : tf.Tensor
        ``(na, nz)`` resources of every current state.
    asset_grid : tf.Tensor
        ``(na,)`` asset grid (choice set).
    discounted_ev : tf.Tensor
        ``(na, nz)`` discounted expected continuation value.
    chunk_size : int
        Number of current-asset states per tile.
    sweep_kernel : callable
        Tile kernel; ``sweep_kernel(cash_tile, asset_grid, discounted_ev)``
        must return ``(v_tile, idx_tile)`` of shape ``(n_tile, nz)``.
    pool : ThreadPool, optional
        Worker pool owned by the caller and reused across sweeps.  Without
        a pool, or with a single tile, tiles run sequentially in the
        calling thread.

    Returns
    -------
    v_next : tf.Tensor
        ``(na, nz)`` maximised value.
    policy_idx : tf.Tensor
        ``(na, nz)`` leftmost maximising next-asset index.
    """
    n_states = int(cash_on_hand.shape[0])
    bounds = tile_bounds(n_states, chunk_size)
    tile_rows = min(chunk_size, n_states)

    def _run_tile(tile: Tuple[int, int]) -> Tuple[tf.Tensor, tf.Tensor]:
        start, end = tile
        cash_tile = pad_tile(cash_on_hand[start:end], tile_rows)
        v, idx = sweep_kernel(cash_tile, asset_grid, discounted_ev)
        return v[: end - start], idx[: end - start]

    if pool is not None and len(bounds) > 1:
        parts = pool.map(_run_tile, bounds)
    else:
        parts = [_run_tile(tile) for tile in bounds]

    if len(parts) == 1:
        return parts[0]

    v_parts = [v for v, _ in parts]
    idx_parts = [idx for _, idx in parts]
    return tf.concat(v_parts, axis=0), tf.concat(idx_parts, axis=0)
