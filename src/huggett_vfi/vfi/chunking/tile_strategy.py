"""Compute tile dimensions from a memory budget.

A Bellman sweep over ``n_tile`` states materialises a
``(n_tile, n_assets, n_productivity)`` right-hand-side tensor plus the
consumption and utility tensors of the same shape.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

BYTES_PER_ELEM: int = 8 * 3  # float64 × 3 concurrent tensors


def compute_state_chunk(
    n_assets: int,
    n_productivity: int,
    memory_limit_gb: float = 1.0,
) -> int:
    """Return the number of current-asset states evaluated per tile.

    Strategy
    --------
    1. Estimate the full tile footprint:
       ``n_assets × n_assets × n_productivity × 8B × 3``.
    2. If it fits in ``memory_limit_gb``, use the full grid (1 tile).
    3. Otherwise take the largest row count that fits, but at least 1.

    Parameters
    ----------
    n_assets : int
        Number of asset grid points (states and choices).
    n_productivity : int
        Number of productivity states.
    memory_limit_gb : float, default 1.0
        Memory budget per tile in GB.

    Returns
    -------
    int
        Tile size along the current-asset axis, in ``[1, n_assets]``.
    """
    limit = int(memory_limit_gb * (1024 ** 3))
    per_row = n_assets * n_productivity * BYTES_PER_ELEM
    full_bytes = n_assets * per_row

    if full_bytes <= limit:
        logger.info(
            f"  Tiles for ({n_assets},{n_productivity}): FULL GRID (1 tile) — "
            f"estimated {full_bytes / 1e9:.3f} GB"
        )
        return n_assets

    chunk = max(limit // per_row, 1)
    n_tiles = (n_assets + chunk - 1) // chunk
    logger.info(
        f"  Tiles for ({n_assets},{n_productivity}): {chunk} states/tile — "
        f"{n_tiles} tiles, ~{chunk * per_row / 1e9:.3f} GB/tile"
    )
    return int(chunk)
