# huggett_vfi/config/vfi_config.py
"""
Configuration for the brute-force Value Function Iteration solver.

This module provides the configuration record for the discrete asset grid,
the convergence criterion, and the tiling / worker settings used by the
Bellman sweep.

Example:
    >>> import dataclasses
    >>> from huggett_vfi.config.vfi_config import GridConfig
    >>> config = dataclasses.replace(GridConfig(), n_assets=200)
    >>> print(f"Asset grid points: {config.n_assets}")
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GridConfig:
    """
    Configuration for the VFI asset grid and numerical tolerances.

    This immutable configuration controls the discretization of the asset
    state space and the convergence criteria of the fixed-point loop.

    Attributes:
        asset_min: Lower bound of the asset grid (borrowing limit).
        asset_max: Upper bound of the asset grid.
        n_assets: Number of points in the asset grid.
        tol_vfi: Sup-norm convergence tolerance.
        max_iter_vfi: Maximum number of Bellman applications.  ``None``
            removes the cap and iterates until convergence.
        infeasible_penalty: Utility assigned to non-positive consumption.
        state_chunk_size: Asset states per tile in the Bellman sweep.
            ``None`` derives the size from ``memory_limit_gb``.
        n_workers: Worker threads evaluating tiles; 1 runs serially.
        memory_limit_gb: Memory budget per tile when sizing tiles.
        log_every: Emit an INFO progress record every this many iterations.
    """

    asset_min: float = 0.0
    asset_max: float = 11.0
    n_assets: int = 1000

    tol_vfi: float = 1e-5
    max_iter_vfi: Optional[int] = 5000

    infeasible_penalty: float = -10_000_000.0

    state_chunk_size: Optional[int] = None
    n_workers: int = 1
    memory_limit_gb: float = 1.0

    log_every: int = 50
