"""Memory-aware tiling strategy and execution for the Bellman sweep.

Modules
-------
tile_strategy
    Compute tile size from a memory budget.
tile_executor
    Tiling loop over current-asset states with optional worker threads.
"""

from huggett_vfi.vfi.chunking.tile_strategy import compute_state_chunk
from huggett_vfi.vfi.chunking.tile_executor import execute_state_tiles, tile_bounds

__all__ = [
    "compute_state_chunk",
    "execute_state_tiles",
    "tile_bounds",
]
