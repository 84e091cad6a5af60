"""Value Function Iteration (VFI) solver for the Huggett household problem.

This package provides:

* :class:`HuggettModelVFI` — brute-force VFI solver over an
  (assets × productivity) grid.
* :class:`VFISolution` — immutable result record returned by the solver.
* :class:`VFIEngine` — Generic Bellman fixed-point iterator.

Sub-packages
------------
kernels
    XLA-compiled numerical kernels (expected value, leftmost argmax,
    sup-norm, tile sweep).
chunking
    Memory-aware tiling strategy and (optionally threaded) tile executor.
simulation
    Post-solve panel simulator.
grids
    Grid construction and income-process validation.

Modules
-------
protocols
    Protocol definitions for solver collaborators.
policies
    Policy extraction and formatting.
engine
    Generic Bellman fixed-point iterator.
"""

from huggett_vfi.vfi.engine import VFIEngine
from huggett_vfi.vfi.huggett import HuggettModelVFI, VFISolution

__all__ = [
    "HuggettModelVFI",
    "VFIEngine",
    "VFISolution",
]
