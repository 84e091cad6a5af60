# huggett_vfi/vfi/grids/__init__.py
"""
Grid management for the VFI solver.

This package provides utilities for constructing the discretized asset
grid and validating the productivity process.
"""

from huggett_vfi.vfi.grids.grid_builder import GridBuilder

__all__ = ['GridBuilder']
