"""XLA-compiled numerical kernels for the VFI solver.

Each module contains pure numerical functions decorated with
``@tf.function(jit_compile=True)``.  Corresponding ``_core`` variants
(undecorated) are provided for nesting inside other XLA scopes.

Modules
-------
bellman_kernels
    Expected-value computation, leftmost argmax, and sup-norm.
sweep_kernels
    Exhaustive grid search of the Bellman operator over a state tile.
"""

from huggett_vfi.vfi.kernels.bellman_kernels import (
    compute_ev,
    compute_ev_core,
    first_argmax,
    first_argmax_core,
    sup_norm_diff,
    sup_norm_diff_core,
)
from huggett_vfi.vfi.kernels.sweep_kernels import (
    bellman_sweep,
    bellman_sweep_core,
)

__all__ = [
    "compute_ev",
    "compute_ev_core",
    "first_argmax",
    "first_argmax_core",
    "sup_norm_diff",
    "sup_norm_diff_core",
    "bellman_sweep",
    "bellman_sweep_core",
]
