"""Core definitions shared by the Huggett VFI solver.

Provide the global numerical precision, shared type aliases, and the
solver's exception hierarchy.
"""

from huggett_vfi.core.types import TENSORFLOW_DTYPE, NUMPY_DTYPE, Tensor, Array
from huggett_vfi.core.errors import (
    ConfigurationError,
    NonConvergenceError,
    SolverCancelledError,
    VFIError,
)
