# huggett_vfi/core/errors.py
"""
Exception hierarchy for the VFI solver.

Configuration problems are detected before any Bellman iteration runs and
surface as :class:`ConfigurationError`.  Failures of the fixed-point loop
itself carry the iteration count and last sup-norm error so that callers
can diagnose them.
"""

import math


class VFIError(Exception):
    """Base class for all solver errors."""


class ConfigurationError(VFIError, ValueError):
    """Malformed grid, income process, parameters or solver settings."""


class NonConvergenceError(VFIError, RuntimeError):
    """The sup-norm error did not reach tolerance within ``max_iter``.

    Attributes:
        iterations: Number of Bellman applications performed.
        error: Sup-norm distance between the last two iterates.
    """

    def __init__(self, iterations: int, error: float, tol: float) -> None:
        self.iterations = iterations
        self.error = error
        self.tol = tol
        super().__init__(
            f"VFI did not converge after {iterations} iterations "
            f"(error={error:.3e}, tol={tol:.1e})."
        )


class SolverCancelledError(VFIError):
    """The solve was cancelled between two iterations.

    Attributes:
        iterations: Number of Bellman applications completed before the
            cancellation was observed.
        error: Last computed sup-norm error (``inf`` if none yet).
    """

    def __init__(self, iterations: int, error: float = math.inf) -> None:
        self.iterations = iterations
        self.error = error
        super().__init__(
            f"VFI cancelled after {iterations} iterations (error={error:.3e})."
        )
