"""Numerical engine for Value Function Iteration (VFI).

This module provides a generic fixed-point iterator for Bellman equations,
handling the convergence check, progress reporting, the iteration cap and
cooperative cancellation.  It is agnostic to the specific economic model:
the Bellman operator is passed in as a sweep function.

Example::

    >>> engine = VFIEngine(tol=1e-5, max_iter=1000)
    >>> result = engine.run(v_init, model.sweep)
    >>> result.iterations, result.error
"""

from __future__ import annotations

import enum
import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import tensorflow as tf

from huggett_vfi.core.errors import (
    ConfigurationError,
    NonConvergenceError,
    SolverCancelledError,
)
from huggett_vfi.core.types import TENSORFLOW_DTYPE, Tensor
from huggett_vfi.vfi.kernels.bellman_kernels import sup_norm_diff
from huggett_vfi.vfi.protocols import ProgressReporter

logger = logging.getLogger(__name__)

# Signature: sweep_fn(v_curr) -> (v_next, policy_idx); must not mutate v_curr.
SweepFn = Callable[[Tensor], Tuple[Tensor, Tensor]]


class SolverState(enum.Enum):
    """Convergence-controller states."""

    ITERATING = "iterating"
    CONVERGED = "converged"


@dataclass(frozen=True)
class IterationRecord:
    """Progress record emitted after every Bellman application."""

    iteration: int
    error: float


@dataclass(frozen=True)
class EngineResult:
    """Artifacts of the last Bellman application of a converged run.

    Attributes
    ----------
    value_function : Tensor
        Last iterate ``V_new``, ``(na, nz)``.
    policy_idx : Tensor
        Maximising next-asset indices from the last sweep, ``(na, nz)``.
    iterations : int
        Number of Bellman applications performed.
    error : float
        Final sup-norm distance ``‖V_new − V‖∞``.
    error_history : tuple of float
        Sup-norm distance after every iteration.
    """

    value_function: Tensor
    policy_idx: Tensor
    iterations: int
    error: float
    error_history: Tuple[float, ...]


class VFIEngine:
    """Fixed-point iterator for Bellman equations.

    Iterates :math:`V_{t+1} = T(V_t)` until
    :math:`\\|V_{t+1} - V_t\\|_\\infty \\le \\text{tol}`.

    Parameters
    ----------
    tol : float
        Convergence tolerance (sup-norm).
    max_iter : int, optional
        Maximum number of Bellman iterations.  ``None`` iterates until
        convergence.
    progress_callback : callable, optional
        Called with an :class:`IterationRecord` after every iteration.
    cancel_event : threading.Event, optional
        Checked before every iteration; once set, the run stops with
        :class:`SolverCancelledError`.
    log_every : int
        Log progress at INFO level every this many iterations (DEBUG
        otherwise).

    Raises
    ------
    ConfigurationError
        If *tol* is non-positive, *max_iter* is non-positive, or
        *log_every* is non-positive.
    """

    def __init__(
        self,
        tol: float = 1e-5,
        max_iter: Optional[int] = None,
        progress_callback: Optional[ProgressReporter] = None,
        cancel_event: Optional[threading.Event] = None,
        log_every: int = 50,
    ) -> None:
        if not tol > 0.0:
            raise ConfigurationError(f"Tolerance must be positive, got {tol}.")
        if max_iter is not None and max_iter <= 0:
            raise ConfigurationError(
                f"max_iter must be positive, got {max_iter}."
            )
        if log_every <= 0:
            raise ConfigurationError(
                f"log_every must be positive, got {log_every}."
            )

        self.tol: float = float(tol)
        self.max_iter: Optional[int] = (
            None if max_iter is None else int(max_iter)
        )
        self.progress_callback = progress_callback
        self.cancel_event = cancel_event
        self.log_every: int = int(log_every)
        self.state: SolverState = SolverState.ITERATING

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, v_init: Tensor, sweep_fn: SweepFn) -> EngineResult:
        """Execute value function iteration until convergence.

        Parameters
        ----------
        v_init : Tensor
            Initial guess for the value function, ``(na, nz)``.
        sweep_fn : callable
            One application of the Bellman operator.

        Returns
        -------
        EngineResult
            Artifacts of the last (converged) sweep.

        Raises
        ------
        NonConvergenceError
            If the error is still above *tol* after *max_iter* iterations.
        SolverCancelledError
            If *cancel_event* is set between two iterations.
        """
        self.state = SolverState.ITERATING
        v_curr = tf.cast(v_init, TENSORFLOW_DTYPE)
        error = math.inf
        iterations = 0
        history = []

        while True:
            if self.cancel_event is not None and self.cancel_event.is_set():
                logger.warning(
                    "VFIEngine cancelled after %d iterations (diff=%.2e).",
                    iterations,
                    error,
                )
                raise SolverCancelledError(iterations, error)

            v_next, policy_idx = sweep_fn(v_curr)
            iterations += 1
            error = float(sup_norm_diff(v_next, v_curr))
            history.append(error)
            self._report(IterationRecord(iterations, error))

            if error <= self.tol:
                self.state = SolverState.CONVERGED
                logger.info(
                    "VFIEngine converged in %d iterations (diff=%.2e).",
                    iterations,
                    error,
                )
                return EngineResult(
                    value_function=v_next,
                    policy_idx=policy_idx,
                    iterations=iterations,
                    error=error,
                    error_history=tuple(history),
                )

            if self.max_iter is not None and iterations >= self.max_iter:
                logger.error(
                    "VFIEngine did not converge after %d iterations "
                    "(final diff=%.2e).",
                    iterations,
                    error,
                )
                raise NonConvergenceError(iterations, error, self.tol)

            v_curr = v_next

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _report(self, record: IterationRecord) -> None:
        """Forward a progress record to the logger and the callback."""
        if record.iteration % self.log_every == 0:
            logger.info(
                "VFI iteration %d: diff=%.3e", record.iteration, record.error
            )
        else:
            logger.debug(
                "VFI iteration %d: diff=%.3e", record.iteration, record.error
            )
        if self.progress_callback is not None:
            self.progress_callback(record)
