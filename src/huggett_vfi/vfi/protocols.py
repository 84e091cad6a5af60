"""Protocol definitions for VFI solver components.

Defines ``typing.Protocol`` classes that formalise the interfaces
between the orchestrator and its collaborators.  Contains no
implementation — only type signatures.

In tests, any protocol can be satisfied by a lightweight stub (a
recording callback, a canned sweep kernel, a fake simulator).
"""

from __future__ import annotations

from typing import Any, Dict, Protocol, Tuple, runtime_checkable

import tensorflow as tf


@runtime_checkable
class SweepKernel(Protocol):
    """Interface for the Bellman maximisation over one state tile."""

    def __call__(
        self,
        cash_on_hand: tf.Tensor,
        asset_grid: tf.Tensor,
        discounted_ev: tf.Tensor,
    ) -> Tuple[tf.Tensor, tf.Tensor]:
        """Return ``(v_tile, idx_tile)`` for the given tile."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Interface for per-iteration progress sinks."""

    def __call__(self, record: Any) -> None:
        """Receive an ``IterationRecord``."""
        ...


@runtime_checkable
class Simulator(Protocol):
    """Interface for post-solve simulation."""

    def run(
        self, solution: Any
    ) -> Tuple[Dict[str, Any], Dict[str, float]]:
        """Run simulation and return (history, stats)."""
        ...
