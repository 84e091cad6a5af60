# huggett_vfi/vfi/grids/grid_builder.py
"""
Grid construction utilities for the VFI state space.

This module builds the evenly spaced asset grid and validates the
productivity Markov chain before any Bellman iteration runs.
"""

import logging
import math
from typing import Tuple

import numpy as np
import tensorflow as tf

from huggett_vfi.config.income_process import IncomeProcess
from huggett_vfi.config.vfi_config import GridConfig
from huggett_vfi.core.errors import ConfigurationError
from huggett_vfi.core.types import NUMPY_DTYPE, TENSORFLOW_DTYPE, Tensor

logger = logging.getLogger(__name__)

ROW_SUM_TOLERANCE: float = 1e-9


class GridBuilder:
    """
    Utility class for constructing VFI state space grids.

    This class provides static methods for building the asset grid and
    the productivity process.  All methods are pure and fail with
    :class:`ConfigurationError` on malformed input.
    """

    @staticmethod
    def build_asset_grid(config: GridConfig) -> Tensor:
        """
        Build the evenly spaced asset grid.

        Args:
            config: Grid configuration with ``asset_min``, ``asset_max``
                and ``n_assets``.

        Returns:
            Strictly increasing asset grid of shape ``(n_assets,)`` with
            ``grid[0] == asset_min`` and ``grid[-1] == asset_max``.

        Raises:
            ConfigurationError: If the bounds are not finite, not ordered,
                or the grid has fewer than two points.
        """
        a_min, a_max = config.asset_min, config.asset_max
        n_points = config.n_assets

        if not (math.isfinite(a_min) and math.isfinite(a_max)):
            raise ConfigurationError(
                f"Asset bounds must be finite, got ({a_min}, {a_max})."
            )
        if a_min >= a_max:
            raise ConfigurationError(
                f"asset_min ({a_min}) must be less than asset_max ({a_max})."
            )
        if isinstance(n_points, bool) or not isinstance(n_points, (int, np.integer)):
            raise ConfigurationError(
                f"n_assets must be an integer, got {n_points!r}."
            )
        if n_points < 2:
            raise ConfigurationError(
                f"n_assets must be >= 2, got {n_points}."
            )

        return GridBuilder._build_linear_grid(a_min, a_max, int(n_points))

    @staticmethod
    def build_productivity_process(
        income: IncomeProcess,
    ) -> Tuple[Tensor, Tensor]:
        """
        Validate and convert the productivity Markov chain.

        Args:
            income: Productivity levels, transition matrix and labels.

        Returns:
            Tuple containing:
                - e_grid: Productivity levels, shape ``(n_z,)``.
                - P: Transition matrix, shape ``(n_z, n_z)``.

        Raises:
            ConfigurationError: If the productivity vector is empty or not
                finite, the matrix is not square with one row per state,
                an entry lies outside [0, 1], or a row does not sum to 1.
        """
        e = np.asarray(income.productivity, dtype=NUMPY_DTYPE)
        if e.ndim != 1 or e.size == 0:
            raise ConfigurationError(
                f"Productivity must be a non-empty vector, got shape {e.shape}."
            )
        if not np.all(np.isfinite(e)):
            raise ConfigurationError("Productivity levels must be finite.")

        P = GridBuilder.validate_transition_matrix(income.transition, e.size)

        if len(income.state_labels) != e.size:
            raise ConfigurationError(
                f"Expected {e.size} state labels, got {len(income.state_labels)}."
            )

        return (
            tf.constant(e, dtype=TENSORFLOW_DTYPE),
            tf.constant(P, dtype=TENSORFLOW_DTYPE),
        )

    @staticmethod
    def validate_transition_matrix(transition, n_states: int) -> np.ndarray:
        """
        Check that ``transition`` is an ``(n_states, n_states)`` stochastic matrix.

        Args:
            transition: Nested sequence or array of transition probabilities.
            n_states: Number of productivity states.

        Returns:
            The matrix as a float64 NumPy array.

        Raises:
            ConfigurationError: On any structural or probabilistic violation.
        """
        try:
            P = np.asarray(transition, dtype=NUMPY_DTYPE)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Transition matrix is not a numeric matrix: {e}"
            ) from e

        if P.ndim != 2 or P.shape[0] != P.shape[1]:
            raise ConfigurationError(
                f"Transition matrix must be square, got shape {P.shape}."
            )
        if P.shape[0] != n_states:
            raise ConfigurationError(
                f"Transition matrix has dimension {P.shape[0]} but there are "
                f"{n_states} productivity states."
            )
        if not np.all(np.isfinite(P)) or np.any(P < 0.0) or np.any(P > 1.0):
            raise ConfigurationError(
                "Transition probabilities must lie in [0, 1]."
            )

        row_sums = P.sum(axis=1)
        bad_rows = np.flatnonzero(np.abs(row_sums - 1.0) > ROW_SUM_TOLERANCE)
        if bad_rows.size > 0:
            raise ConfigurationError(
                f"Transition matrix rows {bad_rows.tolist()} do not sum to 1 "
                f"(sums={row_sums[bad_rows].tolist()})."
            )
        return P

    @staticmethod
    def _build_linear_grid(
        min_val: float,
        max_val: float,
        n_points: int
    ) -> Tensor:
        """Build a linearly-spaced grid with exact endpoints."""
        # np.linspace pins the last point to max_val exactly.
        grid = np.linspace(min_val, max_val, n_points, dtype=NUMPY_DTYPE)
        return tf.constant(grid, dtype=TENSORFLOW_DTYPE)
