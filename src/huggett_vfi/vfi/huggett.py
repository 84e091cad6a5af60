"""Value Function Iteration for the Huggett incomplete-markets household.

Solves the consumption/savings problem of a household facing
idiosyncratic productivity risk and a borrowing limit at the bottom of
the asset grid.  Each period the household chooses next-period assets
``a'`` on the grid::

    V(a, e) = max_{a'} u((1 + r) a + w e − a') + β Σ_{e'} π(e, e') V(a', e')

The maximisation is a brute-force search over the full grid, and the
borrowing limit is enforced implicitly by penalising non-positive
consumption.

Architecture note
-----------------
This module is a thin orchestrator.  Bellman primitives live in
``vfi.kernels``, state tiling in ``vfi.chunking``, the fixed-point loop
in ``vfi.engine`` and policy extraction in ``vfi.policies``.
"""

from __future__ import annotations

import functools
import logging
import math
import threading
from dataclasses import dataclass
from multiprocessing.pool import ThreadPool
from typing import Optional, Tuple

import tensorflow as tf

from huggett_vfi.config.economic_params import EconomicParams
from huggett_vfi.config.income_process import IncomeProcess
from huggett_vfi.config.vfi_config import GridConfig
from huggett_vfi.core.errors import ConfigurationError
from huggett_vfi.core.types import (
    NUMPY_DTYPE,
    TENSORFLOW_DTYPE,
    Array,
    Tensor,
)
from huggett_vfi.econ import BudgetConstraint
from huggett_vfi.vfi.chunking.tile_executor import execute_state_tiles
from huggett_vfi.vfi.chunking.tile_strategy import compute_state_chunk
from huggett_vfi.vfi.engine import VFIEngine
from huggett_vfi.vfi.grids.grid_builder import GridBuilder
from huggett_vfi.vfi.kernels.bellman_kernels import compute_ev
from huggett_vfi.vfi.kernels.sweep_kernels import bellman_sweep
from huggett_vfi.vfi.policies import extract_policies, freeze_array
from huggett_vfi.vfi.protocols import ProgressReporter, SweepKernel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VFISolution:
    """Immutable result of :meth:`HuggettModelVFI.solve`.

    Attributes
    ----------
    asset_grid : np.ndarray
        Asset grid, ``(na,)``.
    productivity : np.ndarray
        Productivity levels, ``(nz,)``.
    transition_matrix : np.ndarray
        Productivity transition matrix, ``(nz, nz)``.
    state_labels : tuple of str
        Productivity state names.
    value_function : np.ndarray
        Converged value function, ``(na, nz)``.
    policy_assets : np.ndarray
        Next-period asset policy, ``(na, nz)``.
    policy_consumption : np.ndarray
        Consumption policy, ``(na, nz)``.
    policy_index : np.ndarray
        Grid index of the asset policy, ``(na, nz)`` int32.
    iterations : int
        Number of Bellman applications.
    error : float
        Final sup-norm error.
    error_history : tuple of float
        Sup-norm error after every iteration.
    """

    asset_grid: Array
    productivity: Array
    transition_matrix: Array
    state_labels: Tuple[str, ...]
    value_function: Array
    policy_assets: Array
    policy_consumption: Array
    policy_index: Array
    iterations: int
    error: float
    error_history: Tuple[float, ...]

    @property
    def n_assets(self) -> int:
        return int(self.asset_grid.shape[0])

    @property
    def n_states(self) -> int:
        return int(self.productivity.shape[0])


class HuggettModelVFI:
    """Brute-force VFI solver for the Huggett household problem.

    State space : (Assets a, Productivity e)
    Choice      : Next-period assets a'

    Parameters
    ----------
    params : EconomicParams
        Preferences and prices (frozen dataclass).
    income : IncomeProcess
        Productivity levels and transition matrix.
    config : GridConfig
        Asset grid, tolerances, iteration cap and tiling settings.
    progress_callback : callable, optional
        Receives an :class:`IterationRecord` after every iteration.
    cancel_event : threading.Event, optional
        Cooperative cancellation flag, checked between iterations.

    Raises
    ------
    ConfigurationError
        If the grid, income process or solver settings are invalid.
        Raised here, before any iteration runs.
    """

    def __init__(
        self,
        params: EconomicParams,
        income: Optional[IncomeProcess] = None,
        config: Optional[GridConfig] = None,
        progress_callback: Optional[ProgressReporter] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        income = income if income is not None else IncomeProcess()
        config = config if config is not None else GridConfig()
        self._validate_inputs(config)

        self.params: EconomicParams = params
        self.income: IncomeProcess = income
        self.config: GridConfig = config

        self._initialize_grids()

        self.engine = VFIEngine(
            tol=config.tol_vfi,
            max_iter=config.max_iter_vfi,
            progress_callback=progress_callback,
            cancel_event=cancel_event,
            log_every=config.log_every,
        )
        self.sweep_kernel: SweepKernel = functools.partial(
            bellman_sweep,
            risk_aversion=float(params.risk_aversion),
            penalty=float(config.infeasible_penalty),
        )
        # Worker pool shared by every sweep of a solve() run.
        self._pool: Optional[ThreadPool] = None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_inputs(config: GridConfig) -> None:
        """Validate solver settings not covered by GridBuilder/VFIEngine.

        Raises
        ------
        ConfigurationError
            On any invalid setting.
        """
        if config.n_workers < 1:
            raise ConfigurationError(
                f"n_workers must be >= 1, got {config.n_workers}."
            )
        if config.state_chunk_size is not None and config.state_chunk_size < 1:
            raise ConfigurationError(
                f"state_chunk_size must be >= 1, got {config.state_chunk_size}."
            )
        if not config.memory_limit_gb > 0.0:
            raise ConfigurationError(
                f"memory_limit_gb must be positive, got {config.memory_limit_gb}."
            )
        if not (math.isfinite(config.infeasible_penalty)
                and config.infeasible_penalty < 0.0):
            raise ConfigurationError(
                "infeasible_penalty must be a finite negative number, "
                f"got {config.infeasible_penalty}."
            )

    # ------------------------------------------------------------------
    # Grid initialisation
    # ------------------------------------------------------------------

    def _initialize_grids(self) -> None:
        """Build the asset grid, productivity process and cash on hand."""
        self.asset_grid: tf.Tensor = GridBuilder.build_asset_grid(self.config)
        self.e_grid: tf.Tensor
        self.P: tf.Tensor
        self.e_grid, self.P = GridBuilder.build_productivity_process(
            self.income
        )

        self.n_assets: int = int(self.asset_grid.shape[0])
        self.n_productivity: int = int(self.e_grid.shape[0])

        # Invariant across Bellman iterations.
        self.cash_on_hand: tf.Tensor = BudgetConstraint.cash_on_hand(
            self.asset_grid, self.e_grid, self.params
        )
        self.beta: tf.Tensor = tf.constant(
            self.params.discount_factor, dtype=TENSORFLOW_DTYPE
        )

        if self.config.state_chunk_size is not None:
            self.chunk_size: int = min(
                self.config.state_chunk_size, self.n_assets
            )
        else:
            self.chunk_size = compute_state_chunk(
                self.n_assets,
                self.n_productivity,
                self.config.memory_limit_gb,
            )

    # ------------------------------------------------------------------
    # Bellman operator
    # ------------------------------------------------------------------

    def initial_value_function(self) -> tf.Tensor:
        """Return the zero initial guess, ``(na, nz)``."""
        return tf.zeros(
            (self.n_assets, self.n_productivity), dtype=TENSORFLOW_DTYPE
        )

    def sweep(self, v_curr: Tensor) -> Tuple[tf.Tensor, tf.Tensor]:
        """Apply the Bellman operator once.

        *v_curr* is only read; a freshly allocated value function and
        index map are returned.  Tiles run on the worker pool while
        ``solve()`` is in progress and sequentially otherwise; both give
        the same result.

        Parameters
        ----------
        v_curr : Tensor
            Previous value function, ``(na, nz)``.

        Returns
        -------
        v_next : tf.Tensor
            Updated value function, ``(na, nz)``.
        policy_idx : tf.Tensor
            Leftmost maximising next-asset index, ``(na, nz)``.

        Raises
        ------
        ConfigurationError
            If *v_curr* does not have shape ``(na, nz)``.
        """
        v_curr = tf.cast(v_curr, TENSORFLOW_DTYPE)
        expected = (self.n_assets, self.n_productivity)
        if tuple(v_curr.shape) != expected:
            raise ConfigurationError(
                f"Value function must have shape {expected}, "
                f"got {tuple(v_curr.shape)}."
            )

        discounted_ev = compute_ev(v_curr, self.P, self.beta)
        return execute_state_tiles(
            self.cash_on_hand,
            self.asset_grid,
            discounted_ev,
            chunk_size=self.chunk_size,
            sweep_kernel=self.sweep_kernel,
            pool=self._pool,
        )

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    def solve(self) -> VFISolution:
        """Solve the household problem via value function iteration.

        Blocks until the value function converges or the run fails.

        Returns
        -------
        VFISolution
            Grids, converged value function, policies and convergence
            diagnostics.

        Raises
        ------
        NonConvergenceError
            If ``max_iter_vfi`` is reached before convergence.
        SolverCancelledError
            If the cancel event is set.
        """
        logger.info(
            "Starting HuggettModelVFI.solve() — "
            "β=%.4f, γ=%.2f, r=%.4f, w=%.4f, n_a=%d, n_e=%d, tiles of %d",
            self.params.discount_factor,
            self.params.risk_aversion,
            self.params.interest_rate,
            self.params.wage,
            self.n_assets,
            self.n_productivity,
            self.chunk_size,
        )

        if self.config.n_workers > 1:
            with ThreadPool(processes=self.config.n_workers) as pool:
                self._pool = pool
                try:
                    result = self.engine.run(
                        self.initial_value_function(), self.sweep
                    )
                finally:
                    self._pool = None
        else:
            result = self.engine.run(self.initial_value_function(), self.sweep)

        policies = extract_policies(
            self.asset_grid, self.cash_on_hand, result.policy_idx
        )

        logger.info(
            "Asset policy range: low-state [%.4f, %.4f], top-state [%.4f, %.4f]",
            float(policies.policy_assets[:, 0].min()),
            float(policies.policy_assets[:, 0].max()),
            float(policies.policy_assets[:, -1].min()),
            float(policies.policy_assets[:, -1].max()),
        )

        return VFISolution(
            asset_grid=freeze_array(self.asset_grid, NUMPY_DTYPE),
            productivity=freeze_array(self.e_grid, NUMPY_DTYPE),
            transition_matrix=freeze_array(self.P, NUMPY_DTYPE),
            state_labels=tuple(self.income.state_labels),
            value_function=freeze_array(result.value_function, NUMPY_DTYPE),
            policy_assets=policies.policy_assets,
            policy_consumption=policies.policy_consumption,
            policy_index=policies.policy_index,
            iterations=result.iterations,
            error=result.error,
            error_history=result.error_history,
        )
