"""Panel simulator driven by the solved asset-policy index map.

Works entirely on grid indices with direct array lookups: an
individual's next asset index is ``policy_index[ia, ie]``, so no
re-search of the grid and no interpolation is needed.  Productivity
follows the Markov chain, drawn independently per individual and
period by inverse-CDF sampling.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import tensorflow as tf
import tensorflow_probability as tfp

from huggett_vfi.core.errors import ConfigurationError
from huggett_vfi.core.types import NUMPY_INDEX_DTYPE, TENSORFLOW_DTYPE
from huggett_vfi.moment_calculator import (
    compute_cross_section_mean,
    compute_cross_section_std,
    compute_global_mean,
    compute_global_std,
    compute_wealth_distribution,
)
from huggett_vfi.vfi.huggett import VFISolution

tfd = tfp.distributions

SHOCK_SOURCES = ("normal", "uniform")


class PanelSimulator:
    """Simulate a panel of households under the solved policy.

    Parameters
    ----------
    n_individuals : int
        Number of simulated households.
    n_periods : int
        Number of periods, including the initial one.
    initial_asset_index : int
        Asset grid index everyone starts from.
    initial_state : int
        Productivity state everyone starts in.
    seed : int, optional
        Random seed for reproducibility.
    shock_source : {"normal", "uniform"}
        ``"normal"`` maps standard-normal draws through the normal CDF
        before inverting the transition CDF; ``"uniform"`` inverts
        uniform draws directly.
    distribution_periods : sequence of int, optional
        Zero-based periods at which the wealth distribution is recorded.
        ``None`` records periods 20 and 50 (where they exist) and the
        final period.
    """

    def __init__(
        self,
        n_individuals: int = 20000,
        n_periods: int = 200,
        initial_asset_index: int = 299,
        initial_state: int = 0,
        seed: Optional[int] = None,
        shock_source: str = "normal",
        distribution_periods: Optional[Sequence[int]] = None,
    ) -> None:
        if n_individuals < 1:
            raise ConfigurationError(
                f"n_individuals must be >= 1, got {n_individuals}."
            )
        if n_periods < 1:
            raise ConfigurationError(
                f"n_periods must be >= 1, got {n_periods}."
            )
        if shock_source not in SHOCK_SOURCES:
            raise ConfigurationError(
                f"shock_source must be one of {SHOCK_SOURCES}, got {shock_source!r}."
            )
        if distribution_periods is not None:
            bad = [p for p in distribution_periods if not 0 <= p < n_periods]
            if bad:
                raise ConfigurationError(
                    f"distribution_periods {bad} outside [0, {n_periods})."
                )
        self.n_individuals = n_individuals
        self.n_periods = n_periods
        self.initial_asset_index = initial_asset_index
        self.initial_state = initial_state
        self.seed = seed
        self.shock_source = shock_source
        self.distribution_periods = (
            None if distribution_periods is None
            else tuple(int(p) for p in distribution_periods)
        )
        self.shock_dist = tfd.Normal(
            loc=tf.constant(0.0, dtype=TENSORFLOW_DTYPE),
            scale=tf.constant(1.0, dtype=TENSORFLOW_DTYPE),
        )

    def draw_uniforms(self, shape: Tuple[int, ...]) -> np.ndarray:
        """Draw uniform variates on [0, 1] from the configured source."""
        if self.shock_source == "normal":
            z = np.random.randn(*shape)
            return self.shock_dist.cdf(
                tf.constant(z, dtype=TENSORFLOW_DTYPE)
            ).numpy()
        return np.random.rand(*shape)

    def snapshot_periods(self) -> Tuple[int, ...]:
        """Return the periods at which the wealth distribution is recorded."""
        if self.distribution_periods is not None:
            return self.distribution_periods
        last = self.n_periods - 1
        early = tuple(p for p in (19, 49) if p < last)
        return early + (last,)

    @staticmethod
    def next_states(
        current: np.ndarray,
        uniforms: np.ndarray,
        cumulative: np.ndarray,
    ) -> np.ndarray:
        """Invert the transition CDF row of each individual.

        A draw equal to a cumulative boundary selects the lower state.
        """
        n_states = cumulative.shape[1]
        rows = cumulative[current]
        nxt = np.sum(uniforms[:, None] > rows, axis=1)
        return np.minimum(nxt, n_states - 1).astype(NUMPY_INDEX_DTYPE)

    def run(
        self, solution: VFISolution
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, float]]:
        """Simulate the panel and return history + summary stats.

        Parameters
        ----------
        solution : VFISolution
            Output of ``HuggettModelVFI.solve()``.

        Returns
        -------
        history : dict
            ``asset_index``, ``assets``, ``productivity_index``,
            ``productivity`` → arrays ``(n_individuals, n_periods)``;
            ``mean_assets``, ``std_assets`` → arrays ``(n_periods,)``;
            ``distribution_periods`` and ``wealth_distribution`` (mass on
            each grid point at those periods) → ``(n_snapshots, n_a)``.
        stats : dict
            ``mean_assets_final``, ``std_assets_final``; ``mean_assets_panel``,
            ``std_assets_panel`` pooled over every individual and period;
            ``min_hit_pct``, ``max_hit_pct`` (boundary-hit rates, %).

        Raises
        ------
        ConfigurationError
            If the initial asset index or state is outside the solution's
            grids.
        """
        asset_grid = np.asarray(solution.asset_grid)
        productivity = np.asarray(solution.productivity)
        policy_index = np.asarray(solution.policy_index)
        transition = np.asarray(solution.transition_matrix)

        n_a = asset_grid.shape[0]
        n_z = productivity.shape[0]
        if not 0 <= self.initial_asset_index < n_a:
            raise ConfigurationError(
                f"initial_asset_index {self.initial_asset_index} outside "
                f"[0, {n_a})."
            )
        if not 0 <= self.initial_state < n_z:
            raise ConfigurationError(
                f"initial_state {self.initial_state} outside [0, {n_z})."
            )

        np.random.seed(self.seed)

        N, T = self.n_individuals, self.n_periods
        cumulative = np.cumsum(transition, axis=1)

        # Productivity paths are drawn first; assets follow the index map.
        e_idx = np.zeros((N, T), dtype=NUMPY_INDEX_DTYPE)
        e_idx[:, 0] = self.initial_state
        if T > 1:
            u = self.draw_uniforms((N, T - 1))
            for t in range(1, T):
                e_idx[:, t] = self.next_states(
                    e_idx[:, t - 1], u[:, t - 1], cumulative
                )

        a_idx = np.zeros((N, T), dtype=NUMPY_INDEX_DTYPE)
        a_idx[:, 0] = self.initial_asset_index
        for t in range(1, T):
            a_idx[:, t] = policy_index[a_idx[:, t - 1], e_idx[:, t - 1]]

        assets = asset_grid[a_idx]
        mean_assets = compute_cross_section_mean(assets).numpy()
        std_assets = compute_cross_section_std(assets).numpy()
        periods = self.snapshot_periods()
        distribution = np.stack(
            [compute_wealth_distribution(a_idx[:, p], n_a).numpy() for p in periods]
        )

        history = {
            "asset_index": a_idx,
            "assets": assets,
            "productivity_index": e_idx,
            "productivity": productivity[e_idx],
            "mean_assets": mean_assets,
            "std_assets": std_assets,
            "distribution_periods": np.asarray(periods, dtype=NUMPY_INDEX_DTYPE),
            "wealth_distribution": distribution,
        }
        stats = {
            "mean_assets_final": float(mean_assets[-1]),
            "std_assets_final": float(std_assets[-1]),
            "mean_assets_panel": float(compute_global_mean(assets)),
            "std_assets_panel": float(compute_global_std(assets)),
            "min_hit_pct": float(np.mean(a_idx == 0) * 100),
            "max_hit_pct": float(np.mean(a_idx == n_a - 1) * 100),
        }
        return history, stats
