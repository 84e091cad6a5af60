"""Unit tests for grid_builder: GridBuilder."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

tf.config.set_visible_devices([], 'GPU')

import pytest

from huggett_vfi.config.income_process import IncomeProcess
from huggett_vfi.config.vfi_config import GridConfig
from huggett_vfi.core.errors import ConfigurationError
from huggett_vfi.vfi.grids.grid_builder import GridBuilder


class TestGridBuilderAssets:
    """Tests for asset grid construction."""

    def test_shape(self):
        """Asset grid has correct number of points."""
        config = GridConfig(asset_min=0.0, asset_max=11.0, n_assets=20)
        grid = GridBuilder.build_asset_grid(config)
        assert grid.shape == (20,)
        assert grid.dtype == tf.float64

    @pytest.mark.parametrize(
        "a_min,a_max,n", [(0.0, 11.0, 1000), (-2.0, 3.3, 7), (0.1, 0.7, 2)]
    )
    def test_endpoints_exact(self, a_min, a_max, n):
        """First and last points equal the bounds exactly."""
        config = GridConfig(asset_min=a_min, asset_max=a_max, n_assets=n)
        grid = GridBuilder.build_asset_grid(config).numpy()
        assert grid[0] == a_min
        assert grid[-1] == a_max

    def test_strictly_increasing(self):
        config = GridConfig(asset_min=0.0, asset_max=11.0, n_assets=1000)
        grid = GridBuilder.build_asset_grid(config).numpy()
        assert np.all(np.diff(grid) > 0)

    def test_even_spacing(self):
        config = GridConfig(asset_min=0.0, asset_max=11.0, n_assets=12)
        grid = GridBuilder.build_asset_grid(config).numpy()
        np.testing.assert_allclose(np.diff(grid), 1.0, atol=1e-12)

    @pytest.mark.parametrize("a_min,a_max", [(1.0, 1.0), (2.0, 1.0)])
    def test_unordered_bounds_rejected(self, a_min, a_max):
        config = GridConfig(asset_min=a_min, asset_max=a_max, n_assets=10)
        with pytest.raises(ConfigurationError, match="asset_min"):
            GridBuilder.build_asset_grid(config)

    def test_non_finite_bounds_rejected(self):
        config = GridConfig(asset_min=0.0, asset_max=float("inf"), n_assets=10)
        with pytest.raises(ConfigurationError, match="finite"):
            GridBuilder.build_asset_grid(config)

    @pytest.mark.parametrize("n", [0, 1, -5])
    def test_too_few_points_rejected(self, n):
        config = GridConfig(n_assets=n)
        with pytest.raises(ConfigurationError, match="n_assets"):
            GridBuilder.build_asset_grid(config)

    def test_non_integer_size_rejected(self):
        config = GridConfig(n_assets=10.5)
        with pytest.raises(ConfigurationError, match="integer"):
            GridBuilder.build_asset_grid(config)


class TestGridBuilderProductivity:
    """Tests for productivity process validation."""

    def test_shapes(self):
        e_grid, P = GridBuilder.build_productivity_process(IncomeProcess())
        assert e_grid.shape == (2,)
        assert P.shape == (2, 2)
        np.testing.assert_array_equal(e_grid.numpy(), [0.25, 2.0])

    def test_transition_rows_sum_to_one(self):
        """Each row of the transition matrix sums to 1."""
        _, P = GridBuilder.build_productivity_process(IncomeProcess())
        row_sums = tf.reduce_sum(P, axis=1).numpy()
        np.testing.assert_allclose(row_sums, 1.0, atol=1e-9)

    def test_row_sum_within_tolerance_accepted(self):
        income = IncomeProcess(
            transition=((0.55, 0.45 + 1e-12), (0.15, 0.85))
        )
        _, P = GridBuilder.build_productivity_process(income)
        assert P.shape == (2, 2)

    def test_row_sum_violation_rejected(self):
        income = IncomeProcess(transition=((0.55, 0.46), (0.15, 0.85)))
        with pytest.raises(ConfigurationError, match="do not sum to 1"):
            GridBuilder.build_productivity_process(income)

    def test_small_row_sum_violation_rejected(self):
        income = IncomeProcess(
            transition=((0.55, 0.45 + 1e-7), (0.15, 0.85))
        )
        with pytest.raises(ConfigurationError, match="rows \\[0\\]"):
            GridBuilder.build_productivity_process(income)

    def test_non_square_rejected(self):
        income = IncomeProcess(transition=((0.5, 0.5), (0.2, 0.8), (1.0, 0.0)))
        with pytest.raises(ConfigurationError, match="square"):
            GridBuilder.build_productivity_process(income)

    def test_dimension_mismatch_rejected(self):
        income = IncomeProcess(
            productivity=(0.25, 1.0, 2.0),
            transition=((0.55, 0.45), (0.15, 0.85)),
            state_labels=("low", "mid", "high"),
        )
        with pytest.raises(ConfigurationError, match="3 productivity states"):
            GridBuilder.build_productivity_process(income)

    def test_entries_outside_unit_interval_rejected(self):
        income = IncomeProcess(transition=((1.2, -0.2), (0.15, 0.85)))
        with pytest.raises(ConfigurationError, match=r"\[0, 1\]"):
            GridBuilder.build_productivity_process(income)

    def test_ragged_matrix_rejected(self):
        income = IncomeProcess(transition=((0.55, 0.45), (1.0,)))
        with pytest.raises(ConfigurationError):
            GridBuilder.build_productivity_process(income)

    def test_label_count_mismatch_rejected(self):
        income = IncomeProcess(state_labels=("only",))
        with pytest.raises(ConfigurationError, match="state labels"):
            GridBuilder.build_productivity_process(income)

    def test_empty_productivity_rejected(self):
        income = IncomeProcess(productivity=(), transition=(), state_labels=())
        with pytest.raises(ConfigurationError, match="non-empty"):
            GridBuilder.build_productivity_process(income)
