"""Unit tests for EconomicParams, IncomeProcess and GridConfig."""

from __future__ import annotations

import dataclasses

import pytest

from huggett_vfi.config.economic_params import EconomicParams
from huggett_vfi.config.income_process import IncomeProcess
from huggett_vfi.config.vfi_config import GridConfig
from huggett_vfi.core.errors import ConfigurationError


class TestEconomicParams:
    """Tests for parameter validation."""

    def test_reference_calibration(self):
        params = EconomicParams.reference()
        assert params.discount_factor == 0.96
        assert params.risk_aversion == 2.0
        assert params.interest_rate == 0.01
        assert params.wage == 1.0
        assert not params.is_log_utility

    def test_frozen(self):
        params = EconomicParams.reference()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.discount_factor = 0.5

    @pytest.mark.parametrize("beta", [0.0, 1.0, -0.1, 1.5])
    def test_invalid_discount_factor(self, beta):
        with pytest.raises(ConfigurationError, match="Discount factor"):
            EconomicParams(discount_factor=beta)

    @pytest.mark.parametrize("gamma", [0.0, -2.0, float("nan")])
    def test_invalid_risk_aversion(self, gamma):
        with pytest.raises(ConfigurationError, match="Risk aversion"):
            EconomicParams(risk_aversion=gamma)

    def test_log_utility_accepted(self):
        params = EconomicParams(risk_aversion=1.0)
        assert params.is_log_utility

    def test_invalid_interest_rate(self):
        with pytest.raises(ConfigurationError, match="Interest rate"):
            EconomicParams(interest_rate=-1.0)

    def test_invalid_wage(self):
        with pytest.raises(ConfigurationError, match="Wage"):
            EconomicParams(wage=-0.5)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            EconomicParams(discount_factor=2.0)


class TestDefaults:
    """Reference calibration defaults of the other config records."""

    def test_income_process_defaults(self):
        income = IncomeProcess()
        assert income.productivity == (0.25, 2.0)
        assert income.transition == ((0.55, 0.45), (0.15, 0.85))
        assert income.state_labels == ("low", "high")
        assert income.n_states == 2

    def test_grid_config_defaults(self):
        config = GridConfig()
        assert config.asset_min == 0.0
        assert config.asset_max == 11.0
        assert config.n_assets == 1000
        assert config.tol_vfi == 1e-5
        assert config.infeasible_penalty == -10_000_000.0
