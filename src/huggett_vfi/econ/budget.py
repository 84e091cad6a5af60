# huggett_vfi/econ/budget.py
"""
Household budget constraint.

Implements ``c + a' = (1 + r) a + w e`` for the grid-based solver.
"""

import tensorflow as tf

from huggett_vfi.config.economic_params import EconomicParams
from huggett_vfi.core.types import TENSORFLOW_DTYPE, Tensor


class BudgetConstraint:
    """Static methods for budget-constraint calculations."""

    @staticmethod
    def cash_on_hand(
        asset_grid: Tensor,
        productivity: Tensor,
        params: EconomicParams,
    ) -> Tensor:
        """
        Compute resources available for every (asset, productivity) state.

        Formula: m(a, e) = (1 + r) * a + w * e

        Args:
            asset_grid: Current asset holdings, shape ``(n_a,)``.
            productivity: Productivity levels, shape ``(n_z,)``.
            params: Household parameters (interest rate and wage).

        Returns:
            Cash on hand, shape ``(n_a, n_z)``.
        """
        a = tf.reshape(tf.cast(asset_grid, TENSORFLOW_DTYPE), (-1, 1))
        e = tf.reshape(tf.cast(productivity, TENSORFLOW_DTYPE), (1, -1))
        gross_return = tf.constant(
            1.0 + params.interest_rate, dtype=TENSORFLOW_DTYPE
        )
        wage = tf.constant(params.wage, dtype=TENSORFLOW_DTYPE)
        return gross_return * a + wage * e

    @staticmethod
    def consumption(cash_on_hand: Tensor, next_assets: Tensor) -> Tensor:
        """
        Compute consumption implied by a savings choice.

        Formula: c = m - a'

        Args:
            cash_on_hand: Available resources.
            next_assets: Chosen next-period assets, broadcastable to
                ``cash_on_hand``.

        Returns:
            Consumption tensor.
        """
        return tf.cast(cash_on_hand, TENSORFLOW_DTYPE) - tf.cast(
            next_assets, TENSORFLOW_DTYPE
        )
