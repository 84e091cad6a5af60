# huggett_vfi/econ/utility.py
"""
Period utility of consumption.

This module implements CRRA utility with an implicit feasibility
constraint: any non-positive consumption level receives a large negative
penalty instead of a utility value, so the Bellman search can range over
the whole asset grid without explicit constraints.
"""

import tensorflow as tf

from huggett_vfi.core.types import TENSORFLOW_DTYPE, Tensor

INFEASIBLE_UTILITY: float = -10_000_000.0


class UtilityFunctions:
    """Static methods for period utility evaluation."""

    @staticmethod
    def crra(
        consumption: Tensor,
        risk_aversion: float,
        penalty: float = INFEASIBLE_UTILITY,
    ) -> Tensor:
        """
        Compute CRRA utility with a feasibility penalty.

        Formula:
            u(c) = c^(1 - gamma) / (1 - gamma)   if c > 0 and gamma != 1
            u(c) = ln(c)                         if c > 0 and gamma == 1
            u(c) = penalty                       if c <= 0

        Args:
            consumption: Consumption levels (any shape).
            risk_aversion: Relative risk aversion gamma (> 0).  Must be a
                Python float so the log-utility branch is chosen at
                trace time.
            penalty: Utility assigned to infeasible consumption.

        Returns:
            Utility tensor with the same shape as ``consumption``.
        """
        c = tf.cast(consumption, TENSORFLOW_DTYPE)
        feasible = c > 0.0

        # Evaluate the power on a strictly positive tensor so the masked-out
        # branch never produces NaN.
        c_safe = tf.where(feasible, c, tf.ones_like(c))

        if risk_aversion == 1.0:
            utility = tf.math.log(c_safe)
        else:
            exponent = 1.0 - risk_aversion
            utility = tf.pow(c_safe, exponent) / exponent

        return tf.where(
            feasible, utility, tf.convert_to_tensor(penalty, dtype=TENSORFLOW_DTYPE)
        )
