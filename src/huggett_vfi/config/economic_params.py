# huggett_vfi/config/economic_params.py
"""
Household preference and price parameters.

This module defines the structural parameters of the Huggett household
problem.  Parameters are immutable after initialization to prevent
accidental modification while the solver is iterating.

Example:
    >>> from huggett_vfi.config.economic_params import EconomicParams
    >>> params = EconomicParams.reference()
    >>> print(f"Discount factor: {params.discount_factor}")
"""

from dataclasses import dataclass
import math
import logging

from huggett_vfi.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EconomicParams:
    """
    Immutable container for household parameters and prices.

    Attributes:
        discount_factor: Time preference parameter (beta), must be in (0, 1).
        risk_aversion: CRRA coefficient (gamma), must be positive.  A value
            of exactly 1 selects log utility.
        interest_rate: Return on the risk-free asset (r), must exceed -1.
        wage: Wage per efficiency unit of labour (w), must be non-negative.

    Raises:
        ConfigurationError: If any parameter lies outside its valid range.
    """

    discount_factor: float = 0.96
    risk_aversion: float = 2.0
    interest_rate: float = 0.01
    wage: float = 1.0

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        self._validate_discount_factor()
        self._validate_risk_aversion()
        self._validate_prices()

    @classmethod
    def reference(cls) -> "EconomicParams":
        """Return the reference calibration (beta=0.96, gamma=2, r=0.01, w=1)."""
        return cls(
            discount_factor=0.96,
            risk_aversion=2.0,
            interest_rate=0.01,
            wage=1.0,
        )

    @property
    def is_log_utility(self) -> bool:
        """True when gamma == 1 and utility reduces to ln(c)."""
        return self.risk_aversion == 1.0

    def _validate_discount_factor(self) -> None:
        """Ensure discount factor is economically meaningful."""
        if not (0 < self.discount_factor < 1):
            raise ConfigurationError(
                f"Discount factor must be in (0, 1), got {self.discount_factor}"
            )

    def _validate_risk_aversion(self) -> None:
        if not math.isfinite(self.risk_aversion) or self.risk_aversion <= 0:
            raise ConfigurationError(
                f"Risk aversion must be positive, got {self.risk_aversion}"
            )

    def _validate_prices(self) -> None:
        if not math.isfinite(self.interest_rate) or self.interest_rate <= -1.0:
            raise ConfigurationError(
                f"Interest rate must be greater than -1, got {self.interest_rate}"
            )
        if not math.isfinite(self.wage) or self.wage < 0:
            raise ConfigurationError(
                f"Wage must be non-negative, got {self.wage}"
            )
