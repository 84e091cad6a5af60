# huggett_vfi/config/income_process.py
"""
Idiosyncratic productivity process.

The process is given explicitly as a vector of productivity levels and a
Markov transition matrix.  Structural validation (squareness, row sums,
dimension agreement) is performed by
:meth:`huggett_vfi.vfi.grids.grid_builder.GridBuilder.build_productivity_process`.

Example:
    >>> from huggett_vfi.config.income_process import IncomeProcess
    >>> income = IncomeProcess()
    >>> income.n_states
    2
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class IncomeProcess:
    """
    Immutable description of the productivity Markov chain.

    Attributes:
        productivity: Productivity level ``e[s]`` of each state.
        transition: Row-stochastic matrix, ``transition[s][s']`` is the
            probability of moving from state ``s`` to ``s'``.
        state_labels: Human-readable state names, one per state.
    """

    productivity: Tuple[float, ...] = (0.25, 2.0)
    transition: Tuple[Tuple[float, ...], ...] = (
        (0.55, 0.45),
        (0.15, 0.85),
    )
    state_labels: Tuple[str, ...] = ("low", "high")

    @property
    def n_states(self) -> int:
        """Number of productivity states."""
        return len(self.productivity)
