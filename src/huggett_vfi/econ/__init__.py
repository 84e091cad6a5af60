# huggett_vfi/econ/__init__.py
"""
Core economic logic module.

This package provides the household's period utility and budget
constraint used by the VFI solver.
"""

from huggett_vfi.econ.utility import INFEASIBLE_UTILITY, UtilityFunctions
from huggett_vfi.econ.budget import BudgetConstraint


__all__ = [
    'INFEASIBLE_UTILITY',
    'UtilityFunctions',
    'BudgetConstraint',
]
