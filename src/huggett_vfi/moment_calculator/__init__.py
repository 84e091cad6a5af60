# huggett_vfi/moment_calculator/__init__.py
"""Moment calculator module for cross-sectional statistics of simulated panels."""

from .compute_mean import compute_cross_section_mean, compute_global_mean
from .compute_std import compute_cross_section_std, compute_global_std
from .compute_wealth_distribution import compute_wealth_distribution

__all__ = [
    'compute_cross_section_mean',
    'compute_cross_section_std',
    'compute_global_mean',
    'compute_global_std',
    'compute_wealth_distribution',
]
