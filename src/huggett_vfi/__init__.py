"""Brute-force value function iteration for a Huggett incomplete-markets economy.

Example::

    >>> from huggett_vfi.config.economic_params import EconomicParams
    >>> from huggett_vfi.vfi import HuggettModelVFI
    >>> solution = HuggettModelVFI(EconomicParams.reference()).solve()
    >>> solution.policy_assets.shape
    (1000, 2)
"""

__version__ = "0.1.0"
