"""Simulators for post-solve analysis.

Modules
-------
panel_simulator
    Grid-index panel simulator driven by the asset-policy index map.
"""

from huggett_vfi.vfi.simulation.panel_simulator import PanelSimulator

__all__ = [
    "PanelSimulator",
]
