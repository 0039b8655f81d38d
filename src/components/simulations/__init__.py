"""
Simulations component - Distributor credit simulations.
"""

from ._impl import SimulationService

__all__ = ["SimulationService"]
