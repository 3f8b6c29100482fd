"""Simulation package.

Exposes the Simulation driver and its configuration so callers can write
`from tracesim.simulation import Simulation, SimulationConfig`.
"""
from .config import SimulationConfig
from .simulation import Simulation

__all__ = ["Simulation", "SimulationConfig"]
