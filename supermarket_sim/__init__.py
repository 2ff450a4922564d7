"""
supermarket_sim package initializer.

This package contains the discrete-event engine, event queue, checkout
lanes, random variates and run statistics for the supermarket checkout
simulation: customers arrive during store hours, join the shortest of N
parallel lanes, and leave after a random checkout time.
"""
from .engine import SimulationEngine, SimulationState, StoreSettings, configure
from .errors import (
    ConfigurationError, EmptyQueue, LaneUnderflow, SimulationError,
    SimulationInvariantViolation, SimulationStateError,
)
from .metrics import SimulationStatistics, Snapshot

__all__ = [
    "entities", "events", "lanes", "variates", "metrics", "engine",
    "config", "simulation", "presenter", "cli",
    "configure", "SimulationEngine", "SimulationState", "StoreSettings",
    "SimulationStatistics", "Snapshot",
    "SimulationError", "ConfigurationError", "SimulationStateError",
    "EmptyQueue", "LaneUnderflow", "SimulationInvariantViolation",
]
