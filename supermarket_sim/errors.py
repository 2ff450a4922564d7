# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exception taxonomy for the checkout simulation.
#
# Design notes:
#   - ConfigurationError is the only user-recoverable error; it is raised
#     before any engine state is touched.
#   - LaneUnderflow / EmptyQueue / SimulationInvariantViolation signal a
#     defect in the engine and carry enough context to diagnose it.
#
# Usage:
#   from supermarket_sim.errors import ConfigurationError
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Any, Dict, Optional, Sequence


class SimulationError(Exception):
    """Base class for every error raised by the simulation."""


class ConfigurationError(SimulationError, ValueError):
    """Invalid store configuration (lane count, service time, customer count...)."""


class SimulationStateError(SimulationError):
    """An engine operation was called in the wrong lifecycle state."""


class EmptyQueue(SimulationError, IndexError):
    """pop() was called on an empty event queue."""


class LaneUnderflow(SimulationError):
    """A departure tried to dequeue from an empty lane."""

    def __init__(self, lane_index: int, lane_lengths: Sequence[int] = ()):
        self.lane_index = lane_index
        self.lane_lengths = tuple(lane_lengths)
        super().__init__(
            f"lane {lane_index} is empty (lane lengths: {list(self.lane_lengths)})"
        )


class SimulationInvariantViolation(SimulationError):
    """A bookkeeping invariant failed; the run cannot be trusted."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context: Dict[str, Any] = dict(context or {})
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{details}]"
