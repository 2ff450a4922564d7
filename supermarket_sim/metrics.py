# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Run counters, per-step snapshots and the bookkeeping invariants that show
#   a run completed correctly.
#
# Design notes:
#   - Keep side-effect methods (note_*) for instrumentation from the engine.
#   - Snapshots are immutable copies handed to the presentation layer.
#   - summary() returns a JSON-serialisable dict for easy tabulation.
#
# Usage:
#   stats = SimulationStatistics(customer_count=n, lane_count=4)
#   stats.note_arrival(t, lanes.max_length())
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import SimulationInvariantViolation


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time view of a run, passed to the on_step observer."""
    events_processed: int
    total_events: int
    arrivals_processed: int
    departures_processed: int
    lane_lengths: Tuple[int, ...]
    longest_line_so_far: int
    clock: float = 0.0
    event_kind: str = ""
    lane_contents: Tuple[Tuple[int, ...], ...] = ()


@dataclass
class SimulationStatistics:
    customer_count: int
    lane_count: int
    events_processed: int = 0
    arrivals_processed: int = 0
    departures_processed: int = 0
    departures_scheduled: int = 0
    longest_line: int = 0
    first_arrival: Optional[float] = None
    last_arrival: Optional[float] = None
    last_departure: Optional[float] = None
    served_per_lane: List[int] = field(default_factory=list)

    def __post_init__(self):
        if not self.served_per_lane:
            self.served_per_lane = [0] * self.lane_count

    @property
    def total_events(self) -> int:
        return 2 * self.customer_count

    def note_arrival(self, t: float, longest_now: int):
        self.events_processed += 1
        self.arrivals_processed += 1
        if self.first_arrival is None:
            self.first_arrival = t
        self.last_arrival = t
        self.longest_line = max(self.longest_line, longest_now)

    def note_departure_scheduled(self):
        self.departures_scheduled += 1

    def note_departure(self, t: float, lane_index: int):
        self.events_processed += 1
        self.departures_processed += 1
        self.served_per_lane[lane_index] += 1
        self.last_departure = t

    def snapshot(self, lane_contents: Sequence[Sequence[int]], clock: float = 0.0, event_kind: str = "") -> Snapshot:
        contents = tuple(tuple(lane) for lane in lane_contents)
        return Snapshot(
            events_processed=self.events_processed,
            total_events=self.total_events,
            arrivals_processed=self.arrivals_processed,
            departures_processed=self.departures_processed,
            lane_lengths=tuple(len(lane) for lane in contents),
            longest_line_so_far=self.longest_line,
            clock=clock,
            event_kind=event_kind,
            lane_contents=contents,
        )

    # -- invariants ---------------------------------------------------------

    def _context(self, lane_lengths: Sequence[int]) -> Dict[str, Any]:
        return {
            "customer_count": self.customer_count,
            "events_processed": self.events_processed,
            "arrivals_processed": self.arrivals_processed,
            "departures_processed": self.departures_processed,
            "departures_scheduled": self.departures_scheduled,
            "lane_lengths": list(lane_lengths),
        }

    def check_step(self, lane_lengths: Sequence[int]):
        """Invariants that hold after every processed event."""
        if self.arrivals_processed < self.departures_processed:
            raise SimulationInvariantViolation(
                "more departures than arrivals", self._context(lane_lengths)
            )
        if sum(lane_lengths) != self.arrivals_processed - self.departures_processed:
            raise SimulationInvariantViolation(
                "customers in lanes do not match arrivals minus departures",
                self._context(lane_lengths),
            )
        if self.departures_scheduled != self.arrivals_processed:
            raise SimulationInvariantViolation(
                "each processed arrival must schedule exactly one departure",
                self._context(lane_lengths),
            )

    def check_final(self, lane_lengths: Sequence[int]):
        """Invariants that must hold once the event queue has drained."""
        self.check_step(lane_lengths)
        if self.events_processed != self.total_events:
            raise SimulationInvariantViolation(
                "processed event count differs from 2 x customers", self._context(lane_lengths)
            )
        if not (self.arrivals_processed == self.departures_processed == self.customer_count):
            raise SimulationInvariantViolation(
                "arrivals, departures and customers do not balance", self._context(lane_lengths)
            )
        if sum(self.served_per_lane) != self.departures_processed:
            raise SimulationInvariantViolation(
                "per-lane departures do not add up", self._context(lane_lengths)
            )

    def summary(self) -> Dict[str, Any]:
        return {
            "customers": self.customer_count,
            "lanes": self.lane_count,
            "events_processed": self.events_processed,
            "total_events": self.total_events,
            "arrivals_processed": self.arrivals_processed,
            "departures_processed": self.departures_processed,
            "longest_line": self.longest_line,
            "served_per_lane": list(self.served_per_lane),
            "first_arrival": self.first_arrival,
            "last_arrival": self.last_arrival,
            "last_departure": self.last_departure,
        }
