# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# engine.py
# -----------------------------------------------------------------------------
# Purpose:
#   The discrete-event engine for one store day: generate every arrival up
#   front, then pop events in time order, route arrivals to the shortest lane
#   and release lane heads on departures.
#
# Design notes:
#   - Each engine runs exactly one simulation:
#       CONFIGURED -> ARRIVALS_GENERATED -> RUNNING -> COMPLETED
#   - The random source, id allocator, lanes and FEL all belong to the engine
#     instance; nothing is shared between runs.
#   - Presentation is decoupled through the on_step(snapshot) callback; the
#     engine itself never sleeps or prints.
#   - Clock values are seconds since midnight of the opening day. A closing
#     time at or before the opening time means the store closes the next day.
#
# Usage:
#   engine = configure(8 * 3600, 0, 375, 600, 4, rng=random.Random(1))
#   stats = engine.run(on_step=print)
# -----------------------------------------------------------------------------

from __future__ import annotations
import enum, logging, random
from dataclasses import dataclass
from typing import Callable, Optional

from .entities import Customer, CustomerIdAllocator
from .errors import (
    ConfigurationError, LaneUnderflow, SimulationInvariantViolation, SimulationStateError,
)
from .events import Arrival, Departure, Event, EventQueue
from .lanes import LaneSet
from .metrics import SimulationStatistics, Snapshot
from .variates import VariateGenerator

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 3600

StepCallback = Callable[[Snapshot], None]


class SimulationState(enum.Enum):
    CONFIGURED = "configured"
    ARRIVALS_GENERATED = "arrivals_generated"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class StoreSettings:
    """Validated store parameters. Times are seconds since midnight."""
    opening_time: float
    closing_time: float
    expected_service_time: float
    expected_customers: float
    num_lanes: int

    @property
    def effective_closing_time(self) -> float:
        """Closing time on the clock; rolls over to the next day if needed."""
        if self.closing_time <= self.opening_time:
            return self.closing_time + SECONDS_PER_DAY
        return self.closing_time

    @property
    def hours_open(self) -> float:
        return (self.effective_closing_time - self.opening_time) / 3600.0

    def validate(self) -> "StoreSettings":
        if isinstance(self.num_lanes, bool) or not isinstance(self.num_lanes, int):
            raise ConfigurationError(f"number of lanes must be an integer, got {self.num_lanes!r}")
        if self.num_lanes < 1:
            raise ConfigurationError(f"need at least one checkout lane, got {self.num_lanes}")
        if not self.expected_service_time > 0:
            raise ConfigurationError(
                f"expected service time must be > 0 seconds, got {self.expected_service_time}"
            )
        if not self.expected_customers >= 0:
            raise ConfigurationError(
                f"expected number of customers must be >= 0, got {self.expected_customers}"
            )
        for name in ("opening_time", "closing_time"):
            value = getattr(self, name)
            if not 0 <= value < SECONDS_PER_DAY:
                raise ConfigurationError(f"{name} must be a time of day, got {value} seconds")
        return self


class SimulationEngine:
    """Runs one store day.

    Parameters
    ----------
    settings : StoreSettings | None
        Store parameters. An engine without settings refuses to generate
        arrivals.
    variates : VariateGenerator | None
        Source of customer counts, arrival offsets and service durations.
        Defaults to an exponential-service generator over a fresh
        random.Random().
    ids : CustomerIdAllocator | None
        Identity allocator for this run.
    """

    def __init__(self, settings: Optional[StoreSettings] = None,
                 variates: Optional[VariateGenerator] = None,
                 ids: Optional[CustomerIdAllocator] = None):
        self.settings = settings
        self.variates = variates if variates is not None else VariateGenerator()
        self.ids = ids if ids is not None else CustomerIdAllocator()
        self.fel = EventQueue()
        self.lanes: Optional[LaneSet] = None
        self.stats: Optional[SimulationStatistics] = None
        self.state = SimulationState.CONFIGURED
        self.t: float = 0.0

    # -- setup ---------------------------------------------------------------

    def generate_arrivals(self):
        """Draw the day's customer count and schedule every arrival."""
        if self.settings is None:
            raise ConfigurationError("store settings must be configured before generating arrivals")
        if self.state is not SimulationState.CONFIGURED:
            raise SimulationStateError(f"arrivals already generated (state={self.state.value})")
        s = self.settings.validate()

        n = self.variates.poisson(s.expected_customers)
        opening, closing = s.opening_time, s.effective_closing_time
        self.lanes = LaneSet(s.num_lanes)
        self.stats = SimulationStatistics(customer_count=n, lane_count=s.num_lanes)

        for _ in range(n):
            ts = self.variates.arrival_time(opening, closing)
            cust = Customer(
                self.ids.next_id(),
                arrival_time=ts,
                service_duration=self.variates.service_duration(s.expected_service_time),
            )
            self.fel.push(Arrival(ts, cust))

        self.state = SimulationState.ARRIVALS_GENERATED
        logger.info(
            "generated %d arrivals (mean %.1f) between %.0fs and %.0fs across %d lanes",
            n, s.expected_customers, opening, closing, s.num_lanes,
        )

    # -- event handlers --------------------------------------------------------

    def process_arrival(self, ev: Arrival):
        s = self.settings
        if not s.opening_time <= ev.t < s.effective_closing_time:
            raise SimulationInvariantViolation(
                "arrival outside store hours",
                {"timestamp": ev.t, "opening": s.opening_time, "closing": s.effective_closing_time},
            )
        idx = self.lanes.shortest_lane()
        self.lanes.enqueue(idx, ev.customer)
        self.stats.note_arrival(ev.t, self.lanes.max_length())
        self.fel.push(Departure(ev.t + ev.customer.service_duration, idx))
        self.stats.note_departure_scheduled()
        logger.debug("t=%.2f arrival cust=%d -> lane %d", ev.t, ev.customer.cid, idx)

    def process_departure(self, ev: Departure):
        cust = self.lanes.dequeue(ev.lane_index)
        self.stats.note_departure(ev.t, ev.lane_index)
        logger.debug("t=%.2f departure cust=%d <- lane %d", ev.t, cust.cid, ev.lane_index)

    def _dispatch(self, ev: Event):
        if isinstance(ev, Arrival):
            self.process_arrival(ev)
        elif isinstance(ev, Departure):
            self.process_departure(ev)
        else:
            raise TypeError(f"unknown event type {type(ev).__name__}")

    # -- main loop ---------------------------------------------------------------

    def snapshot(self, event_kind: str = "") -> Snapshot:
        return self.stats.snapshot(self.lanes.contents(), clock=self.t, event_kind=event_kind)

    def run(self, on_step: Optional[StepCallback] = None) -> SimulationStatistics:
        """
        Process every event until the FEL is empty and return the final
        statistics. Arrivals are generated first if that has not happened
        yet. on_step, if given, receives a Snapshot after each event and must
        return before the loop continues.
        """
        if self.state is SimulationState.CONFIGURED:
            self.generate_arrivals()
        if self.state is not SimulationState.ARRIVALS_GENERATED:
            raise SimulationStateError(f"engine cannot run from state {self.state.value}")
        self.state = SimulationState.RUNNING

        try:
            while not self.fel.is_empty():
                ev = self.fel.pop()
                if ev.t < self.t:
                    raise SimulationInvariantViolation(
                        "event popped out of time order", {"clock": self.t, "timestamp": ev.t}
                    )
                self.t = ev.t
                self._dispatch(ev)
                self.stats.check_step(self.lanes.lengths())
                if on_step is not None:
                    on_step(self.snapshot(ev.kind))
            self.stats.check_final(self.lanes.lengths())
        except (LaneUnderflow, SimulationInvariantViolation) as exc:
            logger.error("simulation aborted at t=%.2f: %s", self.t, exc)
            raise

        self.state = SimulationState.COMPLETED
        logger.info(
            "run completed: %d customers, %d events, longest line %d",
            self.stats.customer_count, self.stats.events_processed, self.stats.longest_line,
        )
        return self.stats


def configure(opening_time: float, closing_time: float, expected_service_time: float,
              expected_customers: float, num_lanes: int,
              rng: Optional[random.Random] = None,
              service_distribution: str = "exponential",
              variates: Optional[VariateGenerator] = None) -> SimulationEngine:
    """
    Validate store parameters and return a ready engine.

    Raises ConfigurationError if num_lanes < 1, expected_service_time <= 0 or
    expected_customers < 0. Pass either `rng` (wrapped in a VariateGenerator
    using `service_distribution`) or a ready `variates` generator.
    """
    settings = StoreSettings(
        opening_time=opening_time,
        closing_time=closing_time,
        expected_service_time=expected_service_time,
        expected_customers=expected_customers,
        num_lanes=num_lanes,
    ).validate()
    if variates is None:
        try:
            variates = VariateGenerator(rng, service_distribution=service_distribution)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    return SimulationEngine(settings, variates=variates)
