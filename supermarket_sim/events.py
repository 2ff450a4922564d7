# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# events.py
# -----------------------------------------------------------------------------
# Purpose:
#   Event model and Future Event List (FEL) for the checkout simulation.
#
# Design notes:
#   - The variant set is closed: a customer either arrives (joins a lane) or
#     departs (leaves the head of a lane). Event = Arrival | Departure.
#   - Events are immutable once created.
#   - The FEL is a binary heap keyed on (timestamp, insertion sequence), so
#     events sharing a timestamp pop in the order they were scheduled.
#
# Usage:
#   from supermarket_sim.events import Arrival, Departure, EventQueue
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq, itertools
from dataclasses import dataclass
from typing import List, Tuple, Union

from .entities import Customer
from .errors import EmptyQueue


@dataclass(frozen=True)
class Arrival:
    """A customer walks up to the checkouts at time `t`."""
    t: float
    customer: Customer
    kind = "arrival"


@dataclass(frozen=True)
class Departure:
    """The head customer of lane `lane_index` finishes checking out at `t`."""
    t: float
    lane_index: int
    kind = "departure"


Event = Union[Arrival, Departure]


class EventQueue:
    """Min-heap of events ordered by timestamp, FIFO among equal timestamps."""

    def __init__(self):
        self._heap: List[Tuple[float, int, Event]] = []
        self._seq = itertools.count()

    def push(self, ev: Event) -> None:
        heapq.heappush(self._heap, (ev.t, next(self._seq), ev))

    def pop(self) -> Event:
        """Remove and return the earliest event; raise EmptyQueue if none."""
        if not self._heap:
            raise EmptyQueue("pop from an empty event queue")
        return heapq.heappop(self._heap)[2]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)
