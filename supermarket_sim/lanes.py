# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# lanes.py
# -----------------------------------------------------------------------------
# Purpose:
#   The bank of parallel FIFO checkout lanes and the shortest-queue rule
#   that decides which lane an arriving customer joins.
#
# Design notes:
#   - Lane counts are small (tens), so shortest_lane() is a linear scan.
#   - Ties go to the lowest lane index.
#
# Usage:
#   lanes = LaneSet(4)
#   idx = lanes.shortest_lane(); lanes.enqueue(idx, customer)
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Deque, List, Tuple

from .entities import Customer
from .errors import ConfigurationError, LaneUnderflow


class LaneSet:
    """N checkout lanes, each a FIFO of customers."""

    def __init__(self, num_lanes: int):
        if num_lanes < 1:
            raise ConfigurationError(f"need at least one checkout lane, got {num_lanes}")
        self._lanes: List[Deque[Customer]] = [deque() for _ in range(num_lanes)]

    def __len__(self) -> int:
        return len(self._lanes)

    def shortest_lane(self) -> int:
        best, best_len = 0, len(self._lanes[0])
        for i in range(1, len(self._lanes)):
            n = len(self._lanes[i])
            if n < best_len:
                best, best_len = i, n
        return best

    def enqueue(self, lane_index: int, customer: Customer) -> int:
        """Append a customer to a lane; returns the new lane length."""
        lane = self._lanes[lane_index]
        lane.append(customer)
        return len(lane)

    def dequeue(self, lane_index: int) -> Customer:
        lane = self._lanes[lane_index]
        if not lane:
            raise LaneUnderflow(lane_index, self.lengths())
        return lane.popleft()

    def lengths(self) -> Tuple[int, ...]:
        return tuple(len(lane) for lane in self._lanes)

    def max_length(self) -> int:
        return max(len(lane) for lane in self._lanes)

    def contents(self) -> Tuple[Tuple[int, ...], ...]:
        """Customer ids per lane, head first."""
        return tuple(tuple(c.cid for c in lane) for lane in self._lanes)
