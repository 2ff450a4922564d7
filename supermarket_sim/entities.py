# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the checkout simulation: Customer and the
#   per-run identity allocator.
#
# Design notes:
#   - Customers are created in bulk when arrivals are generated and live in
#     whichever lane currently holds them.
#   - Identities come from an allocator owned by one engine, so two runs
#     never share a counter.
#
# Usage:
#   ids = CustomerIdAllocator()
#   cust = Customer(ids.next_id(), arrival_time=28800.0, service_duration=375.0)
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    cid: int                    # unique within one run, starts at 1
    arrival_time: float         # seconds since midnight of the opening day
    service_duration: float     # seconds spent at the checkout


class CustomerIdAllocator:
    """Hands out monotonically increasing customer ids, starting at `start`."""

    def __init__(self, start: int = 1):
        self._next = start

    def next_id(self) -> int:
        cid = self._next
        self._next += 1
        return cid
