# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# presenter.py
# -----------------------------------------------------------------------------
# Purpose:
#   Console presentation of a run: redraw the lanes after every event and
#   pace the animation.
#
# Design notes:
#   - render_snapshot() is pure; ConsolePresenter adds screen clearing and
#     the per-step delay. The engine only ever sees a callable.
#
# Usage:
#   engine.run(on_step=ConsolePresenter(step_delay_ms=30))
# -----------------------------------------------------------------------------

from __future__ import annotations
import shutil, sys, time
from typing import Dict, Optional, TextIO

from .config import format_clock, format_duration
from .engine import StoreSettings
from .metrics import Snapshot

CLEAR_SCREEN = "\033[2J\033[H"


def spanning_bar(ch: str = "-", width: int = 0) -> str:
    width = width or shutil.get_terminal_size((80, 24)).columns
    return ch * width


def render_snapshot(snap: Snapshot, width: int = 0) -> str:
    lines = ["Running Simulation...", spanning_bar("-", width), ""]
    for i, lane in enumerate(snap.lane_contents):
        row = f"{i + 1}:".rjust(3) + "".join(str(cid).rjust(5) for cid in lane)
        lines.append(row)
    lines.append(f"Number of events processed: {snap.events_processed}/{snap.total_events}")
    lines.append(f"Number of arrivals processed: {snap.arrivals_processed}")
    lines.append(f"Number of exits processed: {snap.departures_processed}")
    lines.append(f"Longest line encountered so far: {snap.longest_line_so_far}")
    if snap.event_kind:
        lines.append(f"Clock: {format_clock(snap.clock)} ({snap.event_kind})")
    lines.append("")
    return "\n".join(lines)


def describe_settings(settings: StoreSettings, step_delay_ms: int = 0) -> str:
    lines = [
        f"Opening Time: {format_clock(settings.opening_time)}",
        f"Closing Time: {format_clock(settings.closing_time)}",
        f"Hours Open: {settings.hours_open:g}",
        f"Expected Checkout Time: {format_duration(settings.expected_service_time)}",
        f"Expected Number of Customers: {settings.expected_customers:g}",
        f"Number of Checkout Lanes: {settings.num_lanes}",
        f"Number of Milliseconds per Simulation Step: {step_delay_ms}",
    ]
    return "\n".join(lines)


def describe_summary(summary: Dict) -> str:
    lines = [
        f"Customers served: {summary['departures_processed']}/{summary['customers']}",
        f"Events processed: {summary['events_processed']}/{summary['total_events']}",
        f"Longest line: {summary['longest_line']}",
        "Served per lane: " + ", ".join(
            f"{i + 1}={n}" for i, n in enumerate(summary["served_per_lane"])
        ),
    ]
    if summary.get("last_departure") is not None:
        lines.append(f"Last customer left at: {format_clock(summary['last_departure'])}")
    return "\n".join(lines)


class ConsolePresenter:
    """on_step observer that redraws the store and waits step_delay_ms."""

    def __init__(self, step_delay_ms: int = 0, stream: Optional[TextIO] = None, clear: bool = True):
        self.step_delay_ms = step_delay_ms
        self.stream = stream if stream is not None else sys.stdout
        self.clear = clear
        self.frames = 0

    def __call__(self, snap: Snapshot) -> None:
        out = render_snapshot(snap)
        if self.clear:
            out = CLEAR_SCREEN + out
        self.stream.write(out + "\n")
        self.stream.flush()
        self.frames += 1
        if self.step_delay_ms > 0:
            time.sleep(self.step_delay_ms / 1000.0)
