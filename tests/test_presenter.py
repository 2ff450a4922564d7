import io

from supermarket_sim.engine import StoreSettings
from supermarket_sim.metrics import Snapshot
from supermarket_sim.presenter import (
    CLEAR_SCREEN, ConsolePresenter, describe_settings, describe_summary, render_snapshot,
)


def _snap():
    return Snapshot(
        events_processed=5,
        total_events=20,
        arrivals_processed=4,
        departures_processed=1,
        lane_lengths=(2, 1),
        longest_line_so_far=2,
        clock=8 * 3600 + 90,
        event_kind="arrival",
        lane_contents=((3, 12), (4,)),
    )


def test_render_snapshot_draws_lanes_and_counters():
    text = render_snapshot(_snap(), width=10)
    lines = text.splitlines()
    assert lines[0] == "Running Simulation..."
    assert lines[1] == "-" * 10
    assert " 1:    3   12" in lines
    assert " 2:    4" in lines
    assert "Number of events processed: 5/20" in lines
    assert "Number of arrivals processed: 4" in lines
    assert "Number of exits processed: 1" in lines
    assert "Longest line encountered so far: 2" in lines
    assert "Clock: 08:01:30 (arrival)" in lines


def test_console_presenter_writes_frames():
    out = io.StringIO()
    presenter = ConsolePresenter(step_delay_ms=0, stream=out)
    presenter(_snap())
    presenter(_snap())
    assert presenter.frames == 2
    assert out.getvalue().count(CLEAR_SCREEN) == 2


def test_console_presenter_without_clear():
    out = io.StringIO()
    ConsolePresenter(stream=out, clear=False)(_snap())
    assert CLEAR_SCREEN not in out.getvalue()


def test_console_presenter_sleeps_for_delay(monkeypatch):
    slept = []
    monkeypatch.setattr("supermarket_sim.presenter.time.sleep", slept.append)
    ConsolePresenter(step_delay_ms=30, stream=io.StringIO())(_snap())
    assert slept == [0.03]


def test_describe_settings():
    text = describe_settings(StoreSettings(8 * 3600.0, 0.0, 375.0, 600, 4), step_delay_ms=30)
    assert "Opening Time: 08:00:00" in text
    assert "Closing Time: 00:00:00" in text
    assert "Hours Open: 16" in text
    assert "Expected Checkout Time: 00:06:15" in text
    assert "Expected Number of Customers: 600" in text
    assert "Number of Checkout Lanes: 4" in text
    assert "Number of Milliseconds per Simulation Step: 30" in text


def test_describe_summary():
    text = describe_summary({
        "customers": 3, "events_processed": 6, "total_events": 6, "departures_processed": 3,
        "longest_line": 2, "served_per_lane": [2, 1], "last_departure": 9 * 3600.0,
    })
    assert "Customers served: 3/3" in text
    assert "Served per lane: 1=2, 2=1" in text
    assert "Last customer left at: 09:00:00" in text
