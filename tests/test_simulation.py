import json
import logging

from supermarket_sim.config import apply_overrides, load_cfg
from supermarket_sim.simulation import build_engine, run_one_day


def test_run_one_day_summary_is_balanced_and_serialisable():
    res = run_one_day(load_cfg())
    assert res["arrivals_processed"] == res["departures_processed"] == res["customers"]
    assert res["events_processed"] == res["total_events"] == 2 * res["customers"]
    assert len(res["served_per_lane"]) == 4
    json.dumps(res)


def test_seed_in_config_makes_runs_reproducible():
    cfg = apply_overrides(load_cfg(), {"sim": {"seed": 42}})
    assert run_one_day(cfg) == run_one_day(cfg)


def test_zero_customer_config():
    cfg = apply_overrides(load_cfg(), {"store": {"expected_customers": 0}})
    res = run_one_day(cfg)
    assert res["customers"] == 0
    assert res["events_processed"] == 0
    assert res["last_departure"] is None


def test_on_step_receives_every_event():
    cfg = apply_overrides(load_cfg(), {"store": {"expected_customers": 50}, "sim": {"seed": 9}})
    seen = []
    res = run_one_day(cfg, on_step=seen.append)
    assert len(seen) == res["events_processed"]


def test_build_engine_uses_configured_service_distribution():
    cfg = apply_overrides(load_cfg(), {"sim": {"service_distribution": "legacy"}})
    engine = build_engine(cfg)
    assert engine.variates.service_distribution == "legacy"
    assert engine.settings.num_lanes == 4


def test_build_engine_logs_seed_and_distribution(caplog):
    cfg = apply_overrides(load_cfg(), {"sim": {"seed": 17, "service_distribution": "legacy"}})
    with caplog.at_level(logging.DEBUG, logger="supermarket_sim.simulation"):
        build_engine(cfg)
    text = caplog.text
    assert "seed=17" in text
    assert "service_distribution=legacy" in text
