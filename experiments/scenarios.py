"""
experiments/scenarios.py

Holds scenario definitions (decision variables) to sweep during experiments.
Add lane counts, demand levels and service models here.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

EXTRA_LANE = {
    "name": "extra_lane",
    "overrides": {
        "store": {"lanes": 5},
    },
}

FEWER_LANES = {
    "name": "fewer_lanes",
    "overrides": {
        "store": {"lanes": 3},
    },
}

RUSH_DAY = {
    "name": "rush_day",
    "overrides": {
        "store": {
            "expected_customers": 900,
            "lanes": 6,
        },
        "sim": {"seed": 100},
    },
}

LEGACY_SERVICE = {
    "name": "legacy_service",
    "overrides": {
        "sim": {"service_distribution": "legacy"},
    },
}

SCENARIOS = [BASELINE, EXTRA_LANE, FEWER_LANES, RUSH_DAY, LEGACY_SERVICE]
