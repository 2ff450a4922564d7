# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate a single replication ("one day") from a config dict: build the
#   engine, run the event loop, and return the summary.
#
# Design notes:
#   - Every replication gets its own random.Random(seed); nothing touches
#     the module-level random state.
#   - Replication handling lives outside, in experiments/.
#
# Usage:
#   from supermarket_sim.simulation import run_one_day
#   results = run_one_day(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import random
from typing import Dict, Optional

from .config import sim_options, store_settings
from .engine import SimulationEngine, StepCallback
from .variates import VariateGenerator

logger = logging.getLogger(__name__)


def build_engine(cfg: Dict) -> SimulationEngine:
    settings = store_settings(cfg)
    opts = sim_options(cfg)
    logger.debug("building engine: seed=%s service_distribution=%s",
                 opts["seed"], opts["service_distribution"])
    rng = random.Random(opts["seed"])
    variates = VariateGenerator(rng, service_distribution=opts["service_distribution"])
    return SimulationEngine(settings, variates=variates)


def run_one_day(cfg: Dict, on_step: Optional[StepCallback] = None) -> Dict:
    engine = build_engine(cfg)
    stats = engine.run(on_step=on_step)
    return stats.summary()
