from __future__ import annotations

# Command line entrypoint.
#
#     supermarket-sim run [--config PATH] [--lanes N] [--customers N] ...
#     supermarket-sim show-config [--config PATH]
#
# The YAML config is the baseline; flags override individual keys.

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .config import apply_overrides, load_cfg, sim_options, step_delay_ms, store_settings
from .errors import ConfigurationError
from .presenter import ConsolePresenter, describe_settings, describe_summary
from .simulation import build_engine
from .variates import SERVICE_DISTRIBUTIONS


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="YAML config (default: config/baseline.yaml)")
    p.add_argument("--opening", default=None, help="opening time, e.g. 08:00 or '8:00 AM'")
    p.add_argument("--closing", default=None, help="closing time; at or before opening means next day")
    p.add_argument("--service-time", default=None, help="expected checkout length, HH:MM:SS or seconds")
    p.add_argument("--customers", type=float, default=None, help="expected number of customers")
    p.add_argument("--lanes", type=int, default=None, help="number of checkout lanes")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--service-distribution", choices=SERVICE_DISTRIBUTIONS, default=None)
    p.add_argument("--delay-ms", type=int, default=None, help="milliseconds per simulation step")


def _overrides(args: argparse.Namespace) -> Dict:
    store = {
        "opening_time": args.opening,
        "closing_time": args.closing,
        "expected_service_time": args.service_time,
        "expected_customers": args.customers,
        "lanes": args.lanes,
    }
    sim = {"seed": args.seed, "service_distribution": args.service_distribution}
    out: Dict = {
        "store": {k: v for k, v in store.items() if v is not None},
        "sim": {k: v for k, v in sim.items() if v is not None},
    }
    if args.delay_ms is not None:
        out["display"] = {"step_delay_ms": args.delay_ms}
    return out


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supermarket-sim",
        description="Supermarket checkout simulation - discrete-event model of parallel lanes",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="run one simulated store day")
    _add_config_args(p_run)
    p_run.add_argument("--quiet", action="store_true", help="skip the per-step lane display")

    p_show = sub.add_parser("show-config", help="print the effective store configuration")
    _add_config_args(p_show)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = apply_overrides(load_cfg(args.config), _overrides(args))
        settings = store_settings(cfg)
        sim_options(cfg)
        delay = step_delay_ms(cfg)
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    print("Supermarket Simulation")
    print(describe_settings(settings, delay))
    if args.cmd == "show-config":
        return 0

    engine = build_engine(cfg)
    presenter = None if args.quiet else ConsolePresenter(step_delay_ms=delay)
    stats = engine.run(on_step=presenter)
    print("Simulation Complete!")
    print(describe_summary(stats.summary()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
