# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Load the YAML store configuration, merge scenario overrides and turn the
#   result into validated StoreSettings.
#
# Design notes:
#   - Clock strings ("08:00", "8:00 PM", "23:30:15") become seconds since
#     midnight; durations ("00:06:15", "6:15" or plain seconds) become
#     seconds.
#   - Every bad value raises ConfigurationError naming the key, so a caller
#     can re-prompt without touching any engine.
#
# Usage:
#   cfg = load_cfg()
#   settings = store_settings(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, datetime, logging, os, re
from typing import Any, Dict, Optional

import yaml

from .engine import StoreSettings
from .errors import ConfigurationError
from .variates import SERVICE_DISTRIBUTIONS

logger = logging.getLogger(__name__)

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG = os.path.join(ROOT, "config", "baseline.yaml")

_CLOCK_RE = re.compile(
    r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?\s*$"
)
_DURATION_RE = re.compile(r"^\s*(?:(\d+):)?(\d{1,2}):(\d{2})\s*$")


def load_cfg(path: Optional[str] = None) -> Dict:
    path = path or DEFAULT_CONFIG
    try:
        with open(path, "r") as f:
            cfg = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc
    logger.debug("loaded config from %s", path)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return cfg


def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new


def parse_clock(value: Any, key: str = "time") -> float:
    """Time of day -> seconds since midnight. Accepts 24h or AM/PM strings."""
    if isinstance(value, datetime.time):
        return value.hour * 3600.0 + value.minute * 60.0 + value.second + value.microsecond / 1e6
    if not isinstance(value, str):
        raise ConfigurationError(f"{key}: expected a clock string like '08:00', got {value!r}")
    m = _CLOCK_RE.match(value)
    if not m:
        raise ConfigurationError(f"{key}: cannot parse clock time {value!r}")
    hour, minute, second = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
    meridiem = (m.group(4) or "").upper()
    if meridiem:
        if not 1 <= hour <= 12:
            raise ConfigurationError(f"{key}: hour must be 1-12 with AM/PM, got {value!r}")
        hour = hour % 12 + (12 if meridiem == "PM" else 0)
    if hour > 23 or minute > 59 or second > 59:
        raise ConfigurationError(f"{key}: clock time out of range: {value!r}")
    return hour * 3600.0 + minute * 60.0 + second


def parse_duration(value: Any, key: str = "duration") -> float:
    """'HH:MM:SS', 'MM:SS' or a number of seconds -> seconds."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{key}: expected a duration, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    if isinstance(value, str):
        m = _DURATION_RE.match(value)
        if m:
            hours = int(m.group(1) or 0)
            minutes, seconds = int(m.group(2)), int(m.group(3))
            if seconds > 59 or (m.group(1) is not None and minutes > 59):
                raise ConfigurationError(f"{key}: duration out of range: {value!r}")
            return hours * 3600.0 + minutes * 60.0 + seconds
        try:
            return float(value)
        except ValueError:
            pass
    raise ConfigurationError(f"{key}: cannot parse duration {value!r}")


def format_clock(seconds: float) -> str:
    """Seconds since midnight -> 'HH:MM:SS' (wraps past midnight)."""
    total = int(round(seconds)) % (24 * 3600)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_duration(seconds: float) -> str:
    total = int(round(seconds))
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def _section(cfg: Dict, name: str) -> Dict:
    sec = cfg.get(name)
    if sec is None:
        return {}
    if not isinstance(sec, dict):
        raise ConfigurationError(f"{name}: expected a mapping, got {type(sec).__name__}")
    return sec


def store_settings(cfg: Dict) -> StoreSettings:
    """Build validated StoreSettings from the `store` section."""
    store = _section(cfg, "store")
    if not store:
        raise ConfigurationError("store: section missing from configuration")
    missing = [k for k in ("opening_time", "closing_time", "expected_service_time",
                           "expected_customers", "lanes") if k not in store]
    if missing:
        raise ConfigurationError(f"store: missing keys {missing}")

    customers = store["expected_customers"]
    if isinstance(customers, bool) or not isinstance(customers, (int, float)):
        raise ConfigurationError(f"store.expected_customers: expected a number, got {customers!r}")
    lanes = store["lanes"]
    if isinstance(lanes, bool) or not isinstance(lanes, int):
        raise ConfigurationError(f"store.lanes: expected an integer, got {lanes!r}")

    return StoreSettings(
        opening_time=parse_clock(store["opening_time"], "store.opening_time"),
        closing_time=parse_clock(store["closing_time"], "store.closing_time"),
        expected_service_time=parse_duration(store["expected_service_time"], "store.expected_service_time"),
        expected_customers=float(customers),
        num_lanes=lanes,
    ).validate()


def sim_options(cfg: Dict) -> Dict[str, Any]:
    """Seed and service distribution from the `sim` section."""
    sim = _section(cfg, "sim")
    seed = sim.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigurationError(f"sim.seed: expected an integer, got {seed!r}")
    dist = sim.get("service_distribution", "exponential")
    if dist not in SERVICE_DISTRIBUTIONS:
        raise ConfigurationError(
            f"sim.service_distribution: expected one of {SERVICE_DISTRIBUTIONS}, got {dist!r}"
        )
    return {"seed": seed, "service_distribution": dist}


def step_delay_ms(cfg: Dict) -> int:
    delay = _section(cfg, "display").get("step_delay_ms", 0)
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        raise ConfigurationError(f"display.step_delay_ms: expected a number >= 0, got {delay!r}")
    return int(delay)
