"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs multiple daily replications, and reports KPIs with confidence intervals.

    python -m experiments.run_experiments [--config PATH] [--replications N]
"""

from __future__ import annotations
import argparse, copy, math
from statistics import mean, stdev
from typing import Callable, Dict, List, Optional, Tuple

from scipy.stats import t

from supermarket_sim.config import apply_overrides, load_cfg
from supermarket_sim.simulation import run_one_day

from .scenarios import SCENARIOS


def mean_ci(values: List[float], confidence_level: float) -> Tuple[float, float]:
    """Return (mean, half-width) using a Student t critical value."""
    if not values:
        return 0.0, 0.0
    mu = mean(values)
    n = len(values)
    if n < 2:
        return mu, 0.0
    level = min(max(confidence_level, 0.0), 0.999999)
    alpha = 1.0 - level
    tcrit = t.ppf(1 - alpha / 2.0, n - 1)
    half = tcrit * (stdev(values) / math.sqrt(n))
    return mu, float(half)


def series(results: List[Dict], extractor: Callable[[Dict], float]) -> List[float]:
    """Collect a numeric series from each replication result."""
    return [float(extractor(res)) for res in results]


def _sim_section(cfg: Dict) -> Dict:
    """The `sim` mapping of cfg, created if absent or empty (`sim:` loads as None)."""
    if not isinstance(cfg.get("sim"), dict):
        cfg["sim"] = {}
    return cfg["sim"]


def crn_comparisons(crn_pairs: List, scenarios: List[Dict]) -> List[Tuple[Dict, Dict]]:
    """Resolve configured [name_a, name_b] pairs to scenarios, warning on bad entries."""
    sc_index = {s["name"]: s for s in scenarios}
    out = []
    for pair in crn_pairs:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            print(f"[warn] skipping CRN entry (needs 2 names): {pair}")
            continue
        sc_a, sc_b = sc_index.get(pair[0]), sc_index.get(pair[1])
        if sc_a and sc_b:
            out.append((sc_a, sc_b))
        else:
            print(f"[warn] CRN pair not found: {pair}")
    return out


def run_replications(cfg: Dict, replications: int, base_seed: int) -> List[Tuple[int, Dict]]:
    """Run `replications` days with seeds base_seed, base_seed+1, ..."""
    out = []
    for rep in range(replications):
        rep_cfg = copy.deepcopy(cfg)
        _sim_section(rep_cfg)["seed"] = base_seed + rep
        out.append((base_seed + rep, run_one_day(rep_cfg)))
    return out


def run_crn(cfg: Dict, sc_a: Dict, sc_b: Dict, replications: int, base_seed: int,
            confidence: float, C: float = 1.0) -> Dict[str, float]:
    """
    Common-random-number comparison of the longest line between two scenarios:
    both use the same seed per replication, and we report the paired
    differences with a Bonferroni-adjusted CI (alpha / C).
    """
    cfg_a = apply_overrides(cfg, sc_a["overrides"])
    cfg_b = apply_overrides(cfg, sc_b["overrides"])
    runs_a = run_replications(cfg_a, replications, base_seed)
    runs_b = run_replications(cfg_b, replications, base_seed)
    rows = [(seed, a["longest_line"], b["longest_line"]) for (seed, a), (_, b) in zip(runs_a, runs_b)]
    diffs = [float(b - a) for (_, a, b) in rows]
    mean_diff = mean(diffs)
    sd_diff = stdev(diffs) if len(diffs) > 1 else 0.0
    level = min(max(confidence, 0.0), 0.999999)
    alpha = (1.0 - level) / max(C, 1.0)
    df = max(1, len(diffs) - 1)
    tcrit = t.ppf(1 - alpha / 2.0, df)
    half = float(tcrit * (sd_diff / math.sqrt(len(diffs)))) if len(diffs) > 1 else 0.0
    print(f"CRN paired longest-line comparison ({sc_b['name']} - {sc_a['name']}):")
    print("  Replication | Seed | Line1 | Line2 | Difference")
    for idx, (seed, l1, l2) in enumerate(rows, start=1):
        print(f"    {idx:2d}        | {seed:4d} | {l1:5d} | {l2:5d} | {l2 - l1:+d}")
    print(f"  Mean difference: {mean_diff:+.2f}")
    print(f"  Std dev of differences: {sd_diff:.2f}")
    print(f"  {level*100:.1f}% CI of mean diff: {mean_diff - half:+.2f} to {mean_diff + half:+.2f}")
    return {"mean_diff": mean_diff, "sd_diff": sd_diff, "half_width": half}


def main(argv: Optional[List[str]] = None):
    """Entry point: drive all scenarios, replications, and report KPIs."""
    parser = argparse.ArgumentParser(description="Replicated supermarket checkout experiments")
    parser.add_argument("--config", default=None)
    parser.add_argument("--replications", type=int, default=None)
    args = parser.parse_args(argv)

    cfg = load_cfg(args.config)
    exp_cfg = cfg.get("experiments", {}) or {}
    replications = max(1, int(args.replications or exp_cfg.get("replications", 1)))
    confidence = float(exp_cfg.get("confidence_level", 0.95))
    default_seed = _sim_section(cfg).get("seed") or 0

    for sc in SCENARIOS:
        sc_cfg = apply_overrides(cfg, sc["overrides"])
        scenario_seed = _sim_section(sc_cfg).get("seed") or default_seed
        runs = run_replications(sc_cfg, replications, scenario_seed)
        results = [res for _, res in runs]

        longest = mean_ci(series(results, lambda r: r["longest_line"]), confidence)
        customers = mean_ci(series(results, lambda r: r["customers"]), confidence)
        close = mean_ci(series(results, lambda r: (r["last_departure"] or 0.0) / 3600.0), confidence)

        print(f"Scenario: {sc['name']} (replications={replications}, {confidence*100:.1f}% CI, "
              f"seeds {scenario_seed}-{scenario_seed + replications - 1})")
        print("  Longest line by seed:")
        for seed, res in runs:
            print(f"    seed {seed}: {res['longest_line']} (customers {res['customers']})")
        print(f"  Longest line: {longest[0]:.2f} ± {longest[1]:.2f}")
        print(f"  Customers/day: {customers[0]:.1f} ± {customers[1]:.1f}")
        print(f"  Last departure (hours after midnight): {close[0]:.2f} ± {close[1]:.2f}")
        print("-")

    comparisons = crn_comparisons(exp_cfg.get("crn_compare") or [], SCENARIOS)
    # Bonferroni: each of the C comparisons run gets alpha / C
    C = len(comparisons)
    for sc_a, sc_b in comparisons:
        print(f"\nCRN & Bonferroni Comparison: {sc_a['name']} vs {sc_b['name']} "
              f"(replications={replications}, seeds shared, C={C})")
        run_crn(cfg, sc_a, sc_b, replications, default_seed, confidence, C)


if __name__ == "__main__":
    main()
