import pytest

import yaml

from experiments import run_experiments
from experiments.run_experiments import crn_comparisons, mean_ci, run_crn, run_replications, series
from experiments.scenarios import SCENARIOS
from supermarket_sim.config import apply_overrides, load_cfg


def _small_cfg():
    return apply_overrides(load_cfg(), {"store": {"expected_customers": 40}})


def test_mean_ci_basic_cases():
    assert mean_ci([], 0.95) == (0.0, 0.0)
    assert mean_ci([3.0], 0.95) == (3.0, 0.0)
    mu, half = mean_ci([1.0, 2.0, 3.0, 4.0], 0.95)
    assert mu == 2.5
    # t(0.975, 3) = 3.182..., sd = 1.291
    assert half == pytest.approx(3.1824 * 1.2910 / 2.0, rel=1e-3)


def test_series_extracts_values():
    assert series([{"a": 1}, {"a": 2}], lambda r: r["a"]) == [1.0, 2.0]


def test_replications_use_consecutive_seeds_and_repeat():
    runs = run_replications(_small_cfg(), 3, base_seed=10)
    assert [seed for seed, _ in runs] == [10, 11, 12]
    again = run_replications(_small_cfg(), 3, base_seed=10)
    assert runs == again


def test_crn_comparison_of_identical_scenarios_is_zero(capsys):
    base = SCENARIOS[0]
    out = run_crn(_small_cfg(), base, base, replications=3, base_seed=1, confidence=0.95)
    assert out["mean_diff"] == 0.0
    assert out["half_width"] == 0.0
    assert "CRN paired longest-line comparison" in capsys.readouterr().out


def test_scenarios_are_valid_overrides():
    names = [sc["name"] for sc in SCENARIOS]
    assert len(names) == len(set(names))
    for sc in SCENARIOS:
        cfg = apply_overrides(_small_cfg(), sc["overrides"])
        assert cfg["store"]["lanes"] >= 1


def _write_cfg(tmp_path, crn_compare, sim=None):
    cfg = _small_cfg()
    cfg["store"]["expected_customers"] = 5
    cfg["sim"] = sim
    cfg["experiments"] = {"replications": 2, "crn_compare": crn_compare}
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return str(path)


def _record_crn(monkeypatch):
    calls = []
    monkeypatch.setattr(
        run_experiments, "run_crn",
        lambda cfg, a, b, reps, seed, conf, C: calls.append((a["name"], b["name"], C)),
    )
    return calls


@pytest.mark.parametrize("pairs", [
    [["baseline", "extra_lane"]],
    [["baseline", "extra_lane"], ["baseline", "legacy_service"]],
    [["baseline", "extra_lane"], ["baseline", "fewer_lanes"],
     ["baseline", "rush_day"], ["baseline", "legacy_service"]],
])
def test_main_bonferroni_divides_by_number_of_comparisons(tmp_path, monkeypatch, capsys, pairs):
    calls = _record_crn(monkeypatch)
    run_experiments.main(["--config", _write_cfg(tmp_path, pairs, sim={"seed": 0})])
    assert [c[:2] for c in calls] == [tuple(p) for p in pairs]
    assert {c[2] for c in calls} == {len(pairs)}


def test_main_ignores_bad_pairs_when_counting_comparisons(tmp_path, monkeypatch, capsys):
    calls = _record_crn(monkeypatch)
    pairs = [["baseline", "extra_lane"], ["baseline", "nope"], ["baseline"]]
    run_experiments.main(["--config", _write_cfg(tmp_path, pairs, sim={"seed": 0})])
    assert calls == [("baseline", "extra_lane", 1)]
    out = capsys.readouterr().out
    assert "CRN pair not found" in out
    assert "needs 2 names" in out


def test_crn_comparisons_resolves_names():
    resolved = crn_comparisons([["baseline", "extra_lane"]], SCENARIOS)
    assert [(a["name"], b["name"]) for a, b in resolved] == [("baseline", "extra_lane")]


def test_empty_sim_section_is_tolerated(tmp_path, monkeypatch, capsys):
    _record_crn(monkeypatch)
    run_experiments.main(["--config", _write_cfg(tmp_path, [], sim=None)])
    assert "Scenario: baseline" in capsys.readouterr().out
    cfg = _small_cfg()
    cfg["sim"] = None
    runs = run_replications(cfg, 2, base_seed=4)
    assert [seed for seed, _ in runs] == [4, 5]
