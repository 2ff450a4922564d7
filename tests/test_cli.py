import subprocess
import sys

from supermarket_sim.cli import main


def test_show_config_prints_settings(capsys):
    assert main(["show-config", "--lanes", "6"]) == 0
    out = capsys.readouterr().out
    assert "Number of Checkout Lanes: 6" in out
    assert "Opening Time: 08:00:00" in out


def test_run_quiet_prints_summary(capsys):
    rc = main(["run", "--quiet", "--customers", "25", "--lanes", "2", "--seed", "3"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Simulation Complete!" in out
    assert "Longest line:" in out
    assert "Running Simulation..." not in out


def test_run_with_display(capsys):
    rc = main(["run", "--customers", "3", "--lanes", "2", "--seed", "1", "--delay-ms", "0"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Running Simulation..." in out
    assert "Number of exits processed" in out


def test_bad_configuration_exits_with_code_2(capsys):
    assert main(["run", "--lanes", "0", "--quiet"]) == 2
    assert "configuration error" in capsys.readouterr().err
    assert main(["run", "--opening", "noon", "--quiet"]) == 2


def test_module_help_runs():
    proc = subprocess.run(
        [sys.executable, "-m", "supermarket_sim", "-h"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0
    out = proc.stdout + proc.stderr
    assert "run" in out
    assert "show-config" in out
