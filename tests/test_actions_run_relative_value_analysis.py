"""
Tests for actions/run_relative_value_analysis.py

Runs the script's main() end to end on small seeded inputs and checks the
printed report and exit codes.
"""

import re

import pytest
from loguru import logger

from actions.run_relative_value_analysis import main


@pytest.fixture(autouse=True)
def drop_script_sinks():
    """main() installs a stderr sink bound to the captured stream; remove it afterwards."""
    yield
    logger.remove()
    logger.disable("relval")


def test_main_runs_all_steps(capsys):
    """A seeded run prints every step and exits 0."""
    exit_code = main(["--seed", "1", "--count", "30", "--samples", "50", "--log-level", "WARNING"])
    out = capsys.readouterr().out

    assert exit_code == 0
    for step in ("Step 1", "Step 2", "Step 3", "Step 4", "Step 5"):
        assert step in out
    assert "Steepener" in out


def test_main_is_reproducible_with_seed(capsys):
    """Two runs with the same seed print the same report."""
    args = ["--seed", "3", "--count", "20", "--samples", "40", "--workers", "2",
            "--log-level", "WARNING"]
    main(args)
    first = capsys.readouterr().out
    main(args)
    second = capsys.readouterr().out

    assert first == second


def test_main_custom_strategy(capsys):
    """Custom thresholds are passed to the backtest."""
    exit_code = main(["--seed", "2", "--count", "20", "--samples", "10",
                      "--strategy", "Custom", "--min-profit", "30", "--max-risk", "50",
                      "--log-level", "WARNING"])
    assert exit_code == 0
    assert "Backtest (Custom)" in capsys.readouterr().out


def test_main_rejects_bad_arguments(capsys):
    """Invalid strategy or sample count exits with code 2."""
    assert main(["--seed", "1", "--count", "5", "--strategy", "Aggressive",
                 "--log-level", "ERROR"]) == 2
    assert main(["--seed", "1", "--count", "5", "--samples", "-3",
                 "--log-level", "ERROR"]) == 2


def test_main_empty_screen(capsys):
    """A screen that keeps nothing still completes."""
    exit_code = main(["--seed", "1", "--count", "10", "--screen-min-profit", "1000",
                      "--samples", "10", "--log-level", "WARNING"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Screen kept 0 opportunities" in out
    assert "frontier is empty" in out


def test_backtest_runs_on_unscreened_opportunities(capsys):
    """The screen narrows the summary and frontier, never the backtest input."""
    exit_code = main(["--seed", "4", "--count", "12", "--screen-min-profit", "1000",
                      "--strategy", "Custom", "--min-profit", "0", "--max-risk", "100",
                      "--samples", "10", "--log-level", "WARNING"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Screen kept 0 opportunities" in out
    assert "over all 12 generated opportunities" in out
    assert re.search(r"Trades:\s+12\b", out)
