"""
Tests for relval/api.py

The API layer validates caller arguments before the engines run, so these tests
focus on what is rejected and how accepted arguments are passed through.
"""

import numpy as np
import pytest

from factories import make_curve, make_opportunity
from relval.api import apply_yield_scenario, explore_frontier, run_backtest
from relval.strategies.base import StrategyName, StrategyParams
from relval.utils.errors import InvalidArgumentError


def test_run_backtest_accepts_dict_params():
    """A plain dict is coerced to StrategyParams."""
    opps = [make_opportunity(id=0, potential_profit=12.0, risk_score=75)]
    result = run_backtest(opps, "Custom", {"min_profit": 10, "max_risk": 80},
                          rng=np.random.default_rng(0))

    assert result.strategy is StrategyName.CUSTOM
    assert result.params == StrategyParams(min_profit=10, max_risk=80)
    assert result.trades == 1


@pytest.mark.parametrize(
    "strategy, params",
    [
        ("Carry", None),
        ("Custom", {"min_profit": -1}),
        ("Custom", {"max_risk": 150}),
        ("Custom", {"min_profit": 5, "leverage": 2}),
        ("Custom", [10, 80]),
    ],
)
def test_run_backtest_rejects_bad_arguments(strategy, params):
    """Unknown strategies and malformed params raise InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError):
        run_backtest([make_opportunity()], strategy, params)


def test_apply_yield_scenario_passthrough():
    """The API applies the named scenario."""
    stressed = apply_yield_scenario(make_curve([2.0, 2.5, 3.0]), "Parallel Down")
    assert [p.scenario_yield for p in stressed] == [1.5, 2.0, 2.5]


def test_explore_frontier_defaults_sample_count_from_settings(monkeypatch):
    """RELVAL_FRONTIER_SAMPLES is used when no count is given."""
    from relval.config.settings import reset_settings

    monkeypatch.setenv("RELVAL_FRONTIER_SAMPLES", "25")
    reset_settings()

    frontier = explore_frontier(["A", "B"], rng=np.random.default_rng(0))
    assert len(frontier.points) == 25


def test_explore_frontier_default_is_one_thousand():
    """Without configuration the frontier draws 1000 portfolios."""
    frontier = explore_frontier(["A", "B"], rng=np.random.default_rng(0))
    assert len(frontier.points) == 1000


@pytest.mark.parametrize("sample_count", [-1, 2.5, "100", True])
def test_explore_frontier_rejects_bad_sample_count(sample_count):
    """Negative or non-integer counts are rejected."""
    with pytest.raises(InvalidArgumentError):
        explore_frontier(["A"], sample_count=sample_count)


@pytest.mark.parametrize("max_workers", [0, -2, 1.5])
def test_explore_frontier_rejects_bad_worker_count(max_workers):
    """max_workers must be a positive integer."""
    with pytest.raises(InvalidArgumentError):
        explore_frontier(["A"], sample_count=10, max_workers=max_workers)


def test_explore_frontier_zero_samples_is_empty():
    """Zero is a valid count and yields an empty frontier."""
    frontier = explore_frontier(["A", "B"], sample_count=0)
    assert frontier.points == []
    assert frontier.max_sharpe_portfolio is None


def test_explore_frontier_accepts_numpy_integer():
    """numpy integer counts are fine."""
    frontier = explore_frontier(["A"], sample_count=np.int64(5), rng=np.random.default_rng(0))
    assert len(frontier.points) == 5
