"""
Tests for relval/portfolio/frontier.py
"""

import numpy as np
import pytest

from relval.portfolio.frontier import (
    Frontier,
    draw_normalized_weights,
    explore_frontier,
)
from relval.utils.errors import InvalidArgumentError


ASSETS = ["Apple Inc 3.25% 2030 (AA+)", "Ford Motor Co. 4.80% 2033 (BB)", "Pfizer Inc. 2.10% 2027 (A-)"]


def test_weights_non_negative_and_sum_to_one():
    """Every sample is a valid long-only allocation."""
    frontier = explore_frontier(ASSETS, samples=500, rng=np.random.default_rng(0))

    assert len(frontier.points) == 500
    for point in frontier.points:
        assert len(point.weights) == len(ASSETS)
        assert all(w >= 0 for w in point.weights)
        assert sum(point.weights) == pytest.approx(1.0, abs=1e-6)


def test_selected_portfolios_are_extremes():
    """min-vol has the lowest volatility and max-Sharpe the highest Sharpe."""
    frontier = explore_frontier(ASSETS, samples=300, rng=np.random.default_rng(1))

    assert frontier.min_vol_portfolio.volatility == min(p.volatility for p in frontier.points)
    assert frontier.max_sharpe_portfolio.sharpe == max(p.sharpe for p in frontier.points)
    assert frontier.min_vol_portfolio in frontier.points
    assert frontier.max_sharpe_portfolio in frontier.points


def test_points_in_percent_and_ratio_consistent():
    """Volatility/return are percent; Sharpe is their raw ratio."""
    frontier = explore_frontier(ASSETS, samples=200, rng=np.random.default_rng(2))

    for point in frontier.points:
        assert 0 < point.volatility < 25.0
        assert -2.0 <= point.expected_return < 8.0
        assert point.sharpe == pytest.approx(point.expected_return / point.volatility)


def test_draw_indices_in_order():
    """Samples are stored in draw order."""
    frontier = explore_frontier(ASSETS, samples=50, rng=np.random.default_rng(3))
    assert [p.draw for p in frontier.points] == list(range(50))


@pytest.mark.parametrize("assets, samples", [([], 100), (ASSETS, 0)])
def test_empty_frontier(assets, samples):
    """No assets or no samples → no points and no selections."""
    frontier = explore_frontier(assets, samples=samples, rng=np.random.default_rng(0))

    assert frontier.points == []
    assert frontier.min_vol_portfolio is None
    assert frontier.max_sharpe_portfolio is None
    assert frontier.to_frame().empty


def test_single_asset_gets_full_weight():
    """With one asset every weight vector is (1.0,)."""
    frontier = explore_frontier(["Govt. of USA 2.00% 2030 (AAA)"], samples=20, rng=np.random.default_rng(4))
    assert all(p.weights == (1.0,) for p in frontier.points)


def test_duplicate_asset_ids_are_separate_positions():
    """Duplicates each get their own weight."""
    frontier = explore_frontier(["X", "X", "Y"], samples=10, rng=np.random.default_rng(5))
    assert all(len(p.weights) == 3 for p in frontier.points)
    assert frontier.asset_ids == ("X", "X", "Y")


class _ZeroFirstGenerator:
    """Generator stub whose first weight draw is all zeros."""

    def __init__(self, seed):
        self._rng = np.random.default_rng(seed)
        self.calls = 0

    def random(self, size):
        self.calls += 1
        if self.calls == 1:
            return np.zeros(size)
        return self._rng.random(size)


def test_zero_sum_weight_rows_are_redrawn():
    """A row of zero uniforms is redrawn instead of dividing by zero."""
    rng = _ZeroFirstGenerator(0)
    weights = draw_normalized_weights(rng, n_samples=4, n_assets=3)

    assert rng.calls == 2
    assert np.all(np.isfinite(weights))
    assert np.allclose(weights.sum(axis=1), 1.0)


def test_seeded_runs_reproducible():
    """Same seed, same worker count → identical frontier."""
    a = explore_frontier(ASSETS, samples=100, rng=np.random.default_rng(9))
    b = explore_frontier(ASSETS, samples=100, rng=np.random.default_rng(9))
    assert a.points == b.points


def test_parallel_sampling_deterministic_and_complete():
    """Threaded runs return every sample and repeat exactly for a seed."""
    a = explore_frontier(ASSETS, samples=1001, rng=np.random.default_rng(9), max_workers=4)
    b = explore_frontier(ASSETS, samples=1001, rng=np.random.default_rng(9), max_workers=4)

    assert len(a.points) == 1001
    assert [p.draw for p in a.points] == list(range(1001))
    assert a.points == b.points
    assert a.max_sharpe_portfolio == b.max_sharpe_portfolio


def test_more_workers_than_samples():
    """Worker count is capped by the sample count."""
    frontier = explore_frontier(ASSETS, samples=3, rng=np.random.default_rng(0), max_workers=8)
    assert len(frontier.points) == 3


def test_to_frame_and_weights_for():
    """Frame columns and the asset-to-weight mapping."""
    frontier = explore_frontier(ASSETS, samples=10, rng=np.random.default_rng(6))

    frame = frontier.to_frame()
    assert list(frame.columns) == ['volatility', 'expected_return', 'sharpe']
    assert len(frame) == 10

    mapping = frontier.weights_for(frontier.max_sharpe_portfolio)
    assert list(mapping) == ASSETS
    assert sum(mapping.values()) == pytest.approx(1.0)


def test_default_frontier_is_empty():
    """A bare Frontier has no points."""
    assert Frontier().points == []


def test_negative_samples_rejected_by_engine():
    """A negative sample count raises InvalidArgumentError, not numpy's ValueError."""
    with pytest.raises(InvalidArgumentError, match="non-negative"):
        explore_frontier(ASSETS, samples=-5, rng=np.random.default_rng(0))
