"""
Tests for relval/analytics/screening.py
"""

import pytest

from factories import make_opportunity
from relval.analytics.screening import (
    PortfolioSummary,
    screen_opportunities,
    summarize_portfolio,
)
from relval.utils.errors import InvalidArgumentError


@pytest.fixture
def opportunities():
    return [
        make_opportunity(id=0, potential_profit=30.0, risk_score=20, arbitrage_type="Credit Spread"),
        make_opportunity(id=1, potential_profit=12.0, risk_score=70, arbitrage_type="Yield Curve"),
        make_opportunity(id=2, potential_profit=30.0, risk_score=40, arbitrage_type="Credit Spread"),
        make_opportunity(id=3, potential_profit=45.0, risk_score=90, arbitrage_type="Relative Value"),
    ]


def test_default_screen_sorts_by_profit_descending(opportunities):
    """All opportunities pass; ties keep input order."""
    screened = screen_opportunities(opportunities)
    assert [op.id for op in screened] == [3, 0, 2, 1]


def test_screen_filters_type_risk_and_profit(opportunities):
    """Type filter plus inclusive risk and profit bounds."""
    assert [op.id for op in screen_opportunities(opportunities, type_filter="Credit Spread")] == [0, 2]
    assert [op.id for op in screen_opportunities(opportunities, max_risk=40)] == [0, 2]
    assert [op.id for op in screen_opportunities(opportunities, min_profit=30)] == [3, 0, 2]


def test_screen_ascending_sort(opportunities):
    """Ascending risk sort."""
    screened = screen_opportunities(opportunities, sort_key="risk_score", descending=False)
    assert [op.id for op in screened] == [0, 2, 1, 3]


def test_screen_rejects_unknown_sort_key(opportunities):
    """Sorting on a non-numeric or unknown field is an error."""
    with pytest.raises(InvalidArgumentError):
        screen_opportunities(opportunities, sort_key="bond_a")


def test_summarize_portfolio():
    """Averages over leg A and type composition in first-seen order."""
    opps = [
        make_opportunity(id=0, duration_a=2.0, yield_a=3.0, liquidity=4.0, arbitrage_type="Yield Curve"),
        make_opportunity(id=1, duration_a=5.0, yield_a=4.5, liquidity=7.5, arbitrage_type="Credit Spread"),
        make_opportunity(id=2, duration_a=3.5, yield_a=3.0, liquidity=9.0, arbitrage_type="Yield Curve"),
    ]
    summary = summarize_portfolio(opps)

    assert summary.count == 3
    assert summary.avg_duration == 3.5
    assert summary.avg_yield == 3.5
    assert summary.avg_liquidity == 6.8
    assert summary.composition == {"Yield Curve": 2, "Credit Spread": 1}
    assert list(summary.composition) == ["Yield Curve", "Credit Spread"]


def test_summarize_empty_portfolio():
    """An empty screen summarizes to zeros."""
    assert summarize_portfolio([]) == PortfolioSummary()
