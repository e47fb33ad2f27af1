"""
Opportunity screening and portfolio summaries.

A screen narrows the generated opportunity set before it reaches the engines:
the filtered, sorted list feeds the backtest directly, and its leg-A bond names
become the candidate assets for the frontier.
"""

from dataclasses import dataclass, field

from relval.data.schemas import SORTABLE_FIELDS, TradeOpportunity
from relval.utils.errors import InvalidArgumentError
from relval.utils.math import round_display

ALL_TYPES = 'All'


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Averages and composition of a screened opportunity set.

    Attributes:
        count: Number of opportunities.
        avg_duration: Mean leg-A duration in years (2 dp).
        avg_yield: Mean leg-A yield in percent (2 dp).
        avg_liquidity: Mean liquidity score (1 dp).
        composition: Arbitrage type -> count, in first-seen order.
    """
    count: int = 0
    avg_duration: float = 0.0
    avg_yield: float = 0.0
    avg_liquidity: float = 0.0
    composition: dict[str, int] = field(default_factory=dict)


def screen_opportunities(
    opportunities: list[TradeOpportunity],
    type_filter: str = ALL_TYPES,
    max_risk: float = 100,
    min_profit: float = 0,
    sort_key: str = 'potential_profit',
    descending: bool = True,
) -> list[TradeOpportunity]:
    """
    Filter and sort opportunities.

    Keeps opportunities whose type matches ``type_filter`` (any type for
    "All"), with risk_score <= max_risk and potential_profit >= min_profit,
    then sorts stably on ``sort_key``. Equal keys keep their input order in
    both directions.

    Raises:
        InvalidArgumentError: If sort_key is not a sortable numeric field.
    """
    if sort_key not in SORTABLE_FIELDS:
        raise InvalidArgumentError(
            f"Cannot sort on {sort_key!r}. Expected one of {list(SORTABLE_FIELDS)}."
        )

    kept = [
        op for op in opportunities
        if (type_filter == ALL_TYPES or op.arbitrage_type == type_filter)
        and op.risk_score <= max_risk
        and op.potential_profit >= min_profit
    ]
    # sorted(reverse=True) is stable too: ties keep input order
    return sorted(kept, key=lambda op: getattr(op, sort_key), reverse=descending)


def summarize_portfolio(opportunities: list[TradeOpportunity]) -> PortfolioSummary:
    """Average leg-A duration/yield, liquidity and type composition; zeros when empty."""
    count = len(opportunities)
    if count == 0:
        return PortfolioSummary()

    composition: dict[str, int] = {}
    for op in opportunities:
        composition[op.arbitrage_type] = composition.get(op.arbitrage_type, 0) + 1

    return PortfolioSummary(
        count=count,
        avg_duration=round_display(sum(op.duration_a for op in opportunities) / count),
        avg_yield=round_display(sum(op.yield_a for op in opportunities) / count),
        avg_liquidity=round_display(sum(op.liquidity for op in opportunities) / count, 1),
        composition=composition,
    )
