"""
Strategy rules that select which opportunities a backtest trades.

**Conceptual**: This module defines the contract between strategy rules and
the backtest engine. A rule looks at one TradeOpportunity and answers "would
this strategy put the trade on?". The engine keeps the accepted opportunities
in their original order and simulates them one by one.

**Why a rule interface?**
  - Decoupling: the engine doesn't need to know threshold values.
  - Extensibility: new rules plug in without modifying the engine.
  - Testability: rules are checked independently of the random simulation.
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from relval.data.schemas import TradeOpportunity
from relval.utils.errors import InvalidArgumentError


class StrategyName(str, Enum):
    """Backtest strategies a caller can select."""
    BALANCED = 'Balanced'
    CUSTOM = 'Custom'


@dataclass(frozen=True)
class StrategyParams:
    """
    Thresholds for the Custom strategy.

    Attributes:
        min_profit: Minimum potential profit (inclusive), >= 0.
        max_risk: Maximum risk score (inclusive), in [0, 100].
    """
    min_profit: float = 0.0
    max_risk: float = 100.0

    def __post_init__(self):
        for name in ('min_profit', 'max_risk'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidArgumentError(f"{name} must be a number, got {value!r}.")
            if value != value:
                raise InvalidArgumentError(f"{name} must not be NaN.")
        if self.min_profit < 0:
            raise InvalidArgumentError(
                f"min_profit must be non-negative, got {self.min_profit}."
            )
        if not 0 <= self.max_risk <= 100:
            raise InvalidArgumentError(
                f"max_risk must be in [0, 100], got {self.max_risk}."
            )


class OpportunityRule(Protocol):
    """
    Strategy rule interface for backtesting.

    Any object with an ``accepts`` method matching this signature can be used
    as a rule (structural typing, not inheritance).
    """

    def accepts(self, opportunity: TradeOpportunity) -> bool:
        """Return True if the strategy would trade this opportunity."""
        ...


class BalancedRule:
    """
    Fixed-threshold rule: meaningful edge with moderate risk.

    Keeps opportunities with potential_profit > 20 AND risk_score < 60. Both
    bounds are strict.
    """

    min_profit_exclusive = 20.0
    max_risk_exclusive = 60

    def accepts(self, opportunity: TradeOpportunity) -> bool:
        return (
            opportunity.potential_profit > self.min_profit_exclusive
            and opportunity.risk_score < self.max_risk_exclusive
        )


class CustomRule:
    """
    Caller-parametrized rule with inclusive bounds.

    Keeps opportunities with potential_profit >= min_profit AND
    risk_score <= max_risk.
    """

    def __init__(self, params: StrategyParams):
        self.params = params

    def accepts(self, opportunity: TradeOpportunity) -> bool:
        return (
            opportunity.potential_profit >= self.params.min_profit
            and opportunity.risk_score <= self.params.max_risk
        )


def parse_strategy_name(strategy: "str | StrategyName") -> StrategyName:
    """
    Resolve a strategy by value ("Balanced") or member name ("BALANCED").

    Raises:
        InvalidArgumentError: If the name matches no strategy.
    """
    if isinstance(strategy, StrategyName):
        return strategy
    for member in StrategyName:
        if strategy == member.value or strategy == member.name:
            return member
    raise InvalidArgumentError(
        f"Unknown strategy {strategy!r}. "
        f"Expected one of {[member.value for member in StrategyName]}."
    )


def build_rule(
    strategy: "str | StrategyName",
    params: StrategyParams | None = None,
) -> OpportunityRule:
    """
    Build the rule for a strategy.

    Args:
        strategy: Strategy name or member.
        params: Thresholds for Custom. Ignored for Balanced. Defaults to
                StrategyParams() (accept everything) when Custom is chosen
                without params.

    Returns:
        An OpportunityRule.

    Raises:
        InvalidArgumentError: For unknown strategy names.
    """
    resolved = parse_strategy_name(strategy)
    if resolved is StrategyName.CUSTOM:
        return CustomRule(params if params is not None else StrategyParams())
    return BalancedRule()


def filter_opportunities(
    opportunities: list[TradeOpportunity],
    rule: OpportunityRule,
) -> list[TradeOpportunity]:
    """Stable filter: accepted opportunities in input order."""
    return [op for op in opportunities if rule.accepts(op)]
