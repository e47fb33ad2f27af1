"""
Trade-by-trade backtest engine for relative-value opportunity rules.

**Conceptual**: The backtest engine takes a set of candidate opportunities,
keeps the ones a strategy rule would trade, and simulates what each trade
actually realized. The output is an equity curve, a trade log, and summary
statistics (total return, Sharpe, max drawdown, win/loss ratio).

**Simulation model**:
  - Equity starts at a fixed initial value (100,000 by default).
  - Trades are taken in input order, one step per trade.
  - Realized outcome = potential_profit * U, with U ~ Uniform[0.5, 2.0). This
    models slippage around the estimated edge: anywhere from half to twice
    the estimate.
  - A trade is a Win if it realized at least 80% of its estimate, else a Loss.
    Outcomes are never negative for non-negative estimates, so "Loss" here
    means "under-delivered", not "lost money".
  - Equity accumulates outcomes at full precision. Rounding to 2 decimals
    happens only in summary() and in the trade log's display profit.

**Why inject the random source?**
  - Reproducible: same generator seed → same equity curve.
  - Testable: properties can be checked on fixed draws.
"""

from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from loguru import logger

from relval.analytics.risk_metrics import (
    InfiniteRatio,
    compute_equity_metrics,
    compute_win_loss_ratio,
)
from relval.config.settings import get_settings
from relval.data.schemas import TradeOpportunity
from relval.strategies.base import (
    StrategyName,
    StrategyParams,
    build_rule,
    filter_opportunities,
    parse_strategy_name,
)
from relval.utils.math import make_rng, round_display

# Outcome multiplier range and win threshold
OUTCOME_MULTIPLIER_LOW = 0.5
OUTCOME_MULTIPLIER_HIGH = 2.0
WIN_THRESHOLD = 0.8


@dataclass(frozen=True)
class TradeRecord:
    """
    One simulated trade.

    Attributes:
        opportunity_id: Id of the traded opportunity.
        pair: Issuer short names of both legs, e.g. "Apple / Microsoft".
        profit: Realized outcome rounded to 2 decimals (display value).
        status: "Win" or "Loss".
    """
    opportunity_id: int
    pair: str
    profit: float
    status: str


@dataclass
class BacktestResult:
    """
    Results from a backtest run.

    Attributes:
        equity_curve: Cumulative equity indexed by step label ("Start",
                     "Trade 1", ..., "Trade n"). Length is always trades + 1.
                     Values are full precision.
        trade_log: One TradeRecord per simulated trade, in trade order.
        metrics: total_return (%), sharpe_ratio, max_drawdown (%),
                final_equity, trades, wins, losses (full precision).
        win_loss_ratio: wins / losses, or the INFINITE sentinel when there
                       were no losses.
        strategy: Strategy that produced this result.
        params: Custom thresholds used (None for Balanced).
    """
    equity_curve: pd.Series
    trade_log: list[TradeRecord] = field(default_factory=list)
    metrics: dict[str, float] = field(default_factory=dict)
    win_loss_ratio: float | InfiniteRatio | None = None
    strategy: StrategyName = StrategyName.BALANCED
    params: StrategyParams | None = None

    @property
    def trades(self) -> int:
        return len(self.trade_log)

    def summary(self) -> dict[str, object]:
        """
        Display-ready summary: monetary and percentage values rounded to 2 dp.

        The win/loss ratio is rounded when numeric and rendered as "inf" when
        it is the INFINITE sentinel.
        """
        if isinstance(self.win_loss_ratio, InfiniteRatio):
            win_loss = str(self.win_loss_ratio)
        else:
            win_loss = round_display(self.win_loss_ratio)

        return {
            'total_return': round_display(self.metrics['total_return']),
            'sharpe_ratio': round_display(self.metrics['sharpe_ratio']),
            'max_drawdown': round_display(self.metrics['max_drawdown']),
            'final_equity': round_display(self.metrics['final_equity']),
            'trades': self.trades,
            'win_loss_ratio': win_loss,
        }

    def trade_log_frame(self) -> pd.DataFrame:
        """Trade log as a DataFrame (columns: opportunity_id, pair, profit, status)."""
        return pd.DataFrame(
            [vars(record) for record in self.trade_log],
            columns=['opportunity_id', 'pair', 'profit', 'status'],
        )


def simulate_outcome(potential_profit: float, rng: np.random.Generator) -> float:
    """Realized profit of one trade: potential_profit * U[0.5, 2.0)."""
    return float(potential_profit * rng.uniform(OUTCOME_MULTIPLIER_LOW, OUTCOME_MULTIPLIER_HIGH))


def classify_outcome(outcome: float, potential_profit: float) -> str:
    """Win if the trade realized at least 80% of its estimate."""
    return 'Win' if outcome >= WIN_THRESHOLD * potential_profit else 'Loss'


def run_backtest(
    opportunities: list[TradeOpportunity],
    strategy: "str | StrategyName",
    params: StrategyParams | None = None,
    rng: np.random.Generator | None = None,
    initial_equity: float | None = None,
) -> BacktestResult:
    """
    Run a trade-by-trade backtest.

    **Conceptual**: This is the main entrypoint for backtesting. It:
      1. Builds the strategy rule and keeps matching opportunities (stable,
         input order, no re-sort).
      2. Walks the filtered opportunities, drawing a realized outcome for each
         and adding it to equity.
      3. Records an equity point and a trade-log entry per trade.
      4. Computes summary statistics over the full-precision equity curve.

    **Edge cases**:
      - No opportunity passes the filter → the equity curve is just the seed
        point, Sharpe = 0, max drawdown = 0, win/loss = INFINITE.

    Args:
        opportunities: Candidate opportunities (not modified).
        strategy: "Balanced" or "Custom" (or a StrategyName).
        params: Thresholds for Custom; ignored for Balanced.
        rng: Random source. Defaults to make_rng() (configured seed or entropy).
        initial_equity: Starting equity. Defaults to RELVAL_INITIAL_EQUITY
                        (100,000).

    Returns:
        BacktestResult with equity curve, trade log, and metrics.

    Raises:
        InvalidArgumentError: For unknown strategy names or invalid params.
    """
    settings = get_settings().analytics
    resolved = parse_strategy_name(strategy)
    if resolved is StrategyName.CUSTOM and params is None:
        params = StrategyParams()
    rule = build_rule(resolved, params)
    rng = make_rng(rng)

    if initial_equity is None:
        initial_equity = settings.initial_equity

    filtered = filter_opportunities(opportunities, rule)
    logger.debug(
        "Backtest {}: {} of {} opportunities pass the filter",
        resolved.value, len(filtered), len(opportunities),
    )

    # Seed point, then one point per trade
    equity = float(initial_equity)
    labels = ['Start']
    values = [equity]
    trade_log: list[TradeRecord] = []
    wins = 0
    losses = 0

    for step, op in enumerate(filtered, start=1):
        outcome = simulate_outcome(op.potential_profit, rng)
        status = classify_outcome(outcome, op.potential_profit)
        if status == 'Win':
            wins += 1
        else:
            losses += 1

        equity += outcome
        labels.append(f"Trade {step}")
        values.append(equity)
        trade_log.append(
            TradeRecord(
                opportunity_id=op.id,
                pair=op.pair_label,
                profit=round_display(outcome),
                status=status,
            )
        )

    equity_curve = pd.Series(values, index=labels, name='equity', dtype=float)

    metrics = compute_equity_metrics(
        equity_curve, periods_per_year=settings.periods_per_year
    )
    metrics['trades'] = len(filtered)
    metrics['wins'] = wins
    metrics['losses'] = losses

    result = BacktestResult(
        equity_curve=equity_curve,
        trade_log=trade_log,
        metrics=metrics,
        win_loss_ratio=compute_win_loss_ratio(wins, losses),
        strategy=resolved,
        params=params if resolved is StrategyName.CUSTOM else None,
    )

    logger.debug(
        "Backtest {} finished: trades={} total_return={:.2f}% max_drawdown={:.2f}%",
        resolved.value, len(filtered), metrics['total_return'], metrics['max_drawdown'],
    )
    return result
