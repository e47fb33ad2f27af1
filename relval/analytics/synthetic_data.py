"""
Synthetic market data generators for testing and demonstration.

This module manufactures the inputs the analytics core consumes:
  - Arbitrage opportunities: random two-leg bond pairs with profit, risk,
    liquidity, duration and yield drawn from fixed ranges.
  - Base yield curve: an upward-drifting random walk over the standard tenors.
  - Pair spread history: a random-walk spread with a GARCH(1,1)-style
    volatility path, for inspecting one opportunity.
  - Market internals: a floored credit-spread random walk and an issuance
    volume split.

All generators take an optional ``numpy.random.Generator``; pass a seeded one
for reproducible data.
"""

import numpy as np
import pandas as pd

from relval.data.schemas import (
    ARBITRAGE_TYPES,
    TENORS,
    TradeOpportunity,
    YieldCurvePoint,
)
from relval.utils.math import compute_garch_volatility_step, make_rng, round_display

ISSUERS = (
    'Apple Inc',
    'Govt. of USA',
    'Microsoft Corp',
    'JPMorgan Chase',
    'Ford Motor Co.',
    'Verizon Comm.',
    'Toyota Motors',
    'Pfizer Inc.',
)

RATINGS = ('AAA', 'AA+', 'A-', 'BBB+', 'BB', 'B+')

BASE_CURVE_START = 2.5


def _choice(rng: np.random.Generator, options: tuple[str, ...]) -> str:
    return options[int(rng.integers(len(options)))]


def generate_bond_name(issuer: str, rating: str, rng: np.random.Generator) -> str:
    """
    Build a bond display name: "<issuer> <coupon>% <year> (<rating>)".

    Coupon is drawn from [1.5, 5.5) and the maturity year from 2026-2035.
    """
    coupon = rng.uniform(1.5, 5.5)
    year = int(rng.integers(2026, 2036))
    return f"{issuer} {coupon:.2f}% {year} ({rating})"


def generate_arbitrage_opportunities(
    count: int = 100,
    rng: np.random.Generator | None = None,
) -> list[TradeOpportunity]:
    """
    Generate random relative-value opportunities.

    **Field ranges**:
    - Issuer B is redrawn until it differs from issuer A.
    - potential_profit: a 4-decimal draw from [0.05, 0.55) scaled by 100 and
      rounded to 2 decimals, i.e. [5, 55) per 100k notional.
    - risk_score: integer in [0, 99].
    - liquidity: [1, 10) with 1 decimal.
    - duration_a/b: [2, 7) years, yield_a/b: [2.5, 5.5) percent, 2 decimals.

    Args:
        count: Number of opportunities (ids 0..count-1).
        rng: Random source.

    Returns:
        List of TradeOpportunity.
    """
    rng = make_rng(rng)
    opportunities = []

    for i in range(count):
        rating_a = _choice(rng, RATINGS)
        rating_b = _choice(rng, RATINGS)
        issuer_a = _choice(rng, ISSUERS)
        issuer_b = _choice(rng, ISSUERS)
        while issuer_b == issuer_a:
            issuer_b = _choice(rng, ISSUERS)

        profit = round(rng.uniform(0.05, 0.55), 4)

        opportunities.append(
            TradeOpportunity(
                id=i,
                bond_a=generate_bond_name(issuer_a, rating_a, rng),
                bond_b=generate_bond_name(issuer_b, rating_b, rng),
                issuer_a=issuer_a,
                issuer_b=issuer_b,
                rating_a=rating_a,
                rating_b=rating_b,
                arbitrage_type=_choice(rng, ARBITRAGE_TYPES),
                liquidity=round_display(rng.uniform(1.0, 10.0), 1),
                potential_profit=round_display(profit * 100),
                risk_score=int(rng.integers(0, 100)),
                duration_a=round_display(rng.uniform(2.0, 7.0)),
                yield_a=round_display(rng.uniform(2.5, 5.5)),
                duration_b=round_display(rng.uniform(2.0, 7.0)),
                yield_b=round_display(rng.uniform(2.5, 5.5)),
            )
        )

    return opportunities


def generate_base_yield_curve(
    rng: np.random.Generator | None = None,
) -> list[YieldCurvePoint]:
    """
    Generate an upward-drifting base curve over the standard tenor list.

    Starting from 2.5%, each tenor adds a step drawn from [-0.05, 0.25), so the
    curve is usually (not always) upward sloping. Yields are rounded to 2
    decimals; the walk itself continues at full precision.
    """
    rng = make_rng(rng)
    level = BASE_CURVE_START
    curve = []
    for index, maturity in enumerate(TENORS):
        level += rng.uniform(-0.05, 0.25)
        curve.append(
            YieldCurvePoint(maturity=maturity, yield_pct=round_display(level), index=index)
        )
    return curve


def generate_yield_spread_history(
    yield_a: float,
    yield_b: float,
    days: int = 90,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """
    Simulate a spread path between two legs with GARCH-style volatility.

    **Mathematical**: Starting from s_0 = yield_a - yield_b and σ_0 = 0.1,
    for each day:
        ε_t = (U_t - 0.5) * 0.1
        s_t = s_{t-1} + ε_t
        σ_t = sqrt(0.1 * 0.1^2 + 0.8 * σ_{t-1}^2 + 0.1 * ε_t^2)

    Args:
        yield_a: Leg A yield (percent).
        yield_b: Leg B yield (percent).
        days: Length of the history.
        rng: Random source.

    Returns:
        DataFrame with columns days_ago (days..1), spread, volatility, oldest
        first. Values are rounded to 2 decimals.
    """
    rng = make_rng(rng)
    spread = yield_a - yield_b
    volatility = 0.1
    rows = []
    for days_ago in range(days, 0, -1):
        shock = (rng.random() - 0.5) * 0.1
        spread += shock
        volatility = compute_garch_volatility_step(volatility, shock)
        rows.append(
            {
                'days_ago': days_ago,
                'spread': round_display(spread),
                'volatility': round_display(volatility),
            }
        )
    return pd.DataFrame(rows, columns=['days_ago', 'spread', 'volatility'])


def generate_market_internals(
    days: int = 180,
    rng: np.random.Generator | None = None,
) -> dict[str, pd.DataFrame]:
    """
    Simulate market-wide credit conditions.

    Returns:
        {'credit_spread': DataFrame(days_ago, spread), 'issuance_volume':
        DataFrame(name, value)}. The credit spread starts at 1.5, moves by
        (U - 0.5) * 0.05 per day, and is floored at 0.5. Issuance volume splits
        into "New Issues" (50-99) and "Off-the-Run" (30-49).
    """
    rng = make_rng(rng)
    spread = 1.5
    rows = []
    for days_ago in range(days, 0, -1):
        spread += (rng.random() - 0.5) * 0.05
        spread = max(0.5, spread)
        rows.append({'days_ago': days_ago, 'spread': round_display(spread)})

    issuance = pd.DataFrame(
        [
            {'name': 'New Issues', 'value': int(rng.integers(50, 100))},
            {'name': 'Off-the-Run', 'value': int(rng.integers(30, 50))},
        ],
        columns=['name', 'value'],
    )
    return {
        'credit_spread': pd.DataFrame(rows, columns=['days_ago', 'spread']),
        'issuance_volume': issuance,
    }
