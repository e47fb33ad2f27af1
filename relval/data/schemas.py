"""
Data model and validation for trade opportunities and yield curves.

**Conceptual**: This module defines the "data contracts" for the analytics
core. Every engine reads the same immutable records:
  - TradeOpportunity: a candidate two-leg relative-value trade.
  - YieldCurvePoint: one tenor of a base yield curve.
  - ScenarioCurvePoint: a curve point after a stress scenario is applied.

**Schema philosophy**:
  - Records are frozen dataclasses: created once, read-only thereafter.
  - Field ranges are checked in ``__post_init__`` so a malformed record can
    never reach an engine.
  - Validation raises SchemaValidationError with actionable messages.
"""

from dataclasses import asdict, dataclass

import pandas as pd


class SchemaValidationError(Exception):
    """
    Raised when a record does not conform to the expected schema.

    **Usage**: The message names the record (opportunity id or tenor) and the
    offending field so the producer can be fixed quickly.
    """
    pass


# Arbitrage styles an opportunity may carry
ARBITRAGE_TYPES = (
    'Cash-and-Carry',
    'Yield Curve',
    'Credit Spread',
    'Relative Value',
)

# Fixed, ordered tenor list for yield curves (short end first)
TENORS = ('1M', '3M', '6M', '1Y', '2Y', '3Y', '5Y', '7Y', '10Y', '20Y', '30Y')

# Numeric fields an opportunity screen may sort on
SORTABLE_FIELDS = (
    'id',
    'liquidity',
    'potential_profit',
    'risk_score',
    'duration_a',
    'duration_b',
    'yield_a',
    'yield_b',
)


@dataclass(frozen=True)
class TradeOpportunity:
    """
    A candidate two-leg relative-value trade between two bonds.

    **Conceptual**: Leg A is bought and leg B is sold. The record carries the
    estimated edge (``potential_profit`` per 100k notional) and a risk score the
    strategy rules filter on, plus per-leg duration and yield for portfolio
    summaries.

    Attributes:
        id: Opportunity identifier (unique within a generated set).
        bond_a: Display name of leg A, e.g. "Apple Inc 3.25% 2031 (AA+)".
        bond_b: Display name of leg B.
        issuer_a: Issuer of leg A.
        issuer_b: Issuer of leg B. Must differ from issuer_a.
        rating_a: Credit rating of leg A.
        rating_b: Credit rating of leg B.
        arbitrage_type: One of ARBITRAGE_TYPES.
        liquidity: Liquidity score in [1, 10].
        potential_profit: Estimated profit per 100k notional (>= 0).
        risk_score: Integer risk score in [0, 100].
        duration_a: Leg A duration in years (> 0).
        duration_b: Leg B duration in years (> 0).
        yield_a: Leg A yield in percent (> 0).
        yield_b: Leg B yield in percent (> 0).
    """
    id: int
    bond_a: str
    bond_b: str
    issuer_a: str
    issuer_b: str
    rating_a: str
    rating_b: str
    arbitrage_type: str
    liquidity: float
    potential_profit: float
    risk_score: int
    duration_a: float
    duration_b: float
    yield_a: float
    yield_b: float

    def __post_init__(self):
        ctx = f"Opportunity {self.id}: "

        if self.issuer_a == self.issuer_b:
            raise SchemaValidationError(
                f"{ctx}legs must reference distinct issuers, both are '{self.issuer_a}'."
            )
        if self.arbitrage_type not in ARBITRAGE_TYPES:
            raise SchemaValidationError(
                f"{ctx}unknown arbitrage type '{self.arbitrage_type}'. "
                f"Expected one of {list(ARBITRAGE_TYPES)}."
            )
        if not 1.0 <= self.liquidity <= 10.0:
            raise SchemaValidationError(
                f"{ctx}liquidity must be in [1, 10], got {self.liquidity}."
            )
        if self.potential_profit < 0:
            raise SchemaValidationError(
                f"{ctx}potential_profit must be non-negative, got {self.potential_profit}."
            )
        if isinstance(self.risk_score, bool) or not isinstance(self.risk_score, int):
            raise SchemaValidationError(
                f"{ctx}risk_score must be an integer, got {self.risk_score!r}."
            )
        if not 0 <= self.risk_score <= 100:
            raise SchemaValidationError(
                f"{ctx}risk_score must be in [0, 100], got {self.risk_score}."
            )
        for name in ('duration_a', 'duration_b', 'yield_a', 'yield_b'):
            value = getattr(self, name)
            if value <= 0:
                raise SchemaValidationError(
                    f"{ctx}{name} must be positive, got {value}."
                )

    @property
    def pair_label(self) -> str:
        """Issuer short names of both legs, e.g. "Apple / Microsoft"."""
        return f"{self.bond_a.split(' ')[0]} / {self.bond_b.split(' ')[0]}"


@dataclass(frozen=True)
class YieldCurvePoint:
    """
    One tenor of a yield curve.

    Attributes:
        maturity: Tenor label from TENORS (e.g. "10Y").
        yield_pct: Yield in percent.
        index: Position of the tenor in the curve (0 = shortest). Drives the
               interpolation weight of slope scenarios.
    """
    maturity: str
    yield_pct: float
    index: int

    def __post_init__(self):
        if self.maturity not in TENORS:
            raise SchemaValidationError(
                f"Unknown tenor '{self.maturity}'. Expected one of {list(TENORS)}."
            )
        if self.index < 0:
            raise SchemaValidationError(
                f"Tenor {self.maturity}: index must be non-negative, got {self.index}."
            )


@dataclass(frozen=True)
class ScenarioCurvePoint(YieldCurvePoint):
    """A curve point carrying the stressed yield next to the original one."""
    scenario_yield: float = 0.0


def opportunities_to_frame(opportunities: list[TradeOpportunity]) -> pd.DataFrame:
    """
    Flatten opportunities into a DataFrame (one row per opportunity).

    Column order follows the dataclass field order. An empty input yields an
    empty DataFrame with the full column set.
    """
    if not opportunities:
        return pd.DataFrame(columns=list(TradeOpportunity.__dataclass_fields__))
    return pd.DataFrame([asdict(op) for op in opportunities])
