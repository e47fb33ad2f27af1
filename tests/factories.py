"""
Test data factories shared across test modules.
"""

from relval.data.schemas import TENORS, TradeOpportunity, YieldCurvePoint


def make_opportunity(
    id: int = 0,
    potential_profit: float = 25.0,
    risk_score: int = 50,
    arbitrage_type: str = "Relative Value",
    issuer_a: str = "Apple Inc",
    issuer_b: str = "Microsoft Corp",
    liquidity: float = 5.0,
    duration_a: float = 4.0,
    duration_b: float = 3.0,
    yield_a: float = 3.5,
    yield_b: float = 3.0,
) -> TradeOpportunity:
    """
    Build a valid opportunity with only the fields a test cares about.

    Bond names follow the generator's "<issuer> <coupon>% <year> (<rating>)"
    shape so pair labels are realistic.
    """
    return TradeOpportunity(
        id=id,
        bond_a=f"{issuer_a} 3.25% 2030 (AA+)",
        bond_b=f"{issuer_b} 4.10% 2032 (A-)",
        issuer_a=issuer_a,
        issuer_b=issuer_b,
        rating_a="AA+",
        rating_b="A-",
        arbitrage_type=arbitrage_type,
        liquidity=liquidity,
        potential_profit=potential_profit,
        risk_score=risk_score,
        duration_a=duration_a,
        duration_b=duration_b,
        yield_a=yield_a,
        yield_b=yield_b,
    )


def make_curve(yields: list[float]) -> list[YieldCurvePoint]:
    """Curve over the first len(yields) standard tenors."""
    return [
        YieldCurvePoint(maturity=TENORS[i], yield_pct=y, index=i)
        for i, y in enumerate(yields)
    ]
