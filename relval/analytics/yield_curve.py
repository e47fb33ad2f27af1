"""
Yield-curve stress scenarios.

**Conceptual**: A relative-value book is exposed to moves in the level and the
slope of the curve. This module applies named, deterministic stress shifts to a
base curve so the two legs of a trade can be re-priced under each scenario:
  - Parallel Up / Parallel Down: every tenor moves by ±50bp (level risk).
  - Steepener / Flattener: the shift grows linearly with tenor position, up to
    ±75bp at the long end (slope risk). The 1M point never moves.

**Mathematical**: For point i of a curve of length N:
    Parallel Up:   y'_i = y_i + 0.5
    Parallel Down: y'_i = y_i - 0.5
    Steepener:     y'_i = y_i + 0.75 * (i / N)
    Flattener:     y'_i = y_i - 0.75 * (i / N)
The shift depends only on the scenario and the tenor index, never on the yield
level, so Steepener and Flattener are mirror images around the base curve.
"""

from enum import Enum

from loguru import logger

from relval.data.schemas import ScenarioCurvePoint, YieldCurvePoint
from relval.utils.math import round_display


class Scenario(str, Enum):
    """Named curve stress scenarios (values are the display names)."""
    NONE = 'None'
    PARALLEL_UP = 'Parallel Up'
    PARALLEL_DOWN = 'Parallel Down'
    STEEPENER = 'Steepener'
    FLATTENER = 'Flattener'

    @classmethod
    def parse(cls, name: "str | Scenario | None") -> "Scenario":
        """
        Resolve a scenario by value or member name; unknown names map to NONE.

        Accepts "Parallel Up", "PARALLEL_UP" or a Scenario member.
        """
        if isinstance(name, cls):
            return name
        if name is None:
            return cls.NONE
        for member in cls:
            if name == member.value or name == member.name:
                return member
        logger.debug("Unknown yield scenario {!r}, treating as None", name)
        return cls.NONE


PARALLEL_SHIFT = 0.5
SLOPE_SHIFT = 0.75


def compute_scenario_shift(scenario: Scenario, index: int, curve_length: int) -> float:
    """
    Additive yield shift (in percentage points) for one tenor.

    Args:
        scenario: Stress scenario.
        index: Tenor position (0 = shortest).
        curve_length: Number of points in the curve.

    Returns:
        Shift to add to the base yield.
    """
    if scenario is Scenario.PARALLEL_UP:
        return PARALLEL_SHIFT
    if scenario is Scenario.PARALLEL_DOWN:
        return -PARALLEL_SHIFT
    if scenario is Scenario.STEEPENER:
        return SLOPE_SHIFT * (index / curve_length)
    if scenario is Scenario.FLATTENER:
        return -SLOPE_SHIFT * (index / curve_length)
    return 0.0


def apply_scenario(
    curve: list[YieldCurvePoint],
    scenario: "str | Scenario | None",
) -> list[ScenarioCurvePoint]:
    """
    Apply a named stress scenario to a base curve.

    **Functionally**:
    - Input: ordered curve points and a scenario (name or member).
    - Output: one ScenarioCurvePoint per input point, same order, carrying the
      original yield and the stressed yield rounded to 2 decimals.
    - Unknown scenario names behave like "None" (no error).
    - Pure: the input curve is not modified.

    Args:
        curve: Base curve, shortest tenor first.
        scenario: Scenario to apply.

    Returns:
        The stressed curve.
    """
    resolved = Scenario.parse(scenario)
    curve_length = len(curve)

    return [
        ScenarioCurvePoint(
            maturity=point.maturity,
            yield_pct=point.yield_pct,
            index=point.index,
            scenario_yield=round_display(
                point.yield_pct + compute_scenario_shift(resolved, point.index, curve_length)
            ),
        )
        for point in curve
    ]


def compute_curve_slope(curve: list[YieldCurvePoint]) -> float:
    """
    Long-end minus short-end yield (30Y - 1M on the standard tenor list).

    Returns 0.0 for curves with fewer than two points.
    """
    if len(curve) < 2:
        return 0.0
    return round_display(curve[-1].yield_pct - curve[0].yield_pct)
