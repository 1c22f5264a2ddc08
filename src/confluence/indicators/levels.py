"""Support/resistance ladder derived from a reference candle."""

from __future__ import annotations

from confluence.core.models import Candle, LevelSet

# Each level compounds the previous, unrounded level by the next multiplier.
LADDER_MULTIPLIERS = (0.0009, 0.0018, 0.0036, 0.0072)


def compute_levels(reference_high: float, reference_low: float) -> LevelSet:
    """Build four resistance levels above the high and four supports below the low."""
    resistance = []
    support = []
    upper = float(reference_high)
    lower = float(reference_low)
    for multiplier in LADDER_MULTIPLIERS:
        upper = upper + upper * multiplier
        lower = lower - lower * multiplier
        resistance.append(round(upper, 2))
        support.append(round(lower, 2))
    return LevelSet(
        reference_high=float(reference_high),
        reference_low=float(reference_low),
        resistance=tuple(resistance),
        support=tuple(support),
    )


def levels_from_candle(candle: Candle) -> LevelSet:
    return compute_levels(candle.high, candle.low)
