"""Locate the current price relative to the level ladder."""

from __future__ import annotations

from confluence.core.models import LevelSet, PositionLabel, PricePosition

# Distance from a level, as a fraction of price, that counts as "at" the level.
AT_LEVEL_RATIO = 0.001


def classify_position(current_price: float, levels: LevelSet) -> PricePosition:
    # Fallbacks are asymmetric: R1 when price is above R4, S4 when below S4.
    nearest_resistance = next(
        (level for level in levels.resistance if level >= current_price), levels.resistance[0]
    )
    nearest_support = next(
        (level for level in levels.support if level <= current_price), levels.support[-1]
    )

    to_resistance = abs(current_price - nearest_resistance)
    to_support = abs(current_price - nearest_support)
    threshold = current_price * AT_LEVEL_RATIO

    if to_resistance < threshold:
        label = PositionLabel.AT_RESISTANCE
    elif to_support < threshold:
        label = PositionLabel.AT_SUPPORT
    elif to_resistance < to_support:
        label = PositionLabel.NEAR_RESISTANCE
    else:
        label = PositionLabel.NEAR_SUPPORT

    return PricePosition(
        nearest_support=nearest_support,
        nearest_resistance=nearest_resistance,
        label=label,
    )
