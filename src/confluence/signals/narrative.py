"""Templated commentary for an evaluated market state."""

from __future__ import annotations

from typing import List

from confluence.core.models import PositionLabel, PricePosition, RSICondition, TradeSignal

TREND_THRESHOLD_PCT = 0.5
BALANCED_MOMENTUM_THRESHOLD = 3.0
STOP_BUFFER = 0.005


def describe_market(position: PricePosition, price_change_pct: float) -> str:
    if position.label in (PositionLabel.AT_SUPPORT, PositionLabel.NEAR_SUPPORT):
        verb = "at" if position.label == PositionLabel.AT_SUPPORT else "approaching"
        text = f"Price is {verb} key support level ({position.nearest_support:.2f}). "
    else:
        verb = "at" if position.label == PositionLabel.AT_RESISTANCE else "approaching"
        text = f"Price is {verb} key resistance level ({position.nearest_resistance:.2f}). "

    if price_change_pct > TREND_THRESHOLD_PCT:
        return text + "Strong bullish momentum observed."
    if price_change_pct < -TREND_THRESHOLD_PCT:
        return text + "Strong bearish momentum observed."
    return text + "Consolidation phase detected."


def describe_rsi(condition: RSICondition, current_rsi: float, momentum: float) -> str:
    if condition == RSICondition.OVERBOUGHT:
        text = (
            f"RSI is in overbought territory at {current_rsi:.2f}, "
            "suggesting potential selling pressure. "
        )
        if momentum < 0:
            return text + "Momentum is turning negative, increasing reversal probability."
        return text + "However, strong momentum may push prices higher before reversal."

    if condition == RSICondition.OVERSOLD:
        text = (
            f"RSI is in oversold territory at {current_rsi:.2f}, "
            "suggesting potential buying opportunity. "
        )
        if momentum > 0:
            return text + "Momentum is turning positive, increasing bounce probability."
        return text + "However, continued weakness may push prices lower before bounce."

    text = f"RSI is at {current_rsi:.2f}, indicating balanced market conditions. "
    if abs(momentum) > BALANCED_MOMENTUM_THRESHOLD:
        return text + f"{'Bullish' if momentum > 0 else 'Bearish'} momentum building."
    return text + "Limited directional momentum at present."


def describe_confluence(label: PositionLabel, condition: RSICondition) -> str:
    at_level = label in (PositionLabel.AT_SUPPORT, PositionLabel.AT_RESISTANCE)
    if at_level and condition.is_extreme:
        return (
            f"Strong confluence detected! Price at key level with {condition.value.lower()} "
            "RSI creates high-probability setup."
        )
    if at_level:
        return "Price at key level. Watch for RSI confirmation for stronger signal."
    if condition.is_extreme:
        return f"RSI {condition.value.lower()}. Wait for price to reach key level for better entry."
    return "No strong confluence zone identified. Wait for clearer setup."


def recommend(signal: TradeSignal, position: PricePosition) -> List[str]:
    support = position.nearest_support
    resistance = position.nearest_resistance
    if signal.is_bullish:
        return [
            f"Consider long position near {support:.2f}",
            f"Set stop loss below {support * (1 - STOP_BUFFER):.2f}",
            f"Target resistance at {resistance:.2f}",
        ]
    if signal.is_bearish:
        return [
            f"Consider short position near {resistance:.2f}",
            f"Set stop loss above {resistance * (1 + STOP_BUFFER):.2f}",
            f"Target support at {support:.2f}",
        ]
    return [
        "Wait for clearer signal before entering",
        f"Watch {support:.2f} and {resistance:.2f}",
        "Monitor RSI for divergence patterns",
    ]
