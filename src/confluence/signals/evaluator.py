"""Signal generation module that fuses RSI state with the level ladder."""

from __future__ import annotations

from typing import Sequence

from confluence.core.config import RsiConfig
from confluence.core.models import (
    AnalysisResult,
    Candle,
    LevelSet,
    PositionLabel,
    RSICondition,
    RSIPoint,
    TradeSignal,
)
from confluence.signals import narrative
from confluence.signals.position import classify_position

DEFAULT_RSI = 50.0
MOMENTUM_LOOKBACK = 5


class SignalEvaluator:
    """Generate a trading signal, confidence score and commentary."""

    def __init__(self, rsi_cfg: RsiConfig | None = None) -> None:
        self._rsi = rsi_cfg or RsiConfig()

    def evaluate(
        self, candles: Sequence[Candle], levels: LevelSet, rsi_series: Sequence[RSIPoint]
    ) -> AnalysisResult:
        current = candles[-1]
        current_rsi = round(rsi_series[-1].value, 2) if rsi_series else DEFAULT_RSI
        momentum = rsi_momentum(rsi_series)
        position = classify_position(current.close, levels)
        condition = self.classify_rsi(current_rsi)
        change_pct = price_change_pct(candles)

        signal, confidence = self._decide_signal(position.label, condition, momentum)
        breakout_probability, breakout_direction = self._breakout(
            position.label, condition, current_rsi, momentum
        )

        return AnalysisResult(
            signal=signal,
            confidence=confidence,
            market_condition=narrative.describe_market(position, change_pct),
            rsi_analysis=narrative.describe_rsi(condition, current_rsi, momentum),
            current_rsi=current_rsi,
            nearest_resistance=position.nearest_resistance,
            nearest_support=position.nearest_support,
            confluence_zone=narrative.describe_confluence(position.label, condition),
            recommendations=narrative.recommend(signal, position),
            breakout_probability=breakout_probability,
            breakout_direction=breakout_direction,
            position=position.label,
            rsi_condition=condition,
            rsi_momentum=momentum,
            price_change_pct=change_pct,
        )

    def classify_rsi(self, rsi: float) -> RSICondition:
        overbought = self._rsi.overbought
        oversold = self._rsi.oversold
        if rsi > overbought:
            return RSICondition.OVERBOUGHT
        if rsi < oversold:
            return RSICondition.OVERSOLD
        if rsi > (overbought + 50) / 2:
            return RSICondition.SLIGHTLY_OVERBOUGHT
        if rsi < (oversold + 50) / 2:
            return RSICondition.SLIGHTLY_OVERSOLD
        return RSICondition.NEUTRAL

    def _decide_signal(
        self, label: PositionLabel, condition: RSICondition, momentum: float
    ) -> tuple[TradeSignal, int]:
        """First matching rule wins; confluence rules come before momentum rules."""
        overbought = condition == RSICondition.OVERBOUGHT
        oversold = condition == RSICondition.OVERSOLD

        if label == PositionLabel.AT_SUPPORT and oversold:
            return TradeSignal.STRONG_BUY, 85
        if label == PositionLabel.NEAR_SUPPORT and oversold:
            return TradeSignal.BUY, 70
        if label == PositionLabel.AT_RESISTANCE and overbought:
            return TradeSignal.STRONG_SELL, 85
        if label == PositionLabel.NEAR_RESISTANCE and overbought:
            return TradeSignal.SELL, 70
        if oversold and momentum > 5:
            return TradeSignal.BUY, 65
        if overbought and momentum < -5:
            return TradeSignal.SELL, 65
        if label == PositionLabel.AT_SUPPORT and not overbought:
            return TradeSignal.BUY, 60
        if label == PositionLabel.AT_RESISTANCE and not oversold:
            return TradeSignal.SELL, 60
        return TradeSignal.NEUTRAL, 50

    def _breakout(
        self, label: PositionLabel, condition: RSICondition, current_rsi: float, momentum: float
    ) -> tuple[int, str]:
        if condition == RSICondition.OVERBOUGHT and momentum > 5:
            return 75, "High probability of upside breakout through resistance"
        if condition == RSICondition.OVERSOLD and momentum < -5:
            return 75, "High probability of downside breakdown through support"
        if label == PositionLabel.AT_RESISTANCE and current_rsi > 60:
            return 65, "Moderate probability of resistance breakout"
        if label == PositionLabel.AT_SUPPORT and current_rsi < 40:
            return 65, "Moderate probability of support breakdown"
        if abs(momentum) > 7:
            return 60, f"Building momentum for {'upside' if momentum > 0 else 'downside'} move"
        return 50, "Neutral - monitoring for directional move"


def rsi_momentum(rsi_series: Sequence[RSIPoint]) -> float:
    """Change between the latest RSI and the value at the start of the lookback window."""
    if len(rsi_series) < MOMENTUM_LOOKBACK:
        return 0.0
    return round(rsi_series[-1].value - rsi_series[-MOMENTUM_LOOKBACK].value, 2)


def price_change_pct(candles: Sequence[Candle]) -> float:
    first_close = candles[0].close
    if not first_close:
        return 0.0
    return (candles[-1].close - first_close) / first_close * 100
