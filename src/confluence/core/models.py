"""Shared data models used across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Sequence, Tuple


class TradeSignal(str, Enum):
    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    NEUTRAL = "NEUTRAL"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"

    @property
    def is_bullish(self) -> bool:
        return self in (TradeSignal.STRONG_BUY, TradeSignal.BUY)

    @property
    def is_bearish(self) -> bool:
        return self in (TradeSignal.STRONG_SELL, TradeSignal.SELL)


class PositionLabel(str, Enum):
    AT_RESISTANCE = "AT_RESISTANCE"
    AT_SUPPORT = "AT_SUPPORT"
    NEAR_RESISTANCE = "NEAR_RESISTANCE"
    NEAR_SUPPORT = "NEAR_SUPPORT"


class RSICondition(str, Enum):
    OVERBOUGHT = "OVERBOUGHT"
    OVERSOLD = "OVERSOLD"
    SLIGHTLY_OVERBOUGHT = "SLIGHTLY_OVERBOUGHT"
    SLIGHTLY_OVERSOLD = "SLIGHTLY_OVERSOLD"
    NEUTRAL = "NEUTRAL"

    @property
    def is_extreme(self) -> bool:
        return self in (RSICondition.OVERBOUGHT, RSICondition.OVERSOLD)


@dataclass(frozen=True, slots=True)
class Candle:
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True, slots=True)
class LevelSet:
    reference_high: float
    reference_low: float
    resistance: Tuple[float, float, float, float]  # R1 < R2 < R3 < R4
    support: Tuple[float, float, float, float]  # S1 > S2 > S3 > S4

    @property
    def r1(self) -> float:
        return self.resistance[0]

    @property
    def r2(self) -> float:
        return self.resistance[1]

    @property
    def r3(self) -> float:
        return self.resistance[2]

    @property
    def r4(self) -> float:
        return self.resistance[3]

    @property
    def s1(self) -> float:
        return self.support[0]

    @property
    def s2(self) -> float:
        return self.support[1]

    @property
    def s3(self) -> float:
        return self.support[2]

    @property
    def s4(self) -> float:
        return self.support[3]


@dataclass(frozen=True, slots=True)
class RSIPoint:
    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class PricePosition:
    nearest_support: float
    nearest_resistance: float
    label: PositionLabel


@dataclass(frozen=True)
class AnalysisResult:
    signal: TradeSignal
    confidence: int
    market_condition: str
    rsi_analysis: str
    current_rsi: float
    nearest_resistance: float
    nearest_support: float
    confluence_zone: str
    recommendations: List[str]
    breakout_probability: int
    breakout_direction: str
    position: PositionLabel
    rsi_condition: RSICondition
    rsi_momentum: float = 0.0
    price_change_pct: float = 0.0


@dataclass(frozen=True)
class AnalysisReport:
    """Everything one evaluation cycle derived from a single candle sequence."""

    candles: Sequence[Candle]
    levels: LevelSet
    rsi: List[RSIPoint]
    result: AnalysisResult
    generated_at: datetime = field(default_factory=datetime.now)

    def latest(self) -> Candle:
        return self.candles[-1]
