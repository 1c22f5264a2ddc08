"""Run the full level/RSI/signal pipeline over one candle sequence."""

from __future__ import annotations

import logging
from typing import Sequence

from confluence.core.config import RsiConfig
from confluence.core.models import AnalysisReport, Candle
from confluence.indicators.levels import levels_from_candle
from confluence.indicators.rsi import compute_rsi
from confluence.signals.evaluator import SignalEvaluator

logger = logging.getLogger(__name__)


class MarketAnalyzer:
    """Derive levels, RSI and the signal from the same candles in one pass."""

    def __init__(self, rsi_cfg: RsiConfig | None = None) -> None:
        self._rsi_cfg = rsi_cfg or RsiConfig()
        self._evaluator = SignalEvaluator(self._rsi_cfg)

    def analyze(self, candles: Sequence[Candle]) -> AnalysisReport:
        if not candles:
            raise ValueError("At least one candle is required to derive levels.")

        candles = tuple(candles)
        levels = levels_from_candle(candles[0])
        rsi = compute_rsi(candles, self._rsi_cfg.period, self._rsi_cfg.smoothing)
        if not rsi:
            logger.debug(
                "Only %d candles for RSI period %d; using neutral RSI",
                len(candles),
                self._rsi_cfg.period,
            )
        result = self._evaluator.evaluate(candles, levels, rsi)
        logger.debug("Signal %s (%d%%) at %.2f", result.signal.value, result.confidence, candles[-1].close)
        return AnalysisReport(candles=candles, levels=levels, rsi=rsi, result=result)
