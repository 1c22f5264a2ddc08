"""Wilder's RSI built on top of pandas."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from confluence.core.models import Candle, RSIPoint


def compute_rsi(candles: Sequence[Candle], period: int = 14, smoothing: int = 1) -> List[RSIPoint]:
    """Return one RSI point per candle after the warm-up window.

    Average gain/loss are seeded with the simple mean of the first ``period``
    deltas and then updated with Wilder's smoothing. A zero average loss pins
    the RSI at 100. When ``smoothing`` > 1 each emitted value is replaced by
    the mean of itself and the previous ``smoothing - 1`` values; points before
    that window fills are left as they are.
    """
    period = max(int(period), 1)
    smoothing = max(int(smoothing), 1)
    if len(candles) < period + 1:
        return []

    closes = pd.Series([c.close for c in candles], dtype="float64")
    delta = closes.diff().iloc[1:].reset_index(drop=True)
    gain = delta.clip(lower=0)
    loss = (-delta).clip(lower=0)

    avg_gain = _wilder(gain, period)
    avg_loss = _wilder(loss, period)
    if avg_gain.empty:
        return []

    rs = avg_gain / avg_loss
    rsi = (100 - 100 / (1 + rs)).where(avg_loss != 0, 100.0).round(2)

    if smoothing > 1:
        smoothed = rsi.rolling(smoothing).mean().round(2)
        rsi = smoothed.fillna(rsi)

    # Delta i closes on candle i + 1.
    stamps = [candles[i + 1].timestamp for i in range(period, len(candles) - 1)]
    return [RSIPoint(timestamp=ts, value=float(value)) for ts, value in zip(stamps, rsi)]


def _wilder(series: pd.Series, period: int) -> pd.Series:
    """Seeded Wilder average for every delta after the first ``period``."""
    seed = series.iloc[:period].mean()
    seeded = pd.concat([pd.Series([seed]), series.iloc[period:]], ignore_index=True)
    return seeded.ewm(alpha=1 / period, adjust=False).mean().iloc[1:].reset_index(drop=True)
