from datetime import datetime, timedelta

import pytest

from confluence.core.models import Candle, RSIPoint
from confluence.indicators.levels import compute_levels

SESSION_START = datetime(2024, 7, 1, 9, 15)


def make_candles(closes, start=SESSION_START, minutes=5):
    """Build a candle series whose bodies chain close to close."""
    candles = []
    previous = closes[0]
    for i, close in enumerate(closes):
        open_price = previous
        candles.append(
            Candle(
                timestamp=start + timedelta(minutes=minutes * i),
                open=open_price,
                high=max(open_price, close) + 0.5,
                low=min(open_price, close) - 0.5,
                close=close,
            )
        )
        previous = close
    return candles


def make_rsi(values, start=SESSION_START):
    return [RSIPoint(timestamp=start + timedelta(minutes=5 * i), value=v) for i, v in enumerate(values)]


@pytest.fixture
def candle_factory():
    return make_candles


@pytest.fixture
def rsi_factory():
    return make_rsi


@pytest.fixture
def session_levels():
    """Ladder for a 24550/24450 opening candle."""
    return compute_levels(24550.0, 24450.0)
