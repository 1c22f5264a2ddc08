from __future__ import annotations

import logging
import random
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from confluence.core.config import SourceConfig
from confluence.core.models import Candle

from .source import CandleSource, TimeProvider

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ["open", "high", "low", "close"]


class SystemTimeProvider(TimeProvider):
    def now(self) -> datetime:
        return datetime.now()


class SimulatedSessionSource(CandleSource):
    """Synthesizes one intraday session of candles as a random walk."""

    def __init__(self, config: SourceConfig | None = None, time_provider: TimeProvider | None = None) -> None:
        self._cfg = config or SourceConfig()
        self._time = time_provider or SystemTimeProvider()
        self._rng = random.Random(self._cfg.seed)

    async def fetch_session(self) -> Sequence[Candle]:
        return self.generate()

    def generate(self) -> List[Candle]:
        cfg = self._cfg
        start = datetime.combine(self._time.now().date(), _parse_clock(cfg.session_open))
        step = cfg.base_price * cfg.volatility
        wick = cfg.base_price * cfg.wick_ratio

        candles: List[Candle] = []
        price = cfg.base_price
        for i in range(cfg.candle_count):
            price += (self._rng.random() - 0.5) * step
            high = price + self._rng.random() * wick
            low = price - self._rng.random() * wick
            close = low + self._rng.random() * (high - low)
            candles.append(
                Candle(
                    timestamp=start + timedelta(minutes=cfg.interval_minutes * i),
                    open=round(price, 2),
                    high=round(high, 2),
                    low=round(low, 2),
                    close=round(close, 2),
                )
            )
            price = close
        return candles


class CsvCandleSource(CandleSource):
    """Load a session from a CSV file with timestamp/open/high/low/close columns."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def fetch_session(self) -> Sequence[Candle]:
        return self.load()

    def load(self) -> List[Candle]:
        if not self._path.exists():
            raise FileNotFoundError(f"Candle file not found: {self._path}")

        df = pd.read_csv(self._path)
        df.columns = [str(col).strip().lower() for col in df.columns]
        missing = [col for col in ["timestamp", *PRICE_COLUMNS] if col not in df.columns]
        if missing:
            raise ValueError(f"{self._path.name} is missing columns: {', '.join(missing)}")
        if df.empty:
            return []

        prices = df[PRICE_COLUMNS].apply(pd.to_numeric, errors="coerce")
        non_finite = prices.isna() | prices.isin([float("inf"), float("-inf")])
        bad_rows = non_finite.any(axis=1)
        if bad_rows.any():
            rows = df.index[bad_rows].tolist()
            raise ValueError(f"Non-finite prices in rows {rows} of {self._path.name}")

        stamps = df["timestamp"]
        if pd.api.types.is_numeric_dtype(stamps):
            stamps = pd.to_datetime(stamps, unit="s")
        else:
            stamps = pd.to_datetime(stamps)
        frame = prices.assign(timestamp=stamps).sort_values("timestamp", kind="stable")

        if frame["timestamp"].duplicated().any():
            raise ValueError(f"Duplicate timestamps in {self._path.name}")
        body_high = frame[["open", "close"]].max(axis=1)
        body_low = frame[["open", "close"]].min(axis=1)
        if ((frame["high"] < body_high) | (frame["low"] > body_low)).any():
            raise ValueError(f"Candle high/low do not bracket open/close in {self._path.name}")

        candles = [
            Candle(
                timestamp=row.timestamp.to_pydatetime(),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
            )
            for row in frame.itertuples(index=False)
        ]
        logger.info("Loaded %d candles from %s", len(candles), self._path)
        return candles


def build_source(config: SourceConfig, time_provider: TimeProvider | None = None) -> CandleSource:
    if config.kind == "csv":
        if not config.csv_path:
            raise ValueError("source.csv_path is required when source.kind is 'csv'")
        return CsvCandleSource(config.csv_path)
    return SimulatedSessionSource(config, time_provider=time_provider)


def _parse_clock(label: str) -> time:
    hour, minute = label.split(":")
    return time(int(hour), int(minute))
