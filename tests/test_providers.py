import asyncio
from datetime import datetime, timedelta

import pytest

from confluence.core.config import SourceConfig
from confluence.data.providers import (
    CsvCandleSource,
    SimulatedSessionSource,
    build_source,
)
from confluence.data.source import TimeProvider


class FixedTime(TimeProvider):
    def now(self) -> datetime:
        return datetime(2024, 7, 1, 13, 0)


def test_simulated_session_shape():
    candles = SimulatedSessionSource(SourceConfig(seed=3), time_provider=FixedTime()).generate()
    assert len(candles) == 75
    assert candles[0].timestamp == datetime(2024, 7, 1, 9, 15)
    assert candles[-1].timestamp == datetime(2024, 7, 1, 9, 15) + timedelta(minutes=5 * 74)
    for candle in candles:
        assert candle.high >= max(candle.open, candle.close)
        assert candle.low <= min(candle.open, candle.close)
        assert round(candle.close, 2) == candle.close


def test_simulated_session_is_reproducible_with_seed():
    first = SimulatedSessionSource(SourceConfig(seed=5), time_provider=FixedTime())
    second = SimulatedSessionSource(SourceConfig(seed=5), time_provider=FixedTime())
    assert asyncio.run(first.fetch_session()) == asyncio.run(second.fetch_session())


def _write(tmp_path, text):
    path = tmp_path / "session.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_csv_source_sorts_rows(tmp_path):
    path = _write(
        tmp_path,
        "timestamp,open,high,low,close\n"
        "2024-07-01 09:20,101,103,100,102\n"
        "2024-07-01 09:15,100,101.5,99.5,101\n",
    )
    candles = asyncio.run(CsvCandleSource(path).fetch_session())
    assert [c.timestamp for c in candles] == [datetime(2024, 7, 1, 9, 15), datetime(2024, 7, 1, 9, 20)]
    assert candles[1].close == 102.0


def test_csv_source_accepts_epoch_seconds(tmp_path):
    path = _write(tmp_path, "Timestamp,Open,High,Low,Close\n1719825300,100,101,99,100.5\n")
    candles = CsvCandleSource(path).load()
    assert candles[0].timestamp == datetime(2024, 7, 1, 9, 15)


@pytest.mark.parametrize(
    "body",
    [
        "2024-07-01 09:15,100,101,99,\n",
        "2024-07-01 09:15,100,101,99,nan\n",
        "2024-07-01 09:15,100,101,99,100\n2024-07-01 09:15,100,101,99,100\n",
        "2024-07-01 09:15,100,99,98,100\n",
    ],
)
def test_csv_source_rejects_malformed_rows(tmp_path, body):
    path = _write(tmp_path, "timestamp,open,high,low,close\n" + body)
    with pytest.raises(ValueError):
        CsvCandleSource(path).load()


def test_csv_source_requires_columns(tmp_path):
    path = _write(tmp_path, "timestamp,open,close\n2024-07-01 09:15,100,100\n")
    with pytest.raises(ValueError, match="high, low"):
        CsvCandleSource(path).load()


def test_csv_source_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CsvCandleSource(tmp_path / "absent.csv").load()


def test_build_source_selects_kind(tmp_path):
    assert isinstance(build_source(SourceConfig()), SimulatedSessionSource)
    assert isinstance(build_source(SourceConfig(kind="csv", csv_path=str(tmp_path / "x.csv"))), CsvCandleSource)
    with pytest.raises(ValueError):
        build_source(SourceConfig(kind="csv"))
