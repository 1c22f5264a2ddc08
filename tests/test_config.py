import pytest

from confluence.core.config import Config


def test_defaults():
    cfg = Config.load()
    assert (cfg.rsi.period, cfg.rsi.overbought, cfg.rsi.oversold, cfg.rsi.smoothing) == (14, 70.0, 30.0, 1)
    assert cfg.scheduler.refresh_seconds == 5.0
    assert cfg.source.kind == "simulated"
    assert cfg.source.candle_count == 75


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "rsi:\n  period: 21\n  overbought: 80\nsource:\n  kind: csv\n  csv_path: data.csv\n",
        encoding="utf-8",
    )
    cfg = Config.load(path)
    assert cfg.rsi.period == 21
    assert cfg.rsi.overbought == 80.0
    assert cfg.rsi.oversold == 30.0
    assert cfg.source.csv_path == "data.csv"


def test_out_of_range_values_are_accepted(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("rsi:\n  period: 2\n  oversold: 45\n", encoding="utf-8")
    cfg = Config.load(path)
    assert cfg.rsi.period == 2
    assert cfg.rsi.oversold == 45.0


def test_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("rsi:\n  period: 21\n", encoding="utf-8")
    monkeypatch.setenv("CONFLUENCE_RSI_PERIOD", "9")
    monkeypatch.setenv("CONFLUENCE_RSI_SMOOTHING", "3")
    monkeypatch.setenv("CONFLUENCE_REFRESH_SECONDS", "1.5")
    monkeypatch.setenv("CONFLUENCE_RSI_OVERBOUGHT", "not-a-number")
    cfg = Config.load(path)
    assert cfg.rsi.period == 9
    assert cfg.rsi.smoothing == 3
    assert cfg.rsi.overbought == 70.0
    assert cfg.scheduler.refresh_seconds == 1.5


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "nope.yaml")


def test_unsupported_format(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        Config.load(path)
