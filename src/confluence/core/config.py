"""Configuration loading utilities for the analyzer."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field

CONFIG_ENV_PREFIX = "CONFLUENCE_"


class RsiConfig(BaseModel):
    # Ranges offered by the UI: period 5-50, overbought 60-90, oversold 10-40,
    # smoothing 1-10. Values outside them are accepted as given.
    period: int = 14
    overbought: float = 70.0
    oversold: float = 30.0
    smoothing: int = 1


class SourceConfig(BaseModel):
    kind: Literal["simulated", "csv"] = "simulated"
    csv_path: str | None = None
    base_price: float = 24500.0
    candle_count: int = 75
    interval_minutes: int = 5
    session_open: str = "09:15"
    volatility: float = 0.002
    wick_ratio: float = 0.001
    seed: int | None = None


class SchedulerConfig(BaseModel):
    refresh_seconds: float = 5.0


class Config(BaseModel):
    rsi: RsiConfig = Field(default_factory=RsiConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)

    @staticmethod
    def load(path: str | Path | None = None, env_prefix: str = CONFIG_ENV_PREFIX) -> "Config":
        """Load config from YAML file if provided, then apply environment overrides."""
        data: Dict[str, Any] = {}
        if path is not None:
            data = _read_file(Path(path))
        return Config(**_apply_env_overrides(data, env_prefix))


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError(f"Unsupported config format: {path.suffix}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def _apply_env_overrides(data: Dict[str, Any], env_prefix: str) -> Dict[str, Any]:
    rsi = dict(data.get("rsi") or {})
    for key, cast in (("period", int), ("overbought", float), ("oversold", float), ("smoothing", int)):
        value = _get_env(f"{env_prefix}RSI_{key.upper()}", cast)
        if value is not None:
            rsi[key] = value

    scheduler = dict(data.get("scheduler") or {})
    refresh = _get_env(f"{env_prefix}REFRESH_SECONDS", float)
    if refresh is not None:
        scheduler["refresh_seconds"] = refresh

    merged = dict(data)
    if rsi:
        merged["rsi"] = rsi
    if scheduler:
        merged["scheduler"] = scheduler
    return merged


def _get_env(key: str, cast: type) -> Any:
    raw = os.getenv(key)
    if raw is None:
        return None
    try:
        return cast(raw)
    except ValueError:
        return None
