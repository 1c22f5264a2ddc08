"""Support/resistance ladder and RSI confluence analysis."""

__all__ = [
    "core",
    "data",
    "indicators",
    "signals",
    "scheduler",
    "monitoring",
]
