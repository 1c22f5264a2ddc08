"""Console rendering of analysis output using Rich."""

from __future__ import annotations

from typing import Any, Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from confluence.core.models import AnalysisReport, AnalysisResult, LevelSet, TradeSignal


class AnalysisLogger:
    _LEVEL_STYLES = {
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
    }
    _SIGNAL_STYLES = {
        TradeSignal.STRONG_BUY: "bold green",
        TradeSignal.BUY: "green",
        TradeSignal.NEUTRAL: "yellow",
        TradeSignal.SELL: "red",
        TradeSignal.STRONG_SELL: "bold red",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def log_event(
        self,
        message: str,
        *,
        level: str = "info",
        details: Mapping[str, Any] | None = None,
    ) -> None:
        """Render a short status message (optionally with structured details)."""
        style = self._LEVEL_STYLES.get(level, "white")
        if details:
            table = Table.grid(expand=True)
            table.add_column(justify="right", style="bold")
            table.add_column(ratio=1)
            for key, value in details.items():
                table.add_row(str(key), str(value))
            panel = Panel(table, title=f"[bold]{message}", border_style=style)
            self._console.print(panel)
            return
        self._console.print(f"[bold {style}]{message}[/bold {style}]")

    def info(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        self.log_event(message, level="info", details=details)

    def warning(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        self.log_event(message, level="warning", details=details)

    def error(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        self.log_event(message, level="error", details=details)

    def log_failure(self, exc: Exception) -> None:
        self.error(
            "Analysis refresh failed",
            details={"error": type(exc).__name__, "message": str(exc) or "-"},
        )

    def log_levels(self, levels: LevelSet) -> None:
        table = Table(title=f"Levels (H {levels.reference_high:.2f} / L {levels.reference_low:.2f})")
        table.add_column("Level")
        table.add_column("Price", justify="right")
        for index, value in reversed(list(enumerate(levels.resistance, start=1))):
            table.add_row(f"[red]R{index}[/red]", f"{value:.2f}")
        for index, value in enumerate(levels.support, start=1):
            table.add_row(f"[green]S{index}[/green]", f"{value:.2f}")
        self._console.print(table)

    def log_analysis(self, result: AnalysisResult) -> None:
        style = self._SIGNAL_STYLES.get(result.signal, "white")
        table = Table(title="Market Analysis", show_lines=True)
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("Signal", f"[{style}]{result.signal.value}[/{style}]")
        table.add_row("Confidence", f"{result.confidence}%")
        table.add_row("RSI", f"{result.current_rsi:.2f} ({result.rsi_condition.value})")
        table.add_row("Momentum", f"{result.rsi_momentum:+.2f}")
        table.add_row("Position", result.position.value)
        table.add_row("Resistance", f"{result.nearest_resistance:.2f}")
        table.add_row("Support", f"{result.nearest_support:.2f}")
        table.add_row("Breakout", f"{result.breakout_probability}% - {result.breakout_direction}")
        self._console.print(table)

        body = "\n\n".join(
            [
                result.market_condition,
                result.rsi_analysis,
                result.confluence_zone,
                "\n".join(f"- {line}" for line in result.recommendations),
            ]
        )
        self._console.print(Panel(body, title="[bold]Commentary", border_style=style))

    def log_report(self, report: AnalysisReport) -> None:
        latest = report.latest()
        self.info(
            "Analysis refreshed",
            details={
                "candles": len(report.candles),
                "last close": f"{latest.close:.2f}",
                "as of": latest.timestamp.isoformat(timespec="minutes"),
                "rsi points": len(report.rsi),
                "generated": report.generated_at.isoformat(timespec="seconds"),
            },
        )
        if not report.rsi:
            self.warning(
                "Not enough candles for RSI",
                details={"candles": len(report.candles), "current rsi": "50.00 (fallback)"},
            )
        self.log_levels(report.levels)
        self.log_analysis(report.result)
