from __future__ import annotations

import asyncio
import logging
from typing import Callable

from confluence.core.config import Config
from confluence.core.models import AnalysisReport, TradeSignal
from confluence.data.source import CandleSource
from confluence.signals.analyzer import MarketAnalyzer

logger = logging.getLogger(__name__)

ReportSink = Callable[[AnalysisReport], None]
ErrorSink = Callable[[Exception], None]


class AnalysisRefresher:
    """Periodically pull a session from the source and re-run the analysis."""

    def __init__(
        self,
        config: Config,
        source: CandleSource,
        sink: ReportSink | None = None,
        analyzer: MarketAnalyzer | None = None,
        error_sink: ErrorSink | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._sink = sink
        self._error_sink = error_sink
        self._analyzer = analyzer or MarketAnalyzer(config.rsi)
        self._tasks: list[asyncio.Task] = []
        self._running = False
        self._last_report: AnalysisReport | None = None

    @property
    def last_report(self) -> AnalysisReport | None:
        return self._last_report

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._tasks = [asyncio.create_task(self._refresh_loop(), name="analysis-refresh")]

    async def run_forever(self) -> None:
        await self.start()
        await self.wait_until_stopped()

    async def stop(self) -> None:
        self._running = False
        for task in self._tasks:
            task.cancel()
        try:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        finally:
            self._tasks.clear()

    async def wait_until_stopped(self) -> None:
        if not self._tasks:
            return
        try:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        except asyncio.CancelledError:
            pass

    async def _refresh_loop(self) -> None:
        interval = self._config.scheduler.refresh_seconds
        while self._running:
            try:
                await self.refresh_once()
            except Exception as exc:
                logger.exception("Analysis refresh failed: %s", exc)
                if self._error_sink is not None:
                    self._error_sink(exc)
            await asyncio.sleep(interval)

    async def refresh_once(self) -> AnalysisReport:
        candles = await self._source.fetch_session()
        report = self._analyzer.analyze(candles)
        self._last_report = report
        if report.result.signal != TradeSignal.NEUTRAL:
            logger.info(
                "Signal %s (%d%%) | %s",
                report.result.signal.value,
                report.result.confidence,
                report.result.confluence_zone,
            )
        if self._sink is not None:
            self._sink(report)
        return report
