"""Entry point for one-shot analysis or a periodically refreshed watch."""

from __future__ import annotations

import argparse
import asyncio
import logging

from confluence.core.config import Config
from confluence.data.providers import build_source
from confluence.monitoring.logger import AnalysisLogger
from confluence.scheduler.refresher import AnalysisRefresher


async def run_app(config: Config, watch: bool, run_minutes: float | None) -> None:
    console = AnalysisLogger()
    source = build_source(config.source)
    refresher = AnalysisRefresher(
        config=config,
        source=source,
        sink=console.log_report,
        error_sink=console.log_failure,
    )

    if not watch:
        await refresher.refresh_once()
        return

    await refresher.start()
    try:
        if run_minutes is None:
            await refresher.wait_until_stopped()
        else:
            await asyncio.sleep(run_minutes * 60)
    finally:
        await refresher.stop()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pivot level and RSI confluence analyzer")
    parser.add_argument("--config", type=str, help="Path to YAML config", default=None)
    parser.add_argument("--csv", type=str, help="Read the session from a CSV file", default=None)
    parser.add_argument("--seed", type=int, help="Seed for the simulated session", default=None)
    parser.add_argument("--watch", action="store_true", help="Refresh the analysis periodically")
    parser.add_argument(
        "--minutes",
        type=float,
        default=None,
        help="Stop watching after this many minutes (requires --watch)",
    )
    args = parser.parse_args(argv)
    if args.minutes is not None and not args.watch:
        parser.error("--minutes requires --watch")
    return args


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    source = config.source
    if args.csv:
        source = source.model_copy(update={"kind": "csv", "csv_path": args.csv})
    if args.seed is not None:
        source = source.model_copy(update={"seed": args.seed})
    return config.model_copy(update={"source": source})


def cli(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    args = parse_args(argv)
    config = apply_cli_overrides(Config.load(args.config), args)
    try:
        asyncio.run(run_app(config, watch=args.watch, run_minutes=args.minutes))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    cli()
