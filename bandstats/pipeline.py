"""Run the whole job: fetch, bootstrap, load, aggregate, render."""

import logging
from dataclasses import dataclass
from datetime import datetime

from .aggregate import BandStat, aggregate_band_stats
from .config import Settings
from .context import RunContext, RunPaths, utc_now
from .normalize import load_spots
from .pskreporter import fetch_report_xml, parse_reception_reports
from .regions import bootstrap_regions
from .render import render_grid_pages
from .store import SpotStore

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    reports: int
    loaded: int
    stats: list[BandStat]
    pages: list


def build_context(settings: Settings, run_time: datetime | None = None) -> RunContext:
    """Create the working directories and a fresh database for this run."""
    paths = RunPaths(settings.output_dir)
    paths.create()
    store = SpotStore.recreate(paths.resolve(settings.db))
    return RunContext(settings=settings, store=store, paths=paths,
                      run_time=run_time or utc_now())


def process_reports(ctx: RunContext, reports: list[dict]) -> RunResult:
    """Everything after the fetch; takes already parsed reports."""
    bootstrap_regions(ctx)
    loaded = load_spots(ctx, reports)
    stats = aggregate_band_stats(ctx)
    pages = render_grid_pages(ctx)
    return RunResult(reports=len(reports), loaded=loaded, stats=stats, pages=pages)


def run(ctx: RunContext) -> RunResult:
    xml_data = fetch_report_xml(ctx.settings.pskreporter_url,
                                timeout=ctx.settings.fetch_timeout,
                                save_to=ctx.paths.tmp / "spots.tmp")
    reports = parse_reception_reports(xml_data)
    return process_reports(ctx, reports)
