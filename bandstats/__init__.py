"""HF band statistics from PSKReporter spots - shared library."""

from .band_utils import DEFAULT_BANDS, parse_bands, freq_to_band
from .geo_utils import grid_field
from .config import load_config, build_settings, dump_config, Settings, ScoreTier
from .errors import BandStatsError, ConfigError, FetchError, OutputError, SpotFormatError, QueryError
from .pskreporter import fetch_report_xml, parse_reception_reports
from .store import SpotStore
from .context import RunContext, RunPaths
from .normalize import SpotRow, normalize_reports, load_spots
from .regions import bootstrap_regions
from .aggregate import BandStat, dx_percentage, score_band, aggregate_band_stats
from .render import row_class, render_table, render_grid_pages
from .pipeline import build_context, process_reports, run

__all__ = [
    # Bands and grids
    'DEFAULT_BANDS',
    'parse_bands',
    'freq_to_band',
    'grid_field',
    # Config
    'load_config',
    'build_settings',
    'dump_config',
    'Settings',
    'ScoreTier',
    # Errors
    'BandStatsError',
    'ConfigError',
    'FetchError',
    'SpotFormatError',
    'QueryError',
    'OutputError',
    # PSKReporter
    'fetch_report_xml',
    'parse_reception_reports',
    # Storage and run state
    'SpotStore',
    'RunContext',
    'RunPaths',
    # Pipeline stages
    'SpotRow',
    'normalize_reports',
    'load_spots',
    'bootstrap_regions',
    'BandStat',
    'dx_percentage',
    'score_band',
    'aggregate_band_stats',
    'row_class',
    'render_table',
    'render_grid_pages',
    'build_context',
    'process_reports',
    'run',
]
