"""Configuration loader for the band statistics job."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .band_utils import DEFAULT_BANDS, parse_bands
from .errors import ConfigError
from .geo_utils import is_valid_field

logger = logging.getLogger(__name__)

TABLE_PLACEHOLDER = "<table></table>"

DEFAULT_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Band Conditions</title>
<link rel="stylesheet" href="css/mdb.min.css">
</head>
<body class="bg-dark">
<table></table>
</body>
</html>
"""

DEFAULT_CSS_TEMPLATE = """body { background-color: #212121; font-family: sans-serif; }
.table { width: 100%; border-collapse: collapse; }
.table-black { background-color: #000; }
.text-white { color: #fff; }
.fs-4 { font-size: 1.5rem; }
.table-success { background-color: #c7f5d4; }
.table-warning { background-color: #fdf2d0; }
.table-danger { background-color: #f9d6db; }
"""

DEFAULT_CONFIG = {
    "db": "tmp/spots.db",
    "pskreporter_url": "https://retrieve.pskreporter.info/query?flowStartSeconds=-900&rronly=1",
    "fetch_timeout": 60,
    "output_dir": ".",
    "log_debug": False,
    "log_file": None,
    "master_grids": {
        "Northeast": "FN",
        "Southeast": "EM",
        "Great Lakes": "EN",
        "Florida": "EL",
        "Southwest": "DM",
        "Mountain": "DN",
        "Pacific Northwest": "CN",
        "California": "CM",
    },
    "bands": {band: [low, high] for band, (low, high) in DEFAULT_BANDS.items()},
    "band_score_parameters": {
        5: {"spot_count": 100, "avg_snr": 0, "dx_percentage": 20},
        4: {"spot_count": 50, "avg_snr": -5, "dx_percentage": 10},
        3: {"spot_count": 20, "avg_snr": -10, "dx_percentage": 5},
        2: {"spot_count": 5, "avg_snr": -15, "dx_percentage": 0},
        1: {"spot_count": 0, "avg_snr": -999, "dx_percentage": 0},
    },
    "html_template": DEFAULT_HTML_TEMPLATE,
    "css_template": DEFAULT_CSS_TEMPLATE,
    "css_file": "mdb.min.css",
}

SEARCH_PATHS = [
    Path("config.yml"),
    Path("config.yaml"),
    Path.home() / ".config" / "bandstats" / "config.yaml",
]


@dataclass(frozen=True)
class ScoreTier:
    """Minimum thresholds a grid/band must meet to earn a score."""

    score: int
    spot_count: int
    avg_snr: int
    dx_percentage: int

    def matches(self, spot_count: int, avg_snr: int, dx_percentage: int) -> bool:
        return (spot_count >= self.spot_count
                and avg_snr >= self.avg_snr
                and dx_percentage >= self.dx_percentage)


@dataclass
class Settings:
    """Validated configuration handed to every pipeline stage."""

    db: Path
    pskreporter_url: str
    fetch_timeout: float
    output_dir: Path
    log_debug: bool
    log_file: str | None
    grids: dict[str, str]
    bands: dict[str, tuple[int, int]]
    score_tiers: list[ScoreTier]
    html_template: str
    css_template: str
    css_file: str

    @property
    def grid_codes(self) -> list[str]:
        return list(self.grids.values())


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with defaults.

    Searches for config in:
    1. Provided path (must exist)
    2. config.yml / config.yaml in the working directory
    3. ~/.config/bandstats/config.yaml
    4. Falls back to defaults

    Args:
        config_path: Optional path to config file

    Returns:
        Dict with configuration values

    Raises:
        ConfigError: if the provided path is missing or any file is not valid YAML
    """
    config = DEFAULT_CONFIG.copy()

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        search_paths = [config_path]
    else:
        search_paths = SEARCH_PATHS

    for path in search_paths:
        if path.exists():
            try:
                user_config = yaml.safe_load(path.read_text())
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse config {path}: {e}")
            if user_config:
                if not isinstance(user_config, dict):
                    raise ConfigError(f"Config {path} must be a YAML mapping")
                config.update(user_config)
            logger.debug("Loaded config from %s", path)
            return config

    logger.debug("No config file found, using defaults")
    return config


def dump_config(config: dict[str, Any] | None = None) -> str:
    """Render a configuration dict as YAML text."""
    return yaml.dump(config or DEFAULT_CONFIG, default_flow_style=False, sort_keys=False)


def _parse_grids(raw) -> dict[str, str]:
    if not isinstance(raw, dict) or not raw:
        raise ConfigError("'master_grids' must be a non-empty mapping of name to grid code")

    grids = {}
    seen = set()
    for name, code in raw.items():
        code = str(code).strip().upper()
        if len(code) != 2:
            raise ConfigError(f"Grid code for {name!r} must be 2 characters, got {code!r}")
        if code in seen:
            raise ConfigError(f"Duplicate master grid code {code!r} in config")
        if not is_valid_field(code):
            logger.warning("Grid code %s for %s is not a Maidenhead field", code, name)
        seen.add(code)
        grids[str(name)] = code
    return grids


def _parse_score_tiers(raw) -> list[ScoreTier]:
    if isinstance(raw, dict):
        entries = [{"score": score, **(params or {})} for score, params in raw.items()]
    elif isinstance(raw, list):
        entries = raw
    else:
        raise ConfigError("'band_score_parameters' must be a mapping or a list")

    tiers = []
    for entry in entries:
        try:
            tiers.append(ScoreTier(
                score=int(entry["score"]),
                spot_count=int(entry["spot_count"]),
                avg_snr=int(entry["avg_snr"]),
                dx_percentage=int(entry["dx_percentage"]),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid score tier {entry!r}: {e}")
    return tiers


def build_settings(config: dict[str, Any]) -> Settings:
    """Validate a raw configuration dict.

    Raises:
        ConfigError: on any missing or malformed value
    """
    html_template = str(config.get("html_template") or "")
    if TABLE_PLACEHOLDER not in html_template:
        raise ConfigError(f"'html_template' must contain the {TABLE_PLACEHOLDER} placeholder")

    try:
        fetch_timeout = float(config["fetch_timeout"])
    except (KeyError, TypeError, ValueError):
        raise ConfigError("'fetch_timeout' must be a number of seconds")

    url = config.get("pskreporter_url")
    if not url:
        raise ConfigError("'pskreporter_url' is required")

    return Settings(
        db=Path(config.get("db") or DEFAULT_CONFIG["db"]),
        pskreporter_url=str(url),
        fetch_timeout=fetch_timeout,
        output_dir=Path(config.get("output_dir") or "."),
        log_debug=bool(config.get("log_debug")),
        log_file=config.get("log_file"),
        grids=_parse_grids(config.get("master_grids")),
        bands=parse_bands(config.get("bands")),
        score_tiers=_parse_score_tiers(config.get("band_score_parameters")),
        html_template=html_template,
        css_template=str(config.get("css_template") or ""),
        css_file=str(config.get("css_file") or DEFAULT_CONFIG["css_file"]),
    )
