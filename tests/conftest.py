"""Shared fixtures: a small two-grid, one-band configuration."""

import logging
from datetime import datetime, timezone

import pytest

from bandstats.config import DEFAULT_CONFIG, build_settings
from bandstats.pipeline import build_context

RUN_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_config(tmp_path, **overrides):
    config = {
        **DEFAULT_CONFIG,
        "db": "tmp/spots.db",
        "output_dir": str(tmp_path),
        "master_grids": {"Alpha": "AA", "Bravo": "BB"},
        "bands": {"20": [14000, 14350]},
        "band_score_parameters": [
            {"score": 5, "spot_count": 10, "avg_snr": 5, "dx_percentage": 10},
            {"score": 1, "spot_count": 0, "avg_snr": -999, "dx_percentage": 0},
        ],
    }
    config.update(overrides)
    return config


@pytest.fixture
def settings(tmp_path):
    return build_settings(make_config(tmp_path))


@pytest.fixture
def ctx(settings):
    context = build_context(settings, run_time=RUN_TIME)
    yield context
    context.store.close()


def report(sender="AA12", receiver="JN45", freq="14100", snr="10", seconds="1714564800"):
    return {
        "senderLocator": sender,
        "receiverLocator": receiver,
        "frequency": freq,
        "sNR": snr,
        "flowStartSeconds": seconds,
    }


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers installed by setup_logging() so they don't outlive a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
