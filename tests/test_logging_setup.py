"""Test logging configuration."""

import logging

import pytest

from bandstats.errors import OutputError
from bandstats.logging_setup import setup_logging


def test_debug_toggle():
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    setup_logging(verbose=False)
    assert logging.getLogger().level == logging.INFO


def test_reconfigure_closes_previous_file_handler(tmp_path):
    setup_logging(log_file=tmp_path / "first.log")
    first = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert len(first) == 1

    setup_logging(log_file=tmp_path / "second.log")
    handlers = logging.getLogger().handlers
    assert first[0] not in handlers
    # FileHandler.close() drops its stream
    assert first[0].stream is None
    assert len([h for h in handlers if isinstance(h, logging.FileHandler)]) == 1


def test_unopenable_log_file_is_output_error(tmp_path):
    with pytest.raises(OutputError):
        setup_logging(log_file=tmp_path / "missing-dir" / "run.log")
