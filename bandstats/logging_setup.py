"""Logging configuration for the band statistics job."""

import logging
import sys
from pathlib import Path

from .errors import OutputError

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure the root logger.

    Args:
        verbose: Enable DEBUG level logging (default: INFO)
        log_file: Optional file path that receives the same log lines
    """
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop existing handlers so repeated runs in one process don't duplicate lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"Could not open log file {log_file}: {e}")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # requests/urllib3 chatter is only useful when chasing connection problems
    logging.getLogger("urllib3").setLevel(logging.WARNING)
