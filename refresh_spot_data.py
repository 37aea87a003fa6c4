#!/usr/bin/env -S uv run
# -*- mode: python; -*-
# vim: set ft=python:
# /// script
# requires-python = ">=3.10"
# dependencies = [
#   "jinja2",
#   "pyyaml",
#   "requests",
# ]
# ///
"""refresh_spot_data.py - Rebuild HF band condition pages from PSKReporter

Each run:
  1. Deletes and recreates the SQLite spot database
  2. Fetches recent reception reports from PSKReporter
  3. Keeps spots where the sender or receiver is in a configured grid
     and the frequency falls in a configured band
  4. Computes per grid/band counts, DX share, average SNR and a 1-5 score
  5. Writes web/<GRID>.html for every grid plus web/css/<css_file>

Config file (first found): ./config.yml, ./config.yaml, ~/.config/bandstats/config.yaml
  See config.example.yaml, or --dump-config for the defaults.

Usage:
  refresh_spot_data.py                       # run with the config search path
  refresh_spot_data.py -c my-config.yml      # explicit config file
  refresh_spot_data.py --debug               # debug logging regardless of log_debug
  refresh_spot_data.py --dump-config         # emit default config to stdout

Exit status: 0 on success, 1 on fetch, query or configuration errors.
"""

import argparse
import logging
import sys
from pathlib import Path

from bandstats import BandStatsError, build_context, build_settings, dump_config, load_config, run
from bandstats.logging_setup import setup_logging

logger = logging.getLogger("refresh_spot_data")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Rebuild HF band condition pages from PSKReporter spots")
    p.add_argument("-c", "--config", type=Path, help="Config file (YAML)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dump-config", action="store_true", help="Emit default config to stdout")
    args = p.parse_args(argv)

    if args.dump_config:
        print(dump_config())
        return 0

    setup_logging(verbose=args.debug)

    try:
        settings = build_settings(load_config(args.config))
        ctx = build_context(settings)
        log_file = ctx.paths.logs / settings.log_file if settings.log_file else None
        setup_logging(verbose=args.debug or settings.log_debug, log_file=log_file)

        try:
            result = run(ctx)
        finally:
            ctx.store.close()
    except BandStatsError as e:
        logger.error("%s", e)
        logger.error("Exiting...")
        return 1

    logger.info("Done: %d of %d spots loaded, %d pages written",
                result.loaded, result.reports, len(result.pages) - 1)
    return 0


if __name__ == "__main__":
    sys.exit(main())
