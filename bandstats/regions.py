"""Make sure every configured grid has exactly one master row."""

import logging

from .context import RunContext
from .errors import ConfigError

logger = logging.getLogger(__name__)


def bootstrap_regions(ctx: RunContext) -> None:
    """Insert new master grids and refresh the update time of existing ones.

    Raises:
        ConfigError: if a grid code already has more than one master row
    """
    for grid_name, grid_code in ctx.settings.grids.items():
        count = ctx.store.count_masters(grid_code)

        if count < 1:
            ctx.store.insert_master(grid_code, grid_name, ctx.run_stamp)
            logger.debug("Added master grid %s (%s)", grid_code, grid_name)
        elif count == 1:
            ctx.store.touch_master(grid_code, ctx.run_stamp)
            logger.debug("Refreshed master grid %s", grid_code)
        else:
            raise ConfigError(f"Duplicate master grid {grid_code} in spot_masters. Verify config.")

    ctx.store.commit()
