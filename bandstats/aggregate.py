"""Per grid/band statistics and band scoring."""

import logging
from dataclasses import asdict, dataclass
from typing import Iterable

from .config import ScoreTier
from .context import RunContext

logger = logging.getLogger(__name__)


@dataclass
class BandStat:
    """Aggregated activity for one grid on one band.

    avg_snr is None when the band had no spots. band_score is None when
    no configured tier matched.
    """

    grid_code: str
    band: str
    spots_as_sender: int
    spots_as_receiver: int
    dx_count: int
    dx_percentage: int = 0
    avg_snr: int | None = None
    band_score: int | None = None

    @property
    def spot_count(self) -> int:
        return self.spots_as_sender + self.spots_as_receiver


def dx_percentage(dx_count: int, spot_count: int) -> int:
    """Whole-number DX share of a grid's spots.

    Truncates rather than rounds: 1 of 3 spots is 33, not 33.33 or 34.
    """
    if spot_count < 1:
        return 0
    return (dx_count * 100) // spot_count


def score_band(tiers: Iterable[ScoreTier], spot_count: int, avg_snr: int, dx_pct: int) -> int | None:
    """Return the score of the first tier whose thresholds are all met."""
    for tier in tiers:
        if tier.matches(spot_count, avg_snr, dx_pct):
            return tier.score
    return None


def compute_band_stat(ctx: RunContext, grid_code: str, band: str) -> BandStat:
    store = ctx.store
    stat = BandStat(
        grid_code=grid_code,
        band=band,
        spots_as_sender=store.count_as_sender(grid_code, band),
        spots_as_receiver=store.count_as_receiver(grid_code, band),
        dx_count=store.count_dx(grid_code, band, ctx.settings.grid_codes),
    )

    # A quiet band gets the lowest score without consulting the tiers
    if stat.spot_count < 1:
        stat.band_score = 1
        return stat

    stat.avg_snr = int(store.average_snr(grid_code, band))
    stat.dx_percentage = dx_percentage(stat.dx_count, stat.spot_count)
    stat.band_score = score_band(ctx.settings.score_tiers, stat.spot_count,
                                 stat.avg_snr, stat.dx_percentage)
    return stat


def aggregate_band_stats(ctx: RunContext) -> list[BandStat]:
    """Compute and store a BandStat for every configured grid and band."""
    logger.info("Process started to compute band stats")

    stats = []
    for grid_code in ctx.settings.grid_codes:
        for band in ctx.settings.bands:
            stat = compute_band_stat(ctx, grid_code, band)
            ctx.store.insert_band_stat(
                stat.grid_code, stat.band, stat.spots_as_sender, stat.spots_as_receiver,
                stat.dx_count, stat.dx_percentage, stat.avg_snr, stat.band_score,
            )
            logger.info("Grid %s - %s meter band stats: %s", grid_code, band, asdict(stat))
            stats.append(stat)
    ctx.store.commit()

    logger.info("Band stats process completed successfully")
    return stats
