"""Filter raw reception reports down to storable spot rows."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Iterator

from .band_utils import freq_to_band
from .context import RunContext, format_time
from .geo_utils import grid_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpotRow:
    sender_code: str
    receiver_code: str
    band: str
    snr: int
    spot_time: datetime


def _to_int(value, default: int = 0) -> int:
    """Integer-truncate a numeric field, treating blanks as the default."""
    if value is None or str(value).strip() == '':
        return default
    try:
        return int(float(value))
    except (OverflowError, ValueError):
        return default


def normalize_report(report: dict, grid_codes: set[str], bands: dict[str, tuple[int, int]]) -> SpotRow | None:
    """Shape one raw report into a SpotRow.

    Returns None when either locator is missing, neither locator is in a
    configured grid, the frequency falls in no configured band, or the
    spot time cannot be converted.
    """
    sender = grid_field(report.get('senderLocator'))
    receiver = grid_field(report.get('receiverLocator'))
    if sender is None or receiver is None:
        return None
    if not {sender, receiver} & grid_codes:
        return None

    freq = _to_int(report.get('frequency'), default=-1)
    band = freq_to_band(freq, bands)
    if band is None:
        return None
    logger.debug("Spot band set to %s for frequency %d", band, freq)

    seconds = _to_int(report.get('flowStartSeconds'))
    try:
        spot_time = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OSError, OverflowError, ValueError):
        logger.debug("Skipping spot with unusable time %r", report.get('flowStartSeconds'))
        return None

    return SpotRow(
        sender_code=sender,
        receiver_code=receiver,
        band=band,
        snr=_to_int(report.get('sNR')),
        spot_time=spot_time,
    )


def normalize_reports(reports: Iterable[dict], grid_codes: Iterable[str],
                      bands: dict[str, tuple[int, int]]) -> Iterator[SpotRow]:
    """Yield a SpotRow for each report that passes validation, in input order."""
    codes = set(grid_codes)
    for report in reports:
        logger.debug("Report: %s", report)
        row = normalize_report(report, codes, bands)
        if row is not None:
            yield row


def load_spots(ctx: RunContext, reports: list[dict]) -> int:
    """Normalize reports and insert them into spot_details.

    Returns:
        Number of spots loaded
    """
    logger.info("Spot count: %d", len(reports))

    loaded = 0
    for row in normalize_reports(reports, ctx.settings.grid_codes, ctx.settings.bands):
        ctx.store.insert_spot(row.sender_code, row.receiver_code, row.band,
                              row.snr, format_time(row.spot_time))
        loaded += 1
    ctx.store.commit()

    logger.info("Spots successfully loaded from PSKReporter: %d spots", loaded)
    return loaded
