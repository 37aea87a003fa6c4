"""Static HTML tables of band statistics, one page per grid."""

import logging
from pathlib import Path
from typing import Sequence

from jinja2 import Environment

from .config import TABLE_PLACEHOLDER
from .context import RunContext
from .errors import OutputError

logger = logging.getLogger(__name__)

HEADERS = ["Region", "Band", "Sender", "Receiver", "DX", "DX%", "Avg SNR", "Score"]

TABLE_TEMPLATE = (
    '<table class="table" style="border:5px solid white">'
    '<thead>'
    '<tr class="table-black text-white fs-4">'
    '{% for label in headers %}<th scope="col">{{ label }}</th>{% endfor %}'
    '</tr>'
    '</thead>'
    '<tbody>'
    '{% for row in rows %}'
    '<tr class="{{ row.css_class }} fs-4">'
    '<th scope="row">{{ row.grid_code }}</th>'
    '<th scope="row">{{ row.band }}m</th>'
    '<td>{{ row.spots_as_sender }}</td>'
    '<td>{{ row.spots_as_receiver }}</td>'
    '<td>{{ row.dx_count }}</td>'
    '<td>{{ row.dx_percentage }}%</td>'
    '<td>{{ row.avg_snr if row.avg_snr is not none }}</td>'
    '<td>{{ row.band_score if row.band_score is not none }}</td>'
    '</tr>'
    '{% endfor %}'
    '</tbody>'
    '</table>'
    '<a class="text-white">Last Updated At: {{ updated_at or "" }}</a>'
)

_env = Environment(autoescape=True)
_table = _env.from_string(TABLE_TEMPLATE)


def row_class(score: int | None) -> str:
    """Table row class for a band score: green 4-5, yellow 2-3, red otherwise."""
    if score in (4, 5):
        return "table-success"
    if score in (2, 3):
        return "table-warning"
    return "table-danger"


def render_table(rows: Sequence[tuple], updated_at: str | None) -> str:
    """Render band_stats rows (as returned by SpotStore.band_stats_for) to markup."""
    view = []
    for row in rows:
        logger.debug("Adding row: %s", row)
        grid_code, band, sender, receiver, dx_count, dx_pct, avg_snr, score = row
        view.append({
            "css_class": row_class(score),
            "grid_code": grid_code,
            "band": band,
            "spots_as_sender": sender,
            "spots_as_receiver": receiver,
            "dx_count": dx_count,
            "dx_percentage": dx_pct,
            "avg_snr": avg_snr,
            "band_score": score,
        })
    return _table.render(headers=HEADERS, rows=view, updated_at=updated_at)


def render_page(html_template: str, table: str) -> str:
    return html_template.replace(TABLE_PLACEHOLDER, table)


def _write(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Could not write {path}: {e}")


def render_grid_pages(ctx: RunContext) -> list[Path]:
    """Write the stylesheet and one HTML page per configured grid.

    Returns:
        Paths written, stylesheet first
    """
    logger.info("Process started to output HTML tables")
    settings = ctx.settings

    css_path = ctx.paths.css / settings.css_file
    _write(css_path, settings.css_template)
    written = [css_path]

    for grid_code in settings.grid_codes:
        rows = ctx.store.band_stats_for(grid_code)
        updated_at = ctx.store.master_update_time(grid_code)
        page = render_page(settings.html_template, render_table(rows, updated_at))

        page_path = ctx.paths.web / f"{grid_code}.html"
        _write(page_path, page)
        logger.debug("Wrote %s", page_path)
        written.append(page_path)

    logger.info("HTML table output process completed successfully")
    return written
