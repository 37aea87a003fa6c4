"""SQLite spot database, recreated from scratch on every run."""

import logging
import sqlite3
from pathlib import Path
from typing import Sequence

from .errors import OutputError, QueryError

logger = logging.getLogger(__name__)

SCHEMA = {
    "spot_masters": """
        CREATE TABLE spot_masters (
            master_grid_code TEXT NOT NULL,
            master_grid_name TEXT NOT NULL,
            update_time TEXT NOT NULL
        )
    """,
    "spot_details": """
        CREATE TABLE spot_details (
            sender_master_grid_code TEXT NOT NULL,
            receiver_master_grid_code TEXT NOT NULL,
            band TEXT NOT NULL,
            snr INTEGER NOT NULL,
            spot_time TEXT NOT NULL
        )
    """,
    "band_stats": """
        CREATE TABLE band_stats (
            master_grid_code TEXT NOT NULL,
            band TEXT NOT NULL,
            spots_as_sender INTEGER NOT NULL,
            spots_as_receiver INTEGER NOT NULL,
            dx_count INTEGER NOT NULL,
            dx_percentage INTEGER NOT NULL,
            avg_snr INTEGER,
            band_score INTEGER
        )
    """,
}


class SpotStore:
    """Owns every persisted row; stages read and write only through here.

    All statements use bound parameters. Any sqlite3 failure is re-raised
    as QueryError naming the statement.
    """

    def __init__(self, path: Path | str):
        self.path = path
        try:
            self.con = sqlite3.connect(str(path))
        except sqlite3.Error as e:
            raise QueryError("connect", e)

    @classmethod
    def recreate(cls, path: Path) -> "SpotStore":
        """Delete any existing database file and build a fresh schema."""
        try:
            if path.exists():
                path.unlink()
                logger.debug("Removed old database %s", path)
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Could not reset database {path}: {e}")
        store = cls(path)
        store.create_schema()
        return store

    def create_schema(self) -> None:
        for name, ddl in SCHEMA.items():
            logger.debug("Creating table %s", name)
            self._execute(f"create_{name}", ddl)
        self.commit()

    def _execute(self, name: str, sql: str, params: Sequence = ()) -> sqlite3.Cursor:
        logger.debug("Running query %s %s", name, tuple(params))
        try:
            return self.con.execute(sql, tuple(params))
        except (sqlite3.Error, OverflowError) as e:
            # OverflowError: an int too large to bind as SQLite INTEGER
            raise QueryError(name, e)

    def _scalar(self, name: str, sql: str, params: Sequence = ()):
        row = self._execute(name, sql, params).fetchone()
        return row[0] if row else None

    def commit(self) -> None:
        try:
            self.con.commit()
        except sqlite3.Error as e:
            raise QueryError("commit", e)

    def close(self) -> None:
        self.con.close()

    # -----------------
    # spot_masters
    # -----------------

    def count_masters(self, grid_code: str) -> int:
        return self._scalar(
            "count_spot_masters",
            "SELECT COUNT(*) FROM spot_masters WHERE master_grid_code = ?",
            (grid_code,),
        )

    def insert_master(self, grid_code: str, grid_name: str, update_time: str) -> None:
        self._execute(
            "insert_spot_masters",
            "INSERT INTO spot_masters (master_grid_code, master_grid_name, update_time) VALUES (?, ?, ?)",
            (grid_code, grid_name, update_time),
        )

    def touch_master(self, grid_code: str, update_time: str) -> None:
        self._execute(
            "update_spot_masters",
            "UPDATE spot_masters SET update_time = ? WHERE master_grid_code = ?",
            (update_time, grid_code),
        )

    def master_update_time(self, grid_code: str) -> str | None:
        return self._scalar(
            "select_spot_masters_time",
            "SELECT update_time FROM spot_masters WHERE master_grid_code = ?",
            (grid_code,),
        )

    def masters(self) -> list[tuple]:
        return self._execute(
            "select_spot_masters",
            "SELECT master_grid_code, master_grid_name, update_time FROM spot_masters ORDER BY rowid",
        ).fetchall()

    # -----------------
    # spot_details
    # -----------------

    def insert_spot(self, sender_code: str, receiver_code: str, band: str, snr: int, spot_time: str) -> None:
        self._execute(
            "insert_spot_details",
            """
            INSERT INTO spot_details
                (sender_master_grid_code, receiver_master_grid_code, band, snr, spot_time)
            VALUES (?, ?, ?, ?, ?)
            """,
            (sender_code, receiver_code, band, snr, spot_time),
        )

    def spot_count(self) -> int:
        return self._scalar("count_spot_details", "SELECT COUNT(*) FROM spot_details")

    def spots(self) -> list[tuple]:
        return self._execute(
            "select_spot_details",
            """
            SELECT sender_master_grid_code, receiver_master_grid_code, band, snr, spot_time
            FROM spot_details ORDER BY rowid
            """,
        ).fetchall()

    def count_as_sender(self, grid_code: str, band: str) -> int:
        return self._scalar(
            "count_spot_details_sender",
            "SELECT COUNT(*) FROM spot_details WHERE band = ? AND sender_master_grid_code = ?",
            (band, grid_code),
        )

    def count_as_receiver(self, grid_code: str, band: str) -> int:
        return self._scalar(
            "count_spot_details_receiver",
            "SELECT COUNT(*) FROM spot_details WHERE band = ? AND receiver_master_grid_code = ?",
            (band, grid_code),
        )

    def count_dx(self, grid_code: str, band: str, local_codes: Sequence[str]) -> int:
        """Count this grid's spots whose other end is outside every local grid."""
        marks = ", ".join("?" for _ in local_codes)
        return self._scalar(
            "count_spot_details_dx",
            f"""
            SELECT COUNT(*) FROM spot_details
            WHERE band = ?
              AND ((sender_master_grid_code = ? AND receiver_master_grid_code NOT IN ({marks}))
                OR (receiver_master_grid_code = ? AND sender_master_grid_code NOT IN ({marks})))
            """,
            (band, grid_code, *local_codes, grid_code, *local_codes),
        )

    def average_snr(self, grid_code: str, band: str) -> float | None:
        return self._scalar(
            "avg_spot_details_snr",
            """
            SELECT AVG(snr) FROM spot_details
            WHERE band = ? AND (sender_master_grid_code = ? OR receiver_master_grid_code = ?)
            """,
            (band, grid_code, grid_code),
        )

    # -----------------
    # band_stats
    # -----------------

    def insert_band_stat(self, grid_code: str, band: str, spots_as_sender: int, spots_as_receiver: int,
                         dx_count: int, dx_percentage: int, avg_snr: int | None,
                         band_score: int | None) -> None:
        self._execute(
            "insert_band_stats",
            """
            INSERT INTO band_stats
                (master_grid_code, band, spots_as_sender, spots_as_receiver,
                 dx_count, dx_percentage, avg_snr, band_score)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (grid_code, band, spots_as_sender, spots_as_receiver,
             dx_count, dx_percentage, avg_snr, band_score),
        )

    def band_stats_for(self, grid_code: str) -> list[tuple]:
        """Rows for one grid, in the order they were written."""
        return self._execute(
            "select_band_stats",
            """
            SELECT master_grid_code, band, spots_as_sender, spots_as_receiver,
                   dx_count, dx_percentage, avg_snr, band_score
            FROM band_stats WHERE master_grid_code = ? ORDER BY rowid
            """,
            (grid_code,),
        ).fetchall()
