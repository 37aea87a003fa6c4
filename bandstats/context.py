"""Per-run state passed explicitly to every pipeline stage."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .config import Settings
from .errors import OutputError
from .store import SpotStore


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_time(ts: datetime) -> str:
    """ISO-8601 text used for every timestamp written to the database."""
    return ts.isoformat()


@dataclass
class RunPaths:
    """Working directories for one run, all under a common base."""

    base: Path

    @property
    def tmp(self) -> Path:
        return self.base / "tmp"

    @property
    def logs(self) -> Path:
        return self.base / "logs"

    @property
    def web(self) -> Path:
        return self.base / "web"

    @property
    def css(self) -> Path:
        return self.web / "css"

    def create(self) -> None:
        for path in (self.tmp, self.logs, self.web, self.css):
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputError(f"Could not create directory {path}: {e}")

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base / path


@dataclass
class RunContext:
    settings: Settings
    store: SpotStore
    paths: RunPaths
    run_time: datetime = field(default_factory=utc_now)

    @property
    def run_stamp(self) -> str:
        return format_time(self.run_time)
