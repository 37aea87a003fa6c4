"""Exceptions raised by the band statistics pipeline.

Library code raises these; only the entry script catches them, logs the
message and exits with status 1.
"""


class BandStatsError(Exception):
    """Base class for every fatal pipeline error."""


class ConfigError(BandStatsError):
    """Invalid configuration, including duplicate region codes."""


class FetchError(BandStatsError):
    """Remote spot retrieval failed (HTTP error, timeout, no connection)."""


class SpotFormatError(BandStatsError):
    """The fetched document is not a usable reception report listing."""


class QueryError(BandStatsError):
    """A statement failed against the spot database."""

    def __init__(self, statement: str, error: Exception):
        self.statement = statement
        self.error = error
        super().__init__(f"Query '{statement}' failed: {error}")


class OutputError(BandStatsError):
    """Working directories, pages or log files could not be written."""
