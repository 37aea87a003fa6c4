"""Band range parsing and frequency to band classification."""

from .errors import ConfigError


# Band edges as reported by PSKReporter (Hz), inclusive at both ends
DEFAULT_BANDS = {
    "160": (1800000, 2000000),
    "80": (3500000, 4000000),
    "60": (5330000, 5410000),
    "40": (7000000, 7300000),
    "30": (10100000, 10150000),
    "20": (14000000, 14350000),
    "17": (18068000, 18168000),
    "15": (21000000, 21450000),
    "12": (24890000, 24990000),
    "10": (28000000, 29700000),
    "6": (50000000, 54000000),
}


def parse_band_range(value) -> tuple[int, int]:
    """Parse one configured band range.

    Accepts ``[low, high]``, ``{"low": .., "high": ..}`` or the
    ``"low..high"`` string form.

    Returns:
        Tuple of (low, high), both inclusive

    Raises:
        ConfigError: if the value cannot be read as a range or low > high
    """
    try:
        if isinstance(value, str):
            low, high = value.split("..")
        elif isinstance(value, dict):
            low, high = value["low"], value["high"]
        else:
            low, high = value
        low, high = int(low), int(high)
    except (KeyError, TypeError, ValueError):
        raise ConfigError(f"Invalid band range: {value!r}")

    if low > high:
        raise ConfigError(f"Band range low end {low} is above high end {high}")
    return low, high


def parse_bands(raw: dict) -> dict[str, tuple[int, int]]:
    """Parse the configured band mapping, keeping its declared order."""
    if not isinstance(raw, dict) or not raw:
        raise ConfigError("'bands' must be a non-empty mapping of band name to range")
    return {str(name): parse_band_range(value) for name, value in raw.items()}


def freq_to_band(freq: int, bands: dict[str, tuple[int, int]]) -> str | None:
    """Convert a frequency to a band name.

    Bands are checked in their declared order and the first range that
    contains the frequency wins.

    Args:
        freq: Integer frequency, in the same unit as the band ranges
        bands: Parsed band mapping from parse_bands()

    Returns:
        Band name (e.g., "20") or None if the frequency is in no band
    """
    for band, (low, high) in bands.items():
        if low <= freq <= high:
            return band
    return None
