"""Test band range parsing and frequency to band conversion."""

import pytest

from bandstats.band_utils import DEFAULT_BANDS, freq_to_band, parse_band_range, parse_bands
from bandstats.errors import ConfigError


def test_freq_to_band():
    """Test frequency to band conversion against the default band plan."""
    print("Testing freq_to_band():")

    test_cases = [
        (1840000, "160"),
        (3573000, "80"),
        (7074000, "40"),
        (10136000, "30"),
        (14074000, "20"),
        (18100000, "17"),
        (21074000, "15"),
        (24915000, "12"),
        (28074000, "10"),
        (50313000, "6"),
        (99999000, None),  # Out of band
    ]

    for freq, expected in test_cases:
        result = freq_to_band(freq, DEFAULT_BANDS)
        print(f"  {freq} Hz → {result} (expected: {expected})")
        assert result == expected, f"Expected {expected}, got {result}"


def test_range_edges_are_inclusive():
    bands = {"20": (14000, 14350)}
    assert freq_to_band(14000, bands) == "20"
    assert freq_to_band(14350, bands) == "20"
    assert freq_to_band(13999, bands) is None
    assert freq_to_band(14351, bands) is None


def test_first_declared_band_wins():
    """Overlapping ranges resolve to whichever band is declared first."""
    bands = {"wide": (14000, 15000), "narrow": (14100, 14200)}
    assert freq_to_band(14150, bands) == "wide"

    bands = {"narrow": (14100, 14200), "wide": (14000, 15000)}
    assert freq_to_band(14150, bands) == "narrow"


def test_parse_band_range_forms():
    assert parse_band_range([14000, 14350]) == (14000, 14350)
    assert parse_band_range({"low": 7000, "high": 7300}) == (7000, 7300)
    assert parse_band_range("3500..4000") == (3500, 4000)


@pytest.mark.parametrize("value", ["14000", [1, 2, 3], {"low": 1}, "a..b", [200, 100]])
def test_parse_band_range_rejects_bad_values(value):
    with pytest.raises(ConfigError):
        parse_band_range(value)


def test_parse_bands_keeps_order_and_stringifies_names():
    bands = parse_bands({40: "7000..7300", 20: [14000, 14350]})
    assert list(bands) == ["40", "20"]


def test_parse_bands_requires_mapping():
    with pytest.raises(ConfigError):
        parse_bands({})
    with pytest.raises(ConfigError):
        parse_bands(None)
