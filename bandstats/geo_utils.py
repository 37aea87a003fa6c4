"""Maidenhead locator helpers."""


def grid_field(locator: str | None) -> str | None:
    """Return the 2-character Maidenhead field of a locator.

    Args:
        locator: Locator as reported (e.g., "FN31pr"), may be None

    Returns:
        Upper-cased field (e.g., "FN"), or None if the locator is missing
        or blank. A 1-character locator is returned whole.
    """
    if locator is None:
        return None
    locator = locator.strip()
    if not locator:
        return None
    return locator[:2].upper()


def is_valid_field(code: str) -> bool:
    """Check that a region code looks like a Maidenhead field (AA..RR)."""
    if len(code) != 2:
        return False
    return all('A' <= ch <= 'R' for ch in code.upper())
