"""Search parameters shared by the listings API and the client views."""

from __future__ import annotations

from app.errors import ValidationError


def parse_price_range(value: str | None) -> tuple[float | None, float | None]:
    """Parse "min-max" or "min+" into inclusive bounds.

    >>> parse_price_range("500000-1000000")
    (500000.0, 1000000.0)
    >>> parse_price_range("2000000+")
    (2000000.0, None)
    """
    if not value:
        return None, None
    raw = value.strip()
    try:
        if raw.endswith("+"):
            return float(raw[:-1]), None
        low, high = raw.split("-", 1)
        low_f, high_f = float(low), float(high)
    except ValueError:
        raise ValidationError(f"Invalid price range: {value!r}", fields=["price_range"])
    if low_f < 0 or high_f < low_f:
        raise ValidationError(f"Invalid price range: {value!r}", fields=["price_range"])
    return low_f, high_f


def matches_location(location: dict, needle: str) -> bool:
    """Case-insensitive substring match over address, city, state and zip."""
    needle = needle.strip().lower()
    if not needle:
        return True
    return any(
        needle in str(location.get(key, "")).lower()
        for key in ("address", "city", "state", "zip_code")
    )
