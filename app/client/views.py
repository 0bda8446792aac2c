"""Derived dashboard views over cached records.

Pure functions: they never mutate their input and never hit the network.
"""

from __future__ import annotations

from collections import Counter
from typing import get_args

from app.schemas.schedule import ScheduleStatus
from app.services.search import matches_location, parse_price_range

SCHEDULE_STATUSES = get_args(ScheduleStatus)


def favorites(properties: list[dict]) -> list[dict]:
    """Featured listings that are still available."""
    return [p for p in properties if p.get("featured") and p.get("status") == "available"]


def public_listings(properties: list[dict]) -> list[dict]:
    """Available listings, featured ones promoted to the front."""
    available = [p for p in properties if p.get("status") == "available"]
    return sorted(available, key=lambda p: not p.get("featured"))


def search(
    properties: list[dict],
    location: str | None = None,
    property_type: str | None = None,
    price_range: str | None = None,
) -> list[dict]:
    """Raises ValidationError for a malformed price range."""
    low, high = parse_price_range(price_range)
    out = []
    for p in properties:
        if property_type and p.get("type") != property_type:
            continue
        price = p.get("price")
        if low is not None or high is not None:
            if not isinstance(price, (int, float)):
                continue
            if low is not None and price < low:
                continue
            if high is not None and price > high:
                continue
        if location and not matches_location(p.get("location") or {}, location):
            continue
        out.append(p)
    return out


def filter_schedules(schedules: list[dict], status: str = "all") -> list[dict]:
    if status == "all":
        return list(schedules)
    return [s for s in schedules if s.get("status") == status]


def schedule_counts(schedules: list[dict]) -> dict[str, int]:
    counts = Counter(s.get("status") for s in schedules)
    summary = {status: counts.get(status, 0) for status in SCHEDULE_STATUSES}
    summary["total"] = len(schedules)
    return summary


def filter_users(users: list[dict], search_term: str = "", role: str = "all") -> list[dict]:
    needle = search_term.strip().lower()
    out = []
    for u in users:
        if role != "all" and u.get("role") != role:
            continue
        if needle and needle not in (u.get("display_name") or "").lower() and needle not in (u.get("email") or "").lower():
            continue
        out.append(u)
    return out
