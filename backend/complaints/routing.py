"""
complaints.routing - Location-based administrator selection.

Pure functions, no ORM access: callers pass the complaint location and an
explicit snapshot of candidate administrators.  Anything exposing the
attributes ``state``, ``district``, ``sub_district``, ``city`` and
``area`` can be matched (model instances, ``LocationRecord`` values).

Matching tiers, most specific first::

    1. state + district + sub_district + city + area
    2. state + district + city + area
    3. state + city + area
    4. city + area
    5. city
    6. fallback - any active administrator (creation-time only)

A tier matches a candidate when every field in it is non-empty on both
sides and equal after trimming and case-folding.  The first tier that
matches at least one candidate wins; inside a tier the lowest primary
key wins, so the outcome never depends on candidate order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

MATCH_TIERS: tuple[tuple[str, ...], ...] = (
    ("state", "district", "sub_district", "city", "area"),
    ("state", "district", "city", "area"),
    ("state", "city", "area"),
    ("city", "area"),
    ("city",),
)


@dataclass(frozen=True)
class LocationRecord:
    state: str = ""
    district: str = ""
    sub_district: str = ""
    city: str = ""
    area: str = ""


def normalize(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().casefold()


def tier_matches(tier: Sequence[str], left: Any, right: Any) -> bool:
    for field in tier:
        a = normalize(getattr(left, field, ""))
        b = normalize(getattr(right, field, ""))
        if not a or not b or a != b:
            return False
    return True


def matching_tier(jurisdiction: Any, location: Any) -> int | None:
    """1-based index of the most specific tier matching, or ``None``."""
    for index, tier in enumerate(MATCH_TIERS, start=1):
        if tier_matches(tier, jurisdiction, location):
            return index
    return None


def jurisdiction_matches(jurisdiction: Any, location: Any) -> bool:
    """
    True when ``location`` falls inside ``jurisdiction`` under tiers 1–5.

    Used to decide whether an administrator may claim an unassigned
    complaint; the fallback tier never grants a claim.
    """
    return matching_tier(jurisdiction, location) is not None


def select_administrator(location: Any, candidates: Iterable[Any]) -> Any | None:
    """
    Pick the single administrator who should own a complaint at
    ``location``.

    Inactive candidates are ignored.  Returns ``None`` only when no
    active candidate exists.
    """
    active = sorted(
        (c for c in candidates if getattr(c, "is_active", True)),
        key=lambda c: c.pk,
    )
    if not active:
        return None

    for tier in MATCH_TIERS:
        for candidate in active:
            if tier_matches(tier, candidate, location):
                return candidate

    return active[0]
