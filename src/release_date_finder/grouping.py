"""Candidate grouping for release-date observations.

Collapses raw (date, region) observations into one group per distinct date,
ordered chronologically with deduplicated, sorted regions in each group.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Candidate:
    """One raw release observation for a single region."""

    date: date
    region: str  # ISO 3166-1 alpha-2 code (e.g., "US", "FR")


@dataclass(frozen=True)
class DateGroup:
    """Candidates collapsed onto a single date."""

    date: date
    regions: tuple[str, ...] = ()
    suspicious: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "regions": list(self.regions),
            "suspicious": self.suspicious,
        }


def _close_group(group_date: date, regions: list[str]) -> DateGroup:
    return DateGroup(date=group_date, regions=tuple(sorted(set(regions))))


def group_candidates(candidates: Iterable[Candidate]) -> list[DateGroup]:
    """
    Group candidates by date.

    Candidates are sorted by date and scanned in order; a new group starts
    whenever the date changes. Dates are compared by exact equality, so
    callers normalize to calendar dates before grouping.

    Args:
        candidates: Raw observations in any order

    Returns:
        DateGroups strictly ascending by date, none marked suspicious
    """
    ordered = sorted(candidates, key=lambda c: c.date)
    if not ordered:
        return []

    groups: list[DateGroup] = []
    current_date = ordered[0].date
    current_regions: list[str] = []

    for cand in ordered:
        if cand.date != current_date:
            groups.append(_close_group(current_date, current_regions))
            current_date = cand.date
            current_regions = []
        current_regions.append(cand.region)

    groups.append(_close_group(current_date, current_regions))
    return groups
