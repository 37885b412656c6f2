"""Release classification for movies and series.

Movie rules:
- Canonical theatrical date: earliest grouped theatrical release
- Digital groups before the theatrical date are reported but flagged suspicious
- The first digital group on or after the theatrical date is reported unflagged
  and ends the digital list

Series rules:
- Next episode known: report its air date with no label
- Otherwise last episode: report its air date, labelled by whether the whole
  season aired on one day
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date
from enum import StrEnum

from release_date_finder.grouping import Candidate, DateGroup, group_candidates

logger = logging.getLogger(__name__)

SeasonDatesLookup = Callable[[], Iterable[date | None]]


class SeriesLabel(StrEnum):
    """Label attached to a last-episode air date."""

    LAST_SEASON = "Last Season"
    LAST_EPISODE_LAST_SEASON = "Last Episode, Last Season"


@dataclass(frozen=True)
class ReleaseSummary:
    """Theatrical and digital release dates for a movie."""

    theatrical: DateGroup | None = None
    digital_groups: tuple[DateGroup, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "theatrical": self.theatrical.to_dict() if self.theatrical else None,
            "digital": [g.to_dict() for g in self.digital_groups],
        }


@dataclass(frozen=True)
class EpisodeRecord:
    """Air date and season of a single episode."""

    air_date: date
    season_number: int


@dataclass(frozen=True)
class SeriesSummary:
    """Target air date for a series and its optional label."""

    target_date: date | None = None
    label: SeriesLabel | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "target_date": self.target_date.isoformat() if self.target_date else None,
            "label": self.label.value if self.label else None,
        }


def classify_digital_groups(
    theatrical: DateGroup | None, digital_groups: Sequence[DateGroup]
) -> tuple[DateGroup, ...]:
    """
    Select and flag the digital groups to report.

    Args:
        theatrical: Canonical theatrical group, if any
        digital_groups: Digital groups in ascending date order

    Returns:
        Groups before the theatrical date (suspicious) followed by the first
        group on or after it (not suspicious). Without a theatrical date only
        the earliest digital group is returned.
    """
    if not digital_groups:
        return ()

    if theatrical is None:
        return (replace(digital_groups[0], suspicious=False),)

    selected: list[DateGroup] = []
    for group in digital_groups:
        if group.date < theatrical.date:
            selected.append(replace(group, suspicious=True))
        else:
            selected.append(replace(group, suspicious=False))
            break

    return tuple(selected)


def classify_movie(
    theatrical_candidates: Iterable[Candidate],
    digital_candidates: Iterable[Candidate],
) -> ReleaseSummary:
    """
    Build the release summary for a movie.

    Args:
        theatrical_candidates: Theatrical release observations
        digital_candidates: Digital release observations

    Returns:
        ReleaseSummary with the canonical theatrical group and classified
        digital groups
    """
    grouped_theatrical = group_candidates(theatrical_candidates)
    grouped_digital = group_candidates(digital_candidates)

    theatrical = grouped_theatrical[0] if grouped_theatrical else None
    digital = classify_digital_groups(theatrical, grouped_digital)

    suspicious_count = sum(1 for g in digital if g.suspicious)
    if suspicious_count:
        logger.debug(
            f"{suspicious_count} digital date(s) precede theatrical date {theatrical.date if theatrical else None}"
        )

    return ReleaseSummary(theatrical=theatrical, digital_groups=digital)


def _season_label(season_episode_dates: SeasonDatesLookup) -> SeriesLabel:
    try:
        distinct_dates = {d for d in season_episode_dates() if d is not None}
    except Exception as e:
        logger.warning(f"Season episode lookup failed: {e}")
        return SeriesLabel.LAST_EPISODE_LAST_SEASON

    if len(distinct_dates) == 1:
        return SeriesLabel.LAST_SEASON
    return SeriesLabel.LAST_EPISODE_LAST_SEASON


def classify_series(
    next_episode: EpisodeRecord | None,
    last_episode: EpisodeRecord | None,
    season_episode_dates: SeasonDatesLookup,
) -> SeriesSummary:
    """
    Build the air-date summary for a series.

    The season lookup is only invoked when there is no next episode. Any
    error it raises is logged and treated as a season with several air dates.

    Args:
        next_episode: Next episode to air, if announced
        last_episode: Most recently aired episode, if any
        season_episode_dates: Callable returning the air dates of every
            episode in the last episode's season

    Returns:
        SeriesSummary with the target date and label
    """
    if next_episode is not None:
        return SeriesSummary(target_date=next_episode.air_date)

    if last_episode is not None:
        return SeriesSummary(
            target_date=last_episode.air_date,
            label=_season_label(season_episode_dates),
        )

    return SeriesSummary()
