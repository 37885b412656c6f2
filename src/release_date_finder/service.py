"""Release-date lookup for a single title.

Resolves an IMDb id through TMDb, fetches the raw release or episode data,
parses dates and hands the candidates to the classifier.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from release_date_finder.classifier import (
    EpisodeRecord,
    ReleaseSummary,
    SeriesSummary,
    classify_movie,
    classify_series,
)
from release_date_finder.dates import parse_calendar_date
from release_date_finder.grouping import Candidate
from release_date_finder.tmdb import (
    TMDbClient,
    TMDbEpisode,
    TMDbError,
    TMDbMediaKind,
    TMDbReleaseDate,
    TMDbReleaseType,
)

logger = logging.getLogger(__name__)


class MediaType(StrEnum):
    """Kind of title being looked up."""

    MOVIE = "movie"
    SERIES = "series"

    @property
    def tmdb_kind(self) -> TMDbMediaKind:
        return TMDbMediaKind.MOVIE if self is MediaType.MOVIE else TMDbMediaKind.TV


class TitleNotFoundError(TMDbError):
    """Raised when an IMDb id cannot be resolved to a TMDb title."""


@dataclass
class ReleaseReport:
    """Classified release information for one title."""

    media_type: MediaType
    imdb_id: str
    tmdb_id: int
    movie: ReleaseSummary | None = None
    series: SeriesSummary | None = None
    origin_countries: list[str] = field(default_factory=list)

    @property
    def tmdb_url(self) -> str:
        kind = self.media_type.tmdb_kind.value
        return f"https://www.themoviedb.org/{kind}/{self.tmdb_id}"


def split_release_candidates(
    rows: Iterable[TMDbReleaseDate],
) -> tuple[list[Candidate], list[Candidate]]:
    """
    Split TMDb release rows into theatrical and digital candidates.

    Rows with unparseable dates are dropped. Release types other than
    theatrical and digital are ignored.

    Returns:
        Tuple of (theatrical_candidates, digital_candidates)
    """
    theatrical: list[Candidate] = []
    digital: list[Candidate] = []

    for row in rows:
        release_date = parse_calendar_date(row.release_date)
        if release_date is None:
            logger.debug(f"Skipping invalid release date {row.release_date!r} ({row.region})")
            continue

        cand = Candidate(date=release_date, region=row.region.upper())
        if row.release_type == TMDbReleaseType.THEATRICAL:
            theatrical.append(cand)
        elif row.release_type == TMDbReleaseType.DIGITAL:
            digital.append(cand)

    return theatrical, digital


def to_episode_record(episode: TMDbEpisode | None) -> EpisodeRecord | None:
    """Convert a TMDb episode reference; episodes without a valid air date yield None."""
    if episode is None:
        return None
    air_date = parse_calendar_date(episode.air_date)
    if air_date is None:
        return None
    return EpisodeRecord(air_date=air_date, season_number=episode.season_number)


def resolve_tmdb_id(client: TMDbClient, media_type: MediaType, imdb_id: str) -> int:
    """
    Resolve an IMDb id to a TMDb id for the given media type.

    Raises:
        TitleNotFoundError: If the id is malformed or TMDb has no match
    """
    if not imdb_id.startswith("tt"):
        raise TitleNotFoundError(f"Not an IMDb title id: {imdb_id}")

    tmdb_id = client.find_by_imdb_id(imdb_id, media_type.tmdb_kind)
    if tmdb_id is None:
        raise TitleNotFoundError(f"No TMDb {media_type.value} found for {imdb_id}")
    return tmdb_id


def lookup_movie(client: TMDbClient, tmdb_id: int) -> ReleaseSummary:
    rows = client.get_movie_release_dates(tmdb_id)
    theatrical, digital = split_release_candidates(rows)
    logger.debug(
        f"Movie {tmdb_id}: {len(theatrical)} theatrical, {len(digital)} digital candidates"
    )
    return classify_movie(theatrical, digital)


def lookup_series(client: TMDbClient, tmdb_id: int) -> tuple[SeriesSummary, list[str]]:
    details = client.get_tv_details(tmdb_id)
    next_episode = to_episode_record(details.next_episode_to_air)
    if details.next_episode_to_air is not None and next_episode is None:
        # A scheduled episode without a date is still upcoming
        logger.debug(f"Series {tmdb_id}: next episode has no valid air date")
        return SeriesSummary(), details.origin_country

    last_episode = to_episode_record(details.last_episode_to_air)

    def season_dates() -> list[date | None]:
        if last_episode is None:
            return []
        air_dates = client.get_season_air_dates(tmdb_id, last_episode.season_number)
        return [parse_calendar_date(d) for d in air_dates]

    summary = classify_series(next_episode, last_episode, season_dates)
    return summary, details.origin_country


def lookup_release_dates(client: TMDbClient, media_type: MediaType, imdb_id: str) -> ReleaseReport:
    """
    Look up and classify release dates for a title.

    Args:
        client: TMDb client
        media_type: Movie or series
        imdb_id: IMDb title id (e.g., "tt0137523")

    Returns:
        ReleaseReport with either a movie or a series summary

    Raises:
        TitleNotFoundError: If the title cannot be resolved
        httpx.HTTPError: If a primary TMDb request fails
    """
    tmdb_id = resolve_tmdb_id(client, media_type, imdb_id)
    logger.info(f"Resolved {imdb_id} to TMDb {media_type.tmdb_kind.value}/{tmdb_id}")

    if media_type is MediaType.MOVIE:
        return ReleaseReport(
            media_type=media_type,
            imdb_id=imdb_id,
            tmdb_id=tmdb_id,
            movie=lookup_movie(client, tmdb_id),
        )

    summary, origin_countries = lookup_series(client, tmdb_id)
    return ReleaseReport(
        media_type=media_type,
        imdb_id=imdb_id,
        tmdb_id=tmdb_id,
        series=summary,
        origin_countries=origin_countries,
    )
