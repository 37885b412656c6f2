"""
TMDb API client for release-date and air-date lookups.

Supports IMDb id resolution, per-region movie release dates, series details
(next/last episode) and season episode listings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class TMDbError(Exception):
    """Raised when the TMDb client cannot perform a request."""


class TMDbMediaKind(StrEnum):
    """TMDb result collections returned by /find."""

    MOVIE = "movie"
    TV = "tv"


class TMDbReleaseType(IntEnum):
    """TMDb release types for /movie/{id}/release_dates."""

    PREMIERE = 1
    THEATRICAL_LIMITED = 2
    THEATRICAL = 3
    DIGITAL = 4
    PHYSICAL = 5
    TV = 6


@dataclass
class TMDbReleaseDate:
    """One release date row for a region."""

    region: str  # ISO 3166-1 alpha-2 code
    release_date: str
    release_type: int


@dataclass
class TMDbEpisode:
    """Episode reference from series details."""

    air_date: str | None
    season_number: int


@dataclass
class TMDbSeriesDetails:
    """Series details relevant to air dates."""

    tmdb_id: int
    next_episode_to_air: TMDbEpisode | None = None
    last_episode_to_air: TMDbEpisode | None = None
    origin_country: list[str] = field(default_factory=list)


def _parse_episode(data: dict[str, Any] | None) -> TMDbEpisode | None:
    if not data:
        return None
    return TMDbEpisode(
        air_date=data.get("air_date"),
        season_number=int(data.get("season_number") or 0),
    )


class TMDbClient:
    """
    TMDb v3 API client.

    Authenticates with an API key passed as a query parameter. Responses are
    not cached and failed requests are not retried.
    """

    BASE_URL = "https://api.themoviedb.org/3"
    USER_AGENT = "release-date-finder/0.1.0"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = BASE_URL,
        timeout_sec: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb v3 API key
            base_url: API root URL
            timeout_sec: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout_sec,
            headers={"User-Agent": self.USER_AGENT},
            transport=transport,
        )

    def _request(self, endpoint: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Make an authenticated GET request and return the JSON payload."""
        if not self.api_key:
            raise TMDbError("TMDb API key is not configured")

        query = {"api_key": self.api_key, **(params or {})}
        url = f"{self.base_url}/{endpoint}"

        logger.debug(f"TMDb request: /{endpoint}")
        response = self._client.get(url, params=query)
        response.raise_for_status()

        return response.json()

    def find_by_imdb_id(self, imdb_id: str, kind: TMDbMediaKind) -> int | None:
        """
        Resolve an IMDb id to a TMDb id.

        Args:
            imdb_id: IMDb title id (e.g., "tt0137523")
            kind: Which result collection to read

        Returns:
            TMDb id of the first match, or None if TMDb has no match
        """
        data = self._request(f"find/{imdb_id}", {"external_source": "imdb_id"})
        results = data.get(f"{kind.value}_results") or []
        if not results:
            logger.info(f"TMDb: no {kind.value} match for {imdb_id}")
            return None
        return int(results[0]["id"])

    def get_movie_release_dates(self, tmdb_id: int) -> list[TMDbReleaseDate]:
        """
        Get per-region release dates for a movie.

        The nested {results: [{iso_3166_1, release_dates: [...]}]} payload is
        flattened into one row per release.
        """
        data = self._request(f"movie/{tmdb_id}/release_dates")

        rows: list[TMDbReleaseDate] = []
        for country_entry in data.get("results", []):
            region = country_entry.get("iso_3166_1")
            if not region:
                continue
            for release in country_entry.get("release_dates", []):
                release_date = release.get("release_date")
                release_type = release.get("type")
                if not release_date or release_type is None:
                    continue
                rows.append(
                    TMDbReleaseDate(
                        region=region,
                        release_date=release_date,
                        release_type=int(release_type),
                    )
                )

        logger.debug(f"TMDb: movie {tmdb_id} has {len(rows)} release date rows")
        return rows

    def get_tv_details(self, tmdb_id: int) -> TMDbSeriesDetails:
        """Get next/last episode and origin countries for a series."""
        data = self._request(f"tv/{tmdb_id}")
        return TMDbSeriesDetails(
            tmdb_id=tmdb_id,
            next_episode_to_air=_parse_episode(data.get("next_episode_to_air")),
            last_episode_to_air=_parse_episode(data.get("last_episode_to_air")),
            origin_country=list(data.get("origin_country") or []),
        )

    def get_season_air_dates(self, tmdb_id: int, season_number: int) -> list[str]:
        """
        Get the air dates of every episode in a season.

        Episodes without an air date are skipped.
        """
        data = self._request(f"tv/{tmdb_id}/season/{season_number}")
        return [e["air_date"] for e in data.get("episodes") or [] if e.get("air_date")]

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> TMDbClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
