"""Pytest configuration and shared fixtures for release-date-finder tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from release_date_finder.tmdb import TMDbClient

API_KEY = "test-key"

# =============================================================================
# TMDb Payloads
# =============================================================================

MOVIE_IMDB_ID = "tt0137523"
MOVIE_TMDB_ID = 550

SERIES_IMDB_ID = "tt0903747"
SERIES_TMDB_ID = 1396


def movie_release_dates_payload() -> dict[str, Any]:
    """Release dates with a digital date that precedes the theatrical date."""
    return {
        "id": MOVIE_TMDB_ID,
        "results": [
            {
                "iso_3166_1": "US",
                "release_dates": [
                    {"certification": "R", "release_date": "1999-10-15T00:00:00.000Z", "type": 3},
                    {"certification": "", "release_date": "1999-09-10T00:00:00.000Z", "type": 4},
                    {"certification": "R", "release_date": "2000-04-18T00:00:00.000Z", "type": 4},
                    {"certification": "R", "release_date": "1999-09-10T00:00:00.000Z", "type": 1},
                ],
            },
            {
                "iso_3166_1": "CA",
                "release_dates": [
                    {"certification": "", "release_date": "1999-10-15T00:00:00.000Z", "type": 3},
                    {"certification": "", "release_date": "2001-01-01T00:00:00.000Z", "type": 4},
                ],
            },
            {
                "iso_3166_1": "DE",
                "release_dates": [
                    {"certification": "18", "release_date": "1999-11-11T00:00:00.000Z", "type": 3},
                    {"certification": "", "release_date": "garbage", "type": 4},
                ],
            },
        ],
    }


def series_details_payload(
    next_episode: dict[str, Any] | None = None,
    last_episode: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "id": SERIES_TMDB_ID,
        "name": "Breaking Bad",
        "origin_country": ["US"],
        "next_episode_to_air": next_episode,
        "last_episode_to_air": last_episode,
    }


def season_payload(*air_dates: str | None) -> dict[str, Any]:
    return {
        "episodes": [
            {"episode_number": i + 1, "air_date": air_date} for i, air_date in enumerate(air_dates)
        ]
    }


# =============================================================================
# HTTP Fixtures
# =============================================================================


def make_transport(
    routes: dict[str, Any],
    requests: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """
    Build a mock transport serving JSON payloads by URL path.

    A route value that is an int is returned as a bare status code.
    Unknown paths return 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        payload = routes.get(request.url.path)
        if payload is None:
            return httpx.Response(404, json={"status_message": "not found"})
        if isinstance(payload, int):
            return httpx.Response(payload)
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def tmdb_factory() -> Iterator[Callable[..., TMDbClient]]:
    """Create TMDb clients backed by a mock transport."""
    clients: list[TMDbClient] = []

    def _make(
        routes: dict[str, Any],
        requests: list[httpx.Request] | None = None,
        api_key: str | None = API_KEY,
    ) -> TMDbClient:
        client = TMDbClient(api_key, transport=make_transport(routes, requests))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def movie_routes() -> dict[str, Any]:
    return {
        f"/3/find/{MOVIE_IMDB_ID}": {
            "movie_results": [{"id": MOVIE_TMDB_ID, "title": "Fight Club"}],
            "tv_results": [],
        },
        f"/3/movie/{MOVIE_TMDB_ID}/release_dates": movie_release_dates_payload(),
    }


@pytest.fixture
def series_routes() -> dict[str, Any]:
    return {
        f"/3/find/{SERIES_IMDB_ID}": {
            "movie_results": [],
            "tv_results": [{"id": SERIES_TMDB_ID, "name": "Breaking Bad"}],
        },
        f"/3/tv/{SERIES_TMDB_ID}": series_details_payload(
            last_episode={"air_date": "2013-09-29", "season_number": 5, "episode_number": 16}
        ),
        f"/3/tv/{SERIES_TMDB_ID}/season/5": season_payload("2013-08-11", "2013-09-29"),
    }
