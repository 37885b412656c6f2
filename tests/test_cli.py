"""Tests for the release-dates CLI."""

from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import MOVIE_IMDB_ID, SERIES_IMDB_ID, make_transport
from typer.testing import CliRunner

from release_date_finder import cli
from release_date_finder.tmdb import TMDbClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in (
        "TMDB_API_KEY",
        "RELEASE_DATE_FINDER_TMDB_API_KEY",
        "RELEASE_DATE_FINDER_TMDB_TIMEOUT_S",
        "RELEASE_DATE_FINDER_LOGGING_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def use_routes(monkeypatch):
    """Route CLI TMDb traffic to a mock transport."""
    created: list[dict[str, Any]] = []

    def _install(routes: dict[str, Any]) -> list[dict[str, Any]]:
        def factory(api_key, base_url=TMDbClient.BASE_URL, timeout_sec=10.0):
            created.append({"api_key": api_key, "timeout_sec": timeout_sec})
            return TMDbClient(
                api_key,
                base_url=base_url,
                timeout_sec=timeout_sec,
                transport=make_transport(routes),
            )

        monkeypatch.setattr(cli, "TMDbClient", factory)
        return created

    return _install


def test_help():
    result = runner.invoke(cli.app, ["--help"])

    assert result.exit_code == 0
    assert "movie" in result.output
    assert "series" in result.output


def test_movie_text_output(use_routes, movie_routes):
    use_routes(movie_routes)

    result = runner.invoke(cli.app, ["--api-key", "k", "movie", MOVIE_IMDB_ID])

    assert result.exit_code == 0, result.output
    assert "Theatrical: 1999-10-15 (CA US)" in result.output
    assert "Digital: 1999-09-10 (US) (Likely Untrue)" in result.output
    assert "Digital: 2000-04-18 (US)" in result.output
    assert "2001-01-01" not in result.output


def test_movie_json_output(use_routes, movie_routes):
    use_routes(movie_routes)

    result = runner.invoke(cli.app, ["--api-key", "k", "-o", "json", "movie", MOVIE_IMDB_ID])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["type"] == "movie"
    assert data["movie"]["theatrical"] == {
        "date": "1999-10-15",
        "regions": ["CA", "US"],
        "suspicious": False,
    }
    assert [g["suspicious"] for g in data["movie"]["digital"]] == [True, False]


def test_series_text_output(use_routes, series_routes):
    use_routes(series_routes)

    result = runner.invoke(cli.app, ["--api-key", "k", "series", SERIES_IMDB_ID])

    assert result.exit_code == 0, result.output
    assert "Air Date: 2013-09-29 (US)" in result.output
    assert "Last Episode, Last Season" in result.output


def test_lookup_with_type_option(use_routes, series_routes):
    use_routes(series_routes)

    result = runner.invoke(
        cli.app, ["--api-key", "k", "lookup", SERIES_IMDB_ID, "--type", "series"]
    )

    assert result.exit_code == 0, result.output
    assert "Air Date: 2013-09-29 (US)" in result.output


def test_missing_api_key():
    result = runner.invoke(cli.app, ["movie", MOVIE_IMDB_ID])

    assert result.exit_code == cli.ExitCode.ERROR
    assert "API key" in result.output


def test_api_key_from_env(monkeypatch, use_routes, movie_routes):
    monkeypatch.setenv("TMDB_API_KEY", "env-key")
    created = use_routes(movie_routes)

    result = runner.invoke(cli.app, ["movie", MOVIE_IMDB_ID])

    assert result.exit_code == 0, result.output
    assert created[0]["api_key"] == "env-key"


def test_title_not_found(use_routes, movie_routes):
    use_routes(movie_routes)

    result = runner.invoke(cli.app, ["--api-key", "k", "series", MOVIE_IMDB_ID])

    assert result.exit_code == cli.ExitCode.NOT_FOUND
    assert "No TMDb series found" in result.output


def test_http_error(use_routes, movie_routes):
    movie_routes["/3/movie/550/release_dates"] = 500
    use_routes(movie_routes)

    result = runner.invoke(cli.app, ["--api-key", "k", "movie", MOVIE_IMDB_ID])

    assert result.exit_code == cli.ExitCode.ERROR
    assert "HTTP 500" in result.output
