"""CLI for release-date-finder using Typer and Rich.

Looks up theatrical, digital and series air dates for an IMDb title.
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import httpx
import typer
from rich.console import Console

from release_date_finder.config import Config
from release_date_finder.console import print as cprint
from release_date_finder.console import print_error, print_warning, set_console
from release_date_finder.report import render_lines, report_to_dict
from release_date_finder.safe_logging import (
    configure_rich_logging,
    quiet_http_loggers,
    redact_dict,
)
from release_date_finder.service import MediaType, TitleNotFoundError, lookup_release_dates
from release_date_finder.tmdb import TMDbClient, TMDbError


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    TEXT = "text"
    JSON = "json"


class ExitCode:
    """Standard exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    NOT_FOUND = 2


app = typer.Typer(
    name="release-dates",
    help="Release Date Finder: theatrical, digital and air dates from TMDb",
    no_args_is_help=True,
    add_completion=False,
)


# Global state (set by callback)
class AppState:
    """Global application state passed between commands."""

    config: Config
    output_format: OutputFormat
    verbose: int


state = AppState()


@app.callback()
def main_callback(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to TOML config file"),
    ] = None,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="TMDb API key (overrides config and env)"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(min=1.0, help="TMDb request timeout in seconds"),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv, -vvv)"),
    ] = 0,
    output: Annotated[
        OutputFormat,
        typer.Option("--output", "-o", help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Release Date Finder: theatrical, digital and air dates from TMDb."""
    logger = logging.getLogger(__name__)

    # Load config (TOML + env vars)
    cfg = Config.load(config_path)

    # CLI > Env > Config File > Defaults
    if api_key:
        cfg.tmdb.api_key = api_key
    if timeout is not None:
        cfg.tmdb.timeout_s = timeout

    if verbose > 0:
        log_level = logging.DEBUG if verbose >= 2 else logging.INFO
    else:
        level_str = cfg.logging.level.upper()
        log_level = getattr(logging, level_str, logging.WARNING)

    # Logs go to stderr, command output to stdout
    configure_rich_logging(level=log_level, hash_paths=cfg.logging.hash_paths)
    set_console(Console())

    # Suppress HTTP library logging unless very verbose (-vvv)
    if verbose < 3:
        quiet_http_loggers()

    if config_path:
        logger.info("Loaded config from %s", config_path)
    logger.debug(f"Logging configured: level={logging.getLevelName(log_level)}")
    logger.debug(f"Effective config: {redact_dict(cfg.model_dump(mode='json'))}")

    state.config = cfg
    state.output_format = output
    state.verbose = verbose


def _run_lookup(media_type: MediaType, imdb_id: str) -> None:
    logger = logging.getLogger(__name__)
    cfg = state.config

    if not cfg.tmdb.api_key:
        print_error("TMDb API key is not configured (use --api-key or TMDB_API_KEY)")
        raise typer.Exit(ExitCode.ERROR)

    try:
        with TMDbClient(
            cfg.tmdb.api_key,
            base_url=cfg.tmdb.base_url,
            timeout_sec=cfg.tmdb.timeout_s,
        ) as client:
            report = lookup_release_dates(client, media_type, imdb_id)
    except TitleNotFoundError as e:
        print_warning(str(e))
        raise typer.Exit(ExitCode.NOT_FOUND) from e
    except httpx.HTTPStatusError as e:
        logger.debug(f"TMDb request failed: {e.request.url}")
        print_error(f"TMDb returned HTTP {e.response.status_code}")
        raise typer.Exit(ExitCode.ERROR) from e
    except (httpx.HTTPError, TMDbError) as e:
        print_error(f"Error fetching dates: {e}")
        raise typer.Exit(ExitCode.ERROR) from e

    if state.output_format == OutputFormat.JSON:
        typer.echo(json.dumps(report_to_dict(report), indent=2))
        return

    for line in render_lines(report):
        cprint(line, highlight=False)
    cprint(f"[dim]{report.tmdb_url}[/dim]")


@app.command()
def movie(
    imdb_id: Annotated[str, typer.Argument(help="IMDb title id (e.g., tt0137523)")],
) -> None:
    """Show theatrical and digital release dates for a movie.

    Digital dates earlier than the theatrical date are marked "Likely Untrue".

    Examples:
        release-dates movie tt0137523
        release-dates -o json movie tt0137523
    """
    _run_lookup(MediaType.MOVIE, imdb_id)


@app.command()
def series(
    imdb_id: Annotated[str, typer.Argument(help="IMDb title id (e.g., tt0903747)")],
) -> None:
    """Show the next (or last) air date for a series."""
    _run_lookup(MediaType.SERIES, imdb_id)


@app.command()
def lookup(
    imdb_id: Annotated[str, typer.Argument(help="IMDb title id")],
    media_type: Annotated[
        MediaType,
        typer.Option("--type", "-t", help="Title type"),
    ] = MediaType.MOVIE,
) -> None:
    """Look up release dates for a title of the given type."""
    _run_lookup(media_type, imdb_id)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
