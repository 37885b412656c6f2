__all__ = (
    "main",
    "Config",
    "TMDbClient",
    # Core
    "Candidate",
    "DateGroup",
    "group_candidates",
    "ReleaseSummary",
    "SeriesSummary",
    "SeriesLabel",
    "EpisodeRecord",
    "classify_movie",
    "classify_series",
    "classify_digital_groups",
    # Lookup
    "MediaType",
    "ReleaseReport",
    "TitleNotFoundError",
    "lookup_release_dates",
    "render_lines",
)

from release_date_finder.classifier import (
    EpisodeRecord,
    ReleaseSummary,
    SeriesLabel,
    SeriesSummary,
    classify_digital_groups,
    classify_movie,
    classify_series,
)
from release_date_finder.cli import main
from release_date_finder.config import Config
from release_date_finder.grouping import Candidate, DateGroup, group_candidates
from release_date_finder.report import render_lines
from release_date_finder.service import (
    MediaType,
    ReleaseReport,
    TitleNotFoundError,
    lookup_release_dates,
)
from release_date_finder.tmdb import TMDbClient
