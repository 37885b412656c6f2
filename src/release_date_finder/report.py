"""Plain-text and JSON rendering of release reports.

Dates are rendered as ISO calendar dates and regions as their ISO 3166-1 codes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from release_date_finder.grouping import DateGroup
from release_date_finder.service import ReleaseReport

TBD = "TBD"
SUSPICIOUS_SUFFIX = " (Likely Untrue)"


def format_regions(regions: Sequence[str]) -> str:
    return " ".join(regions)


def _group_line(prefix: str, group: DateGroup) -> str:
    line = f"{prefix}: {group.date.isoformat()} ({format_regions(group.regions)})"
    if group.suspicious:
        line += SUSPICIOUS_SUFFIX
    return line


def render_lines(report: ReleaseReport) -> list[str]:
    """
    Render a report as summary lines.

    Movies produce one theatrical line and one line per digital group.
    Series produce an air date line, followed by the label when present.
    """
    lines: list[str] = []

    if report.movie is not None:
        summary = report.movie
        if summary.theatrical:
            lines.append(_group_line("Theatrical", summary.theatrical))
        else:
            lines.append(f"Theatrical: {TBD}")

        if summary.digital_groups:
            lines.extend(_group_line("Digital", g) for g in summary.digital_groups)
        else:
            lines.append(f"Digital: {TBD}")

    if report.series is not None:
        series = report.series
        if series.target_date:
            regions = format_regions(report.origin_countries)
            lines.append(f"Air Date: {series.target_date.isoformat()} ({regions})")
            if series.label:
                lines.append(series.label.value)
        else:
            lines.append(f"Air Date: {TBD}")

    return lines


def report_to_dict(report: ReleaseReport) -> dict[str, Any]:
    """Convert a report to a JSON-serializable dict."""
    return {
        "type": report.media_type.value,
        "imdb_id": report.imdb_id,
        "tmdb_id": report.tmdb_id,
        "tmdb_url": report.tmdb_url,
        "movie": report.movie.to_dict() if report.movie else None,
        "series": report.series.to_dict() if report.series else None,
        "origin_countries": report.origin_countries,
        "lines": render_lines(report),
    }
