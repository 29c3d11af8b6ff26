from __future__ import annotations

from collections.abc import Iterable

from .models import RepoStarResult, StarReport

SEPARATOR = "=" * 60


def _ranking_key(result: RepoStarResult) -> tuple[int, int, str]:
    return (-result.stars_in_window, -result.total_stars, result.name)


def rank(results: Iterable[RepoStarResult], year: int, top_count: int = 10) -> StarReport:
    """Order results by stars earned in the window and total them.

    Ties fall back to lifetime stars (descending) and then to the name.
    Column widths are measured on the highlighted repositories only.
    """
    ordered = tuple(sorted(results, key=_ranking_key))
    top = tuple(result for result in ordered if result.stars_in_window > 0)[:top_count]
    return StarReport(
        year=year,
        results=ordered,
        total_stars_in_window=sum(result.stars_in_window for result in ordered),
        total_stars=sum(result.total_stars for result in ordered),
        top=top,
        name_width=max((len(result.name) for result in top), default=0),
        delta_width=max((len(str(result.stars_in_window)) for result in top), default=0),
        total_width=max((len(str(result.total_stars)) for result in top), default=0),
    )


def render_header(year: int) -> str:
    return f"GitHub Stars Counter for {year}"


def render_progress(result: RepoStarResult) -> str:
    return f"   + {result.name}: +{result.stars_in_window} stars this year"


def render_report(report: StarReport) -> list[str]:
    lines = [
        "",
        SEPARATOR,
        "Summary",
        SEPARATOR,
        "",
        f"Total stars earned in {report.year}: {report.total_stars_in_window}",
        f"Total stars (all time): {report.total_stars}",
    ]
    if not report.top:
        return lines

    lines.extend(["", f"Top repositories with new stars in {report.year}:", ""])
    for position, result in enumerate(report.top, start=1):
        name = result.name.ljust(report.name_width)
        delta = str(result.stars_in_window).rjust(report.delta_width)
        before = str(result.stars_before_window).rjust(report.total_width)
        total = str(result.total_stars).rjust(report.total_width)
        lines.append(f"   {position:>2}. {name}  +{delta} ({before} -> {total})")
    return lines
