from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from .client import GithubClient, GithubNotFoundError, HeaderProfile
from .models import StargazerEvent
from .pagination import MAX_PAGE_SIZE, paginate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Star window starting at local midnight on 1 January of ``year``."""

    start: datetime
    year: int

    @classmethod
    def current_year(cls, now: datetime | None = None) -> "DateWindow":
        if now is None or now.tzinfo is None:
            year = (now or datetime.now()).year
            start = datetime(year, 1, 1).astimezone()
        else:
            year = now.year
            start = datetime(year, 1, 1, tzinfo=now.tzinfo)
        return cls(start=start, year=year)

    def contains(self, moment: datetime) -> bool:
        return moment >= self.start

    def precedes(self, moment: datetime) -> bool:
        return moment < self.start


def is_newest_first(events: Sequence[StargazerEvent]) -> bool:
    return all(
        newer.starred_at >= older.starred_at
        for newer, older in zip(events, events[1:])
    )


class _WindowStop:
    # Stopping on the last event is only sound when pages are newest-first,
    # within each page and from one page to the next. The first page that
    # breaks that order switches early stop off for good. A first page that
    # is ordered but holds the oldest stars cannot be told apart.

    def __init__(self, window: DateWindow, label: str) -> None:
        self._window = window
        self._label = label
        self._previous: datetime | None = None
        self.enabled = True

    def __call__(self, page: Sequence[StargazerEvent]) -> bool:
        if not self.enabled:
            return False
        follows = self._previous is None or page[0].starred_at <= self._previous
        self._previous = page[-1].starred_at
        if not (follows and is_newest_first(page)):
            logger.warning(
                "Stargazers of %s are not ordered newest-first; scanning every page",
                self._label,
            )
            self.enabled = False
            return False
        return self._window.precedes(page[-1].starred_at)


async def count_stars_in_window(
    client: GithubClient,
    owner: str,
    repo: str,
    window: DateWindow,
    *,
    page_size: int = MAX_PAGE_SIZE,
    early_stop: bool = True,
) -> int:
    """Count stars of ``owner/repo`` given on or after ``window.start``; 404 counts as zero."""
    label = f"{owner}/{repo}"
    try:
        events = await paginate(
            client,
            f"repos/{owner}/{repo}/stargazers",
            parse=StargazerEvent.from_api,
            profile=HeaderProfile.STAR,
            page_size=page_size,
            keep=lambda event: window.contains(event.starred_at),
            stop_after=_WindowStop(window, label) if early_stop else None,
        )
    except GithubNotFoundError:
        logger.warning("Stargazers of %s not found, counting 0", label)
        return 0
    return len(events)
