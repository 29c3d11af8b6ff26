from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from .client import GithubClient
from .models import Repository, RepoStarResult
from .pagination import MAX_PAGE_SIZE
from .stargazers import DateWindow, count_stars_in_window

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[RepoStarResult], None]


class StarAggregator:
    def __init__(
        self,
        client: GithubClient,
        window: DateWindow,
        *,
        max_concurrency: int = 5,
        page_size: int = MAX_PAGE_SIZE,
        early_stop: bool = True,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        if max_concurrency <= 0:
            raise ValueError("max_concurrency must be positive")
        self._client = client
        self._window = window
        self._max_concurrency = max_concurrency
        self._page_size = page_size
        self._early_stop = early_stop
        self._on_progress = on_progress

    @staticmethod
    def eligible(repositories: Iterable[Repository]) -> list[Repository]:
        return [repo for repo in repositories if repo.stargazers_count > 0]

    async def aggregate(
        self,
        owner: str,
        repositories: Iterable[Repository],
    ) -> list[RepoStarResult]:
        """Count window stars for every starred repository of ``owner``."""
        targets = self.eligible(repositories)
        if not targets:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)
        results: list[RepoStarResult] = []
        # set by the first failure; results finishing afterwards are not reported
        aborted = False

        async def run(repo: Repository) -> None:
            nonlocal aborted
            try:
                async with semaphore:
                    stars = await count_stars_in_window(
                        self._client,
                        owner,
                        repo.name,
                        self._window,
                        page_size=self._page_size,
                        early_stop=self._early_stop,
                    )
            except BaseException:
                aborted = True
                raise
            result = RepoStarResult(
                name=repo.name,
                full_name=repo.full_name,
                url=repo.html_url,
                total_stars=repo.stargazers_count,
                stars_in_window=stars,
            )
            results.append(result)
            if stars > 0 and self._on_progress is not None and not aborted:
                self._on_progress(result)

        logger.info("Counting stars since %s for %d repositories", self._window.start, len(targets))
        await asyncio.gather(*(run(repo) for repo in targets))
        return results
