from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Final, TypeVar

from .client import GithubApiError, GithubClient, GithubNotFoundError, HeaderProfile

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE: Final[int] = 100

T = TypeVar("T")


async def paginate(
    client: GithubClient,
    path: str,
    *,
    parse: Callable[[dict[str, Any]], T],
    params: dict[str, Any] | None = None,
    profile: HeaderProfile = HeaderProfile.JSON,
    page_size: int = MAX_PAGE_SIZE,
    keep: Callable[[T], bool] | None = None,
    stop_after: Callable[[Sequence[T]], bool] | None = None,
) -> list[T]:
    """Fetch ``path`` page by page and return the kept items in API order."""
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

    items: list[T] = []
    page = 1
    while True:
        query = {**(params or {}), "per_page": page_size, "page": page}
        response = await client.get(path, params=query, profile=profile)
        if not response.ok:
            error_cls = GithubNotFoundError if response.status == 404 else GithubApiError
            raise error_cls(path, response.status, response.reason)

        data = response.json()
        if not isinstance(data, list):
            raise GithubApiError(path, response.status, "expected a JSON array")
        if not data:
            break

        try:
            batch = [parse(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise GithubApiError(path, response.status, f"unexpected item in page {page}: {exc!r}") from exc
        items.extend(item for item in batch if keep is None or keep(item))
        logger.debug("%s page %d: %d items", path, page, len(batch))

        if stop_after is not None and stop_after(batch):
            break
        if len(batch) < page_size:
            break
        page += 1

    return items
