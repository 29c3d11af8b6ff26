from __future__ import annotations

import logging

from .client import GithubClient
from .models import Repository
from .pagination import MAX_PAGE_SIZE, paginate

logger = logging.getLogger(__name__)


async def list_public_repositories(
    client: GithubClient,
    username: str,
    *,
    page_size: int = MAX_PAGE_SIZE,
) -> list[Repository]:
    """Return every public repository owned by ``username``, in API order."""
    repositories = await paginate(
        client,
        f"users/{username}/repos",
        params={"type": "owner"},
        parse=Repository.from_api,
        page_size=page_size,
        keep=lambda repo: not repo.private,
    )
    logger.info("Found %d public repositories for %s", len(repositories), username)
    return repositories
