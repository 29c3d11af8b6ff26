from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any, Final

from aiohttp import ClientError, ClientSession, ClientTimeout

logger = logging.getLogger(__name__)

GITHUB_API_BASE_URL: Final[str] = "https://api.github.com"
GITHUB_API_VERSION: Final[str] = "2022-11-28"


class StarTallyError(Exception):
    """Base class for errors reported to the user."""


class GithubApiError(StarTallyError):
    """Raised when a GitHub API endpoint answers with a non-2xx status."""

    def __init__(self, endpoint: str, status: int | None, reason: str) -> None:
        self.endpoint = endpoint
        self.status = status
        self.reason = reason
        if status is None:
            message = f"{endpoint}: {reason}"
        else:
            message = f"{endpoint} failed with status {status}: {reason}"
        super().__init__(message)


class GithubNotFoundError(GithubApiError):
    """The 404 case, kept separate so callers can treat it as an empty result."""


class HeaderProfile(enum.Enum):
    JSON = "application/vnd.github+json"
    STAR = "application/vnd.github.star+json"


@dataclass(frozen=True, slots=True)
class ApiResponse:
    url: str
    status: int
    reason: str
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return self.payload


class GithubClient:
    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = GITHUB_API_BASE_URL,
        api_version: str = GITHUB_API_VERSION,
        timeout: float | None = None,
    ) -> None:
        if not access_token:
            raise ValueError("access_token must not be empty")
        headers = {
            "Authorization": f"Bearer {access_token}",
            "X-GitHub-Api-Version": api_version,
            "User-Agent": "star-tally",
        }
        self._base_url = base_url.rstrip("/")
        self._session = ClientSession(
            headers=headers,
            timeout=ClientTimeout(total=timeout),
        )

    async def __aenter__(self) -> "GithubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._session.closed:
            await self._session.close()

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        profile: HeaderProfile = HeaderProfile.JSON,
    ) -> ApiResponse:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            async with self._session.get(
                url,
                params=params,
                headers={"Accept": profile.value},
            ) as response:
                payload = None
                if 200 <= response.status < 300:
                    try:
                        payload = await response.json(content_type=None)
                    except ValueError as exc:
                        raise GithubApiError(f"GET {url}", response.status, "response body is not JSON") from exc
                logger.debug("GET %s params=%s -> %s", url, params, response.status)
                return ApiResponse(
                    url=url,
                    status=response.status,
                    reason=response.reason or "",
                    payload=payload,
                )
        except (ClientError, asyncio.TimeoutError) as exc:
            raise GithubApiError(f"GET {url}", None, f"network error: {exc}") from exc
