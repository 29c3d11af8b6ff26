import asyncio
from datetime import datetime, timezone

import pytest

from star_tally.client import ApiResponse, HeaderProfile
from star_tally.stargazers import DateWindow

REASONS = {404: "Not Found", 403: "Forbidden", 500: "Internal Server Error"}


class FakeGithubClient:
    """Serves canned pages per path; a route may also be a bare error status."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    async def get(self, path, params=None, profile=HeaderProfile.JSON):
        params = dict(params or {})
        self.calls.append((path, params, profile))
        await asyncio.sleep(0)

        route = self.routes.get(path, [])
        if isinstance(route, int):
            return ApiResponse(url=path, status=route, reason=REASONS.get(route, "Error"))
        page = params["page"]
        payload = route[page - 1] if page <= len(route) else []
        return ApiResponse(url=path, status=200, reason="OK", payload=payload)

    def pages_requested(self, path):
        return [params["page"] for called, params, _ in self.calls if called == path]


def repo_payload(name, stars, private=False, owner="octo"):
    return {
        "name": name,
        "full_name": f"{owner}/{name}",
        "stargazers_count": stars,
        "html_url": f"https://github.com/{owner}/{name}",
        "private": private,
    }


def star_payload(starred_at, login="someone"):
    return {"starred_at": starred_at, "user": {"login": login}}


@pytest.fixture
def fake_client():
    return FakeGithubClient


@pytest.fixture
def make_repo():
    return repo_payload


@pytest.fixture
def make_star():
    return star_payload


@pytest.fixture
def window():
    return DateWindow.current_year(now=datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc))
