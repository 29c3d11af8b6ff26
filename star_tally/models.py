from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True, slots=True)
class Repository:
    name: str
    full_name: str
    stargazers_count: int
    html_url: str
    private: bool

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Repository":
        return cls(
            name=payload["name"],
            full_name=payload["full_name"],
            stargazers_count=payload.get("stargazers_count") or 0,
            html_url=payload.get("html_url") or "",
            private=bool(payload.get("private", False)),
        )


@dataclass(frozen=True, slots=True)
class StargazerEvent:
    starred_at: datetime
    login: str

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "StargazerEvent":
        # deleted accounts come back as "user": null
        user = payload.get("user") or {}
        return cls(
            starred_at=parse_timestamp(payload["starred_at"]),
            login=user.get("login") or "",
        )


@dataclass(frozen=True, slots=True)
class RepoStarResult:
    name: str
    full_name: str
    url: str
    total_stars: int
    stars_in_window: int

    @property
    def stars_before_window(self) -> int:
        return max(self.total_stars - self.stars_in_window, 0)


@dataclass(frozen=True, slots=True)
class StarReport:
    year: int
    results: tuple[RepoStarResult, ...]
    total_stars_in_window: int
    total_stars: int
    top: tuple[RepoStarResult, ...]
    name_width: int
    delta_width: int
    total_width: int
