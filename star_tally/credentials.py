from __future__ import annotations

import asyncio
import logging

from .client import StarTallyError
from .config import GithubSettings

logger = logging.getLogger(__name__)

GH_USER_COMMAND = ("gh", "api", "user", "--jq", ".login")


class CredentialsError(StarTallyError):
    """Raised when the run cannot be authenticated."""


class MissingTokenError(CredentialsError):
    def __init__(self) -> None:
        super().__init__("GITHUB_TOKEN environment variable is not set")


class IdentityLookupError(CredentialsError):
    """Raised when the authenticated username cannot be determined."""


def require_token(settings: GithubSettings) -> str:
    token = settings.token.get_secret_value().strip() if settings.token is not None else ""
    if not token:
        raise MissingTokenError()
    return token


async def resolve_username(settings: GithubSettings) -> str:
    if settings.username:
        return settings.username

    try:
        process = await asyncio.create_subprocess_exec(
            *GH_USER_COMMAND,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise IdentityLookupError(
            "GitHub CLI (gh) not found; install it or pass --user"
        ) from exc

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        detail = stderr.decode(errors="replace").strip() or f"exit status {process.returncode}"
        raise IdentityLookupError(f"`{' '.join(GH_USER_COMMAND)}` failed: {detail}")

    username = stdout.decode().strip()
    if not username:
        raise IdentityLookupError("GitHub CLI returned an empty login")
    logger.debug("Resolved username %s via gh", username)
    return username
