import asyncio
import logging
import sys
from collections.abc import Callable
from typing import Annotated

import typer
from pydantic import ValidationError

from .aggregator import StarAggregator
from .client import GithubApiError, GithubClient
from .config import GithubSettings
from .credentials import CredentialsError, MissingTokenError, require_token, resolve_username
from .models import StarReport
from .report import rank, render_header, render_progress, render_report
from .repositories import list_public_repositories
from .stargazers import DateWindow

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 1
EXIT_API_ERROR = 2

app = typer.Typer(add_completion=False, help="Count the stars your GitHub repositories earned this year.")


async def run(
    settings: GithubSettings,
    token: str,
    window: DateWindow,
    echo: Callable[[str], None] = typer.echo,
) -> StarReport:
    username = await resolve_username(settings)
    echo(f"Authenticated as: {username}")
    echo("")

    async with GithubClient(
        token,
        base_url=settings.base_url,
        api_version=settings.api_version,
        timeout=settings.timeout,
    ) as client:
        echo("Fetching public repositories...")
        repositories = await list_public_repositories(client, username, page_size=settings.page_size)
        echo(f"   Found {len(repositories)} public repositories")
        echo("")

        echo(f"Checking {len(StarAggregator.eligible(repositories))} repositories with stars...")
        echo("")
        aggregator = StarAggregator(
            client,
            window,
            max_concurrency=settings.max_concurrent_requests,
            page_size=settings.page_size,
            early_stop=settings.stargazers_early_stop,
            on_progress=lambda result: echo(render_progress(result)),
        )
        results = await aggregator.aggregate(username, repositories)

    return rank(results, window.year, settings.top_count)


@app.command()
def main(
    user: Annotated[str | None, typer.Option("--user", "-u", help="GitHub login; defaults to `gh api user`.")] = None,
    top: Annotated[int | None, typer.Option(min=1, help="Number of repositories to list.")] = None,
    concurrency: Annotated[int | None, typer.Option(min=1, help="Repositories fetched at once.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log requests to stderr.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = GithubSettings()
    except ValidationError as exc:
        typer.echo(f"Error: invalid configuration\n{exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    overrides = {
        "username": user,
        "top_count": top,
        "max_concurrent_requests": concurrency,
    }
    settings = settings.model_copy(update={key: value for key, value in overrides.items() if value is not None})

    try:
        token = require_token(settings)
    except MissingTokenError as exc:
        typer.echo(f"Error: {exc}", err=True)
        typer.echo("Run this command with: GITHUB_TOKEN=$(gh auth token) star-tally", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    window = DateWindow.current_year()
    typer.echo(render_header(window.year))
    typer.echo("")

    try:
        report = asyncio.run(run(settings, token, window))
    except CredentialsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    except GithubApiError as exc:
        logger.debug("Run aborted", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_API_ERROR) from exc

    for line in render_report(report):
        typer.echo(line)


if __name__ == "__main__":
    app()
