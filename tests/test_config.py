import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from star_tally.config import GithubSettings


def test_defaults():
    with patch.dict(os.environ, {}, clear=True):
        settings = GithubSettings(_env_file=None)

    assert settings.base_url == "https://api.github.com"
    assert settings.token is None
    assert settings.api_version == "2022-11-28"
    assert settings.max_concurrent_requests == 5
    assert settings.page_size == 100
    assert settings.stargazers_early_stop is True
    assert settings.top_count == 10
    assert settings.timeout is None


def test_reads_environment():
    env = {
        "GITHUB_TOKEN": "ghp_abc",
        "GITHUB_API_BASE_URL": "https://github.example.com/api/v3/",
        "GITHUB_MAX_CONCURRENT_REQUESTS": "2",
        "GITHUB_STARGAZERS_EARLY_STOP": "false",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = GithubSettings(_env_file=None)

    assert settings.token.get_secret_value() == "ghp_abc"
    assert settings.base_url == "https://github.example.com/api/v3"
    assert settings.max_concurrent_requests == 2
    assert settings.stargazers_early_stop is False


@pytest.mark.parametrize(
    "name, value",
    [
        ("GITHUB_PAGE_SIZE", "101"),
        ("GITHUB_MAX_CONCURRENT_REQUESTS", "0"),
        ("GITHUB_TIMEOUT_SECONDS", "-1"),
    ],
)
def test_rejects_out_of_range_values(name, value):
    with patch.dict(os.environ, {name: value}, clear=True):
        with pytest.raises(ValidationError):
            GithubSettings(_env_file=None)
