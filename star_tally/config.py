from pydantic import AnyHttpUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GithubSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_base_url: AnyHttpUrl = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_BASE_URL",
    )
    token: SecretStr | None = Field(default=None, validation_alias="GITHUB_TOKEN")
    username: str | None = Field(default=None, validation_alias="GITHUB_USERNAME")
    api_version: str = Field(default="2022-11-28", validation_alias="GITHUB_API_VERSION")
    timeout: float | None = Field(default=None, validation_alias="GITHUB_TIMEOUT_SECONDS", gt=0.0)
    max_concurrent_requests: int = Field(
        default=5,
        validation_alias="GITHUB_MAX_CONCURRENT_REQUESTS",
        ge=1,
    )
    page_size: int = Field(
        default=100,
        validation_alias="GITHUB_PAGE_SIZE",
        ge=1,
        le=100,
    )
    stargazers_early_stop: bool = Field(
        default=True,
        validation_alias="GITHUB_STARGAZERS_EARLY_STOP",
    )
    top_count: int = Field(default=10, validation_alias="STAR_TALLY_TOP_COUNT", ge=1)

    @property
    def base_url(self) -> str:
        return str(self.api_base_url).rstrip("/")
