"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from lorekeeper.utils.constants import DEFAULT_GITHUB_API_URL


class Settings(BaseSettings):
    """Environment variable settings, as populated by GitHub Actions."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_REPOSITORY: str | None = None
    GITHUB_TOKEN: str | None = None

    # Workflow run settings
    GITHUB_REF_NAME: str | None = None
    GITHUB_BASE_REF: str | None = None
