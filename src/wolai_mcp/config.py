"""Configuration management."""

from functools import cache

from pydantic import ConfigDict, Field, computed_field
from pydantic_settings import BaseSettings

from .consts import BLOCKS_URL_PATH, DATABASES_URL_PATH, TOKEN_URL_PATH


class Config(BaseSettings):
    """Configuration with computed API endpoints."""

    model_config = ConfigDict(
        env_prefix="WOLAI_", case_sensitive=False, extra="ignore"
    )
    base_url: str = Field(
        default="https://openapi.wolai.com",
        description="Base URL for the Wolai open API",
    )
    app_id: str | None = Field(
        default=None, description="Application ID used to obtain tokens"
    )
    app_secret: str | None = Field(
        default=None, description="Application secret used to obtain tokens"
    )
    block_id: str | None = Field(
        default=None, description="Default parent block or page for create_blocks"
    )
    database_id: str | None = Field(
        default=None, description="Default database for create_database_rows"
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
        description="Logging level",
    )
    timeout_seconds: int = Field(
        default=30, gt=0, le=300, description="HTTP request timeout in seconds"
    )

    @computed_field
    @property
    def token_url(self) -> str:
        """URL for issuing and refreshing app tokens."""
        return f"{self.base_url}{TOKEN_URL_PATH}"

    @computed_field
    @property
    def blocks_url(self) -> str:
        """URL for block operations."""
        return f"{self.base_url}{BLOCKS_URL_PATH}"

    @computed_field
    @property
    def databases_url(self) -> str:
        """URL for database operations."""
        return f"{self.base_url}{DATABASES_URL_PATH}"


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return Config()
