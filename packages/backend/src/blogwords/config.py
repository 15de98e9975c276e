"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with BLOGWORDS_ prefix.
No YAML files, no file-based config — just env vars (12-factor app style).

The listen port also honours a bare PORT variable, which is what most
hosting platforms inject.
"""

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All app configuration. Set via BLOGWORDS_* env vars."""

    # Blog source
    blog_api_url: str = "https://www.thekey.academy/wp-json/wp/v2/posts"
    blog_per_page: int = 10
    fetch_timeout: float = 30.0  # seconds

    # Redis
    redis_url: str = "redis://localhost:6379/0"
    snapshot_key: str = "wordCountMap"
    snapshot_channel: str = "blogwords:snapshot"

    # Poller
    poll_interval: float = 10.0  # seconds
    keep_snapshot_on_fetch_failure: bool = False

    # Server
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = Field(
        default=8080,
        validation_alias=AliasChoices("BLOGWORDS_PORT", "PORT"),
    )
    embed_poller: bool = False  # run the poller inside the web process

    model_config = {"env_prefix": "BLOGWORDS_"}

    @model_validator(mode="after")
    def validate_intervals(self):
        if self.poll_interval <= 0:
            raise ValueError("BLOGWORDS_POLL_INTERVAL must be positive")
        if self.fetch_timeout <= 0:
            raise ValueError("BLOGWORDS_FETCH_TIMEOUT must be positive")
        return self


# Singleton — import this everywhere
settings = Settings()
