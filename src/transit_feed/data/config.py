from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedConfig(BaseSettings):
    """Configuration for loading and serving a GTFS feed.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    feed_path: Path = Field(default=Path("data/gtfs"), alias="TRANSIT_FEED_PATH")
    load_stop_times: bool = Field(default=True, alias="TRANSIT_FEED_STOP_TIMES")
    strict_references: bool = Field(default=False, alias="TRANSIT_FEED_STRICT")

    # Loaded feed is re-read from disk once this many seconds have passed
    cache_ttl_seconds: float = Field(default=3600, alias="TRANSIT_FEED_CACHE_TTL")


@lru_cache
def get_feed_config() -> FeedConfig:
    """Get feed configuration (cached singleton).

    Returns:
        FeedConfig with values from .env file or environment variables.
    """
    return FeedConfig()
