"""Cache for a loaded feed, keyed on the settings it was loaded with."""

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path

from transit_feed.data.config import FeedConfig
from transit_feed.models.gtfs import Feed


@dataclass(frozen=True)
class FeedKey:
    """Settings that determine the content of a loaded feed."""

    feed_path: Path
    load_stop_times: bool
    strict: bool

    @classmethod
    def from_config(cls, config: FeedConfig) -> "FeedKey":
        return cls(
            feed_path=Path(config.feed_path).resolve(),
            load_stop_times=config.load_stop_times,
            strict=config.strict_references,
        )


class FeedCache:
    """Holds one loaded feed together with its FeedKey and an expiry time.

    A lookup only hits when the key matches the one the feed was loaded
    with and the TTL given at store time has not run out. Storing a feed
    under a different key replaces the previous one.
    """

    def __init__(self) -> None:
        self._key: FeedKey | None = None
        self._feed: Feed | None = None
        self._expires_at: float = 0
        self._lock = asyncio.Lock()

    def get(self, key: FeedKey) -> Feed | None:
        """Return the cached feed for key, or None on a key mismatch or expiry."""
        if self._feed is None or key != self._key:
            return None
        if time.monotonic() >= self._expires_at:
            return None
        return self._feed

    def set(self, key: FeedKey, feed: Feed, ttl: float) -> None:
        """Store a feed loaded with key, valid for ttl seconds."""
        self._key = key
        self._feed = feed
        self._expires_at = time.monotonic() + ttl

    @property
    def key(self) -> FeedKey | None:
        """Key of the currently stored feed, expired or not."""
        return self._key

    @property
    def lock(self) -> asyncio.Lock:
        """Lock held while (re)loading the feed."""
        return self._lock
