"""Shared, lazily loaded feed used by the MCP tools."""

import asyncio
import logging

from transit_feed.data.cache import FeedCache, FeedKey
from transit_feed.data.config import FeedConfig, get_feed_config
from transit_feed.data.feed_loader import FeedLoader
from transit_feed.models.gtfs import Feed

logger = logging.getLogger(__name__)

_cache: FeedCache | None = None


def _get_cache() -> FeedCache:
    global _cache
    if _cache is None:
        _cache = FeedCache()
    return _cache


async def get_feed(config: FeedConfig | None = None) -> Feed:
    """Get the shared feed for a configuration, loading it when needed.

    The cached feed is reused only if it was loaded with the same path,
    stop-times flag and strict flag and its TTL has not expired. Otherwise
    the feed is loaded again in a worker thread and replaces the cached one.

    Args:
        config: Optional configuration. Uses get_feed_config() if not provided.

    Returns:
        The loaded Feed.

    Raises:
        FeedFileError: If the configured feed cannot be read.
    """
    if config is None:
        config = get_feed_config()
    key = FeedKey.from_config(config)
    cache = _get_cache()

    feed = cache.get(key)
    if feed is not None:
        return feed

    async with cache.lock:
        # Another task may have loaded it while we waited
        feed = cache.get(key)
        if feed is not None:
            return feed

        if cache.key is not None and cache.key != key:
            logger.info(f"Feed settings changed, reloading from {key.feed_path}")
        loader = FeedLoader(strict=key.strict)
        feed = await asyncio.to_thread(loader.load, config.feed_path, key.load_stop_times)
        cache.set(key, feed, config.cache_ttl_seconds)
        return feed


def invalidate() -> None:
    """Drop the shared feed so the next get_feed() reloads it."""
    global _cache
    _cache = None
    logger.info("Shared feed invalidated")
