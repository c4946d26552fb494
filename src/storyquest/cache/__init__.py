"""Content cache — TTL-based story and image cache over a key-value store."""

from storyquest.cache.keys import derive_cache_key, normalize_topic
from storyquest.cache.manager import ContentCache
from storyquest.cache.policy import STORY_CACHE_PROBABILITY, should_consult_cache
from storyquest.cache.stats import CacheStats
from storyquest.cache.storage import KeyValueStore, MemoryStore, SqliteStore

__all__ = [
    "ContentCache",
    "CacheStats",
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "STORY_CACHE_PROBABILITY",
    "derive_cache_key",
    "normalize_topic",
    "should_consult_cache",
]
