"""Content cache facade — lookups, writes, sweeps and stats over one store."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import ValidationError

from storyquest.cache.entries import CacheEntry, EntryStore, parse_entry
from storyquest.cache.expiry import is_expired, utc_now
from storyquest.cache.index import IndexList
from storyquest.cache.keys import derive_cache_key
from storyquest.cache.stats import NO_ENTRIES, CacheStats, format_size
from storyquest.cache.storage import KeyValueStore
from storyquest.errors.exceptions import CacheError
from storyquest.types import CachedImageEntry, CachedStoryEntry, ContentKind

logger = logging.getLogger(__name__)


class ContentCache:
    """TTL cache for generated stories and images.

    Entries and the per-kind index lists are written independently with no
    transaction. A key in an index list whose entry is gone is purged by
    ``clear_expired``; an entry missing from its index list is still found by
    lookups and counted by the size scan in ``stats``.

    No public method raises: store failures are logged and degrade to a miss,
    a no-op, ``0`` or ``CacheStats.error()``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._entries = EntryStore(store)
        self._indexes = {kind: IndexList(store, kind) for kind in ContentKind}

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def index(self, kind: ContentKind) -> IndexList:
        return self._indexes[kind]

    # ── Lookups ──

    def lookup_story(
        self, owner: str, character: str, age: int, topic: str
    ) -> CachedStoryEntry | None:
        """Return the live cached story for this fingerprint, if any."""
        key = derive_cache_key(owner, character, age, topic)
        return self._lookup(key, ContentKind.STORY)

    def lookup_image(
        self, owner: str, character: str, age: int, topic: str
    ) -> CachedImageEntry | None:
        """Return the live cached image for this fingerprint, if any."""
        key = derive_cache_key(owner, character, age, topic)
        return self._lookup(key, ContentKind.IMAGE)

    def _lookup(self, key: str, kind: ContentKind) -> CacheEntry | None:
        try:
            entry = self._entries.get(key, kind)
            if entry is None:
                return None
            if is_expired(entry.created_at, kind, self._clock()):
                logger.debug("Cached %s '%s' expired, removing", kind, key)
                self._entries.delete(key, kind)
                return None
            return entry
        except CacheError as e:
            logger.warning("Error getting cached %s '%s': %s", kind, key, e)
            return None

    # ── Writes ──

    def store_story(
        self,
        owner: str,
        character: str,
        age: int,
        topic: str,
        entry: CachedStoryEntry,
    ) -> None:
        """Cache a story under its fingerprint, replacing any previous one."""
        key = derive_cache_key(owner, character, age, topic)
        self._write(key, ContentKind.STORY, entry.model_copy(update={"cache_key": key}))

    def store_image(
        self,
        owner: str,
        character: str,
        age: int,
        topic: str,
        url: str,
        prompt: str,
    ) -> None:
        """Cache an image URL and the prompt that produced it."""
        key = derive_cache_key(owner, character, age, topic)
        entry = CachedImageEntry(
            url=url, prompt=prompt, created_at=self._clock(), cache_key=key
        )
        self._write(key, ContentKind.IMAGE, entry)

    def _write(self, key: str, kind: ContentKind, entry: CacheEntry) -> None:
        try:
            self._entries.put(key, kind, entry)
            self._indexes[kind].register(key)
        except CacheError as e:
            logger.warning("Error caching %s '%s': %s", kind, key, e)

    # ── Bulk operations ──

    def clear_all(self) -> None:
        """Delete every indexed entry of both kinds and empty the index lists."""
        try:
            for kind, index in self._indexes.items():
                for key in index.all():
                    self._entries.delete(key, kind)
                index.clear()
            logger.info("All cache cleared")
        except CacheError as e:
            logger.warning("Error clearing cache: %s", e)

    def clear_expired(self) -> int:
        """Sweep both index lists, removing expired or corrupt entries.

        Dangling index keys (no entry behind them) are dropped from the list
        without being counted. Returns the number of entries removed.
        """
        try:
            now = self._clock()
            removed = 0
            for kind, index in self._indexes.items():
                survivors: list[str] = []
                for key in index.all():
                    raw = self._entries.get_raw(key, kind)
                    if raw is None:
                        continue
                    try:
                        entry = parse_entry(raw, kind)
                    except ValidationError:
                        self._entries.delete(key, kind)
                        removed += 1
                        continue
                    if is_expired(entry.created_at, kind, now):
                        self._entries.delete(key, kind)
                        removed += 1
                    else:
                        survivors.append(key)
                index.replace(survivors)
            if removed:
                logger.info("Removed %d expired cache entries", removed)
            return removed
        except CacheError as e:
            logger.warning("Error clearing expired cache: %s", e)
            return 0

    # ── Stats ──

    def stats(self) -> CacheStats:
        """Summarize the cache.

        Totals come from the index lists. Size and the oldest/newest
        timestamps come from a full scan of every key carrying a cache
        prefix, so orphaned records are included.
        """
        try:
            total_stories = len(self._indexes[ContentKind.STORY])
            total_images = len(self._indexes[ContentKind.IMAGE])

            prefixes = tuple(kind.prefix for kind in ContentKind)
            total_size = 0
            oldest: datetime | None = None
            newest: datetime | None = None

            for storage_key in self._store.keys():
                if not storage_key.startswith(prefixes):
                    continue
                value = self._store.get(storage_key)
                if not value:
                    continue
                total_size += len(value)
                created = _created_at(value)
                if created is None:
                    continue
                if oldest is None or created < oldest:
                    oldest = created
                if newest is None or created > newest:
                    newest = created

            return CacheStats(
                total_stories=total_stories,
                total_images=total_images,
                cache_size=format_size(total_size),
                oldest_entry=oldest.isoformat() if oldest else NO_ENTRIES,
                newest_entry=newest.isoformat() if newest else NO_ENTRIES,
            )
        except CacheError as e:
            logger.warning("Error getting cache stats: %s", e)
            return CacheStats.error()


def _created_at(value: str) -> datetime | None:
    """Pull ``createdAt`` out of a raw record; None for lists and bad data."""
    try:
        record = json.loads(value)
    except json.JSONDecodeError:
        return None
    if not isinstance(record, dict) or not isinstance(record.get("createdAt"), str):
        return None
    try:
        created = datetime.fromisoformat(record["createdAt"])
    except ValueError:
        return None
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return created
