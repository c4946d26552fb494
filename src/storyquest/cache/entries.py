"""Entry store: one serialized record per (kind, cache key)."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from storyquest.cache.storage import KeyValueStore
from storyquest.types import CachedImageEntry, CachedStoryEntry, ContentKind

logger = logging.getLogger(__name__)

CacheEntry = CachedStoryEntry | CachedImageEntry

_ENTRY_MODELS: dict[ContentKind, type[CachedStoryEntry] | type[CachedImageEntry]] = {
    ContentKind.STORY: CachedStoryEntry,
    ContentKind.IMAGE: CachedImageEntry,
}


def storage_key(key: str, kind: ContentKind) -> str:
    return f"{kind.prefix}{key}"


def parse_entry(raw: str, kind: ContentKind) -> CacheEntry:
    """Deserialize a stored record. Raises ValidationError on bad payloads."""
    return _ENTRY_MODELS[kind].model_validate_json(raw)


class EntryStore:
    """get/put/delete of cached entries; stories and images never share keys."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get(self, key: str, kind: ContentKind) -> CacheEntry | None:
        raw = self.get_raw(key, kind)
        if raw is None:
            return None
        try:
            return parse_entry(raw, kind)
        except ValidationError:
            logger.debug("Unparseable %s entry under '%s', treating as miss", kind, key)
            return None

    def get_raw(self, key: str, kind: ContentKind) -> str | None:
        return self._store.get(storage_key(key, kind))

    def put(self, key: str, kind: ContentKind, entry: CacheEntry) -> None:
        self._store.set(storage_key(key, kind), entry.model_dump_json(by_alias=True))

    def delete(self, key: str, kind: ContentKind) -> None:
        self._store.remove(storage_key(key, kind))
