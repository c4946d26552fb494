"""Index lists — the cache's own record of which keys exist per kind.

The backing store has no prefix enumeration the cache relies on, so each
kind keeps an ordered, duplicate-free JSON list of its keys. The list and
the entries are written independently; sweeps repair any drift.
"""

from __future__ import annotations

import json

from storyquest.cache.storage import KeyValueStore
from storyquest.errors.exceptions import CacheParseError
from storyquest.types import ContentKind


class IndexList:
    """Ordered set of cache keys for one content kind."""

    def __init__(self, store: KeyValueStore, kind: ContentKind) -> None:
        self._store = store
        self._kind = kind

    @property
    def kind(self) -> ContentKind:
        return self._kind

    def all(self) -> list[str]:
        raw = self._store.get(self._kind.list_key)
        if raw is None:
            return []
        try:
            keys = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CacheParseError(
                f"Corrupt {self._kind} index list: {e}", key=self._kind.list_key
            ) from e
        if not isinstance(keys, list):
            raise CacheParseError(
                f"Expected a list for {self._kind} index, got {type(keys).__name__}",
                key=self._kind.list_key,
            )
        return [str(k) for k in keys]

    def register(self, key: str) -> None:
        keys = self.all()
        if key not in keys:
            keys.append(key)
            self.replace(keys)

    def replace(self, keys: list[str]) -> None:
        self._store.set(self._kind.list_key, json.dumps(keys))

    def clear(self) -> None:
        self._store.remove(self._kind.list_key)

    def __len__(self) -> int:
        return len(self.all())

    def __contains__(self, key: object) -> bool:
        return key in self.all()
