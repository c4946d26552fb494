"""Saved reader profiles, one record per reader."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from storyquest.cache.storage import KeyValueStore
from storyquest.types import ReaderProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @staticmethod
    def storage_key(owner: str) -> str:
        return f"profile_{owner}"

    def get(self, owner: str) -> ReaderProfile | None:
        raw = self._store.get(self.storage_key(owner))
        if raw is None:
            return None
        try:
            return ReaderProfile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Corrupt profile for '%s', ignoring: %s", owner, e)
            return None

    def save(self, owner: str, profile: ReaderProfile) -> None:
        self._store.set(self.storage_key(owner), profile.model_dump_json())
