"""Cache key derivation — one key per (owner, character, age, topic)."""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")
_SEPARATOR = "_"


def normalize_topic(topic: str) -> str:
    """Collapse whitespace runs to underscores and lower-case."""
    return _WHITESPACE_RUN.sub(_SEPARATOR, topic).lower()


def derive_cache_key(owner: str, character: str, age: int, topic: str) -> str:
    """Build the cache key for a content request.

    Identical requests always collapse to the same key, so at most one story
    and one image are cached per fingerprint. No variation dimension is folded
    in: a cached story for a topic is returned regardless of the setting or
    theme it was generated with.
    """
    return _SEPARATOR.join([owner, str(character), str(age), normalize_topic(topic)])
