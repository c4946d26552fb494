"""Per-kind time-to-live policy for cached content."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from storyquest.types import ContentKind

STORY_MAX_AGE = timedelta(hours=24)
IMAGE_MAX_AGE = timedelta(days=7)  # images are costlier and change less

_MAX_AGE: dict[ContentKind, timedelta] = {
    ContentKind.STORY: STORY_MAX_AGE,
    ContentKind.IMAGE: IMAGE_MAX_AGE,
}


def utc_now() -> datetime:
    return datetime.now(UTC)


def max_age_for(kind: ContentKind) -> timedelta:
    return _MAX_AGE[kind]


def is_expired(created_at: datetime, kind: ContentKind, now: datetime) -> bool:
    """True once the entry is strictly older than its kind's max age.

    An entry exactly at the boundary is still valid. Naive timestamps are
    read as UTC.
    """
    return _as_utc(now) - _as_utc(created_at) > max_age_for(kind)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
