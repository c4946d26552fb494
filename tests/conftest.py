from datetime import UTC, datetime, timedelta

import pytest

from storyquest.cache.manager import ContentCache
from storyquest.cache.storage import MemoryStore
from storyquest.types import CachedStoryEntry, QuizQuestion


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def cache(store, clock):
    return ContentCache(store, clock=clock)


@pytest.fixture
def sample_questions():
    return [
        QuizQuestion(
            question=f"Question {i}?",
            options=["A", "B", "C", "D"],
            correct_answer=i % 4,
            explanation=f"Because {i}.",
        )
        for i in range(3)
    ]


@pytest.fixture
def make_story_entry(clock, sample_questions):
    """Factory for story entries created 'now' on the fake clock."""

    def _make(**overrides) -> CachedStoryEntry:
        fields = dict(
            id="story_1",
            title="Sia and the Ocean Life & Water Cycle",
            content="Once upon a time, Sia went to the sea.",
            science_topic="Ocean Life and Water Cycle",
            story_number=1,
            questions=sample_questions,
            created_at=clock(),
        )
        fields.update(overrides)
        return CachedStoryEntry(**fields)

    return _make
