"""Per-reader story history and quiz scoring."""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import TypeAdapter, ValidationError

from storyquest.cache.storage import KeyValueStore
from storyquest.story.topics import RECENT_TOPIC_WINDOW
from storyquest.types import QuizQuestion, Story

logger = logging.getLogger(__name__)

_stories_adapter = TypeAdapter(list[Story])


class StoryHistory:
    """Every story a reader has been shown, oldest first."""

    def __init__(self, store: KeyValueStore, owner: str) -> None:
        self._store = store
        self._owner = owner

    @property
    def storage_key(self) -> str:
        return f"stories_{self._owner}"

    def list(self) -> list[Story]:
        raw = self._store.get(self.storage_key)
        if raw is None:
            return []
        try:
            return _stories_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Corrupt story history for '%s', ignoring: %s", self._owner, e)
            return []

    def get(self, story_id: str) -> Story | None:
        return next((s for s in self.list() if s.id == story_id), None)

    def add(self, story: Story) -> None:
        stories = self.list()
        stories.append(story)
        self._save(stories)

    def recent_topics(self, n: int = RECENT_TOPIC_WINDOW) -> list[str]:
        return [s.science_topic for s in self.list()[-n:]]

    def complete(self, story_id: str, answers: list[int], now: datetime) -> Story | None:
        """Record quiz answers. Returns the updated story, or None if unknown."""
        stories = self.list()
        for i, story in enumerate(stories):
            if story.id == story_id:
                stories[i] = story.model_copy(update={"answers": answers, "completed_at": now})
                self._save(stories)
                return stories[i]
        return None

    def _save(self, stories: list[Story]) -> None:
        self._store.set(self.storage_key, _stories_adapter.dump_json(stories, by_alias=True).decode())


def score_answers(questions: list[QuizQuestion], answers: list[int]) -> int:
    """Count answers matching each question's correct option."""
    return sum(
        1
        for question, answer in zip(questions, answers, strict=False)
        if answer == question.correct_answer
    )
