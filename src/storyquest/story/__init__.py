"""Story flow: topic selection, generation with caching, reading history."""

from storyquest.story.history import StoryHistory, score_answers
from storyquest.story.profile import ProfileStore
from storyquest.story.service import StoryService

__all__ = ["ProfileStore", "StoryHistory", "StoryService", "score_answers"]
