"""Shared Pydantic models for storyquest."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ──


class ContentKind(StrEnum):
    STORY = "story"
    IMAGE = "image"

    @property
    def prefix(self) -> str:
        """Storage-key prefix for entries of this kind."""
        return f"{self.value}_cache_"

    @property
    def list_key(self) -> str:
        """Storage key of this kind's index list."""
        return f"{self.value}_cache_list"


class Character(StrEnum):
    SIA = "sia"
    RAGHAV = "raghav"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# ── Cached content ──

# Records are stored with camelCase keys; Python code uses snake_case.
_camel = ConfigDict(populate_by_name=True, frozen=True)


class QuizQuestion(BaseModel):
    model_config = _camel

    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer: int = Field(alias="correctAnswer", ge=0, le=3)
    explanation: str = ""


class CachedStoryEntry(BaseModel):
    """A generated story as held by the content cache."""

    model_config = _camel

    id: str
    title: str
    content: str
    science_topic: str = Field(alias="scienceTopic")
    story_number: int = Field(alias="storyNumber")
    questions: list[QuizQuestion] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    cache_key: str = Field(default="", alias="cacheKey")


class CachedImageEntry(BaseModel):
    """A generated illustration as held by the content cache."""

    model_config = _camel

    url: str
    prompt: str
    created_at: datetime = Field(alias="createdAt")
    cache_key: str = Field(default="", alias="cacheKey")


# ── Reader-facing models ──


class ChildProfile(BaseModel):
    gender: str
    age: int = Field(ge=6, le=10)


class ReaderProfile(ChildProfile):
    """A reader's saved choices: companion character plus the child profile."""

    character: Character


class Story(BaseModel):
    """A story as recorded in the reader's history."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    science_topic: str = Field(alias="scienceTopic")
    story_number: int = Field(alias="storyNumber")
    questions: list[QuizQuestion] = Field(default_factory=list)
    mood_image: str | None = Field(default=None, alias="moodImage")
    answers: list[int] | None = None
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    created_at: datetime = Field(alias="createdAt")


class StoryResult(BaseModel):
    story: Story
    story_from_cache: bool = False
    image_from_cache: bool = False


class GeneratedImage(BaseModel):
    url: str | None = None
