"""Error handling: exceptions and generation-service error classification."""

from storyquest.errors.exceptions import (
    CacheError,
    CacheParseError,
    GenerationError,
    StorageError,
    StoryQuestError,
    TerminalError,
    TransientError,
)

__all__ = [
    "StoryQuestError",
    "CacheError",
    "StorageError",
    "CacheParseError",
    "GenerationError",
    "TransientError",
    "TerminalError",
]
