"""Custom exception hierarchy for storyquest."""

from __future__ import annotations

from typing import Any


class StoryQuestError(Exception):
    """Base exception for all storyquest errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class CacheError(StoryQuestError):
    """Base for content cache failures. Never escapes the cache facade."""


class StorageError(CacheError):
    """The persistent key-value store raised (disk full, locked, closed...)."""

    def __init__(
        self,
        message: str = "",
        key: str | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.original = original


class CacheParseError(CacheError):
    """A stored record is not valid serialized data."""

    def __init__(self, message: str = "", key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class GenerationError(StoryQuestError):
    """Base for failures of the external text/image generation service."""


class TransientError(GenerationError):
    """Transient error — safe to retry with backoff.

    Examples: 429 rate limit, 500/502/503 server error, timeout, connection error.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "server_error",
        http_status: int | None = None,
        retry_after: float | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.http_status = http_status
        self.retry_after = retry_after
        self.original = original


class TerminalError(GenerationError):
    """Terminal error — fail fast.

    Examples: 401 auth failure, 404 model not found, bad input, content policy.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "auth_failure",
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.http_status = http_status
