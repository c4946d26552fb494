"""Tests for custom exception hierarchy."""

from storyquest.errors.exceptions import (
    CacheError,
    CacheParseError,
    GenerationError,
    StorageError,
    StoryQuestError,
    TerminalError,
    TransientError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_base(self):
        for exc in (CacheError, StorageError, CacheParseError, GenerationError,
                    TransientError, TerminalError):
            assert issubclass(exc, StoryQuestError)

    def test_cache_errors(self):
        assert issubclass(StorageError, CacheError)
        assert issubclass(CacheParseError, CacheError)
        assert not issubclass(GenerationError, CacheError)

    def test_generation_errors(self):
        assert issubclass(TransientError, GenerationError)
        assert issubclass(TerminalError, GenerationError)


class TestStorageError:
    def test_attributes(self):
        original = OSError("disk full")
        err = StorageError("write failed", key="story_cache_k", original=original)
        assert err.key == "story_cache_k"
        assert err.original is original
        assert err.message == "write failed"


class TestTransientError:
    def test_attributes(self):
        err = TransientError(
            "Rate limited",
            error_type="rate_limit",
            http_status=429,
            retry_after=5.0,
        )
        assert err.error_type == "rate_limit"
        assert err.http_status == 429
        assert err.retry_after == 5.0
        assert "Rate limited" in str(err)

    def test_defaults(self):
        err = TransientError("test")
        assert err.error_type == "server_error"
        assert err.http_status is None
        assert err.retry_after is None


class TestTerminalError:
    def test_defaults(self):
        err = TerminalError("nope")
        assert err.error_type == "auth_failure"
        assert err.http_status is None
