"""Classify generation-service failures into retryable and terminal errors."""

from __future__ import annotations

import contextlib

import openai

from storyquest.errors.exceptions import GenerationError, TerminalError, TransientError

# Exceptions worth another attempt before giving up
TRANSIENT_OPENAI_ERRORS = (
    openai.RateLimitError,
    openai.InternalServerError,
    openai.APIConnectionError,
    openai.APITimeoutError,
)


def classify_openai_error(exc: Exception) -> GenerationError:
    """Convert an openai exception to our exception hierarchy."""
    if isinstance(exc, openai.RateLimitError):
        retry_after = None
        if hasattr(exc, "response") and exc.response:
            retry_after_str = exc.response.headers.get("retry-after")
            if retry_after_str:
                with contextlib.suppress(ValueError):
                    retry_after = float(retry_after_str)
        return TransientError(
            str(exc),
            error_type="rate_limit",
            http_status=429,
            retry_after=retry_after,
            original=exc,
        )
    if isinstance(exc, openai.InternalServerError):
        status = getattr(exc, "status_code", 500)
        return TransientError(
            str(exc),
            error_type="server_error",
            http_status=status,
            original=exc,
        )
    if isinstance(exc, (openai.APIConnectionError, openai.APITimeoutError)):
        return TransientError(
            str(exc),
            error_type="timeout",
            original=exc,
        )
    if isinstance(exc, openai.AuthenticationError):
        return TerminalError(str(exc), error_type="auth_failure", http_status=401)
    if isinstance(exc, openai.NotFoundError):
        return TerminalError(str(exc), error_type="model_not_found", http_status=404)
    if isinstance(exc, openai.BadRequestError):
        # Includes image content-policy rejections
        return TerminalError(str(exc), error_type="bad_input", http_status=400)
    return TerminalError(str(exc), error_type="unknown")
