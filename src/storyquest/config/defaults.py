"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default text generation settings
DEFAULT_TEXT_MODEL = "gpt-4o-mini"
DEFAULT_STORY_MAX_TOKENS = 1200
DEFAULT_QUIZ_MAX_TOKENS = 800

# Default image generation settings
DEFAULT_IMAGE_MODEL = "dall-e-3"
DEFAULT_IMAGE_SIZE = "1024x1024"
DEFAULT_IMAGE_QUALITY = "standard"

# Default cache settings
DEFAULT_STORY_CACHE_PROBABILITY = 0.3
DEFAULT_CACHE_DISABLED = False

# Default retry settings
DEFAULT_MAX_RETRIES = 3

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "text_model": DEFAULT_TEXT_MODEL,
        "story_max_tokens": DEFAULT_STORY_MAX_TOKENS,
        "quiz_max_tokens": DEFAULT_QUIZ_MAX_TOKENS,
        "image_model": DEFAULT_IMAGE_MODEL,
        "image_size": DEFAULT_IMAGE_SIZE,
        "image_quality": DEFAULT_IMAGE_QUALITY,
        "story_cache_probability": DEFAULT_STORY_CACHE_PROBABILITY,
        "cache_disabled": DEFAULT_CACHE_DISABLED,
        "max_retries": DEFAULT_MAX_RETRIES,
        "log_level": DEFAULT_LOG_LEVEL,
    }
