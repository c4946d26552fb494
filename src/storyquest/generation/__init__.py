"""Text and image generation: client, prompt templates and quiz parsing."""

from storyquest.generation.client import GenerationService, OpenAIGenerationClient
from storyquest.generation.parser import fallback_questions, parse_questions

__all__ = [
    "GenerationService",
    "OpenAIGenerationClient",
    "fallback_questions",
    "parse_questions",
]
