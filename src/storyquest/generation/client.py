"""Async generation client wrapping OpenAI's text and image APIs with retry."""

from __future__ import annotations

import logging
from typing import Protocol

import openai
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from storyquest.config.defaults import DEFAULT_MAX_RETRIES
from storyquest.errors.retry import TRANSIENT_OPENAI_ERRORS, classify_openai_error
from storyquest.types import GeneratedImage

logger = logging.getLogger(__name__)


class GenerationService(Protocol):
    """What the story flow needs from a text/image generator."""

    async def generate_text(self, prompt: str, model: str, max_tokens: int) -> str: ...

    async def generate_image(
        self, prompt: str, size: str, quality: str, n: int = 1
    ) -> list[GeneratedImage]: ...


class OpenAIGenerationClient:
    """Sends generation requests to an OpenAI-compatible API.

    Transient failures are retried; anything left over is raised as a
    ``TransientError`` or ``TerminalError``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        image_model: str = "dall-e-3",
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._client = openai.AsyncOpenAI(api_key=api_key, base_url=base_url)
        self._image_model = image_model
        self._max_attempts = max(1, max_retries)

    async def generate_text(self, prompt: str, model: str, max_tokens: int) -> str:
        """Return the completion text for a single user prompt."""
        try:
            response = await self._create_completion(prompt, model, max_tokens)
        except openai.OpenAIError as e:
            raise classify_openai_error(e) from e
        choice = response.choices[0]
        if choice.finish_reason == "length":
            logger.info("Text generation hit max_tokens=%d with model '%s'", max_tokens, model)
        return choice.message.content or ""

    async def generate_image(
        self, prompt: str, size: str, quality: str, n: int = 1
    ) -> list[GeneratedImage]:
        """Return one ``GeneratedImage`` per image the API produced."""
        try:
            response = await self._create_image(prompt, size, quality, n)
        except openai.OpenAIError as e:
            raise classify_openai_error(e) from e
        return [GeneratedImage(url=item.url) for item in (response.data or [])]

    async def close(self) -> None:
        await self._client.close()

    def _retrying(self) -> AsyncRetrying:
        """A fresh retry loop; ``max_retries`` counts total attempts."""
        return AsyncRetrying(
            retry=retry_if_exception_type(TRANSIENT_OPENAI_ERRORS),
            wait=wait_exponential(multiplier=1, min=1, max=60),
            stop=stop_after_attempt(self._max_attempts),
            reraise=True,
        )

    async def _create_completion(
        self, prompt: str, model: str, max_tokens: int
    ) -> openai.types.chat.ChatCompletion:
        async for attempt in self._retrying():
            with attempt:
                return await self._client.chat.completions.create(
                    model=model,
                    messages=self._build_messages(prompt),
                    max_tokens=max_tokens,
                )
        raise AssertionError("unreachable")

    async def _create_image(
        self, prompt: str, size: str, quality: str, n: int
    ) -> openai.types.ImagesResponse:
        async for attempt in self._retrying():
            with attempt:
                return await self._client.images.generate(
                    model=self._image_model,
                    prompt=prompt,
                    size=size,
                    quality=quality,
                    n=n,
                )
        raise AssertionError("unreachable")

    @staticmethod
    def _build_messages(prompt: str) -> list[dict]:
        return [{"role": "user", "content": prompt}]
