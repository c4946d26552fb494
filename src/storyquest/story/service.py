"""Story flow — pick a topic, reuse or generate content, record history."""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Callable
from datetime import datetime

from storyquest.cache.expiry import utc_now
from storyquest.cache.manager import ContentCache
from storyquest.cache.policy import STORY_CACHE_PROBABILITY, should_consult_cache
from storyquest.config.defaults import (
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_QUIZ_MAX_TOKENS,
    DEFAULT_STORY_MAX_TOKENS,
    DEFAULT_TEXT_MODEL,
)
from storyquest.errors.exceptions import GenerationError
from storyquest.generation.client import GenerationService
from storyquest.generation.parser import parse_questions
from storyquest.generation.prompts import (
    build_image_prompt,
    build_questions_prompt,
    build_story_prompt,
)
from storyquest.story.history import StoryHistory
from storyquest.story.topics import (
    STORY_SETTINGS,
    STORY_VARIATIONS,
    choose_topic,
    make_title,
)
from storyquest.types import (
    CachedStoryEntry,
    Character,
    ChildProfile,
    QuizQuestion,
    Story,
    StoryResult,
)

logger = logging.getLogger(__name__)


class StoryService:
    """Produces the next story for a reader.

    Stories consult the cache only with probability
    ``story_cache_probability`` so repeat topics still get fresh text;
    illustrations are always looked up first.
    """

    def __init__(
        self,
        generator: GenerationService,
        history_factory: Callable[[str], StoryHistory],
        cache: ContentCache | None = None,
        text_model: str = DEFAULT_TEXT_MODEL,
        story_max_tokens: int = DEFAULT_STORY_MAX_TOKENS,
        quiz_max_tokens: int = DEFAULT_QUIZ_MAX_TOKENS,
        image_size: str = DEFAULT_IMAGE_SIZE,
        image_quality: str = DEFAULT_IMAGE_QUALITY,
        story_cache_probability: float = STORY_CACHE_PROBABILITY,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._generator = generator
        self._history_for = history_factory
        self._cache = cache
        self._text_model = text_model
        self._story_max_tokens = story_max_tokens
        self._quiz_max_tokens = quiz_max_tokens
        self._image_size = image_size
        self._image_quality = image_quality
        self._story_cache_probability = story_cache_probability
        self._rng = rng or random.Random()
        self._clock = clock

    async def read_story(
        self,
        owner: str,
        character: Character,
        profile: ChildProfile,
        story_number: int,
    ) -> StoryResult:
        """Run the full flow and return the story shown to the reader."""
        name = character.display_name
        history = self._history_for(owner)
        topic = choose_topic(history.recent_topics(), self._rng)
        title = make_title(name, topic)

        use_cache = self._cache is not None and should_consult_cache(
            self._story_cache_probability, self._rng.random
        )
        cached_story = (
            self._cache.lookup_story(owner, character, profile.age, topic) if use_cache else None
        )
        cached_image = (
            self._cache.lookup_image(owner, character, profile.age, topic) if self._cache else None
        )

        if cached_story is not None:
            logger.info("Using cached story for '%s'", topic)
            content, questions = cached_story.content, cached_story.questions
        else:
            logger.info("Generating new story for '%s'", topic)
            try:
                content, questions = await self._generate_story(name, profile, topic)
            except GenerationError as e:
                logger.error("Story generation failed for '%s': %s", topic, e)
                return StoryResult(story=self._fallback_story(name, profile, topic, title, story_number))
            if self._cache is not None:
                self._cache.store_story(
                    owner,
                    character,
                    profile.age,
                    topic,
                    CachedStoryEntry(
                        id=self._new_id(),
                        title=title,
                        content=content,
                        science_topic=topic,
                        story_number=story_number,
                        questions=questions,
                        created_at=self._clock(),
                    ),
                )

        if cached_image is not None:
            logger.info("Using cached image for '%s'", topic)
            image_url: str | None = cached_image.url
        else:
            image_url = await self._generate_image(owner, character, profile.age, topic)

        story = Story(
            id=self._new_id(),
            title=title,
            content=content,
            science_topic=topic,
            story_number=story_number,
            questions=questions,
            mood_image=image_url,
            created_at=self._clock(),
        )
        history.add(story)
        return StoryResult(
            story=story,
            story_from_cache=cached_story is not None,
            image_from_cache=cached_image is not None,
        )

    async def _generate_story(
        self, name: str, profile: ChildProfile, topic: str
    ) -> tuple[str, list[QuizQuestion]]:
        story_prompt = build_story_prompt(
            name=name,
            age=profile.age,
            gender=profile.gender,
            topic=topic,
            variation=self._rng.choice(STORY_VARIATIONS),
            setting=self._rng.choice(STORY_SETTINGS),
            story_id=uuid.uuid4().hex[:12],
        )
        content = await self._generator.generate_text(
            story_prompt, self._text_model, self._story_max_tokens
        )
        questions_text = await self._generator.generate_text(
            build_questions_prompt(name=name, age=profile.age, topic=topic, story=content),
            self._text_model,
            self._quiz_max_tokens,
        )
        return content, parse_questions(questions_text, name, topic)

    async def _generate_image(
        self, owner: str, character: Character, age: int, topic: str
    ) -> str | None:
        logger.info("Generating new image for '%s'", topic)
        prompt = build_image_prompt(topic)
        try:
            images = await self._generator.generate_image(
                prompt, self._image_size, self._image_quality, 1
            )
        except GenerationError as e:
            # The story is still readable without an illustration.
            logger.warning("Mood image generation failed for '%s': %s", topic, e)
            return None
        url = images[0].url if images else None
        if url and self._cache is not None:
            self._cache.store_image(owner, character, age, topic, url, prompt)
        return url

    def _fallback_story(
        self, name: str, profile: ChildProfile, topic: str, title: str, story_number: int
    ) -> Story:
        return Story(
            id=self._new_id(),
            title=title,
            content=(
                f"Once upon a time, {name} discovered something amazing about {topic}! "
                "This is where an exciting adventure would unfold, teaching us wonderful "
                "things about science and nature. The story would be perfectly crafted for "
                f"a {profile.age}-year-old {profile.gender} who loves to learn and explore!"
            ),
            science_topic=topic,
            story_number=story_number,
            created_at=self._clock(),
        )

    def _new_id(self) -> str:
        return f"story_{int(self._clock().timestamp() * 1000)}_{uuid.uuid4().hex[:9]}"
