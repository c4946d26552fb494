"""Parse generated quiz text into questions, falling back to built-ins."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from storyquest.types import QuizQuestion

logger = logging.getLogger(__name__)

QUESTION_COUNT = 3


def parse_questions(raw_text: str, character_name: str, topic: str) -> list[QuizQuestion]:
    """Parse a JSON array of exactly three quiz questions.

    Models often wrap JSON in code fences or return prose instead; any output
    that is not exactly three valid questions yields ``fallback_questions``.
    """
    try:
        data: Any = json.loads(_strip_code_fences(raw_text))
    except json.JSONDecodeError as e:
        logger.warning("Quiz output is not JSON (%s), using fallback questions", e)
        return fallback_questions(character_name, topic)

    if not isinstance(data, list) or len(data) != QUESTION_COUNT:
        logger.warning("Quiz output is not a list of %d questions, using fallback", QUESTION_COUNT)
        return fallback_questions(character_name, topic)

    try:
        return [QuizQuestion.model_validate(item) for item in data]
    except ValidationError as e:
        logger.warning("Quiz questions failed validation, using fallback: %s", e)
        return fallback_questions(character_name, topic)


def fallback_questions(character_name: str, topic: str) -> list[QuizQuestion]:
    return [
        QuizQuestion(
            question=f"What did {character_name} discover about {topic}?",
            options=["Something amazing", "Nothing special", "It was boring", "It was scary"],
            correct_answer=0,
            explanation=f"{character_name} always discovers amazing things about science!",
        ),
        QuizQuestion(
            question="Why is it important to learn about science?",
            options=["It's not important", "To understand our world", "Only for adults", "It's too hard"],
            correct_answer=1,
            explanation="Science helps us understand the amazing world around us!",
        ),
        QuizQuestion(
            question=f"What should you do when you're curious about {topic}?",
            options=["Ignore it", "Ask questions and explore", "Be afraid", "Give up"],
            correct_answer=1,
            explanation="Being curious and asking questions is how we learn new things!",
        ),
    ]


def _strip_code_fences(text: str) -> str:
    """Remove a code fence wrapping the whole output."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json") :]
    elif text.startswith("```"):
        text = text[3:]

    if text.rstrip().endswith("```"):
        text = text.rstrip()[:-3]

    return text.strip()
