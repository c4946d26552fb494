"""Science topics and the random ingredients that vary generated stories."""

from __future__ import annotations

import random

SCIENCE_TOPICS = [
    "Plants and How They Grow",
    "Amazing Animals and Their Homes",
    "Weather and Clouds",
    "The Solar System and Stars",
    "Ocean Life and Water Cycle",
    "Simple Machines and How They Work",
    "Butterflies and Their Life Cycle",
    "Rocks, Minerals and Fossils",
    "Light and Shadows",
    "Sound and Music",
    "Magnets and Their Magic",
    "Seasons and Why They Change",
]

STORY_VARIATIONS = [
    "a magical discovery adventure",
    "an exciting exploration journey",
    "a mysterious science quest",
    "a thrilling outdoor expedition",
    "a fascinating investigation",
    "an amazing learning adventure",
]

STORY_SETTINGS = [
    "in a beautiful forest",
    "near a sparkling lake",
    "in a colorful garden",
    "on a sunny hillside",
    "by the ocean shore",
    "in a peaceful meadow",
    "near a babbling brook",
    "in their backyard",
]

RECENT_TOPIC_WINDOW = 3


def choose_topic(recent: list[str], rng: random.Random | None = None) -> str:
    """Pick a topic not among ``recent``; any topic if all were recent."""
    rng = rng or random.Random()
    available = [t for t in SCIENCE_TOPICS if t not in recent]
    return rng.choice(available or SCIENCE_TOPICS)


def make_title(character_name: str, topic: str) -> str:
    """E.g. 'Sia and the Plants & How They Grow'."""
    return f"{character_name} and the {topic.replace('and', '&', 1)}"
