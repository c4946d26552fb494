"""Tests for topic selection and titles."""

import random

from storyquest.story.topics import SCIENCE_TOPICS, choose_topic, make_title


class TestChooseTopic:
    def test_avoids_recent_topics(self):
        recent = SCIENCE_TOPICS[:3]
        rng = random.Random(7)
        for _ in range(200):
            assert choose_topic(recent, rng) not in recent

    def test_all_recent_falls_back_to_any(self):
        assert choose_topic(list(SCIENCE_TOPICS), random.Random(1)) in SCIENCE_TOPICS

    def test_only_one_left(self):
        recent = SCIENCE_TOPICS[1:]
        assert choose_topic(recent, random.Random(3)) == SCIENCE_TOPICS[0]


class TestMakeTitle:
    def test_replaces_first_and_only(self):
        assert make_title("Sia", "Plants and How They Grow") == "Sia and the Plants & How They Grow"
        assert (
            make_title("Raghav", "Rocks, Minerals and Fossils")
            == "Raghav and the Rocks, Minerals & Fossils"
        )

    def test_topic_without_and(self):
        assert make_title("Sia", "Light") == "Sia and the Light"
