"""Tests for the cache-use decision."""

import random

from storyquest.cache.policy import STORY_CACHE_PROBABILITY, should_consult_cache


class TestShouldConsultCache:
    def test_default_story_probability(self):
        assert STORY_CACHE_PROBABILITY == 0.3

    def test_draw_below_probability_consults(self):
        assert should_consult_cache(0.3, lambda: 0.29) is True

    def test_draw_at_probability_skips(self):
        assert should_consult_cache(0.3, lambda: 0.3) is False

    def test_zero_never_consults(self):
        assert should_consult_cache(0.0, lambda: 0.0) is False

    def test_one_always_consults(self):
        assert should_consult_cache(1.0, lambda: 0.999999) is True

    def test_rate_over_many_draws(self):
        rng = random.Random(1234)
        hits = sum(should_consult_cache(STORY_CACHE_PROBABILITY, rng.random) for _ in range(10_000))
        # ~4.6 standard deviations either side of 3000
        assert 2800 <= hits <= 3200
