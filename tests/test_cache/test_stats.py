"""Tests for cache stats and size formatting."""

from datetime import timedelta

from storyquest.cache.stats import CacheStats, format_size


class TestFormatSize:
    def test_kilobytes(self):
        assert format_size(0) == "0.00 KB"
        assert format_size(1536) == "1.50 KB"

    def test_exactly_one_megabyte_stays_kb(self):
        assert format_size(1024 * 1024) == "1024.00 KB"

    def test_switches_to_megabytes_above_one_mb(self):
        assert format_size(1024 * 1024 + 1) == "1.00 MB"
        assert format_size(5 * 1024 * 1024) == "5.00 MB"


class TestCacheStatsModel:
    def test_defaults(self):
        stats = CacheStats()
        assert stats.total_stories == 0
        assert stats.oldest_entry == "None"
        assert stats.is_empty

    def test_error_record(self):
        stats = CacheStats.error()
        assert stats.cache_size == "0 KB"
        assert (stats.oldest_entry, stats.newest_entry) == ("Error", "Error")

    def test_total_entries(self):
        assert CacheStats(total_stories=2, total_images=3).total_entries == 5


class TestContentCacheStats:
    def test_empty_cache(self, cache):
        stats = cache.stats()
        assert stats.total_stories == 0
        assert stats.total_images == 0
        assert stats.cache_size == "0.00 KB"
        assert stats.oldest_entry == "None"
        assert stats.newest_entry == "None"

    def test_story_and_image_an_hour_apart(self, cache, clock, make_story_entry):
        first = clock()
        cache.store_story("u", "sia", 7, "Light and Shadows", make_story_entry())
        clock.advance(timedelta(hours=1))
        second = clock()
        cache.store_image("u", "sia", 7, "Light and Shadows", "https://img/2.png", "prompt")

        stats = cache.stats()
        assert stats.total_stories == 1
        assert stats.total_images == 1
        assert stats.oldest_entry == first.isoformat()
        assert stats.newest_entry == second.isoformat()
        assert stats.cache_size.endswith(" KB")
        assert float(stats.cache_size.split()[0]) > 0

    def test_size_counts_every_prefixed_record(self, cache, store):
        store.set("image_cache_orphan", "x" * 2048)
        store.set("stories_u", "y" * 4096)
        stats = cache.stats()
        assert stats.cache_size == "2.00 KB"
        assert stats.total_images == 0

    def test_large_cache_reported_in_mb(self, cache, store):
        store.set("story_cache_big", "z" * (2 * 1024 * 1024))
        assert cache.stats().cache_size == "2.00 MB"

    def test_unparseable_records_skipped_for_dates(self, cache, store, clock):
        store.set("story_cache_bad", "{oops")
        cache.store_image("u", "sia", 7, "t", "u", "p")
        stats = cache.stats()
        assert stats.oldest_entry == clock().isoformat()
        assert stats.newest_entry == clock().isoformat()
