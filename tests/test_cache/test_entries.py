"""Tests for the entry store."""

from storyquest.cache.entries import EntryStore, storage_key
from storyquest.types import CachedImageEntry, ContentKind


class TestEntryStore:
    def test_put_get_story(self, store, make_story_entry):
        entries = EntryStore(store)
        entry = make_story_entry(cache_key="k1")
        entries.put("k1", ContentKind.STORY, entry)
        assert entries.get("k1", ContentKind.STORY) == entry

    def test_storage_layout(self, store, make_story_entry):
        EntryStore(store).put("k1", ContentKind.STORY, make_story_entry())
        assert "story_cache_k1" in store
        assert storage_key("k1", ContentKind.IMAGE) == "image_cache_k1"

    def test_serialized_with_camel_case_fields(self, store, make_story_entry):
        EntryStore(store).put("k1", ContentKind.STORY, make_story_entry())
        raw = store.get("story_cache_k1")
        assert '"createdAt"' in raw
        assert '"scienceTopic"' in raw
        assert '"correctAnswer"' in raw

    def test_missing_is_none(self, store):
        assert EntryStore(store).get("nope", ContentKind.IMAGE) is None

    def test_corrupt_payload_is_miss(self, store):
        store.set("story_cache_k1", "{not json")
        assert EntryStore(store).get("k1", ContentKind.STORY) is None

    def test_wrong_shape_is_miss(self, store):
        store.set("image_cache_k1", '{"url": "x"}')
        assert EntryStore(store).get("k1", ContentKind.IMAGE) is None

    def test_overwrite(self, store, clock):
        entries = EntryStore(store)
        first = CachedImageEntry(url="a", prompt="p", created_at=clock())
        second = CachedImageEntry(url="b", prompt="p", created_at=clock())
        entries.put("k1", ContentKind.IMAGE, first)
        entries.put("k1", ContentKind.IMAGE, second)
        assert entries.get("k1", ContentKind.IMAGE).url == "b"

    def test_delete_missing_is_noop(self, store):
        EntryStore(store).delete("nope", ContentKind.STORY)

    def test_reads_records_with_z_suffix_timestamps(self, store):
        store.set(
            "image_cache_k1",
            '{"url": "u", "prompt": "p", "createdAt": "2026-03-01T10:00:00.000Z", "cacheKey": "k1"}',
        )
        entry = EntryStore(store).get("k1", ContentKind.IMAGE)
        assert entry is not None
        assert entry.created_at.hour == 10
