"""Tests for the transcript store."""

from frankenbite_mcp.cache import TranscriptStore


class TestTranscriptStore:
    def test_add_and_get(self, sample_transcript):
        store = TranscriptStore(max_size=10, ttl=3600)
        transcript = store.add("interview", sample_transcript)
        assert len(transcript.segments) == 4
        assert store.get(transcript.id) is transcript

    def test_id_is_stable_for_content(self, sample_transcript):
        store = TranscriptStore(max_size=10, ttl=3600)
        first = store.add("a", sample_transcript)
        second = store.add("b", sample_transcript)
        assert first.id == second.id
        assert store.get(first.id).name == "b"

    def test_untimecoded_text_not_kept(self):
        store = TranscriptStore(max_size=10, ttl=3600)
        transcript = store.add("notes", "no timecodes here")
        assert transcript.segments == []
        assert store.get(transcript.id) is None

    def test_miss(self):
        store = TranscriptStore(max_size=10, ttl=3600)
        assert store.get("nonexistent") is None

    def test_transcripts_listed(self, sample_transcript):
        store = TranscriptStore(max_size=10, ttl=3600)
        store.add("one", sample_transcript)
        store.add("two", "00:00:01:00 hi 00:00:02:00")
        assert [t.name for t in store.transcripts()] == ["one", "two"]

    def test_stats_after_operations(self, sample_transcript):
        store = TranscriptStore(max_size=10, ttl=3600)
        transcript = store.add("one", sample_transcript)
        store.get(transcript.id)  # hit
        store.get("xyz")  # miss
        stats = store.stats()
        assert stats["size"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 50.0

    def test_max_size(self):
        store = TranscriptStore(max_size=2, ttl=3600)
        for i in range(3):
            store.add(f"t{i}", f"00:00:0{i}:00 text {i} 00:00:0{i + 1}:00")
        # One of the first two should have been evicted
        assert store.stats()["size"] == 2
