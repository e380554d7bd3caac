"""In-memory TTL store for parsed transcripts."""

import hashlib
from datetime import datetime, timezone

from cachetools import TTLCache

from frankenbite_mcp.models import StoredTranscript
from frankenbite_mcp.segmenter import parse_transcript_with_timecodes


class TranscriptStore:
    def __init__(self, max_size: int = 20, ttl: int = 6 * 3600):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._hits = 0
        self._misses = 0

    @staticmethod
    def transcript_id(content: str) -> str:
        return hashlib.sha1(content.encode("utf-8")).hexdigest()[:12]

    def add(self, name: str, content: str) -> StoredTranscript:
        """Parse and store a transcript. Re-adding the same text replaces it.

        Text without timecoded segments is parsed but not kept.
        """
        transcript = StoredTranscript(
            id=self.transcript_id(content),
            name=name,
            content=content,
            segments=parse_transcript_with_timecodes(content),
            created_at=datetime.now(timezone.utc),
        )
        if transcript.segments:
            self._cache[transcript.id] = transcript
        return transcript

    def get(self, transcript_id: str) -> StoredTranscript | None:
        result = self._cache.get(transcript_id)
        if result is not None:
            self._hits += 1
        else:
            self._misses += 1
        return result

    def transcripts(self) -> list[StoredTranscript]:
        return sorted(self._cache.values(), key=lambda t: t.created_at)

    def stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(self._hits + self._misses, 1) * 100, 1),
        }
