"""YouTube captions via youtube-transcript-api, rendered as timecoded text."""

import asyncio
import logging
import re
from functools import partial

from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, YouTubeTranscriptApi

from frankenbite_mcp.utils import seconds_to_timecode
from .base import TranscriptProvider

logger = logging.getLogger(__name__)

_VIDEO_ID_PATTERNS = [
    r"(?:v=|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})",
    r"(?:embed/)([a-zA-Z0-9_-]{11})",
    r"(?:shorts/)([a-zA-Z0-9_-]{11})",
]


def extract_video_id(url_or_id: str) -> str | None:
    """Extract YouTube video ID from URL or return as-is if valid ID.

    The ID keys the caption fetch whose snippets become timecoded lines.
    """
    for pattern in _VIDEO_ID_PATTERNS:
        match = re.search(pattern, url_or_id)
        if match:
            return match.group(1)
    if re.match(r"^[a-zA-Z0-9_-]{11}$", url_or_id):
        return url_or_id
    return None


def snippets_to_timecoded_text(snippets) -> str:
    """One ``HH:MM:SS:FF text`` line per caption plus a closing marker."""
    lines = []
    end = 0.0
    for s in snippets:
        text = " ".join(s.text.split())
        if not text:
            continue
        lines.append(f"{seconds_to_timecode(s.start)} {text}")
        end = max(end, s.start + s.duration)
    if lines:
        lines.append(seconds_to_timecode(end))
    return "\n".join(lines)


class YouTubeProvider(TranscriptProvider):
    def __init__(self):
        self._api = YouTubeTranscriptApi()

    async def get_timecoded_text(self, source: str, language: str = "en") -> str:
        video_id = extract_video_id(source)
        if not video_id:
            raise ValueError(f"Invalid YouTube URL or video ID: {source}")

        loop = asyncio.get_event_loop()
        try:
            fetched = await loop.run_in_executor(
                None,
                partial(self._fetch, video_id, language),
            )
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            raise ValueError(f"No transcript available for {video_id}: {e}")

        logger.info(f"Fetched {video_id} ({language})")
        return snippets_to_timecoded_text(fetched)

    def _fetch(self, video_id: str, language: str):
        """Synchronous fetch in executor."""
        return self._api.fetch(video_id, languages=[language, "en"])

    async def close(self) -> None:
        pass
