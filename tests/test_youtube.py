"""Tests for the YouTube provider with mocked youtube-transcript-api."""

from unittest.mock import patch
import pytest

from frankenbite_mcp.providers.youtube import (
    YouTubeProvider,
    extract_video_id,
    snippets_to_timecoded_text,
)
from frankenbite_mcp.segmenter import parse_transcript_with_timecodes


class MockSnippet:
    def __init__(self, text, start, duration):
        self.text = text
        self.start = start
        self.duration = duration


@pytest.fixture
def mock_snippets():
    return [
        MockSnippet("Hello there", 0.0, 2.0),
        MockSnippet("General\nKenobi", 2.5, 1.5),
    ]


class TestExtractVideoId:
    def test_standard_url(self):
        assert extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_short_url(self):
        assert extract_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_shorts_url(self):
        assert extract_video_id("https://www.youtube.com/shorts/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_raw_id(self):
        assert extract_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_invalid(self):
        assert extract_video_id("https://google.com") is None


class TestSnippetsToTimecodedText:
    def test_lines_and_closing_marker(self, mock_snippets):
        text = snippets_to_timecoded_text(mock_snippets)
        assert text == (
            "00:00:00:00 Hello there\n"
            "00:00:02:15 General Kenobi\n"
            "00:00:04:00"
        )

    def test_parses_into_segments(self, mock_snippets):
        segments = parse_transcript_with_timecodes(snippets_to_timecoded_text(mock_snippets))
        assert [s.text for s in segments] == ["Hello there", "General Kenobi"]
        assert segments[1].start_time == 2.5
        assert segments[1].end_time == 4.0

    def test_empty(self):
        assert snippets_to_timecoded_text([]) == ""


class TestYouTubeProvider:
    @pytest.mark.asyncio
    async def test_get_timecoded_text(self, mock_snippets):
        provider = YouTubeProvider()
        with patch.object(provider, "_fetch", return_value=mock_snippets):
            text = await provider.get_timecoded_text("dQw4w9WgXcQ", "en")
        assert text.startswith("00:00:00:00 Hello there")

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        provider = YouTubeProvider()
        with pytest.raises(ValueError, match="Invalid YouTube URL"):
            await provider.get_timecoded_text("not-a-url")

    @pytest.mark.asyncio
    async def test_no_transcript(self):
        from youtube_transcript_api import TranscriptsDisabled
        provider = YouTubeProvider()
        with patch.object(
            provider, "_fetch", side_effect=TranscriptsDisabled("vid")
        ):
            with pytest.raises(ValueError, match="No transcript available"):
                await provider.get_timecoded_text("vid12345678", "en")

    @pytest.mark.asyncio
    async def test_close(self):
        provider = YouTubeProvider()
        await provider.close()  # Should not raise
