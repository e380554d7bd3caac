"""Shared test fixtures."""

import pytest

from frankenbite_mcp.models import TimecodedSegment
from frankenbite_mcp.utils import timecode_to_seconds


SAMPLE_TRANSCRIPT = """00:00:01:00 I love programming in TypeScript.
00:00:05:00 It was the best decision we ever made.
00:00:09:12 The cat sat quietly by the window.
00:00:14:00 Then it jumped on the red mat.
00:00:18:00"""


@pytest.fixture
def make_segment():
    def _make(text, start="00:00:01:00", end="00:00:05:00"):
        return TimecodedSegment(
            text=text,
            words=[],
            start_timecode=start,
            end_timecode=end,
            start_time=timecode_to_seconds(start),
            end_time=timecode_to_seconds(end),
        )

    return _make


@pytest.fixture
def sample_transcript():
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def cat_segments(make_segment):
    return [
        make_segment("the cat sat", "00:00:01:00", "00:00:03:00"),
        make_segment("on the red mat", "00:00:03:00", "00:00:06:00"),
    ]
