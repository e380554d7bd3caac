"""Tests for transcript segmentation."""

import pytest

from frankenbite_mcp.segmenter import parse_transcript_with_timecodes


class TestParseTranscript:
    def test_segments_between_markers(self, sample_transcript):
        segments = parse_transcript_with_timecodes(sample_transcript)
        assert [s.text for s in segments] == [
            "I love programming in TypeScript.",
            "It was the best decision we ever made.",
            "The cat sat quietly by the window.",
            "Then it jumped on the red mat.",
        ]

    def test_segment_times(self, sample_transcript):
        segments = parse_transcript_with_timecodes(sample_transcript)
        assert segments[1].start_timecode == "00:00:05:00"
        assert segments[1].end_timecode == "00:00:09:12"
        assert segments[1].start_time == 5.0
        assert segments[1].end_time == pytest.approx(9.4)
        assert all(s.start_time <= s.end_time for s in segments)
        assert all(a.end_time <= b.start_time for a, b in zip(segments, segments[1:]))

    def test_punctuation_attached_to_previous_word(self, sample_transcript):
        words = parse_transcript_with_timecodes(sample_transcript)[0].words
        assert [w.word for w in words] == ["I", "love", "programming", "in", "TypeScript."]

    def test_word_times_interpolated_by_token_position(self, sample_transcript):
        words = parse_transcript_with_timecodes(sample_transcript)[0].words
        assert words[0].start_time == 1.0
        assert words[0].timecode == "00:00:01:00"
        # 6 tokens (5 words + '.') spread over 4 seconds
        assert words[4].start_time == pytest.approx(1 + 4 / 6 * 4)
        times = [w.start_time for w in words]
        assert times == sorted(times)

    def test_leading_punctuation_kept_as_word(self):
        segments = parse_transcript_with_timecodes("00:00:01:00 , hello 00:00:02:00")
        assert [w.word for w in segments[0].words] == [",", "hello"]

    def test_single_marker(self):
        assert parse_transcript_with_timecodes("00:00:01:00 only one marker") == []

    def test_no_markers(self):
        assert parse_transcript_with_timecodes("no timecodes at all") == []

    def test_empty(self):
        assert parse_transcript_with_timecodes("") == []

    def test_overlapping_marker_matches_collapsed(self):
        segments = parse_transcript_with_timecodes("00:00:01:00 hello 00:00:02:00 world 00:00:03:00")
        assert [s.text for s in segments] == ["hello", "world"]
        assert segments[0].start_timecode == "00:00:01:00"

    def test_fractional_markers(self):
        segments = parse_transcript_with_timecodes("00:00:01.500 hello there 00:00:03.000")
        assert len(segments) == 1
        assert segments[0].text == "hello there"
        assert segments[0].start_time == 1.5
        assert segments[0].end_time == 3.0

    def test_plain_markers(self):
        segments = parse_transcript_with_timecodes("00:00:01 hi 00:00:02 there 00:00:04")
        assert [(s.start_time, s.end_time) for s in segments] == [(1, 2), (2, 4)]

    def test_empty_stretch_skipped(self):
        segments = parse_transcript_with_timecodes("00:00:01:00 00:00:02:00 hi 00:00:03:00")
        assert [s.text for s in segments] == ["hi"]
        assert segments[0].start_timecode == "00:00:02:00"

    def test_out_of_order_markers_clamped(self):
        segments = parse_transcript_with_timecodes("00:00:05:00 a 00:00:01:00 b 00:00:02:00")
        assert segments[0].start_time == 5.0
        assert segments[0].end_time == 5.0
        assert segments[1].start_time == 1.0
