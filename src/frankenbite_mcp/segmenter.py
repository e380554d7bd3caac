"""Split timecoded transcript text into segments with estimated word timing."""

import logging
import re

from frankenbite_mcp.models import TimecodeMarker, TimecodedSegment, TimecodedWord
from frankenbite_mcp.utils import extract_timecodes, seconds_to_timecode, timecode_to_seconds

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[\w']+|[.,!?;:]")
_PUNCT_RE = re.compile(r"^[.,!?;:]$")


def _collapse_overlapping(markers: list[TimecodeMarker]) -> list[TimecodeMarker]:
    """Keep one marker per span of text.

    extract_timecodes reports e.g. ``00:00:01:00`` twice (frame pass and
    plain pass). The first marker at a position is the most specific one;
    anything starting inside an already claimed span is dropped.
    """
    kept: list[TimecodeMarker] = []
    for marker in markers:
        if kept and marker.index < kept[-1].end:
            continue
        kept.append(marker)
    return kept


def _interpolate_words(text: str, start_time: float, end_time: float) -> list[TimecodedWord]:
    tokens = _TOKEN_RE.findall(text)
    duration = end_time - start_time
    entries: list[list] = []  # [word, start_time]

    for idx, token in enumerate(tokens):
        estimated = start_time + (idx / len(tokens)) * duration
        if _PUNCT_RE.match(token) and entries:
            entries[-1][0] += token
        else:
            entries.append([token, estimated])

    return [
        TimecodedWord(word=word, timecode=seconds_to_timecode(at), start_time=at)
        for word, at in entries
    ]


def parse_transcript_with_timecodes(transcript: str) -> list[TimecodedSegment]:
    """Parse raw transcript text into ordered timecoded segments.

    Returns an empty list when the text has fewer than two timecode markers.
    """
    markers = _collapse_overlapping(extract_timecodes(transcript or ""))
    if len(markers) < 2:
        return []

    segments = []
    for current, following in zip(markers, markers[1:]):
        text = transcript[current.end:following.index].strip()
        if not text:
            continue

        start_time = timecode_to_seconds(current.timecode)
        end_time = timecode_to_seconds(following.timecode)
        if end_time < start_time:
            logger.warning(
                f"Timecode {following.timecode} precedes {current.timecode}; "
                "treating segment as zero length"
            )
            end_time = start_time

        segments.append(
            TimecodedSegment(
                text=text,
                words=_interpolate_words(text, start_time, end_time),
                start_timecode=current.timecode,
                end_timecode=following.timecode,
                start_time=start_time,
                end_time=end_time,
            )
        )

    logger.debug(f"Parsed {len(segments)} segments from {len(markers)} markers")
    return segments
