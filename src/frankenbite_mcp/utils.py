"""Timecode helpers."""

import math
import re

from frankenbite_mcp.models import TimecodeMarker

FPS = 30

# Order matters: the first pattern that matches wins.
_TIMECODE_FORMATS = [
    ("frames", re.compile(r"(\d{2}):(\d{2}):(\d{2}):(\d{2})")),
    ("fraction", re.compile(r"(\d{2}):(\d{2}):(\d{2})\.(\d{2,3})")),
    ("seconds", re.compile(r"(\d{2}):(\d{2}):(\d{2})")),
    ("minutes", re.compile(r"(\d{1,2}):(\d{2})")),
]

# MM:SS is accepted when converting but never used to find markers in text.
_MARKER_PATTERNS = [pattern for kind, pattern in _TIMECODE_FORMATS if kind != "minutes"]


def timecode_to_seconds(timecode: str) -> float:
    """Convert HH:MM:SS:FF, HH:MM:SS.ms, HH:MM:SS or MM:SS to seconds.

    Anything unparseable converts to 0.
    """
    if not timecode:
        return 0.0
    for kind, pattern in _TIMECODE_FORMATS:
        match = pattern.search(timecode)
        if not match:
            continue
        parts = match.groups()
        if kind == "frames":
            h, m, s, f = (int(p) for p in parts)
            return h * 3600 + m * 60 + s + f / FPS
        if kind == "fraction":
            h, m, s = (int(p) for p in parts[:3])
            return h * 3600 + m * 60 + s + float(f"0.{parts[3]}")
        if kind == "seconds":
            h, m, s = (int(p) for p in parts)
            return float(h * 3600 + m * 60 + s)
        m, s = (int(p) for p in parts)
        return float(m * 60 + s)
    return 0.0


def seconds_to_timecode(seconds: float) -> str:
    """Format seconds as zero-padded HH:MM:SS:FF at 30 fps."""
    if seconds is None or not math.isfinite(seconds):
        return "00:00:00:00"
    # Whole frames, floored; the epsilon absorbs float noise such as 28.9999.
    total_frames = int(max(seconds, 0.0) * FPS + 1e-6)
    total_seconds, f = divmod(total_frames, FPS)
    h, rest = divmod(total_seconds, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}:{f:02d}"


def extract_timecodes(text: str) -> list[TimecodeMarker]:
    """Find every timecode marker in text, ordered by position.

    Each marker pattern is scanned separately, so a frame-coded marker is
    also reported by the plain HH:MM:SS pass at the same index.
    """
    markers = []
    for pattern in _MARKER_PATTERNS:
        for match in pattern.finditer(text):
            markers.append(TimecodeMarker(timecode=match.group(0), index=match.start()))
    return sorted(markers, key=lambda marker: marker.index)


def format_timecode(timecode: str) -> str:
    """Drop a trailing fractional-seconds suffix for display."""
    return re.sub(r"\.\d+$", "", timecode)
