"""Data models for timecoded transcripts and search results."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class MatchQuality(str, Enum):
    PERFECT = "perfect"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ResultSource(str, Enum):
    EXACT = "exact"
    FRANKENBITE = "frankenbite"


class TimecodeMarker(BaseModel):
    model_config = ConfigDict(frozen=True)

    timecode: str
    index: int

    @property
    def end(self) -> int:
        return self.index + len(self.timecode)


class TimecodedWord(BaseModel):
    """A display word with an interpolated start time."""

    model_config = ConfigDict(frozen=True)

    word: str
    timecode: str
    start_time: float


class TimecodedSegment(BaseModel):
    """Transcript text between two consecutive timecode markers."""

    model_config = ConfigDict(frozen=True)

    text: str
    words: list[TimecodedWord] = []
    start_timecode: str
    end_timecode: str
    start_time: float
    end_time: float


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    match_text: str
    segments: list[TimecodedSegment]
    match_score: int
    match_quality: MatchQuality
    coherence_score: float | None = None
    grammar_score: float | None = None
    context_preservation: float | None = None
    source: ResultSource = ResultSource.EXACT


class StoredTranscript(BaseModel):
    id: str
    name: str
    content: str
    segments: list[TimecodedSegment] = []
    created_at: datetime
