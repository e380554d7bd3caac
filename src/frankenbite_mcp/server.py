"""Frankenbite Finder MCP Server."""

import logging
import sys
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Annotated

from pydantic import Field
from mcp.server.fastmcp import FastMCP

from frankenbite_mcp.cache import TranscriptStore
from frankenbite_mcp.config import Settings, Transport
from frankenbite_mcp.engine import search_phrases as run_phrase_search
from frankenbite_mcp.engine import search_word as run_word_search
from frankenbite_mcp.history import SearchHistory
from frankenbite_mcp.messages import get_not_found_message
from frankenbite_mcp.models import ResultSource, SearchResult, StoredTranscript
from frankenbite_mcp.providers.youtube import YouTubeProvider
from frankenbite_mcp.utils import format_timecode

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("frankenbite-mcp")

# Module-level state
_provider = None
_store = None
_history = None
_settings = None
_rate_window = deque()

READ_ONLY = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": False,
}
STORES_TRANSCRIPT = {**READ_ONLY, "readOnlyHint": False}


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _provider, _store, _history, _settings, _rate_window
    _settings = Settings()
    _store = TranscriptStore(
        max_size=_settings.store_max_size,
        ttl=_settings.store_ttl_seconds,
    )
    _history = SearchHistory(
        max_size=_settings.history_max_size,
        path=_settings.history_file or None,
    )
    _provider = YouTubeProvider()
    _rate_window = deque()

    logger.info("Server started")
    yield

    if _provider:
        await _provider.close()
    logger.info("Server stopped")


mcp = FastMCP(
    "Frankenbite Finder",
    instructions="Find exact quotes or assemble frankenbites from timecoded transcripts",
    lifespan=app_lifespan,
)


def _check_rate_limit():
    """Sliding window rate limit."""
    now = time.time()
    limit = (_settings.rate_limit_per_minute if _settings else 30)
    while _rate_window and _rate_window[0] < now - 60:
        _rate_window.popleft()
    if len(_rate_window) >= limit:
        raise ValueError(
            f"Rate limit exceeded ({limit}/min). Try again in a few seconds."
        )
    _rate_window.append(now)


def _store_transcript(name: str, content: str) -> str:
    transcript = _store.add(name, content)
    if not transcript.segments:
        return (
            "Error: No timecoded segments found. The transcript needs at least "
            "two timecode markers (e.g. 00:00:01:00 or 00:00:01)."
        )
    logger.info(f"Loaded transcript {transcript.id} ({len(transcript.segments)} segments)")
    return (
        f"## Transcript loaded: {transcript.name}\n"
        f"**ID:** {transcript.id} | **Segments:** {len(transcript.segments)} | "
        f"**Span:** {format_timecode(transcript.segments[0].start_timecode)} - "
        f"{format_timecode(transcript.segments[-1].end_timecode)}"
    )


def _get_transcript(transcript_id: str) -> StoredTranscript | None:
    return _store.get(transcript_id.strip())


def _result_to_markdown(rank: int, result: SearchResult) -> str:
    """Format one result with its source timecodes."""
    label = "Frankenbite" if result.source == ResultSource.FRANKENBITE else "Quote"
    lines = [f"### {rank}. {label} ({result.match_quality.value}, {result.match_score}/100)"]
    lines.extend(f"> {line}" for line in result.match_text.splitlines())
    for seg in result.segments:
        lines.append(
            f"- **[{format_timecode(seg.start_timecode)} - "
            f"{format_timecode(seg.end_timecode)}]** {seg.text}"
        )
    if result.coherence_score is not None:
        lines.append(f"*Coherence: {result.coherence_score:.2f}*")
    return "\n".join(lines)


@mcp.tool(annotations=STORES_TRANSCRIPT)
async def load_transcript(
    content: Annotated[str, Field(description="Transcript text with timecode markers such as 00:01:23:15, 00:01:23.150 or 00:01:23")],
    name: Annotated[str, Field(default="Untitled transcript", description="Display name for the transcript")] = "Untitled transcript",
) -> str:
    """Parse a timecoded transcript and keep it for searching. Returns the transcript ID."""
    if not content.strip():
        return "Error: Transcript content cannot be empty."
    return _store_transcript(name, content)


@mcp.tool(annotations={**STORES_TRANSCRIPT, "openWorldHint": True})
async def load_youtube_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID")],
    language: Annotated[str, Field(default="en", description="ISO 639-1 language code for the captions (e.g. en, de, es)")] = "en",
) -> str:
    """Fetch YouTube captions as a timecoded transcript and keep it for searching."""
    _check_rate_limit()
    try:
        content = await _provider.get_timecoded_text(url, language)
    except Exception as e:
        return f"Error fetching transcript for {url}: {e}"
    return _store_transcript(url, content)


@mcp.tool(annotations=READ_ONLY)
async def search_phrases(
    transcript_id: Annotated[str, Field(description="ID returned by load_transcript")],
    query: Annotated[str, Field(description="The phrase you want the speaker to say")],
    similarity_threshold: Annotated[float, Field(default=0.6, ge=0.0, le=1.0, description="Minimum similarity (0-1) for fuzzy and assembled matches")] = 0.6,
    max_results: Annotated[int, Field(default=8, ge=1, le=50, description="Maximum number of results")] = 8,
) -> str:
    """Search a transcript for a phrase, returning exact quotes or assembled frankenbites."""
    if not query.strip():
        return "Error: Search query cannot be empty."

    transcript = _get_transcript(transcript_id)
    if transcript is None:
        return f"Error: Unknown transcript ID: {transcript_id}"

    _history.add(query)
    results = run_phrase_search(
        transcript.segments,
        query,
        similarity_threshold=similarity_threshold,
        max_results=max_results,
        config=_settings.search_config(),
    )
    if not results:
        return f"No matches found for '{query}'. {get_not_found_message()}"

    header = (
        f"## Results: '{query}' in {transcript.name}\n"
        f"**{len(results)} match(es) found**\n"
    )
    body = "\n\n".join(_result_to_markdown(i, r) for i, r in enumerate(results, start=1))
    return f"{header}\n{body}"


@mcp.tool(annotations=READ_ONLY)
async def search_word(
    transcript_id: Annotated[str, Field(description="ID returned by load_transcript")],
    word: Annotated[str, Field(description="Word or fragment to find (case-insensitive)")],
) -> str:
    """Find every segment that contains a word."""
    if not word.strip():
        return "Error: Search word cannot be empty."

    transcript = _get_transcript(transcript_id)
    if transcript is None:
        return f"Error: Unknown transcript ID: {transcript_id}"

    results = run_word_search(transcript.segments, word)
    if not results:
        return f"No matches found for '{word}'. {get_not_found_message()}"

    header = f"## Occurrences of '{word}'\n**{len(results)} segment(s)**\n"
    body = "\n".join(
        f"- **[{format_timecode(r.segments[0].start_timecode)}]** {r.match_text}"
        for r in results
    )
    return f"{header}\n{body}"


@mcp.tool(annotations=READ_ONLY)
async def list_transcripts() -> str:
    """List the transcripts currently loaded."""
    transcripts = _store.transcripts()
    if not transcripts:
        return "No transcripts loaded."
    lines = [
        f"- **{t.id}** {t.name} ({len(t.segments)} segments)"
        for t in transcripts
    ]
    return "## Loaded transcripts\n" + "\n".join(lines)


@mcp.tool(annotations=READ_ONLY)
async def get_search_history() -> str:
    """Recent search queries, most recent first."""
    queries = _history.items()
    if not queries:
        return "No searches yet."
    return "## Recent searches\n" + "\n".join(f"{i}. {q}" for i, q in enumerate(queries, start=1))


# -- MCP Resources --


@mcp.resource("frankenbite://help")
def help_resource() -> str:
    """Usage guide for the Frankenbite Finder MCP server."""
    return """# Frankenbite Finder - Help Guide

## Transcript format
Free text with timecode markers. Each stretch of text between two markers
becomes a segment. Accepted markers: HH:MM:SS:FF (30 fps), HH:MM:SS.ms,
HH:MM:SS.

```
00:00:01:00 I love programming in Python.
00:00:05:00 It was the best of times.
00:00:09:00
```

## Tools

### load_transcript / load_youtube_transcript
Parse a transcript (or YouTube captions) and get back a transcript ID.

### search_phrases
Exact quotes score 100 (perfect). When nobody said the phrase verbatim,
close single segments and frankenbites spliced from up to three segments
are returned, joined by [...].
- Example: search_phrases(transcript_id="ID", query="cat sat on the mat")

### search_word
Every segment containing a word.

### get_search_history / list_transcripts
Recent queries and loaded transcripts.
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
