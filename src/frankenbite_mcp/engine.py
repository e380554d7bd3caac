"""Phrase search over timecoded segments: exact quotes and frankenbites.

``search_phrases`` runs three passes over the segment list:

1. exact: the normalized query is a substring of a segment,
2. fuzzy: a single segment is close enough by word-level edit distance,
3. assembly: two or three non-contiguous segments that together cover
   most of the query words are spliced into a frankenbite.

Candidates from the last two passes are ranked, labelled with a quality
and merged with the exact hits. The engine is pure: it never mutates the
segments it is given and keeps no state between calls.
"""

import logging
import math
from functools import cmp_to_key
from typing import NamedTuple

from frankenbite_mcp.config import SearchConfig
from frankenbite_mcp.models import MatchQuality, ResultSource, SearchResult, TimecodedSegment
from frankenbite_mcp.similarity import (
    calculate_coherence_score,
    calculate_context_preservation,
    normalize_text,
    string_similarity,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = SearchConfig()

# Joiner used when scoring an assembly; the ellipsis lowers coherence.
_SCORING_JOIN = " ... "


class Candidate(NamedTuple):
    members: tuple[int, ...]
    score: float
    coherence: float
    context: float


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _quality(score: float) -> MatchQuality:
    if score >= 90:
        return MatchQuality.HIGH
    if score >= 75:
        return MatchQuality.MEDIUM
    return MatchQuality.LOW


def extract_key_phrases(query: str) -> list[str]:
    """All contiguous 2- and 3-word windows of the query."""
    words = query.split()
    phrases = []
    for i in range(len(words)):
        if i < len(words) - 1:
            phrases.append(" ".join(words[i:i + 2]))
        if i < len(words) - 2:
            phrases.append(" ".join(words[i:i + 3]))
    return phrases


def coverage(tokens: list[str], text: str) -> float:
    """Fraction of query tokens contained in the normalized text."""
    if not tokens:
        return 0.0
    return sum(1 for token in tokens if token in text) / len(tokens)


def build_coverage_index(
    tokens: list[str], normalized: list[str], min_token_length: int = 3
) -> dict[str, list[int]]:
    """Map query tokens and key phrases to the segments containing them."""
    keys = [token for token in tokens if len(token) >= min_token_length]
    keys += extract_key_phrases(" ".join(tokens))
    return {
        key: [i for i, text in enumerate(normalized) if key in text]
        for key in dict.fromkeys(keys)
    }


def find_segment_combinations(
    tokens: list[str],
    normalized: list[str],
    start_timecodes: list[str],
    index: dict[str, list[int]],
    max_segments: int,
    min_coverage: float,
    beam_width: int = 8,
) -> list[tuple[int, ...]]:
    """Greedy best-first search for segment combinations covering the query.

    At every step the unused segments that cover the most still uncovered
    tokens are tried first, and only the best ``beam_width`` are expanded.
    Expansion stops at ``max_segments`` members or once every token is
    covered. Combinations are returned as tuples of segment positions in
    the order they were chosen.
    """
    combinations: list[tuple[int, ...]] = []
    seen: set[tuple[str, ...]] = set()
    phrases = [key for key in index if " " in key]

    def newly_covered(i: int, remaining: frozenset[str]) -> int:
        return sum(1 for token in remaining if token in normalized[i])

    def phrases_kept(i: int) -> int:
        return sum(1 for phrase in phrases if phrase in normalized[i])

    def build(chosen: tuple[int, ...], remaining: frozenset[str]) -> None:
        if len(chosen) >= max_segments or not remaining:
            joined = " ".join(normalized[i] for i in chosen)
            if coverage(tokens, joined) >= min_coverage:
                key = tuple(start_timecodes[i] for i in chosen)
                if key not in seen:
                    seen.add(key)
                    combinations.append(chosen)
            return

        lookups = [token for token in remaining if token in index]
        lookups += [p for p in phrases if any(word in remaining for word in p.split())]
        candidates = {i for key in lookups for i in index[key] if i not in chosen}

        ranked = sorted(
            candidates,
            key=lambda i: (-newly_covered(i, remaining), -phrases_kept(i), i),
        )
        for i in ranked[:beam_width]:
            covered = {token for token in remaining if token in normalized[i]}
            build(chosen + (i,), remaining - covered)

    build((), frozenset(tokens))
    return combinations


def score_combination(
    members: tuple[int, ...],
    segments: list[TimecodedSegment],
    normalized_query: str,
    tokens: list[str],
    config: SearchConfig = DEFAULT_CONFIG,
) -> Candidate:
    """Blend similarity, coverage, coherence and context into a 0-100 score."""
    combined_text = _SCORING_JOIN.join(segments[i].text for i in members)
    normalized_combined = normalize_text(combined_text)
    multi = len(members) > 1

    coherence = calculate_coherence_score(combined_text)
    context = calculate_context_preservation(normalized_query, normalized_combined)
    if multi:
        coherence *= config.multi_segment_coherence_discount
        context *= config.multi_segment_context_discount

    similarity = string_similarity(normalized_query, normalized_combined)
    score = (
        similarity * config.similarity_weight
        + coverage(tokens, normalized_combined) * config.coverage_weight
        + coherence * config.coherence_weight
        + context * config.context_weight
    ) * 100
    return Candidate(members, score, coherence, context)


def rank_candidates(
    candidates: list[Candidate], config: SearchConfig = DEFAULT_CONFIG
) -> list[Candidate]:
    """Order by score; near ties go to the more coherent, then the shorter."""

    def compare(a: Candidate, b: Candidate) -> float:
        if abs(b.score - a.score) > config.rank_score_tolerance:
            return b.score - a.score
        if abs(b.coherence - a.coherence) > config.rank_coherence_tolerance:
            return b.coherence - a.coherence
        return len(a.members) - len(b.members)

    return sorted(candidates, key=cmp_to_key(compare))


def _exact_result(result_id: str, segment: TimecodedSegment, with_context: bool) -> SearchResult:
    return SearchResult(
        id=result_id,
        match_text=segment.text,
        segments=[segment],
        match_score=100,
        match_quality=MatchQuality.PERFECT,
        coherence_score=calculate_coherence_score(segment.text),
        grammar_score=0.95,
        context_preservation=1.0 if with_context else None,
        source=ResultSource.EXACT,
    )


def search_phrases(
    segments: list[TimecodedSegment],
    query: str,
    similarity_threshold: float = 0.6,
    max_results: int = 8,
    config: SearchConfig | None = None,
) -> list[SearchResult]:
    """Find exact quotes and frankenbites approximating ``query``.

    Returns at most ``max_results`` results ordered by score, with unique
    ``match_text``. Empty queries or segment lists give an empty list.
    """
    config = config or DEFAULT_CONFIG
    normalized_query = normalize_text(query or "")
    if not normalized_query or not segments or max_results <= 0:
        return []

    tokens = normalized_query.split()
    normalized = [normalize_text(segment.text) for segment in segments]
    results: list[SearchResult] = []

    for segment, text in zip(segments, normalized):
        if normalized_query in text:
            results.append(_exact_result(f"result-{len(results)}", segment, True))

    candidates: list[Candidate] = []
    for i, (segment, text) in enumerate(zip(segments, normalized)):
        similarity = string_similarity(normalized_query, text)
        if similarity >= similarity_threshold:
            candidates.append(
                Candidate(
                    (i,),
                    similarity * 100,
                    calculate_coherence_score(segment.text),
                    calculate_context_preservation(normalized_query, text),
                )
            )

    if len(tokens) > 1:
        index = build_coverage_index(tokens, normalized, config.min_token_length)
        start_timecodes = [segment.start_timecode for segment in segments]
        passes = [(min(2, config.max_segments), config.two_segment_min_coverage)]
        if config.max_segments > 2 and len(tokens) >= config.three_segment_min_tokens:
            passes.append((config.max_segments, config.three_segment_min_coverage))

        # The deeper pass rediscovers the shallow pass's combinations.
        combinations: dict[tuple[str, ...], tuple[int, ...]] = {}
        for depth, min_coverage in passes:
            found = find_segment_combinations(
                tokens,
                normalized,
                start_timecodes,
                index,
                max_segments=depth,
                min_coverage=min_coverage,
                beam_width=config.candidate_beam_width,
            )
            for members in found:
                combinations.setdefault(tuple(start_timecodes[i] for i in members), members)

        floor = similarity_threshold * config.combination_threshold_factor
        for members in combinations.values():
            candidate = score_combination(members, segments, normalized_query, tokens, config)
            if candidate.score >= floor:
                candidates.append(candidate)
        logger.debug(
            f"Assembly pass: {len(combinations)} combinations for {len(tokens)} tokens"
        )

    for candidate in rank_candidates(candidates, config)[:max_results]:
        members = [segments[i] for i in candidate.members]
        results.append(
            SearchResult(
                id=f"result-{len(results)}",
                match_text=config.splice_delimiter.join(s.text for s in members),
                segments=members,
                match_score=_round(candidate.score),
                match_quality=_quality(candidate.score),
                coherence_score=candidate.coherence,
                grammar_score=candidate.coherence * 0.9,
                context_preservation=candidate.context,
                source=ResultSource.FRANKENBITE if len(members) > 1 else ResultSource.EXACT,
            )
        )

    unique: dict[str, SearchResult] = {}
    for result in results:
        unique.setdefault(result.match_text, result)
    ranked = sorted(unique.values(), key=lambda r: r.match_score, reverse=True)
    logger.debug(f"Search '{normalized_query}': {len(ranked)} unique results")
    return ranked[:max_results]


def search_word(segments: list[TimecodedSegment], word: str) -> list[SearchResult]:
    """Every segment containing ``word`` as a perfect, exact result."""
    normalized_word = normalize_text(word or "")
    if not normalized_word:
        return []

    results: list[SearchResult] = []
    for segment in segments:
        if normalized_word in normalize_text(segment.text):
            results.append(_exact_result(f"word-{len(results)}", segment, False))
    return results
