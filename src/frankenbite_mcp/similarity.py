"""Text normalization and similarity heuristics used for matching."""

import re

from rapidfuzz.distance import Levenshtein

_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(
    r"\b(I|you|he|she|it|we|they)\b.*\b(is|am|are|was|were|will|have|has|had)\b",
    re.IGNORECASE,
)

_ELLIPSIS = "... "


def normalize_text(text: str) -> str:
    """Lowercase, strip punctuation and collapse whitespace."""
    text = _PUNCTUATION_RE.sub("", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def word_level_similarity(word1: str, word2: str) -> float:
    """Character edit-distance similarity between two words, 0-1."""
    if word1 == word2:
        return 1.0
    # Words of very different length are treated as unrelated.
    if abs(len(word1) - len(word2)) > 3:
        return 0.1
    distance = Levenshtein.distance(word1, word2)
    return 1 - distance / max(len(word1), len(word2))


def string_similarity(a: str, b: str) -> float:
    """Word-level edit-distance similarity with partial credit for near words.

    Substituting a word costs nothing when the two words are more than 80%
    alike and ``1 - similarity`` otherwise.
    """
    a_words = a.lower().split()
    b_words = b.lower().split()
    if not a_words:
        return 1.0 if not b_words else 0.0
    if not b_words:
        return 0.0

    previous = list(range(len(a_words) + 1))
    for i, b_word in enumerate(b_words, start=1):
        current = [i] + [0] * len(a_words)
        for j, a_word in enumerate(a_words, start=1):
            similarity = word_level_similarity(a_word, b_word)
            cost = 0 if similarity > 0.8 else 1 - similarity
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous = current

    distance = previous[-1]
    return max(0.0, 1 - distance / max(len(a_words), len(b_words)))


def calculate_coherence_score(text: str) -> float:
    """Rough estimate of how natural a piece of (assembled) text reads."""
    score = 0.6
    if re.match(r"[A-Z]", text):
        score += 0.1
    if "  " not in text:
        score += 0.1
    if re.search(r"[.!?]$", text):
        score += 0.1
    if _SENTENCE_RE.search(text):
        score += 0.1
    if _ELLIPSIS in text:
        score -= 0.15
    return max(0.0, min(1.0, score))


def calculate_context_preservation(query: str, text: str) -> float:
    """Blend of query word coverage (70%) and preserved word order (30%)."""
    query_words = query.split()
    text_words = text.split()
    if not query_words:
        return 0.0

    text_vocab = set(text_words)
    matched = sum(1 for word in query_words if word in text_vocab)

    first_seen: dict[str, int] = {}
    for position, word in enumerate(text_words):
        first_seen.setdefault(word, position)

    run = 0
    longest_run = 0
    for current, following in zip(query_words, query_words[1:]):
        current_pos = first_seen.get(current)
        following_pos = first_seen.get(following)
        if current_pos is not None and following_pos == current_pos + 1:
            run += 1
            longest_run = max(longest_run, run)
        else:
            run = 0

    coverage = matched / len(query_words)
    sequence = longest_run / (len(query_words) - 1) if len(query_words) > 1 else 1.0
    return coverage * 0.7 + sequence * 0.3
