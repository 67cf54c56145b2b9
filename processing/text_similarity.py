"""Text similarity for near-duplicate news detection.

Titles are compared character by character (Levenshtein), bodies by
word overlap (Jaccard). The composite score blends the two with
caller-supplied weights.
"""
import math

from rapidfuzz.distance import Levenshtein

DEFAULT_TITLE_WEIGHT = 0.4
DEFAULT_CONTENT_WEIGHT = 0.6


def tokenize(text):
    """Lowercase, whitespace-split word set"""
    if not text:
        return set()
    return set(text.lower().split())


def calculate_jaccard_similarity(text1, text2):
    """Jaccard index of the two word sets (|A & B| / |A | B|).

    Two empty texts count as identical (1.0); one empty text gives 0.0.
    """
    words1 = tokenize(text1)
    words2 = tokenize(text2)

    if not words1 and not words2:
        return 1.0
    if not words1 or not words2:
        return 0.0

    return len(words1 & words2) / len(words1 | words2)


def levenshtein_distance(text1, text2):
    """Minimum number of single-character edits between two strings"""
    return Levenshtein.distance(text1, text2)


def calculate_levenshtein_similarity(text1, text2):
    """1 - distance / max length. Any empty input gives 0.0."""
    if not text1 or not text2:
        return 0.0
    if text1 == text2:
        return 1.0

    distance = levenshtein_distance(text1, text2)
    return 1 - distance / max(len(text1), len(text2))


def calculate_news_similarity(title1, content1, title2, content2,
                              title_weight=DEFAULT_TITLE_WEIGHT,
                              content_weight=DEFAULT_CONTENT_WEIGHT):
    """Weighted title/content similarity of two news items.

    Weights are not normalized: weights that do not sum to 1 can push the
    result outside [0, 1].
    """
    title_similarity = calculate_levenshtein_similarity(title1 or "", title2 or "")
    content_similarity = calculate_jaccard_similarity(content1 or "", content2 or "")

    return title_similarity * title_weight + content_similarity * content_weight


def similarity_to_percent(similarity):
    """Score -> integer percent, rounding halves up"""
    return int(math.floor(similarity * 100 + 0.5))
