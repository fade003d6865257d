"""
Text comparison helpers

Implements the normalization, keyword extraction and string-similarity primitives
shared by the evaluation strategies.
"""

from __future__ import annotations

import re
import unicodedata

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize text for exact comparison

    - Unicode normalization (NFKC)
    - Convert to lowercase
    - Strip leading and trailing whitespace
    - Collapse consecutive whitespace to a single space
    - Strip punctuation (removed characters leave their neighbouring spaces
      in place, so "a - b" becomes "a  b")

    Args:
        text: Text to normalize

    Returns:
        Normalized text
    """
    text = unicodedata.normalize("NFKC", text)
    text = text.lower().strip()
    text = _WHITESPACE_RE.sub(" ", text)
    return _PUNCTUATION_RE.sub("", text)


def extract_keywords(text: str, min_length: int = 3) -> list[str]:
    """
    Extract lowercase alphanumeric keywords

    Punctuation is replaced by spaces before splitting, so "foo-bar" yields two tokens.

    Args:
        text: Source text (a criterion, a task description, a regex pattern...)
        min_length: Minimum keyword length

    Returns:
        Keywords in order of appearance (duplicates kept)
    """
    cleaned = _PUNCTUATION_RE.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= min_length]


def keyword_coverage(keywords: list[str], text: str) -> float:
    """
    Fraction of keywords present in text (case-insensitive substring match)

    Returns:
        0.0 to 1.0 (0.0 for an empty keyword list)
    """
    if not keywords:
        return 0.0
    text_lower = text.lower()
    found = sum(1 for keyword in keywords if keyword in text_lower)
    return found / len(keywords)


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance with unit insert/delete/substitute costs

    Uses the standard dynamic-programming table, keeping only two rows.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def levenshtein_similarity(a: str, b: str) -> float:
    """
    Similarity derived from edit distance: 1 - distance / max(len(a), len(b))

    Returns:
        0.0 to 1.0 (1.0 for two empty strings)
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1 - levenshtein_distance(a, b) / max_len


def jaccard_similarity(a: str, b: str) -> float:
    """
    Jaccard similarity of the lowercase whitespace-separated word sets

    Returns:
        0.0 to 1.0 (0.0 when both texts are empty)
    """
    words_a = set(a.lower().split())
    words_b = set(b.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)
