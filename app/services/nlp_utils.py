"""Keyword utilities for resume analysis.

This module intentionally stays small and dependency free. It provides:
- Keyword extraction (normalize, filter, dedupe, cap)
- Containment matching between keyword lists

Matching is plain substring containment with no stemming or synonym table,
so "manage" matches both "management" and "unmanaged".
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence


STOPWORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does",
    "did", "will", "would", "could", "should", "may", "might", "can", "must", "shall",
})

MIN_KEYWORD_LENGTH = 3
MAX_KEYWORDS = 20

# Anything that is not an ASCII word character or whitespace becomes a separator
NON_WORD_PATTERN = re.compile(r"[^A-Za-z0-9_\s]")


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """
    Extract significant keywords from free text.

    Tokens are lowercased, split on anything that is not a word character,
    filtered by length and stop words, and deduplicated keeping the first
    occurrence.

    Args:
        text: Text to tokenize
        limit: Maximum number of keywords returned

    Returns:
        Ordered list of unique keywords
    """
    if not text:
        return []

    words = NON_WORD_PATTERN.sub(" ", text.lower()).split()
    keywords = [w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOPWORDS]
    return list(dict.fromkeys(keywords))[:limit]


def keywords_overlap(a: str, b: str) -> bool:
    """Containment match: one keyword is a substring of the other."""
    return a in b or b in a


def matching_keywords(candidates: Iterable[str], targets: Sequence[str]) -> list[str]:
    """Candidates that overlap at least one target, in candidate order."""
    return [c for c in candidates if any(keywords_overlap(c, t) for t in targets)]


def missing_keywords(targets: Iterable[str], candidates: Sequence[str]) -> list[str]:
    """Targets that no candidate overlaps, in target order."""
    return [t for t in targets if not any(keywords_overlap(c, t) for c in candidates)]
