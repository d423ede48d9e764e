# blogs/similarity.py
"""
Related-article suggestions based on term-frequency cosine similarity.

The current article is described by its title, description and raw body;
each candidate by its title, description and tags, which is all the
prerendered index keeps about it.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import FrozenSet, Iterable, List, Sequence

TOKEN_PATTERN = re.compile(r"[a-z0-9]{3,}")
HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
DEFAULT_RELATED_LIMIT = 3
STOPWORDS: FrozenSet[str] = frozenset(
    """
    a about above after again all also an and any are as at back be been
    before being below between both but by can could did do does down
    during each even every few for from further had has have he her here
    his how if in into is it its just may might more most no not now of off
    on once only or other our out over same she should so some still such
    than that the their them then there these they this those through to
    under up very was way we well were what when where which who whom why
    will with would you your
    """.split()
)


def _tokenize(text: str) -> Sequence[str]:
    """Lowercased words of 3+ characters with markup and stopwords removed."""
    cleaned = HTML_TAG_PATTERN.sub(" ", (text or "").lower())
    return [token for token in TOKEN_PATTERN.findall(cleaned) if token not in STOPWORDS]


def _term_frequencies(tokens: Sequence[str]) -> dict:
    if not tokens:
        return {}
    length = len(tokens)
    return {term: count / length for term, count in Counter(tokens).items()}


def _norm(vector: dict) -> float:
    return math.sqrt(sum(weight * weight for weight in vector.values()))


def _cosine_similarity(left: dict, right: dict) -> float:
    shared = set(left).intersection(right)
    if not shared:
        return 0.0
    denominator = _norm(left) * _norm(right)
    if denominator == 0:
        return 0.0
    return sum(left[term] * right[term] for term in shared) / denominator


def text_similarity(text_a: str, text_b: str) -> float:
    """Cosine similarity (0..1) of the term-frequency vectors of two texts."""
    return _cosine_similarity(
        _term_frequencies(_tokenize(text_a)),
        _term_frequencies(_tokenize(text_b)),
    )


def _post_text(post) -> str:
    return " ".join([post.title or "", post.description or "", post.raw_content or ""])


def _candidate_text(candidate) -> str:
    return " ".join([candidate.title or "", candidate.description or "", " ".join(candidate.tags)])


def compute_related_posts(post, candidates: Iterable, *, limit: int = DEFAULT_RELATED_LIMIT) -> List:
    """
    Return the ``limit`` candidates most similar to ``post``.

    ``post`` itself (same category and slug) is never suggested. Ties keep
    the order of ``candidates``.
    """
    post_vector = _term_frequencies(_tokenize(_post_text(post)))

    ranked = [
        (_cosine_similarity(post_vector, _term_frequencies(_tokenize(_candidate_text(c)))), c)
        for c in candidates
        if (c.category, c.slug) != (post.category, post.slug)
    ]

    ranked.sort(key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in ranked[:limit]]
