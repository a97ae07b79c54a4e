import re
from typing import Iterable

STOP_WORDS = frozenset({
    "the", "a", "an", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "shall",
    "should", "may", "might", "must", "can", "could", "of", "in", "to",
    "for", "with", "on", "at", "from", "by", "about", "as", "into",
    "through", "during", "before", "after", "and", "but", "or", "nor",
    "not", "so", "yet", "both", "either", "neither", "each", "every",
    "all", "any", "few", "more", "most", "other", "some", "such", "no",
    "only", "own", "same", "than", "too", "very", "just", "our", "your",
    "we", "us", "you", "they", "them", "their", "its", "this", "that",
    "it", "i", "my", "me",
})

MAX_QUERY_WORDS = 4

_TAG_RE = re.compile(r"<[^>]*>")
_PUNCT_RE = re.compile(r"[^\w\s]")


def build_search_query(text_parts: Iterable[str]) -> str:
    """
    Derive a short stock photo query from block text.

    Tags are stripped, punctuation becomes whitespace, and the first
    four words longer than two characters that are not stop words are
    kept. May return an empty string.
    """
    joined = " ".join(part for part in text_parts if isinstance(part, str) and part)
    cleaned = _PUNCT_RE.sub(" ", _TAG_RE.sub("", joined)).lower()

    words = [word for word in cleaned.split() if len(word) > 2 and word not in STOP_WORDS]
    return " ".join(words[:MAX_QUERY_WORDS])
