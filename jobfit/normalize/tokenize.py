from __future__ import annotations

import re
from collections.abc import Iterable

_NON_WORD_RE = re.compile(r"[^\w\s]")
_MIN_TOKEN_LENGTH = 3
_MIN_STEM_LENGTH = 5

STOPWORDS = frozenset(
    {
        # German
        "der", "die", "das", "und", "oder", "aber", "mit", "von", "zu", "in", "auf",
        "für", "ist", "sind", "war", "waren", "wird", "werden", "hat", "haben",
        "ein", "eine", "einer", "eines", "einem", "einen", "als", "auch", "nicht",
        "sich", "dass", "kann", "können", "muss", "müssen", "bei", "nach", "über",
        "durch", "um", "am", "im", "zum", "zur", "vom", "beim", "ans", "aufs",
        "des", "dem", "den", "wir", "sie", "er", "es", "ihr", "du", "ich",
        "sein", "seine", "seiner", "seines", "ihnen", "uns", "euch", "dich", "mich",
        "dieser", "diese", "dieses", "jener", "jene", "jenes", "welcher", "welche",
        "alle", "alles", "einige", "mehrere", "viele", "wenige", "andere",
        "mehr", "weniger", "sehr", "so", "wie", "wenn", "dann", "weil", "da",
        "noch", "nur", "schon", "bereits", "immer", "nie", "oft", "manchmal",
        # English
        "the", "a", "an", "and", "or", "but", "with", "from", "to", "in", "on",
        "for", "is", "are", "was", "were", "will", "be", "has", "have", "had",
        "as", "also", "not", "can", "must", "should", "would", "could", "may",
        "at", "by", "of", "about", "into", "through", "during", "before", "after",
        "above", "below", "between", "under", "over", "again", "further", "then",
        "once", "here", "there", "when", "where", "why", "how", "all", "both",
        "each", "few", "more", "most", "other", "some", "such", "no", "nor",
        "only", "own", "same", "than", "too", "very", "that", "these",
        "those", "this", "what", "which", "who", "whom", "whose", "if", "because",
        "while", "doing", "been", "being", "does", "did", "having", "do",
        "we", "you", "they", "he", "she", "it", "our", "your", "their", "his",
        "her", "its", "my", "me", "him", "them", "us", "myself", "yourself",
        "himself", "herself", "itself", "ourselves", "yourselves", "themselves",
    }
)

# Longest/most specific first. "-er" is left alone on purpose: "developer" must
# not collapse into "develop".
_ENGLISH_SUFFIXES = (
    "ing", "tion", "sion", "ness", "ment", "able", "ible",
    "est", "ful", "less", "ly", "ed", "s",
)
_GERMAN_SUFFIXES = ("ung", "en", "es", "e", "n")


def simple_stem(word: str) -> str:
    if len(word) < _MIN_STEM_LENGTH:
        return word
    for suffix in _ENGLISH_SUFFIXES + _GERMAN_SUFFIXES:
        if word.endswith(suffix) and len(word) > len(suffix) + 2:
            return word[: -len(suffix)]
    return word


def split_words(text: str) -> list[str]:
    """Lowercase, strip punctuation and drop short words and stopwords (no stemming)."""
    if not text or not text.strip():
        return []
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [word for word in cleaned.split() if len(word) >= _MIN_TOKEN_LENGTH and word not in STOPWORDS]


def tokenize_text(text: str | None) -> list[str]:
    """Return normalized tokens in first-seen order, without duplicates."""
    if not text:
        return []
    return list(dict.fromkeys(simple_stem(word) for word in split_words(text)))


def token_set(text: str | None) -> frozenset[str]:
    return frozenset(tokenize_text(text))


def tokenize_many(texts: Iterable[str | None]) -> frozenset[str]:
    tokens: set[str] = set()
    for text in texts:
        tokens.update(tokenize_text(text))
    return frozenset(tokens)


def phrase_in_tokens(phrase: str, tokens: frozenset[str] | set[str]) -> bool:
    """True when the phrase is a token itself or all of its normalized words are present."""
    normalized = phrase.strip().lower()
    if not normalized:
        return False
    if normalized in tokens:
        return True
    parts = tokenize_text(normalized)
    return bool(parts) and all(part in tokens for part in parts)
