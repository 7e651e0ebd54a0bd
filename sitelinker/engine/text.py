"""Shared text utilities: tokenising, stop-words and heuristic stemming."""

from __future__ import annotations

import re
from typing import Callable, List, Set

Stemmer = Callable[[str], Set[str]]

_APOSTROPHE_RE = re.compile(r"['’]")
_PUNCT_RE = re.compile(r"[\W_]+")
_EDGE_PUNCT_RE = re.compile(r"^[\W_]+|[\W_]+$")

STOP_WORDS = frozenset(
    {
        # articles, conjunctions, prepositions
        "a", "an", "the", "and", "or", "but", "nor", "so", "yet", "if", "than",
        "as", "at", "by", "for", "from", "in", "into", "of", "on", "onto", "to",
        "with", "within", "without", "about", "above", "after", "before", "between",
        "through", "under", "over", "via", "per", "because", "while", "until",
        # auxiliaries and modals
        "is", "was", "are", "were", "be", "been", "being", "am", "have", "has",
        "had", "do", "does", "did", "will", "would", "could", "should", "may",
        "might", "must", "shall", "can", "need",
        # pronouns and determiners
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us",
        "them", "my", "your", "his", "its", "our", "their", "this", "that",
        "these", "those", "what", "which", "who", "whom", "whose", "when",
        "where", "why", "how", "all", "each", "every", "both", "few", "any",
        "more", "most", "other", "some", "such", "no", "not", "only", "own",
        "same", "here", "there", "then", "now",
        # generic adjectives and adverbs
        "very", "too", "just", "also", "really", "quite", "much", "many",
        "good", "great", "best", "better", "new", "well", "even", "still",
        "again", "like", "lot", "lots", "thing", "things",
    }
)

_PLURAL_ES_STEMS = ("s", "x", "z", "ch", "sh")
_SUFFIXES = ("ness", "ment", "able", "tion", "ing", "ed", "ly")
_MIN_STEM = 3


def tokenize(text: str) -> List[str]:
    """Return lower-cased word tokens with punctuation removed."""

    lowered = _APOSTROPHE_RE.sub("", (text or "").lower())
    return _PUNCT_RE.sub(" ", lowered).split()


def normalize_tokens(text: str) -> List[str]:
    """Return tokens longer than two characters that are not stop-words."""

    return [token for token in tokenize(text) if len(token) > 2 and token not in STOP_WORDS]


def stem(word: str) -> str:
    """Collapse common English inflections onto a shared stem."""

    stemmed = word.lower()
    if len(stemmed) <= _MIN_STEM:
        return stemmed

    if stemmed.endswith("ies") and len(stemmed) > _MIN_STEM + 2:
        stemmed = stemmed[:-3] + "y"
    elif stemmed.endswith("es") and stemmed[:-2].endswith(_PLURAL_ES_STEMS) and len(stemmed) - 2 >= _MIN_STEM:
        stemmed = stemmed[:-2]
    elif stemmed.endswith("s") and not stemmed.endswith("ss") and len(stemmed) - 1 >= _MIN_STEM:
        stemmed = stemmed[:-1]

    for suffix in _SUFFIXES:
        if stemmed.endswith(suffix) and len(stemmed) - len(suffix) >= _MIN_STEM:
            stemmed = stemmed[: -len(suffix)]
            break

    # silent e: "guide"/"guiding" and "bake"/"baking" meet here
    if stemmed.endswith("e") and len(stemmed) > _MIN_STEM:
        stemmed = stemmed[:-1]
    return stemmed


def stems(text: str) -> Set[str]:
    """Return the set of stems for ``text``; the default :data:`Stemmer`."""

    return {stem(token) for token in normalize_tokens(text)}


def strip_edge_punctuation(word: str) -> str:
    return _EDGE_PUNCT_RE.sub("", word)


def is_stop_word(word: str) -> bool:
    """True for stop-words and for tokens with no letters or digits."""

    cleaned = _APOSTROPHE_RE.sub("", strip_edge_punctuation(word).lower())
    if not cleaned:
        return True
    return cleaned in STOP_WORDS


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()
