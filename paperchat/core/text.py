"""Text normalization and tokenization used for routing questions to papers."""

from __future__ import annotations

import re
from typing import FrozenSet, List

STOPWORDS: FrozenSet[str] = frozenset(
    {
        "a", "an", "the", "for", "of", "and", "to", "in", "on", "vs", "with",
        "using", "based", "from", "by", "at", "is", "are", "this", "that",
        "into", "as", "via", "be", "we", "our", "study", "paper",
    }
)

_DASH_PATTERN = re.compile(r"[-‐-―−﹘﹣－]")
_NON_WORD_PATTERN = re.compile(r"[^\w\s]|_")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Normalize free text for phrase comparison.

    The text is lowercased, dashes and any character that is not a letter,
    digit or whitespace become spaces, and whitespace runs collapse to a single
    space. The result is trimmed, so ``normalize`` is idempotent.
    """

    if not text:
        return ""

    lowered = text.lower()
    lowered = _DASH_PATTERN.sub(" ", lowered)
    lowered = _NON_WORD_PATTERN.sub(" ", lowered)
    return _WHITESPACE_PATTERN.sub(" ", lowered).strip()


def tokenize(text: str | None) -> List[str]:
    """Split normalized text into tokens, dropping stop words."""

    return [token for token in normalize(text).split(" ") if token and token not in STOPWORDS]


def token_set(text: str | None) -> FrozenSet[str]:
    return frozenset(tokenize(text))
