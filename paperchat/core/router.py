"""Route a free-text question to the paper it is most likely about.

Every indexed document gets a score in ``[0, 1]``:

* ``1.0`` when the normalized message contains the normalized title,
* ``0.95`` when it contains one of the document's aliases,
* otherwise the fraction of the title's own tokens present in the message.

The denominator is the title's token count rather than the message's, so the
score reads as "how much of this document's identity shows up in the
question" and short titles are not penalized by long questions.

Documents scoring at least :data:`INCLUSION_FLOOR` become candidates. The top
candidate wins outright when it is alone, leads the runner-up by at least
:data:`CONFIDENCE_GAP`, or scores at least :data:`HIGH_CONFIDENCE_FLOOR`;
otherwise the best few candidates are returned for the user to choose from.
"""

from __future__ import annotations

from typing import AbstractSet, List, Sequence

from .models import Ambiguous, Confident, IndexedDocument, NoMatch, RouteCandidate, RouteResult
from .text import normalize, token_set

EXACT_TITLE_SCORE = 1.0
ALIAS_SCORE = 0.95
INCLUSION_FLOOR = 0.5
CONFIDENCE_GAP = 0.2
HIGH_CONFIDENCE_FLOOR = 0.9
MAX_AMBIGUOUS_CANDIDATES = 3

# Scores are ratios of small integers; compare against the decimal thresholds
# with a tolerance so that e.g. 0.7 - 0.5 counts as a 0.2 gap.
_EPSILON = 1e-9


def score_document(
    normalized_message: str,
    message_tokens: AbstractSet[str],
    entry: IndexedDocument,
) -> float:
    """Score how strongly a normalized message refers to one document."""

    if entry.normalized_title and entry.normalized_title in normalized_message:
        return EXACT_TITLE_SCORE

    if any(alias in normalized_message for alias in entry.normalized_aliases):
        return ALIAS_SCORE

    overlap = len(entry.title_tokens & message_tokens)
    return overlap / max(1, len(entry.title_tokens))


def rank_candidates(message: str, index: Sequence[IndexedDocument]) -> List[RouteCandidate]:
    """Return every document scoring at or above the inclusion floor, best first.

    Ties keep index order.
    """

    normalized_message = normalize(message)
    message_tokens = token_set(message)

    candidates: List[RouteCandidate] = []
    for entry in index:
        score = score_document(normalized_message, message_tokens, entry)
        if score + _EPSILON >= INCLUSION_FLOOR:
            candidates.append(RouteCandidate(id=entry.id, title=entry.title, score=score))

    candidates.sort(key=lambda candidate: candidate.score, reverse=True)
    return candidates


def is_confident(candidates: Sequence[RouteCandidate]) -> bool:
    """Apply the gap/floor rule to candidates already sorted best first."""

    if not candidates:
        return False
    if len(candidates) == 1:
        return True

    top, second = candidates[0], candidates[1]
    if top.score - second.score + _EPSILON >= CONFIDENCE_GAP:
        return True
    return top.score + _EPSILON >= HIGH_CONFIDENCE_FLOOR


def route(message: str, index: Sequence[IndexedDocument]) -> RouteResult:
    """Decide which document, if any, ``message`` is asking about."""

    candidates = rank_candidates(message, index)
    if not candidates:
        return NoMatch()

    if is_confident(candidates):
        top = candidates[0]
        return Confident(id=top.id, title=top.title)

    return Ambiguous(candidates=tuple(candidates[:MAX_AMBIGUOUS_CANDIDATES]))
