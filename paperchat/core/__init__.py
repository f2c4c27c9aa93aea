"""Core data models, text normalization and routing for the assistant."""

from .index import build_index, index_document
from .models import (
    PERSONAL_CONTEXT_ID,
    Ambiguous,
    Confident,
    ContextEntry,
    ConversationTurn,
    Document,
    IndexedDocument,
    NoMatch,
    PaperContext,
    PersonalContext,
    RouteCandidate,
    RouteResult,
)
from .router import route, score_document
from .session import ConversationLog
from .text import STOPWORDS, normalize, token_set, tokenize

__all__ = [
    "PERSONAL_CONTEXT_ID",
    "STOPWORDS",
    "Ambiguous",
    "Confident",
    "ContextEntry",
    "ConversationLog",
    "ConversationTurn",
    "Document",
    "IndexedDocument",
    "NoMatch",
    "PaperContext",
    "PersonalContext",
    "RouteCandidate",
    "RouteResult",
    "build_index",
    "index_document",
    "normalize",
    "route",
    "score_document",
    "token_set",
    "tokenize",
]
