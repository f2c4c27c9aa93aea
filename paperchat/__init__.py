"""Route questions to a personal profile or a research paper and ask a language model."""

from __future__ import annotations

from .api import create_session
from .config import ChatConfig
from .core.models import Ambiguous, Confident, Document, NoMatch, RouteResult
from .core.router import route
from .exceptions import (
    CompletionServiceError,
    ContextLoadError,
    PaperChatError,
    PaperListLoadError,
    PaperNotFoundError,
)
from .services.conversation_service import ConversationSession, SendResult, SendStatus, SessionState

__all__ = [
    "Ambiguous",
    "ChatConfig",
    "CompletionServiceError",
    "Confident",
    "ContextLoadError",
    "ConversationSession",
    "Document",
    "NoMatch",
    "PaperChatError",
    "PaperListLoadError",
    "PaperNotFoundError",
    "RouteResult",
    "SendResult",
    "SendStatus",
    "SessionState",
    "create_session",
    "route",
]
