"""Services coordinating documents, contexts and conversations."""

from .catalog_service import DocumentCatalog
from .context_resolver_service import ContextResolver
from .conversation_service import ConversationSession, SendResult, SendStatus, SessionState

__all__ = [
    "ContextResolver",
    "ConversationSession",
    "DocumentCatalog",
    "SendResult",
    "SendStatus",
    "SessionState",
]
