"""Custom exception hierarchy for the paper chat assistant."""

from __future__ import annotations

from typing import Optional


class PaperChatError(Exception):
    """Base exception for assistant errors surfaced to the user."""


class ContextLoadError(PaperChatError):
    """Raised when the personal context is missing, unreadable or blank."""


class PaperListLoadError(PaperChatError):
    """Raised when the document list feed cannot be fetched or parsed."""


class PaperNotFoundError(PaperChatError):
    """Raised when a specific paper's content cannot be fetched."""

    def __init__(self, document_id: str, message: Optional[str] = None) -> None:
        super().__init__(message or "Could not load the context for the selected paper.")
        self.document_id = document_id


class CompletionServiceError(PaperChatError):
    """Raised when the completion service fails or returns an unusable reply."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
