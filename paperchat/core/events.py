"""Values a conversation session emits for its UI collaborator to render."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .models import RouteCandidate


@dataclass(frozen=True)
class WelcomeMessage:
    content: str


@dataclass(frozen=True)
class ContextSwitched:
    """The active context changed, either by routing or by explicit selection."""

    context_id: str
    label: str
    automatic: bool = False

    @property
    def message(self) -> str:
        return f"Switched to {self.label}"


@dataclass(frozen=True)
class DisambiguationNeeded:
    candidates: Tuple[RouteCandidate, ...]
    content: str

    @property
    def titles(self) -> Tuple[str, ...]:
        return tuple(candidate.title for candidate in self.candidates)


@dataclass(frozen=True)
class CriticalContextFailure:
    message: str


@dataclass(frozen=True)
class PaperListWarning:
    message: str


@dataclass(frozen=True)
class AssistantReply:
    content: str
    context_id: str


@dataclass(frozen=True)
class RequestFailed:
    message: str
    error: Optional[Exception] = None


SessionEvent = Union[
    WelcomeMessage,
    ContextSwitched,
    DisambiguationNeeded,
    CriticalContextFailure,
    PaperListWarning,
    AssistantReply,
    RequestFailed,
]

SessionListener = Callable[[SessionEvent], None]
