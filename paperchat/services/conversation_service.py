from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from paperchat.clients.completion import CompletionClient
from paperchat.core.events import (
    AssistantReply,
    ContextSwitched,
    CriticalContextFailure,
    DisambiguationNeeded,
    PaperListWarning,
    RequestFailed,
    SessionEvent,
    SessionListener,
    WelcomeMessage,
)
from paperchat.core.models import (
    PERSONAL_CONTEXT_ID,
    Ambiguous,
    Confident,
    ConversationTurn,
    Document,
    RouteCandidate,
    RouteResult,
)
from paperchat.core.prompts import disambiguation_message, welcome_message
from paperchat.core.router import route
from paperchat.core.session import ConversationLog
from paperchat.exceptions import ContextLoadError, PaperChatError, PaperListLoadError

from .catalog_service import DocumentCatalog
from .context_resolver_service import ContextResolver

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    READY = "ready"
    AWAITING_DISAMBIGUATION = "awaiting_disambiguation"
    ERROR = "error"


class SendStatus(str, Enum):
    IGNORED = "ignored"
    REPLIED = "replied"
    DISAMBIGUATION = "disambiguation"
    FAILED = "failed"


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single :meth:`ConversationSession.send` call."""

    status: SendStatus
    context_id: str
    reply: Optional[str] = None
    route: Optional[RouteResult] = None
    candidates: Tuple[RouteCandidate, ...] = ()
    error: Optional[PaperChatError] = None


class ConversationSession:
    """Drive a conversation against the personal profile or one paper.

    The session owns the active context, the turn log and the in-flight guard.
    It never renders anything: every user-visible outcome is emitted to the
    registered listeners as an event value and summarized in the returned
    :class:`SendResult`.

    While the active context is the personal one and ``auto_route`` is on,
    each message is routed first. A confident match switches the active
    context to that paper for this and later turns; an ambiguous match asks
    the user to choose and sends nothing; no match keeps the personal context.
    Each request carries exactly one system turn and the current user message;
    earlier turns stay in :attr:`history` but are not replayed.
    """

    def __init__(
        self,
        catalog: DocumentCatalog,
        resolver: ContextResolver,
        completion: CompletionClient,
        *,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        auto_route: bool = True,
        listeners: Iterable[SessionListener] = (),
    ) -> None:
        self.catalog = catalog
        self.resolver = resolver
        self.completion = completion
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.auto_route = auto_route
        self._listeners: List[SessionListener] = list(listeners)
        self._log = ConversationLog()
        self._state = SessionState.IDLE
        self._active_context_id = PERSONAL_CONTEXT_ID
        self._pending_candidates: Tuple[RouteCandidate, ...] = ()
        self._busy = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def active_context_id(self) -> str:
        return self._active_context_id

    @property
    def history(self) -> Tuple[ConversationTurn, ...]:
        return self._log.snapshot()

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def pending_candidates(self) -> Tuple[RouteCandidate, ...]:
        return self._pending_candidates

    @property
    def documents(self) -> List[Document]:
        return self.catalog.documents

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def context_label(self, context_id: Optional[str] = None) -> str:
        return self.catalog.label(context_id or self._active_context_id)

    def start(self) -> None:
        """Begin a new conversation, keeping cached contexts and the index."""

        if self._busy:
            return

        self._log.reset()
        self._active_context_id = PERSONAL_CONTEXT_ID
        self._pending_candidates = ()
        self._state = SessionState.INITIALIZING
        self._busy = True
        try:
            self.resolver.resolve_personal()
        except ContextLoadError as exc:
            logger.error("Error starting new chat: %s", exc)
            self._emit(CriticalContextFailure(f"Could not load initial context. {exc}"))
        else:
            logger.info("New chat started. Personal context loaded.")
            self._emit(WelcomeMessage(welcome_message(self.resolver.owner_name)))
        finally:
            self._busy = False
            self._state = SessionState.READY

    def load_documents(self) -> List[Document]:
        """Load the paper list; a failure is reported as a warning event."""

        try:
            return self.catalog.load()
        except PaperListLoadError as exc:
            self._emit(PaperListWarning(str(exc)))
            return []

    def select_context(self, context_id: str) -> None:
        """Explicitly choose the personal context or a paper for later turns."""

        if not context_id or not context_id.strip():
            raise ValueError("context_id must be a non-empty string")

        context_id = context_id.strip()
        self._pending_candidates = ()
        if self._state is SessionState.AWAITING_DISAMBIGUATION:
            self._state = SessionState.READY
        self._switch_context(context_id, automatic=False)

    def send(
        self,
        message: str,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> SendResult:
        """Answer one user message.

        Blank messages and messages sent while another request is in flight are
        ignored without side effects.
        """

        message = (message or "").strip()
        if not message or self._busy:
            return SendResult(status=SendStatus.IGNORED, context_id=self._active_context_id)

        self._busy = True
        routed: Optional[RouteResult] = None
        try:
            if self.auto_route and self._active_context_id == PERSONAL_CONTEXT_ID:
                routed = route(message, self.catalog.index)
                if isinstance(routed, Ambiguous):
                    return self._ask_for_disambiguation(routed)
                if isinstance(routed, Confident):
                    self._switch_context(routed.id, automatic=True)

            self._pending_candidates = ()
            context_id = self._active_context_id
            entry = self.resolver.resolve(context_id)
            messages = [
                {"role": "system", "content": entry.prompt_text},
                {"role": "user", "content": message},
            ]
            reply = self.completion.complete(
                messages,
                temperature=self.temperature if temperature is None else temperature,
                max_tokens=self.max_tokens if max_tokens is None else max_tokens,
            )
        except PaperChatError as exc:
            logger.warning("Error in send: %s", exc)
            self._state = SessionState.ERROR
            self._emit(RequestFailed(str(exc), error=exc))
            self._state = SessionState.READY
            return SendResult(
                status=SendStatus.FAILED,
                context_id=self._active_context_id,
                route=routed,
                error=exc,
            )
        finally:
            self._busy = False

        self._log.record_exchange(message, reply)
        self._state = SessionState.READY
        self._emit(AssistantReply(reply, context_id=context_id))
        return SendResult(status=SendStatus.REPLIED, context_id=context_id, reply=reply, route=routed)

    def _ask_for_disambiguation(self, routed: Ambiguous) -> SendResult:
        self._pending_candidates = routed.candidates
        self._state = SessionState.AWAITING_DISAMBIGUATION
        self._emit(DisambiguationNeeded(routed.candidates, disambiguation_message(routed.titles)))
        return SendResult(
            status=SendStatus.DISAMBIGUATION,
            context_id=self._active_context_id,
            route=routed,
            candidates=routed.candidates,
        )

    def _switch_context(self, context_id: str, *, automatic: bool) -> None:
        self._active_context_id = context_id
        label = self.catalog.label(context_id)
        logger.info("Switched to %s%s", label, " (auto)" if automatic else "")
        self._emit(ContextSwitched(context_id=context_id, label=label, automatic=automatic))

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
