from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Literal, Mapping, Optional, Tuple, Union

PERSONAL_CONTEXT_ID = "personal"


def _required_text(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"document record is missing a {key!r}")
    return value


@dataclass(frozen=True)
class Document:
    """A context document described by the document list feed.

    ``content_locator`` is the URL or path of the document's full text. When
    it is ``None`` the resolver derives a locator from the document id.
    """

    id: str
    title: str
    aliases: Tuple[str, ...] = ()
    content_locator: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Document":
        """Build a document from a feed record ``{id, title, aliases?, text?}``."""

        if not isinstance(record, Mapping):
            raise ValueError("document record must be a mapping")

        document_id = _required_text(record, "id").strip()
        title = _required_text(record, "title")

        raw_aliases = record.get("aliases")
        aliases: Tuple[str, ...] = ()
        if isinstance(raw_aliases, list):
            aliases = tuple(alias for alias in raw_aliases if isinstance(alias, str))

        locator = record.get("text")
        if not isinstance(locator, str) or not locator.strip():
            locator = None

        return cls(id=document_id, title=title, aliases=aliases, content_locator=locator)


@dataclass(frozen=True)
class IndexedDocument:
    """Precomputed matching data for a single document."""

    id: str
    title: str
    normalized_title: str
    title_tokens: FrozenSet[str] = field(default_factory=frozenset)
    normalized_aliases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RouteCandidate:
    id: str
    title: str
    score: float


@dataclass(frozen=True)
class NoMatch:
    """No document scored high enough to be considered."""


@dataclass(frozen=True)
class Confident:
    """A single document clearly matches the message."""

    id: str
    title: str


@dataclass(frozen=True)
class Ambiguous:
    """Several documents match closely; the user has to pick one."""

    candidates: Tuple[RouteCandidate, ...]

    @property
    def titles(self) -> Tuple[str, ...]:
        return tuple(candidate.title for candidate in self.candidates)


RouteResult = Union[NoMatch, Confident, Ambiguous]


@dataclass(frozen=True)
class PersonalContext:
    text: str
    prompt_text: str


@dataclass(frozen=True)
class PaperContext:
    document_id: str
    prompt_text: str


ContextEntry = Union[PersonalContext, PaperContext]


@dataclass(frozen=True)
class ConversationTurn:
    role: Literal["user", "assistant"]
    content: str


__all__ = [
    "PERSONAL_CONTEXT_ID",
    "Ambiguous",
    "Confident",
    "ContextEntry",
    "ConversationTurn",
    "Document",
    "IndexedDocument",
    "NoMatch",
    "PaperContext",
    "PersonalContext",
    "RouteCandidate",
    "RouteResult",
]
