from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Set, Union

from .models import Document, IndexedDocument
from .text import normalize, token_set

logger = logging.getLogger(__name__)

DocumentLike = Union[Document, Mapping[str, Any]]


def coerce_documents(items: Iterable[DocumentLike]) -> List[Document]:
    """Turn feed records into documents, skipping malformed ones with a warning."""

    documents: List[Document] = []
    for position, item in enumerate(items):
        if isinstance(item, Document):
            documents.append(item)
            continue
        try:
            documents.append(Document.from_record(item))
        except ValueError as exc:
            logger.warning("Skipping document #%s: %s", position, exc)
    return documents


def index_document(document: Document) -> IndexedDocument:
    """Precompute the normalized title, title tokens and aliases of a document."""

    aliases = tuple(alias for alias in (normalize(a) for a in document.aliases) if alias)
    return IndexedDocument(
        id=document.id,
        title=document.title,
        normalized_title=normalize(document.title),
        title_tokens=token_set(document.title),
        normalized_aliases=aliases,
    )


def build_index(documents: Iterable[DocumentLike]) -> List[IndexedDocument]:
    """Build a fresh routing index from documents or raw feed records.

    Malformed entries (missing id or title, a title without any matchable
    text, or a repeated id) are skipped with a warning so a single bad record
    does not take the whole index down.
    """

    index: List[IndexedDocument] = []
    seen: Set[str] = set()
    for document in coerce_documents(documents):
        if not document.id or not document.title:
            logger.warning("Skipping document %r: missing id or title", document.id)
            continue
        if document.id in seen:
            logger.warning("Skipping duplicate document id %r", document.id)
            continue

        entry = index_document(document)
        if not entry.normalized_title:
            logger.warning("Skipping document %r: title has no matchable text", document.id)
            continue

        seen.add(document.id)
        index.append(entry)
    return index
