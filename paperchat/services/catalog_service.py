from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from paperchat.clients.base import ClientError
from paperchat.clients.content import ContentClient
from paperchat.core.index import DocumentLike, build_index, coerce_documents
from paperchat.core.models import PERSONAL_CONTEXT_ID, Document, IndexedDocument
from paperchat.exceptions import PaperListLoadError

logger = logging.getLogger(__name__)


class DocumentCatalog:
    """Holds the paper list and the routing index derived from it.

    The index is rebuilt wholesale each time the documents change; entries are
    never patched in place.
    """

    def __init__(
        self,
        content_client: Optional[ContentClient] = None,
        *,
        feed_locator: str = "papers.json",
    ) -> None:
        self.content_client = content_client or ContentClient()
        self.feed_locator = feed_locator
        self._documents: Dict[str, Document] = {}
        self._index: List[IndexedDocument] = []

    @property
    def documents(self) -> List[Document]:
        return list(self._documents.values())

    @property
    def index(self) -> List[IndexedDocument]:
        return self._index

    def load(self) -> List[Document]:
        """Fetch the document list feed and rebuild the index.

        Raises:
            PaperListLoadError: If the feed cannot be fetched or is not a list.
        """

        try:
            payload = self.content_client.fetch_json(self.feed_locator)
        except ClientError as exc:
            logger.warning("Failed to load document list from %s: %s", self.feed_locator, exc)
            raise PaperListLoadError(f"Could not load the list of research papers. {exc}") from exc

        if not isinstance(payload, list):
            raise PaperListLoadError(
                "Could not load the list of research papers. The feed is not a list."
            )

        self.replace(payload)
        logger.info("Loaded %d documents and built the search index", len(self._documents))
        return self.documents

    def replace(self, documents: Iterable[DocumentLike]) -> None:
        """Swap in a new document list, discarding the previous index."""

        parsed = coerce_documents(documents)
        # Titles without matchable text stay selectable but are never routed to.
        by_id: Dict[str, Document] = {}
        for document in parsed:
            if document.id and document.title:
                by_id.setdefault(document.id, document)
        self._documents = by_id
        self._index = build_index(parsed)

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def label(self, context_id: str) -> str:
        """Human-readable label for a context id."""

        if context_id == PERSONAL_CONTEXT_ID:
            return "Personal Context"
        document = self.get(context_id)
        return f"Paper: {document.title if document else context_id}"

