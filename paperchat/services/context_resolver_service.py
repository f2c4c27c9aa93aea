from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from paperchat.clients.base import ClientError
from paperchat.clients.content import ContentClient
from paperchat.core.models import PERSONAL_CONTEXT_ID, ContextEntry, PaperContext, PersonalContext
from paperchat.core.prompts import build_paper_prompt, build_personal_prompt
from paperchat.exceptions import ContextLoadError, PaperNotFoundError

from .catalog_service import DocumentCatalog

logger = logging.getLogger(__name__)

PERSONAL_NOT_LOADED_MESSAGE = "Personal context is not loaded. Cannot answer the question."


class ContextResolver:
    """Map context ids to system prompts, fetching each source at most once.

    The personal context is fetched by :meth:`resolve_personal` and kept for the
    lifetime of the resolver. Paper prompts are fetched on first use and cached
    by document id; the cache is never invalidated, so a paper's text is read
    once per process even if the underlying file changes.
    """

    def __init__(
        self,
        content_client: ContentClient,
        catalog: DocumentCatalog,
        *,
        personal_locator: str = "context.txt",
        owner_name: str = "Md Shahidul Salim",
        paper_text_dir: str = "paper_text",
        paper_text_ext: str = "txt",
    ) -> None:
        self.content_client = content_client
        self.catalog = catalog
        self.personal_locator = personal_locator
        self.owner_name = owner_name
        self.paper_text_dir = paper_text_dir.rstrip("/")
        self.paper_text_ext = paper_text_ext.lstrip(".")
        self._personal_text: Optional[str] = None
        self._paper_prompts: Dict[str, str] = {}

    @property
    def personal_loaded(self) -> bool:
        return self._personal_text is not None

    @property
    def cached_ids(self) -> Tuple[str, ...]:
        return tuple(self._paper_prompts)

    def is_cached(self, document_id: str) -> bool:
        return document_id in self._paper_prompts

    def resolve_personal(self) -> str:
        """Return the personal context text, fetching it on first use.

        Raises:
            ContextLoadError: If the fetch fails or the text is blank.
        """

        if self._personal_text is not None:
            return self._personal_text

        try:
            text = self.content_client.fetch_text(self.personal_locator)
        except ClientError as exc:
            raise ContextLoadError(
                f"Failed to load {self.personal_locator} ({exc})"
            ) from exc

        if not text.strip():
            raise ContextLoadError(
                f"{self.personal_locator} is empty. The chatbot cannot answer personal questions."
            )

        self._personal_text = text
        logger.info("Personal context loaded from %s", self.personal_locator)
        return text

    def personal_prompt(self) -> str:
        """Return the personal system prompt without fetching anything."""

        if self._personal_text is None:
            raise ContextLoadError(PERSONAL_NOT_LOADED_MESSAGE)
        return build_personal_prompt(self._personal_text, owner_name=self.owner_name)

    def paper_locator(self, document_id: str) -> str:
        document = self.catalog.get(document_id)
        if document is not None and document.content_locator:
            return document.content_locator
        return f"{self.paper_text_dir}/{document_id}.{self.paper_text_ext}"

    def resolve_paper(self, document_id: str) -> str:
        """Return the system prompt for one paper, fetching its text on first use.

        Raises:
            PaperNotFoundError: If the paper's text cannot be fetched. The cache
                is left untouched so a later call tries again.
        """

        cached = self._paper_prompts.get(document_id)
        if cached is not None:
            logger.debug("Loading paper %s from cache", document_id)
            return cached

        locator = self.paper_locator(document_id)
        try:
            paper_text = self.content_client.fetch_text(locator)
        except ClientError as exc:
            logger.warning("Error fetching paper prompt for %s from %s: %s", document_id, locator, exc)
            raise PaperNotFoundError(document_id) from exc

        prompt = build_paper_prompt(paper_text)
        self._paper_prompts[document_id] = prompt
        logger.info("Fetched and cached paper %s", document_id)
        return prompt

    def resolve(self, context_id: str) -> ContextEntry:
        """Resolve a context id to the entry whose prompt grounds the next request."""

        if context_id == PERSONAL_CONTEXT_ID:
            prompt = self.personal_prompt()
            return PersonalContext(text=self._personal_text or "", prompt_text=prompt)
        return PaperContext(document_id=context_id, prompt_text=self.resolve_paper(context_id))
