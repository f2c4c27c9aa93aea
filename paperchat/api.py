"""Wire configuration, clients and services into a conversation session.

Example
-------
```python
from paperchat.api import create_session

session = create_session(listeners=[print])
session.start()
session.load_documents()
result = session.send("What dataset does the Deep Learning for X paper use?")
print(result.status, result.reply)
```
"""

from __future__ import annotations

from typing import Iterable, Optional

import requests

from .clients.completion import CompletionClient
from .clients.content import ContentClient
from .config import ChatConfig
from .core.events import SessionListener
from .services.catalog_service import DocumentCatalog
from .services.context_resolver_service import ContextResolver
from .services.conversation_service import ConversationSession


def create_session(
    config: Optional[ChatConfig] = None,
    *,
    session: Optional[requests.Session] = None,
    content_client: Optional[ContentClient] = None,
    completion_client: Optional[CompletionClient] = None,
    listeners: Iterable[SessionListener] = (),
) -> ConversationSession:
    """Build a :class:`ConversationSession` from ``config`` (environment by default).

    Collaborators can be injected for testing; anything left out is built from
    the configuration and shares one HTTP session.
    """

    config = config or ChatConfig()
    http_session = session or config.build_http_session()

    content_client = content_client or ContentClient(
        root=config.content_root,
        session=http_session,
        base_url=config.content_base_url,
        timeout=config.request_timeout_s,
        max_attempts=config.max_attempts,
    )
    completion_client = completion_client or CompletionClient(
        config.completion_url,
        model=config.model,
        api_key=config.api_key,
        session=http_session,
        timeout=config.request_timeout_s,
    )

    catalog = DocumentCatalog(content_client, feed_locator=config.documents_feed)
    resolver = ContextResolver(
        content_client,
        catalog,
        personal_locator=config.personal_context,
        owner_name=config.owner_name,
        paper_text_dir=config.paper_text_dir,
        paper_text_ext=config.paper_text_ext,
    )
    return ConversationSession(
        catalog,
        resolver,
        completion_client,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        auto_route=config.auto_route,
        listeners=listeners,
    )
