import sys
from pathlib import Path

import pytest

# Ensure repository root is on the import path for local package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from paperchat.clients.base import NotFoundError  # noqa: E402


class StubContentClient:
    """In-memory stand-in for :class:`ContentClient` that counts fetches."""

    def __init__(self, texts=None, json_documents=None):
        self.texts = dict(texts or {})
        self.json_documents = dict(json_documents or {})
        self.fetches = []

    def fetch_text(self, locator):
        self.fetches.append(locator)
        if locator not in self.texts:
            raise NotFoundError(f"File not found: {locator}")
        return self.texts[locator]

    def fetch_json(self, locator):
        self.fetches.append(locator)
        if locator not in self.json_documents:
            raise NotFoundError(f"File not found: {locator}")
        return self.json_documents[locator]

    def count(self, locator):
        return self.fetches.count(locator)


@pytest.fixture
def stub_content():
    return StubContentClient(
        texts={"context.txt": "Name: Jordan Doe\nRole: Lecturer"},
        json_documents={"papers.json": []},
    )
