"""Client for fetching context documents and the document list feed."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urljoin

import requests

from .base import BaseHttpClient, ClientError, NotFoundError, is_absolute_url

logger = logging.getLogger(__name__)


class ContentClient(BaseHttpClient):
    """Fetch plain-text and JSON resources by locator.

    A locator is either an absolute ``http(s)`` URL, or a relative reference.
    Relative references are joined to ``base_url`` when one is configured and
    fetched over HTTP; otherwise they are read from the filesystem below
    ``root`` (the working directory by default).
    """

    def __init__(
        self,
        *,
        root: Union[str, Path, None] = None,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        max_attempts: int = 1,
    ) -> None:
        super().__init__(session=session, base_url=base_url, timeout=timeout, max_attempts=max_attempts)
        self.root = Path(root) if root is not None else Path.cwd()

    def resolve(self, locator: str) -> Union[str, Path]:
        """Return the URL or filesystem path a locator points to."""

        if is_absolute_url(locator):
            return locator
        if self.base_url:
            base = self.base_url if self.base_url.endswith("/") else f"{self.base_url}/"
            return urljoin(base, locator.lstrip("/"))
        path = Path(locator).expanduser()
        return path if path.is_absolute() else self.root / path

    def fetch_text(self, locator: str) -> str:
        """Return the text behind ``locator``.

        Raises:
            NotFoundError: If the resource does not exist.
            ClientError: For any other HTTP or filesystem failure.
        """

        target = self.resolve(locator)
        if isinstance(target, Path):
            return self._read_file(target)

        return self._get(target, accept="text/plain, */*").text

    def fetch_json(self, locator: str) -> Any:
        """Return the decoded JSON document behind ``locator``."""

        target = self.resolve(locator)
        try:
            if isinstance(target, Path):
                return json.loads(self._read_file(target))
            return self._get(target, accept="application/json, */*").json()
        except ValueError as exc:
            raise ClientError(f"Invalid JSON at {locator}: {exc}") from exc

    def _get(self, url: str, *, accept: str) -> requests.Response:
        response = self._request("GET", url, headers={"Accept": accept})
        # Bodies without a declared charset are UTF-8, not ISO-8859-1.
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response

    @staticmethod
    def _read_file(path: Path) -> str:
        logger.debug("Reading %s", path)
        if not path.is_file():
            raise NotFoundError(f"File not found: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ClientError(f"Could not read {path}: {exc}") from exc
