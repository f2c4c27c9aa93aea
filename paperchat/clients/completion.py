"""Client for an OpenAI-compatible chat completion endpoint."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

import requests

from paperchat.exceptions import CompletionServiceError

from .base import BaseHttpClient, ClientError, RequestRejectedError

EMPTY_REPLY_MESSAGE = "Received an empty or invalid response from the API."


def extract_reply(payload: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` when it is a non-empty string."""

    if not isinstance(payload, Mapping):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    message = first.get("message")
    if not isinstance(message, Mapping):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content:
        return None
    return content


class CompletionClient(BaseHttpClient):
    """Submit chat messages to a completion service and return the reply text.

    The request body follows the chat-completions shape::

        {"model": ..., "messages": [...], "temperature": ...,
         "max_tokens": ..., "stream": false}

    Completion requests are not idempotent, so they are always sent once
    regardless of ``max_attempts``.
    """

    def __init__(
        self,
        endpoint: Optional[str],
        *,
        model: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(session=session, timeout=timeout, max_attempts=1)
        self.endpoint = endpoint
        self.model = model
        self.api_key = api_key

    def build_payload(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [dict(message) for message in messages],
            "temperature": float(temperature),
            "max_tokens": int(max_tokens),
            "stream": False,
        }

    def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Send ``messages`` and return the assistant's reply.

        Raises:
            CompletionServiceError: If the endpoint is not configured, the
                request fails, or the response carries no reply text.
        """

        if not self.endpoint:
            raise CompletionServiceError("Completion endpoint is not configured.")

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = self.build_payload(messages, temperature=temperature, max_tokens=max_tokens)
        try:
            response = self._request("POST", self.endpoint, json=payload, headers=headers)
        except RequestRejectedError as exc:
            raise CompletionServiceError(f"API request failed: {exc}", status=exc.status) from exc
        except ClientError as exc:
            raise CompletionServiceError(f"API request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        reply = extract_reply(data)
        if reply is None:
            raise CompletionServiceError(EMPTY_REPLY_MESSAGE, status=response.status_code)
        return reply
