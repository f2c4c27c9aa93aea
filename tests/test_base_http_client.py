from __future__ import annotations

from typing import Any, Iterable, Optional

import pytest
import requests

import paperchat.clients.base as base
from paperchat.clients.base import (
    BaseHttpClient,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    RequestRejectedError,
    RetryableResponseError,
    UnauthorizedError,
    UpstreamError,
)


class _StubSession:
    def __init__(self, responses: Iterable[Any]):
        self._responses = list(responses)
        self.headers: dict[str, str] = {}
        self.calls = 0
        self.urls: list[str] = []

    def request(self, method: str, url: str, timeout: float = 0, **_: Any):
        self.calls += 1
        self.urls.append(url)
        try:
            outcome = self._responses[self.calls - 1]
        except IndexError:
            outcome = self._responses[-1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class _DummyClient(BaseHttpClient):
    BASE_URL = "https://example.test"

    def __init__(self, responses: Iterable[Any], max_attempts: int = 1):
        super().__init__(session=_StubSession(responses), max_attempts=max_attempts)

    @property
    def stub_session(self) -> _StubSession:
        return self.session  # type: ignore[return-value]


class _Outcome:
    def __init__(self, exception: Exception):
        self.failed = True
        self._exception = exception

    def exception(self) -> Exception:
        return self._exception


class _RetryState:
    def __init__(self, attempt_number: int, outcome: Optional[_Outcome]):
        self.attempt_number = attempt_number
        self.outcome = outcome


def _make_response(status: int, body: str = "", headers: Optional[dict[str, str]] = None):
    response = requests.Response()
    response.status_code = status
    response._content = body.encode()
    response.url = "https://example.test/resource"
    response.headers.update(headers or {})
    response.encoding = "utf-8"
    return response


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(base, "_fallback_wait", lambda _state: 0.0)


def test_retry_wait_respects_retry_after_header():
    response = _make_response(429, headers={"Retry-After": "5"})
    retry_state = _RetryState(1, _Outcome(RetryableResponseError(response)))

    assert base._retry_wait(retry_state) == 5


def test_default_client_sends_once_and_reports_failure():
    server_error = _make_response(503)
    client = _DummyClient([server_error, server_error])

    with pytest.raises(UpstreamError):
        client._request("GET", "/resource")

    assert client.stub_session.calls == 1


def test_http_429_with_retry_budget_retries_then_raises_rate_limited():
    rate_limited = _make_response(429, headers={"Retry-After": "0"})
    client = _DummyClient([rate_limited, rate_limited, rate_limited], max_attempts=3)

    with pytest.raises(RateLimitedError) as excinfo:
        client._request("GET", "/resource")

    assert excinfo.value.retry_after == 0
    assert client.stub_session.calls == 3


def test_http_500_with_retry_budget_recovers(no_backoff):
    client = _DummyClient([_make_response(500), _make_response(200, body="ok")], max_attempts=3)

    response = client._request("GET", "/resource")

    assert response.text == "ok"
    assert client.stub_session.calls == 2


def test_network_error_raises_upstream_error():
    client = _DummyClient([requests.ConnectionError("boom")])

    with pytest.raises(UpstreamError) as excinfo:
        client._request("GET", "/resource")

    assert "boom" in str(excinfo.value)


def test_absolute_url_bypasses_base_url():
    client = _DummyClient([_make_response(200, body="ok")])

    client._request("GET", "https://other.test/file.txt")
    client_relative = _DummyClient([_make_response(200, body="ok")])
    client_relative._request("GET", "/file.txt")

    assert client.stub_session.urls == ["https://other.test/file.txt"]
    assert client_relative.stub_session.urls == ["https://example.test/file.txt"]


def test_http_400_raises_request_rejected_error():
    response = _make_response(400, body="Bad request details" + "!" * 500)
    client = _DummyClient([response])

    with pytest.raises(RequestRejectedError) as excinfo:
        client._handle_response(response)

    assert excinfo.value.status == 400
    assert excinfo.value.body_excerpt is not None
    assert len(excinfo.value.body_excerpt) <= 200
    assert "Bad request details" in excinfo.value.body_excerpt


def test_http_401_and_403_raise_specific_rejection_errors():
    unauthorized = _make_response(401, body="token expired")
    forbidden = _make_response(403, body="denied")
    client = _DummyClient([unauthorized, forbidden])

    with pytest.raises(UnauthorizedError):
        client._handle_response(unauthorized)

    with pytest.raises(ForbiddenError):
        client._handle_response(forbidden)


def test_http_404_raises_not_found():
    response = _make_response(404)
    client = _DummyClient([response])

    with pytest.raises(NotFoundError):
        client._handle_response(response)
