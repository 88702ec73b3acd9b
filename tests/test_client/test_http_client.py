"""Tests for HttpxHTTPClient."""

from __future__ import annotations

import httpx
import pytest

from helpers import ANY_URL
from imagefeed.client import HttpxHTTPClient
from imagefeed.models import RequestConfig

TIMEOUT = 2


def _client_for(handler) -> HttpxHTTPClient:
    return HttpxHTTPClient(transport=httpx.MockTransport(handler))


class TestGet:
    def test_sends_get_to_url(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"ok")

        with _client_for(handler) as client:
            response = client.get(ANY_URL).result(timeout=TIMEOUT)

        assert [(r.method, str(r.url)) for r in seen] == [("GET", ANY_URL)]
        assert response.status_code == 200
        assert response.content == b"ok"

    @pytest.mark.parametrize("status", [201, 304, 404, 500])
    def test_error_statuses_are_responses(self, status: int) -> None:
        with _client_for(lambda request: httpx.Response(status)) as client:
            response = client.get(ANY_URL).result(timeout=TIMEOUT)
        assert response.status_code == status

    def test_transport_error_is_future_exception(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client_for(handler) as client:
            error = client.get(ANY_URL).exception(timeout=TIMEOUT)

        assert isinstance(error, httpx.ConnectError)

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/feed":
                return httpx.Response(301, headers={"location": "https://any-url.com/moved"})
            return httpx.Response(200, content=b"moved")

        with _client_for(handler) as client:
            response = client.get(ANY_URL).result(timeout=TIMEOUT)

        assert response.content == b"moved"


class TestLifecycle:
    def test_get_after_close_raises(self) -> None:
        client = _client_for(lambda request: httpx.Response(200))
        client.close()
        with pytest.raises(RuntimeError):
            client.get(ANY_URL)

    def test_close_is_idempotent(self) -> None:
        client = _client_for(lambda request: httpx.Response(200))
        client.close()
        client.close()

    def test_context_manager_closes(self) -> None:
        with _client_for(lambda request: httpx.Response(200)) as client:
            pass
        with pytest.raises(RuntimeError):
            client.get(ANY_URL)

    def test_applies_request_config(self) -> None:
        client = HttpxHTTPClient(RequestConfig(timeout=5), transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        try:
            assert client._client.timeout == httpx.Timeout(5)
        finally:
            client.close()
