# tests/test_sync_functions_client.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from structlog.testing import capture_logs

import functions_client.utils.http_client as http_mod
from functions_client import (
    FunctionInvokeOptions,
    FunctionsDecodeError,
    FunctionsHttpError,
    FunctionsRelayError,
    SyncFunctionsClient,
    __version__,
)

BASE_URL = "https://project.example.test/functions/v1"


class _FakeResponse:
    def __init__(self, status_code: int, content: bytes = b"", headers: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self.content = content
        self.headers = CaseInsensitiveDict(headers or {})


class _FakeSession:
    """Mimics requests.Session.post(url, data=..., headers=..., timeout=...)."""

    def __init__(self, response: _FakeResponse):
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, *, data: bytes, headers: Dict[str, str], timeout: Any) -> _FakeResponse:
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        return self.response


def test_invoke_sends_post_with_merged_headers_and_body() -> None:
    session = _FakeSession(_FakeResponse(200))
    client = SyncFunctionsClient(BASE_URL, {"apikey": "k"}, session=session, timeout_seconds=5)  # type: ignore[arg-type]
    client.set_auth("abc")

    assert client.invoke("hello", FunctionInvokeOptions(body=b"hi")) is None

    call = session.calls[0]
    assert call["url"] == f"{BASE_URL}/hello"
    assert call["data"] == b"hi"
    assert call["timeout"] == 5
    assert call["headers"] == {
        "apikey": "k",
        "X-Client-Info": f"functions-py/{__version__}",
        "Authorization": "Bearer abc",
    }


def test_per_call_authorization_overrides_stored_token() -> None:
    session = _FakeSession(_FakeResponse(200))
    client = SyncFunctionsClient(BASE_URL, session=session)  # type: ignore[arg-type]
    client.set_auth("stored")

    client.invoke("fn", FunctionInvokeOptions(headers={"Authorization": "Bearer override"}))

    assert session.calls[0]["headers"]["Authorization"] == "Bearer override"


def test_invoke_json_decodes_success_body() -> None:
    session = _FakeSession(_FakeResponse(200, b'{"x": 1}'))
    client = SyncFunctionsClient(BASE_URL, session=session)  # type: ignore[arg-type]

    assert client.invoke_json("fn", Dict[str, int]) == {"x": 1}


def test_invoke_json_raises_decode_error_on_shape_mismatch() -> None:
    session = _FakeSession(_FakeResponse(200, b'{"x": "not-a-number"}'))
    client = SyncFunctionsClient(BASE_URL, session=session)  # type: ignore[arg-type]

    with pytest.raises(FunctionsDecodeError):
        client.invoke_json("fn", Dict[str, int])


def test_http_error_carries_status_and_body() -> None:
    session = _FakeSession(_FakeResponse(404, b"not found"))
    client = SyncFunctionsClient(BASE_URL, session=session)  # type: ignore[arg-type]

    with pytest.raises(FunctionsHttpError) as excinfo:
        client.invoke("fn")

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == b"not found"


def test_relay_error_header_lookup_ignores_name_case() -> None:
    session = _FakeSession(_FakeResponse(200, b"{}", {"X-Relay-Error": "true"}))
    client = SyncFunctionsClient(BASE_URL, session=session)  # type: ignore[arg-type]

    with pytest.raises(FunctionsRelayError) as excinfo:
        client.invoke("fn")

    assert excinfo.value.status_code == 200


def test_default_transport_uses_requests_post(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Dict[str, Any]] = []

    def _fake_post(url: str, *, data: bytes, headers: Dict[str, str], timeout: Any) -> _FakeResponse:
        calls.append({"url": url, "timeout": timeout})
        return _FakeResponse(200, b'"pong"')

    monkeypatch.setattr(http_mod.requests, "post", _fake_post)

    client = SyncFunctionsClient(BASE_URL, timeout_seconds=(3.0, 30.0))
    out = client.invoke_json("ping", str)

    assert out == "pong"
    assert calls == [{"url": f"{BASE_URL}/ping", "timeout": (3.0, 30.0)}]


def test_transport_error_propagates_unchanged(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(*args: Any, **kwargs: Any) -> None:
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(http_mod.requests, "post", _fail)

    client = SyncFunctionsClient(BASE_URL)

    with pytest.raises(requests.ConnectionError):
        client.invoke("fn")


def test_raw_decoder_failure_logs_decode_error_event() -> None:
    session = _FakeSession(_FakeResponse(200, b"x"))
    client = SyncFunctionsClient(BASE_URL, session=session)  # type: ignore[arg-type]

    def _decode(data: bytes, response: Any) -> str:
        raise ValueError("cannot decode")

    with capture_logs() as logs:
        with pytest.raises(ValueError):
            client.invoke("fn", decode=_decode)

    events = [entry["event"] for entry in logs]
    assert "function_invoke_decode_error" in events
    assert "function_invoke_transport_error" not in events
