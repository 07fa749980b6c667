# tests/test_response_classifier.py
from __future__ import annotations

import pytest

from functions_client.client.errors import (
    FunctionsBadServerResponseError,
    FunctionsHttpError,
    FunctionsRelayError,
)
from functions_client.client.response_classifier import (
    classify_response,
    is_relay_error,
    is_success_status,
)


def test_is_success_status_bounds() -> None:
    assert is_success_status(200)
    assert is_success_status(204)
    assert is_success_status(299)
    assert not is_success_status(199)
    assert not is_success_status(300)
    assert not is_success_status(500)


def test_is_relay_error_requires_exact_true() -> None:
    assert is_relay_error({"x-relay-error": "true"})
    assert is_relay_error({"X-Relay-Error": "true"})
    assert not is_relay_error({"x-relay-error": "TRUE"})
    assert not is_relay_error({"x-relay-error": "1"})
    assert not is_relay_error({"x-relay-error": " true"})
    assert not is_relay_error({})


def test_classify_success_returns_none() -> None:
    assert classify_response(status_code=200, headers={}, body=b"{}") is None


@pytest.mark.parametrize("status_code", [None, "200", 200.0, True])
def test_classify_without_integer_status_is_bad_server_response(status_code) -> None:
    with pytest.raises(FunctionsBadServerResponseError):
        classify_response(status_code=status_code, headers={}, body=b"")


def test_classify_non_2xx_is_http_error_with_raw_body() -> None:
    with pytest.raises(FunctionsHttpError) as excinfo:
        classify_response(status_code=500, headers={}, body=b"boom")

    assert excinfo.value.status_code == 500
    assert excinfo.value.body == b"boom"


def test_classify_relay_header_on_2xx_is_relay_error() -> None:
    with pytest.raises(FunctionsRelayError):
        classify_response(status_code=200, headers={"x-relay-error": "true"}, body=b"")


def test_classify_checks_status_before_relay_header() -> None:
    with pytest.raises(FunctionsHttpError):
        classify_response(status_code=503, headers={"x-relay-error": "true"}, body=b"")
