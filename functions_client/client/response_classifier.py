"""
functions_client/client/response_classifier.py

WHAT THIS FILE IS FOR
---------------------
This module defines the *single canonical rule* for deciding whether a
function invocation response is a success or one of the classified
failures.

Order of checks (first match wins):

1) No usable status code      -> FunctionsBadServerResponseError
2) Status outside [200, 300)  -> FunctionsHttpError(status_code, raw body)
3) `x-relay-error` == "true"  -> FunctionsRelayError (even on 2xx)
4) Otherwise                  -> success (returns None)

RELAY HEADER MATCHING
---------------------
The header *name* is looked up case-insensitively (HTTP semantics).
The header *value* must be exactly the string "true". "True", "1",
"yes" and so on are NOT relay errors. The upstream contract defines
only that literal.

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Perform I/O or logging
- Decode successful bodies
- Catch transport exceptions

Both clients (async and sync) call into here so the two can never
drift apart.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from functions_client.client.errors import (
    FunctionsBadServerResponseError,
    FunctionsHttpError,
    FunctionsRelayError,
)
from functions_client.utils.headers import get_header

RELAY_ERROR_HEADER = "x-relay-error"


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_relay_error(headers: Mapping[str, str]) -> bool:
    return get_header(headers, RELAY_ERROR_HEADER) == "true"


def classify_response(
    *,
    status_code: Optional[Any],
    headers: Mapping[str, str],
    body: bytes,
) -> None:
    """
    Raise the matching FunctionsError, or return None on success.

    `status_code` is typed loosely on purpose: injected transports may
    hand back objects without a real integer status.
    """
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise FunctionsBadServerResponseError()

    if not is_success_status(status_code):
        raise FunctionsHttpError(status_code=status_code, body=body)

    if is_relay_error(headers):
        raise FunctionsRelayError(status_code=status_code)
