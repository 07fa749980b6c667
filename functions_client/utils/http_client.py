"""
functions_client/utils/http_client.py

WHAT THIS FILE IS FOR
---------------------
This module holds the transport-level pieces the function clients send
their requests through.

It exists to:
- Centralize how transports are built (timeouts)
- Keep raw `requests.post(...)` / `httpx.AsyncClient(...)` calls out of
  the client classes
- Give tests one obvious seam to monkeypatch

This module is intentionally kept *very thin*.

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Retry logic
- Logging
- Response classification (see client/response_classifier.py)
- Decoding payloads

RELATIONSHIP TO THE CLIENTS
---------------------------
- FunctionsClient (async):
    * httpx.AsyncClient, built here when none is injected
- SyncFunctionsClient (blocking):
    * HttpClient below (requests), or an injected requests.Session
"""

from __future__ import annotations

from typing import Mapping, Optional, Tuple, Union

import httpx
import requests

# Timeout can be:
# - single float -> applied to both connect + read
# - (connect_timeout, read_timeout)
TimeoutType = Union[float, Tuple[float, float]]


def build_async_client(timeout_seconds: TimeoutType = 60) -> httpx.AsyncClient:
    """
    Create an `httpx.AsyncClient` for a single invocation.

    A tuple timeout is split into httpx's connect / read components.
    """
    if isinstance(timeout_seconds, tuple):
        connect, read = timeout_seconds
        timeout = httpx.Timeout(read, connect=connect)
    else:
        timeout = httpx.Timeout(timeout_seconds)
    return httpx.AsyncClient(timeout=timeout)


class HttpClient:
    """
    Minimal synchronous HTTP client wrapper over `requests`.

    It intentionally:
    - Does NOT add retries
    - Does NOT add logging
    - Does NOT interpret response payloads

    TIMEOUT SEMANTICS
    -----------------
    `timeout_seconds` is passed directly to requests:
    - float -> used for both connect + read
    - (connect, read) tuple -> split behavior
    """

    def __init__(
        self,
        timeout_seconds: TimeoutType = 60,
        session: Optional[requests.Session] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.session = session

    def post(
        self,
        url: str,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: Optional[TimeoutType] = None,
    ) -> requests.Response:
        """
        Send a POST request with a raw body.

        Raises:
            requests.RequestException:
                Any network-level error (timeout, DNS, connection error).
                Propagated unchanged to the caller.
        """
        sender = self.session.post if self.session is not None else requests.post
        return sender(
            url,
            data=body,
            headers=dict(headers or {}),
            timeout=timeout_seconds if timeout_seconds is not None else self.timeout_seconds,
        )
