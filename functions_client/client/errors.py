"""
functions_client/client/errors.py

WHAT THIS FILE IS FOR
---------------------
Error taxonomy raised by the function invocation clients.

Every failure the client itself detects derives from `FunctionsError`:

- FunctionsBadServerResponseError -> response carried no usable status
- FunctionsHttpError              -> status outside [200, 300)
- FunctionsRelayError             -> 2xx, but `x-relay-error: true`
- FunctionsDecodeError            -> success body could not be decoded

Transport failures (DNS, connect, timeout) are NOT wrapped. They surface
as the transport's own exception types (`httpx.RequestError`,
`requests.RequestException`) so callers can keep using the handling
they already have for those libraries.
"""

from __future__ import annotations

from typing import Optional


class FunctionsError(Exception):
    """Base class for every classified invocation failure."""


class FunctionsBadServerResponseError(FunctionsError):
    def __init__(self, message: str = "Bad server response: missing HTTP status code"):
        super().__init__(message)


class FunctionsHttpError(FunctionsError):
    """
    Non-2xx response from the function.

    The body is kept raw (bytes, undecoded) so the caller can inspect
    whatever error payload the function returned.
    """

    def __init__(self, status_code: int, body: bytes = b""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Function returned HTTP {status_code}")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class FunctionsRelayError(FunctionsError):
    def __init__(self, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__("Relay error: the relay reported a failure while invoking the function")


class FunctionsDecodeError(FunctionsError):
    def __init__(self, message: str, body: bytes = b""):
        self.body = body
        super().__init__(message)
