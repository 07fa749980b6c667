"""
functions_client/client/functions_client.py

WHAT THIS FILE IS FOR
---------------------
This module defines the asynchronous client for invoking remote
serverless functions over HTTP.

It is responsible for:
- Holding the functions base URL and the shared header set
  (client identification + bearer auth)
- Building one POST request per invocation
- Sending it through an httpx.AsyncClient
- Classifying the response (see response_classifier.py)
- Handing the successful body to the caller's decode strategy

CALL FLOW
---------
FunctionsClient.invoke(name, options, decode)
  -> POST <url>/<name>                 (merged headers, raw body)
  -> classify_response(...)            (bad response / HTTP / relay)
  -> decode(body_bytes, response)      (raw / JSON / void)

HEADER RULES
------------
- X-Client-Info is always set at construction and overwrites any
  caller-supplied value for that name.
- Authorization is only set through set_auth().
- Per-call headers (options.headers) win over client headers on a
  name collision. The client headers are copied at merge time, so a
  later set_auth() never changes a request that is already built.

CONCURRENCY
-----------
Invocations are independent coroutines and may complete in any order.
The header dict is shared, mutable state: the client is NOT safe for
calling set_auth() from another thread while invocations are being
built. Use separate clients, or per-call Authorization overrides, when
credentials must be isolated per call.

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Retry or back off
- Acquire or refresh tokens
- Manage connection pools / TLS (httpx's job)
- Stream responses
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
import structlog

from functions_client.client.decoders import Decoder, discard_body, json_decoder
from functions_client.client.errors import (
    FunctionsError,
    FunctionsHttpError,
    FunctionsRelayError,
)
from functions_client.client.response_classifier import classify_response
from functions_client.schemas.invoke_options import FunctionInvokeOptions
from functions_client.utils.headers import merge_headers, set_header
from functions_client.utils.http_client import TimeoutType, build_async_client
from functions_client.utils.settings import Settings
from functions_client.version import CLIENT_INFO

logger = structlog.get_logger(__name__)

T = TypeVar("T")

CLIENT_INFO_HEADER = "X-Client-Info"
AUTHORIZATION_HEADER = "Authorization"


class BaseFunctionsClient:
    """
    State and request-building shared by the async and sync clients.

    Nothing here performs I/O.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        *,
        timeout_seconds: TimeoutType = 60,
    ):
        self._url = str(url)
        self.timeout_seconds = timeout_seconds
        self.headers: Dict[str, str] = dict(headers or {})
        set_header(self.headers, CLIENT_INFO_HEADER, CLIENT_INFO)

    @property
    def url(self) -> str:
        return self._url

    def set_auth(self, token: str) -> None:
        """
        Update the bearer token sent with subsequent invocations.

        Args:
            token: JWT (or any opaque token). Not validated.
        """
        set_header(self.headers, AUTHORIZATION_HEADER, f"Bearer {token}")

    def _build_url(self, function_name: str) -> str:
        return f"{self._url.rstrip('/')}/{function_name}"

    def _build_headers(self, options: FunctionInvokeOptions) -> Dict[str, str]:
        # Snapshot of the shared headers; per-call headers win.
        return merge_headers(self.headers, options.headers)

    @staticmethod
    def _client_kwargs_from_settings(settings: Settings) -> Dict[str, Any]:
        if not settings.functions_url:
            raise ValueError("functions_url is required")
        return {
            "url": str(settings.functions_url),
            "headers": settings.default_headers,
            "timeout_seconds": settings.timeout_seconds,
        }

    def _log_failure(self, function_name: str, exc: Exception) -> None:
        if isinstance(exc, FunctionsHttpError):
            logger.warning(
                "function_invoke_http_error",
                function_name=function_name,
                status_code=exc.status_code,
                response_snippet=exc.text[:500],
            )
        elif isinstance(exc, FunctionsRelayError):
            logger.warning(
                "function_invoke_relay_error",
                function_name=function_name,
                status_code=exc.status_code,
            )
        elif isinstance(exc, FunctionsError):
            logger.warning("function_invoke_bad_response", function_name=function_name, error=str(exc))
        else:
            logger.warning(
                "function_invoke_transport_error",
                function_name=function_name,
                error_type=type(exc).__name__,
                error=str(exc),
            )

    def _log_decode_failure(self, function_name: str, exc: Exception) -> None:
        logger.warning(
            "function_invoke_decode_error",
            function_name=function_name,
            error_type=type(exc).__name__,
            error=str(exc),
        )


class FunctionsClient(BaseFunctionsClient):
    """
    Async client for invoking functions.

    Usage:
        client = FunctionsClient("https://project.example.co/functions/v1")
        client.set_auth(access_token)
        data = await client.invoke_json("hello", dict, FunctionInvokeOptions.from_json({"name": "x"}))

    `http_client` is the transport. When it is injected, the caller owns
    its lifecycle; when it is omitted, a fresh httpx.AsyncClient is opened
    and closed around every invocation.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: TimeoutType = 60,
    ):
        super().__init__(url, headers, timeout_seconds=timeout_seconds)
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "FunctionsClient":
        client = cls(**cls._client_kwargs_from_settings(settings), http_client=http_client)
        if settings.access_token:
            client.set_auth(settings.access_token)
        return client

    async def invoke(
        self,
        function_name: str,
        options: Optional[FunctionInvokeOptions] = None,
        decode: Optional[Decoder[T]] = None,
    ) -> Optional[T]:
        """
        Invoke a function.

        Args:
            function_name: appended to the base URL as a path segment, unescaped.
            options: per-call body / header overrides.
            decode: `(data, response) -> T`. When omitted the body is discarded
                and None is returned.

        Raises:
            httpx.RequestError: transport failure, propagated unchanged.
            FunctionsBadServerResponseError / FunctionsHttpError /
            FunctionsRelayError: classified failures.
            Anything raised by `decode`.
        """
        options = options or FunctionInvokeOptions()
        decode = decode or discard_body  # type: ignore[assignment]

        try:
            response = await self._raw_invoke(function_name, options)
        except Exception as exc:
            self._log_failure(function_name, exc)
            raise

        try:
            result = decode(response.content, response)
        except Exception as exc:
            self._log_decode_failure(function_name, exc)
            raise

        logger.info(
            "function_invoke_succeeded",
            function_name=function_name,
            status_code=response.status_code,
        )
        return result

    async def invoke_json(
        self,
        function_name: str,
        response_type: Type[T] = Any,  # type: ignore[assignment]
        options: Optional[FunctionInvokeOptions] = None,
    ) -> T:
        """Invoke a function and decode its JSON body into `response_type`."""
        return await self.invoke(  # type: ignore[return-value]
            function_name,
            options,
            decode=json_decoder(response_type),
        )

    async def _raw_invoke(self, function_name: str, options: FunctionInvokeOptions) -> httpx.Response:
        url = self._build_url(function_name)
        headers = self._build_headers(options)

        logger.debug("function_invoke_started", function_name=function_name, url=url)

        if self._http_client is not None:
            response = await self._http_client.post(url, content=options.content, headers=headers)
        else:
            async with build_async_client(self.timeout_seconds) as client:
                response = await client.post(url, content=options.content, headers=headers)

        classify_response(
            status_code=getattr(response, "status_code", None),
            headers=getattr(response, "headers", None) or {},
            body=getattr(response, "content", None) or b"",
        )
        return response
