"""
functions_client/client/sync_functions_client.py

Blocking counterpart of FunctionsClient, sending through `requests`.

Same header rules, same response classification, same decode
strategies; the only differences are the transport
(`requests.Session` / `requests.post` via utils.http_client.HttpClient)
and the response object handed to decoders (`requests.Response`).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

import requests
import structlog

from functions_client.client.decoders import Decoder, discard_body, json_decoder
from functions_client.client.functions_client import BaseFunctionsClient
from functions_client.client.response_classifier import classify_response
from functions_client.schemas.invoke_options import FunctionInvokeOptions
from functions_client.utils.http_client import HttpClient, TimeoutType
from functions_client.utils.settings import Settings

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class SyncFunctionsClient(BaseFunctionsClient):
    def __init__(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: TimeoutType = 60,
    ):
        super().__init__(url, headers, timeout_seconds=timeout_seconds)
        self.http = HttpClient(timeout_seconds=timeout_seconds, session=session)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        session: Optional[requests.Session] = None,
    ) -> "SyncFunctionsClient":
        client = cls(**cls._client_kwargs_from_settings(settings), session=session)
        if settings.access_token:
            client.set_auth(settings.access_token)
        return client

    def invoke(
        self,
        function_name: str,
        options: Optional[FunctionInvokeOptions] = None,
        decode: Optional[Decoder[T]] = None,
    ) -> Optional[T]:
        """
        Invoke a function and block until it answers.

        Raises:
            requests.RequestException: transport failure, propagated unchanged.
            FunctionsError subclasses: classified failures.
            Anything raised by `decode`.
        """
        options = options or FunctionInvokeOptions()
        decode = decode or discard_body  # type: ignore[assignment]

        try:
            response = self._raw_invoke(function_name, options)
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

    def invoke_json(
        self,
        function_name: str,
        response_type: Type[T] = Any,  # type: ignore[assignment]
        options: Optional[FunctionInvokeOptions] = None,
    ) -> T:
        return self.invoke(  # type: ignore[return-value]
            function_name,
            options,
            decode=json_decoder(response_type),
        )

    def _raw_invoke(self, function_name: str, options: FunctionInvokeOptions) -> requests.Response:
        url = self._build_url(function_name)
        headers = self._build_headers(options)

        logger.debug("function_invoke_started", function_name=function_name, url=url)

        response = self.http.post(url, options.content, headers=headers)

        classify_response(
            status_code=getattr(response, "status_code", None),
            headers=getattr(response, "headers", None) or {},
            body=getattr(response, "content", None) or b"",
        )
        return response
