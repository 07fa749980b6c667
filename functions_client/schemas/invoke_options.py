# -------------------------------------------------------------------
# functions_client/schemas/invoke_options.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the per-call options bundle passed to
# FunctionsClient.invoke / SyncFunctionsClient.invoke.
#
# An options object is:
#   - built by the caller
#   - consumed once by a single invocation
#   - never mutated (frozen model, read-only headers mapping)
#
# BODY SEMANTICS
# --------------
# The body is opaque bytes. This layer does not serialize payloads;
# the `from_json()` constructor is a convenience for the common case and
# produces the bytes up front.
#
#   - body=None        -> empty request body
#   - body="text"      -> encoded as UTF-8
#   - body=b"..."      -> sent as-is
#
# HEADER SEMANTICS
# ----------------
# `headers` are per-call overrides. They are merged over the client's
# shared headers and win on a name collision (e.g. a per-call
# Authorization replaces the stored bearer token for that call only).
# -------------------------------------------------------------------

from __future__ import annotations

import json as jsonlib
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from functions_client.utils.headers import get_header, set_header


class FunctionInvokeOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: Optional[bytes] = Field(
        default=None,
        description="Raw request body. Sent as-is; empty when omitted.",
    )
    headers: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Per-call headers; override client headers on collision.",
    )

    @field_validator("headers", mode="after")
    @classmethod
    def _freeze_headers(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_validator("body", mode="before")
    @classmethod
    def _encode_text_body(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.encode("utf-8")
        if isinstance(v, (bytearray, memoryview)):
            return bytes(v)
        return v

    @classmethod
    def from_json(
        cls,
        payload: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> "FunctionInvokeOptions":
        """
        Build options with a JSON-serialized body.

        Adds `Content-Type: application/json` unless the caller already
        set a content type.
        """
        merged = dict(headers or {})
        if get_header(merged, "Content-Type") is None:
            set_header(merged, "Content-Type", "application/json")
        return cls(body=jsonlib.dumps(payload).encode("utf-8"), headers=merged)

    @property
    def content(self) -> bytes:
        return self.body or b""
