"""
functions_client/client/decoders.py

Decode strategies applied to a successful invocation.

A decode strategy is any callable `(data: bytes, response) -> T`.
`response` is the transport's response object (`httpx.Response` for the
async client, `requests.Response` for the sync one) and is passed along
so decoders can look at headers or status when they need to.

- raw        -> caller supplies the callable; its exceptions propagate as-is
- json_decoder(T) -> parse JSON and validate into T (pydantic TypeAdapter)
- discard_body    -> ignore the body, return None
"""

from __future__ import annotations

from typing import Any, Callable, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from functions_client.client.errors import FunctionsDecodeError

T = TypeVar("T")

Decoder = Callable[[bytes, Any], T]


def discard_body(data: bytes, response: Any) -> None:
    return None


def json_decoder(response_type: Type[T] = Any) -> Decoder[T]:  # type: ignore[assignment]
    """
    Build a decoder that parses the body as JSON into `response_type`.

    `response_type` can be anything pydantic understands: a BaseModel,
    a TypedDict, `dict[str, int]`, `list[Foo]`, or `Any` for plain JSON.
    """
    adapter: TypeAdapter[T] = TypeAdapter(response_type)

    def _decode(data: bytes, response: Any) -> T:
        try:
            return adapter.validate_json(data)
        except ValidationError as exc:
            raise FunctionsDecodeError(
                f"Could not decode function response as {_type_name(response_type)}: {exc}",
                body=data,
            ) from exc

    return _decode


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)
