from functions_client.client import (
    FunctionsBadServerResponseError,
    FunctionsClient,
    FunctionsDecodeError,
    FunctionsError,
    FunctionsHttpError,
    FunctionsRelayError,
    SyncFunctionsClient,
    discard_body,
    json_decoder,
)
from functions_client.schemas import FunctionInvokeOptions
from functions_client.version import __version__

__all__ = [
    "FunctionsClient",
    "SyncFunctionsClient",
    "FunctionInvokeOptions",
    "FunctionsError",
    "FunctionsBadServerResponseError",
    "FunctionsHttpError",
    "FunctionsRelayError",
    "FunctionsDecodeError",
    "discard_body",
    "json_decoder",
    "__version__",
]
