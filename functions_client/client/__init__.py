from functions_client.client.decoders import discard_body, json_decoder
from functions_client.client.errors import (
    FunctionsBadServerResponseError,
    FunctionsDecodeError,
    FunctionsError,
    FunctionsHttpError,
    FunctionsRelayError,
)
from functions_client.client.functions_client import FunctionsClient
from functions_client.client.sync_functions_client import SyncFunctionsClient

__all__ = [
    "FunctionsClient",
    "SyncFunctionsClient",
    "FunctionsError",
    "FunctionsBadServerResponseError",
    "FunctionsHttpError",
    "FunctionsRelayError",
    "FunctionsDecodeError",
    "discard_body",
    "json_decoder",
]
