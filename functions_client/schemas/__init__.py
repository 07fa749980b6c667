from functions_client.schemas.invoke_options import FunctionInvokeOptions

__all__ = ["FunctionInvokeOptions"]
