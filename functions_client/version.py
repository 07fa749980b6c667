__version__ = "0.1.0"

CLIENT_NAME = "functions-py"
CLIENT_INFO = f"{CLIENT_NAME}/{__version__}"
