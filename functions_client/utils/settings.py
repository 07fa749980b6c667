"""
functions_client/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines the runtime configuration used to build function
clients from the environment (`FunctionsClient.from_settings`).

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from parameters/parameters.yaml
- Overriding defaults with environment variables (FUNCTIONS_CLIENT_*)
- Validating required settings (the functions base URL)
- Exposing a cached, fully-validated Settings object

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) YAML defaults from:
       parameters/parameters.yaml
2) Environment variables:
       FUNCTIONS_CLIENT_*

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- HTTP calls
- Token acquisition or refresh (access_token is only stored)

Constructing a client directly with a URL never touches this module;
settings are only read through get_settings() / from_settings().
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import AnyHttpUrl, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

PARAMETERS_PATH = Path(__file__).resolve().parents[2] / "parameters" / "parameters.yaml"


class Settings(BaseSettings):
    """
    Runtime settings for the function invocation clients.

    Load order / precedence:
        1) YAML defaults (parameters/parameters.yaml)
        2) Environment variables (FUNCTIONS_CLIENT_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="FUNCTIONS_CLIENT_",
        extra="ignore",
    )

    # Metadata
    client_name: str = "functions-py"
    environment: str = "local"
    log_level: str = "INFO"

    # Optional at the model level to allow partial env loading;
    # enforced explicitly in get_settings().
    functions_url: Optional[AnyHttpUrl] = None

    # Stored and attached as "Authorization: Bearer <token>"; never refreshed here.
    access_token: Optional[str] = Field(default=None, repr=False)

    timeout_seconds: float = 60.0

    default_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every invocation (per-call headers still win).",
    )


@lru_cache(maxsize=1)
def _load_yaml_parameters() -> Dict[str, Any]:
    if not PARAMETERS_PATH.exists():
        logger.warning("parameters_yaml_missing", expected=str(PARAMETERS_PATH))
        return {}

    try:
        with PARAMETERS_PATH.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning(
                "parameters_yaml_not_dict",
                path=str(PARAMETERS_PATH),
                type=type(data).__name__,
            )
            return {}
        logger.info("parameters_yaml_loaded", path=str(PARAMETERS_PATH))
        return data
    except (OSError, yaml.YAMLError) as exc:
        logger.error("parameters_yaml_load_error", path=str(PARAMETERS_PATH), error=str(exc))
        return {}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Construct and return the final validated Settings object.

    Cached: one Settings instance per process. Call
    `get_settings.cache_clear()` after changing the environment in tests.
    """
    # 1) YAML defaults
    yaml_data = _load_yaml_parameters()

    # 2) env overrides (partial)
    try:
        env_settings = Settings()
        env_data = env_settings.model_dump(exclude_unset=True)
        logger.info("settings_loaded_env_only_partial", fields=list(env_data.keys()))
    except ValidationError as exc:
        logger.warning("settings_env_validation_error", errors=exc.errors())
        env_data = {}

    # 3) merge
    merged: Dict[str, Any] = {**yaml_data, **env_data}

    # 4) enforce required URL
    if not merged.get("functions_url"):
        logger.error("settings_missing_functions_url", yaml_path=str(PARAMETERS_PATH))
        raise RuntimeError(
            "Missing required setting: functions_url. "
            "Set it either in the FUNCTIONS_CLIENT_FUNCTIONS_URL environment variable "
            f"or in {PARAMETERS_PATH}."
        )

    # 5) final validation
    settings = Settings.model_validate(merged)

    logger.info(
        "settings_loaded",
        environment=settings.environment,
        client_name=settings.client_name,
        functions_url=str(settings.functions_url),
        timeout_seconds=settings.timeout_seconds,
        has_access_token=settings.access_token is not None,
        default_header_names=sorted(settings.default_headers),
    )

    return settings
