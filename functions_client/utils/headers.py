"""
functions_client/utils/headers.py

Case-insensitive helpers for plain `dict[str, str]` header maps.

HTTP header names are case-insensitive, but the client keeps its headers
in an ordinary dict so they stay easy to read and copy. These helpers
make sure `Authorization` and `authorization` never coexist.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional


def set_header(headers: Dict[str, str], name: str, value: str) -> None:
    """Set `name` in place, dropping any existing entry that differs only in case."""
    lowered = name.lower()
    for existing in [k for k in headers if k.lower() == lowered]:
        del headers[existing]
    headers[name] = value


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def merge_headers(
    base: Mapping[str, str],
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Return a new dict with `overrides` applied on top of `base`.

    On a (case-insensitive) name collision the override wins. Neither
    input is mutated.
    """
    merged: Dict[str, str] = dict(base)
    for name, value in (overrides or {}).items():
        set_header(merged, name, value)
    return merged
