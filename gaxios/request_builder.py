"""
Request construction shared by every verb

Turns (method, path, payload, config) into a requests.PreparedRequest:
- JSON payload marshaling
- Base URL resolution
- Default header and query parameter merging
"""

import dataclasses
import json
import re
from collections.abc import Mapping
from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

from .config import ClientConfig
from .exceptions import MarshalError, RequestConstructionError

# RFC 7230 token characters
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def marshal_body(payload: Any) -> bytes | None:
    """
    Serialize a payload to a JSON request body

    Args:
        payload: Any JSON-serializable value, or a dataclass instance

    Returns:
        UTF-8 encoded JSON, or None when there is no payload

    Raises:
        MarshalError: If the payload cannot be serialized
    """
    if payload is None:
        return None

    try:
        return json.dumps(payload, default=_json_default, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise MarshalError(payload) from e


def resolve_url(path: str, base_url: str = "") -> str:
    """Prefix path with base_url using a single "/"; separators are not deduplicated."""
    if base_url:
        return f"{base_url}/{path}"
    return path


def canonical_header_key(name: str) -> str:
    """
    Canonical MIME form of a header name ("content-type" -> "Content-Type")

    Names that are not valid HTTP tokens are returned unchanged.
    """
    if not _TOKEN_RE.match(name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def merge_headers(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None = None
) -> CaseInsensitiveDict:
    """
    Merge configured default headers with per-call headers

    Every header is set, never appended: a later value for the same
    (case-insensitive) name replaces the earlier one, so per-call headers win.
    Multiple values for one name are joined with ",".
    """
    merged: CaseInsensitiveDict = CaseInsensitiveDict()

    for source in (defaults, overrides or {}):
        for name, value in source.items():
            if isinstance(value, (list, tuple)):
                joined = ",".join(str(v) for v in value)
            else:
                joined = str(value)
            merged[canonical_header_key(name)] = joined

    return merged


def build_request(
    method: str,
    path: str,
    payload: Any = None,
    config: ClientConfig | None = None,
    headers: Mapping[str, Any] | None = None,
) -> requests.PreparedRequest:
    """
    Build a ready-to-send request

    Args:
        method: HTTP method (GET, POST, PATCH, DELETE)
        path: Absolute URL, or a path relative to config.base_url
        payload: Optional value serialized as the JSON body
        config: Optional shared configuration (defaults used if None)
        headers: Optional per-call headers, applied after the configured ones

    Returns:
        requests.PreparedRequest

    Raises:
        MarshalError: If the payload cannot be serialized
        RequestConstructionError: If the URL or headers are rejected
    """
    if config is None:
        config = ClientConfig()

    body = marshal_body(payload)
    url = resolve_url(path, config.base_url)

    request_headers = merge_headers(config.headers, headers)
    if body is not None and "Content-Type" not in request_headers:
        request_headers["Content-Type"] = "application/json"

    request = requests.Request(
        method=method,
        url=url,
        headers=request_headers,
        params=list(config.query.items()),
        data=body,
    )

    try:
        return request.prepare()
    except (requests.exceptions.RequestException, ValueError) as e:
        raise RequestConstructionError(
            f"Failed to create request {method} {url}: {e}", method=method, url=url
        ) from e
