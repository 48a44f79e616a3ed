"""
Custom exceptions for gaxios
"""

from typing import Any


class GaxiosError(Exception):
    """Base exception for all gaxios errors"""

    pass


class ConfigurationError(GaxiosError):
    """
    Raised when client configuration values are missing or invalid.

    Invalid values are caught when the config is built rather than
    surfacing later as a confusing request failure.
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")


class MarshalError(GaxiosError):
    """Raised when a request payload cannot be serialized to JSON"""

    def __init__(self, payload: Any):
        self.payload = payload
        super().__init__(f"Unable to marshal payload of type {type(payload).__name__}")


class RequestConstructionError(GaxiosError):
    """Raised when method, URL or headers cannot be turned into a request"""

    def __init__(self, message: str, method: str | None = None, url: str | None = None):
        self.method = method
        self.url = url
        super().__init__(message)


class TransportError(GaxiosError):
    """
    Raised when the exchange could not complete.

    This includes:
    - DNS failures and refused connections
    - Timeout expiry
    - Faults raised by a custom transport
    """

    def __init__(self, message: str, request: Any | None = None):
        self.request = request
        super().__init__(message)


class ResponseError(GaxiosError):
    """
    Raised when the exchange completed but the status is outside 200-299.

    Carries the full response context so callers can decide whether to
    retry on their own.
    """

    def __init__(
        self,
        status: int,
        body: str,
        status_text: str = "",
        headers: Any | None = None,
        request: Any | None = None,
    ):
        self.status = status
        self.body = body
        self.status_text = status_text
        self.headers = headers if headers is not None else {}
        self.request = request
        self.path = getattr(request, "url", None)
        super().__init__(
            f"Response returned status with code {status}: {body}, path: {self.path}"
        )


class BodyReadError(GaxiosError):
    """Raised when the body of a non-2xx response cannot be read"""

    def __init__(self, status: int, request: Any | None = None):
        self.status = status
        self.request = request
        super().__init__(f"Unable to read response body of bad response (status {status})")
