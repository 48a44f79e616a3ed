"""HTTP client with shared configuration for JSON APIs."""

from collections.abc import Mapping
from typing import Any

import requests

from .config import ClientConfig
from .exceptions import TransportError
from .logging_config import get_module_logger
from .request_builder import build_request
from .response import Response, normalize_response
from .transport import as_transport

logger = get_module_logger("http_client")


class Client:
    """
    HTTP client bound to an immutable ClientConfig.

    Every verb method builds a request from the shared configuration,
    sends it through a requests.Session and normalizes the result:
    - 2xx responses are returned as Response (body unread, caller closes it)
    - Anything else raises a GaxiosError subclass

    The configuration is read-only, so one Client can be shared between threads
    as far as requests.Session allows; no additional locking is done here.
    """

    def __init__(self, config: ClientConfig | None = None):
        """
        Initialize the client

        Args:
            config: Shared configuration (base URL, default headers/query,
                    timeout, transport). Defaults are used if None.
        """
        self.config = config or ClientConfig()
        self.session = requests.Session()

        if self.config.transport is not None:
            adapter = as_transport(self.config.transport)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        headers: Mapping[str, Any] | None = None,
    ) -> Response:
        """
        Send a request and normalize the response

        Args:
            method: HTTP method
            path: Absolute URL, or path relative to the configured base URL
            payload: Optional JSON body
            headers: Optional per-call headers (override configured ones)

        Returns:
            Response for 2xx status codes

        Raises:
            MarshalError: If the payload cannot be serialized
            RequestConstructionError: If the request cannot be built
            TransportError: If the exchange could not complete
            ResponseError: If the status code is outside 200-299
            BodyReadError: If the body of an error response cannot be read
        """
        prepared = build_request(method, path, payload, self.config, headers)

        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            raw = self.session.send(prepared, stream=True, timeout=self.config.request_timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"{prepared.method} {prepared.url} could not be performed: {e}")
            raise TransportError(f"Unable to perform request: {e}", request=prepared) from e

        return normalize_response(raw)

    def get(self, path: str, headers: Mapping[str, Any] | None = None) -> Response:
        """
        Send a GET request.

        Caller should close the returned response when done reading from it.
        """
        return self.request("GET", path, headers=headers)

    def post(self, path: str, payload: Any, headers: Mapping[str, Any] | None = None) -> Response:
        """
        Send a POST request with a JSON payload.

        Caller should close the returned response when done reading from it.
        """
        return self.request("POST", path, payload, headers=headers)

    def patch(self, path: str, payload: Any, headers: Mapping[str, Any] | None = None) -> Response:
        """
        Send a PATCH request with a JSON payload.

        Caller should close the returned response when done reading from it.
        """
        return self.request("PATCH", path, payload, headers=headers)

    def delete(self, path: str, headers: Mapping[str, Any] | None = None) -> Response:
        """
        Send a DELETE request.

        Caller should close the returned response when done reading from it.
        """
        return self.request("DELETE", path, headers=headers)

    def close(self):
        """Release the underlying session (open response bodies stay readable)"""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def get(path: str, config: ClientConfig | None = None) -> Response:
    """Send a one-off GET request using the given configuration."""
    with Client(config) as client:
        return client.get(path)


def post(path: str, payload: Any, config: ClientConfig | None = None) -> Response:
    """Send a one-off POST request using the given configuration."""
    with Client(config) as client:
        return client.post(path, payload)


def patch(path: str, payload: Any, config: ClientConfig | None = None) -> Response:
    """Send a one-off PATCH request using the given configuration."""
    with Client(config) as client:
        return client.patch(path, payload)


def delete(path: str, config: ClientConfig | None = None) -> Response:
    """Send a one-off DELETE request using the given configuration."""
    with Client(config) as client:
        return client.delete(path)
