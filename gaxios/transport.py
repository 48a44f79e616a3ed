"""
Pluggable transports

A transport turns a prepared request into a raw response, or fails.
Any requests adapter (requests.adapters.BaseAdapter) qualifies; a plain
function can be plugged in through FunctionTransport. This enables:
- Deterministic test doubles without a real network
- Request instrumentation
"""

import io
from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import Any

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

ExchangeFunc = Callable[[requests.PreparedRequest], requests.Response]


class FunctionTransport(BaseAdapter):
    """Adapter delegating every exchange to a single function"""

    def __init__(self, func: ExchangeFunc):
        super().__init__()
        self.func = func

    def send(
        self,
        request: requests.PreparedRequest,
        stream: bool = False,
        timeout: Any = None,
        verify: Any = True,
        cert: Any = None,
        proxies: Any = None,
    ) -> requests.Response:
        try:
            response = self.func(request)
        except OSError as e:
            raise requests.exceptions.ConnectionError(e, request=request) from e

        if not isinstance(response, requests.Response):
            raise requests.exceptions.RequestException(
                f"transport returned {type(response).__name__} instead of a response",
                request=request,
            )

        if response.request is None:
            response.request = request
        if not response.url:
            response.url = request.url

        return response

    def close(self) -> None:
        pass


def as_transport(transport: Any) -> BaseAdapter:
    """
    Coerce a configured transport into a requests adapter

    Args:
        transport: A BaseAdapter, or a callable taking a PreparedRequest

    Returns:
        BaseAdapter ready to be mounted on a session

    Raises:
        TypeError: If the value offers neither capability
    """
    if isinstance(transport, BaseAdapter):
        return transport
    if callable(transport):
        return FunctionTransport(transport)
    raise TypeError(
        f"transport must be a requests adapter or a callable, got {type(transport).__name__}"
    )


def make_response(
    request: requests.PreparedRequest | None,
    status: int,
    body: bytes | str = b"",
    headers: Mapping[str, str] | None = None,
    reason: str | None = None,
) -> requests.Response:
    """
    Build a raw response with an in-memory body stream

    Args:
        request: The request being answered
        status: HTTP status code
        body: Response body
        headers: Optional response headers
        reason: Status reason phrase (derived from the status code if None)

    Returns:
        requests.Response whose body has not been read yet
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    if reason is None:
        try:
            reason = HTTPStatus(status).phrase
        except ValueError:
            reason = ""

    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = io.BytesIO(body)
    response.encoding = "utf-8"
    response.request = request
    if request is not None:
        response.url = request.url
    return response
