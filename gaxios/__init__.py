"""gaxios: a small JSON-friendly wrapper around requests."""

from .config import ClientConfig, load_config
from .exceptions import (
    BodyReadError,
    ConfigurationError,
    GaxiosError,
    MarshalError,
    RequestConstructionError,
    ResponseError,
    TransportError,
)
from .http_client import Client, delete, get, patch, post
from .logging_config import setup_logging
from .request_builder import build_request
from .response import Response, normalize_response
from .transport import FunctionTransport, make_response

__version__ = "0.1.0"

__all__ = [
    "BodyReadError",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "FunctionTransport",
    "GaxiosError",
    "MarshalError",
    "RequestConstructionError",
    "Response",
    "ResponseError",
    "TransportError",
    "build_request",
    "delete",
    "get",
    "load_config",
    "make_response",
    "normalize_response",
    "patch",
    "post",
    "setup_logging",
]
