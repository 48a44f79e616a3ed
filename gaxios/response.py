"""
Response normalization

Classifies a raw requests.Response as success (2xx) or failure and wraps
successful ones in a Response whose body is left unread for the caller.
"""

import io
import json
from dataclasses import dataclass
from typing import IO, Any

import requests

from .exceptions import BodyReadError, ResponseError
from .logging_config import get_module_logger

logger = get_module_logger("response")


def is_success(status: int) -> bool:
    """Status codes in [200, 300) are successful"""
    return 200 <= status < 300


def status_text(raw: requests.Response) -> str:
    """Status line text, e.g. "201 Created" """
    if raw.reason:
        return f"{raw.status_code} {raw.reason}"
    return str(raw.status_code)


@dataclass
class Response:
    """
    A successful response

    The body stream in `data` belongs to the caller and must be closed
    (close() or a with-block) once it has been consumed.
    """

    status: int
    status_text: str
    headers: Any
    request: requests.PreparedRequest | None
    data: IO[bytes]

    def read(self) -> bytes:
        return self.data.read()

    def text(self, encoding: str = "utf-8") -> str:
        return self.read().decode(encoding)

    def json(self) -> Any:
        """Decode the remaining body as JSON (does not close the stream)"""
        return json.loads(self.read())

    def close(self) -> None:
        self.data.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _body_stream(raw: requests.Response) -> IO[bytes]:
    # A transport that already read the body (instrumentation, stream=False)
    # leaves the bytes in .content and an exhausted raw stream
    if raw._content_consumed or raw._content is not False:
        return io.BytesIO(raw.content or b"")
    if raw.raw is not None:
        if hasattr(raw.raw, "decode_content"):
            raw.raw.decode_content = True
        return raw.raw
    # Transport doubles may return a response without a stream
    return io.BytesIO(raw.content or b"")


def normalize_response(raw: requests.Response) -> Response:
    """
    Classify a raw response

    Args:
        raw: Response produced by the transport (body not yet consumed)

    Returns:
        Response for status codes in [200, 300)

    Raises:
        BodyReadError: If the body of a non-2xx response cannot be read
        ResponseError: For every other status code
    """
    request = raw.request

    if not is_success(raw.status_code):
        try:
            body = raw.text
        except (requests.exceptions.RequestException, OSError) as e:
            raise BodyReadError(raw.status_code, request=request) from e
        finally:
            raw.close()

        logger.warning(f"Request to {getattr(request, 'url', None)} failed: HTTP {raw.status_code}")
        raise ResponseError(
            raw.status_code,
            body,
            status_text=status_text(raw),
            headers=raw.headers,
            request=request,
        )

    logger.debug(f"Response {raw.status_code} from {getattr(request, 'url', None)}")
    return Response(
        status=raw.status_code,
        status_text=status_text(raw),
        headers=raw.headers,
        request=request,
        data=_body_stream(raw),
    )
