"""
HTTP transport for query text

The transport is the only part of the SDK that performs I/O. It takes a
query string, POSTs it to the query endpoint and hands back the raw response
body. Anything with a ``send(query: str) -> bytes`` method can stand in for it.
"""

import logging
from enum import Enum
from typing import Optional

import httpx

from .error import InvalidUrlError, MalformedRequestError, RequestFailedError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 64210


class APIVersion(str, Enum):
    """Cayley HTTP API version"""
    V1 = "v1"
    # Latest version the SDK knows about
    DEFAULT = "v1"


def build_url(host: str, port: int, version: APIVersion = APIVersion.DEFAULT,
              scheme: str = "http", dialect: str = "gremlin") -> str:
    """
    Compose the query endpoint address

    Examples:
        >>> build_url("localhost", 64210)
        'http://localhost:64210/api/v1/query/gremlin'

    Raises:
        InvalidUrlError: If the API version is unknown
    """
    try:
        version = APIVersion(version)
    except ValueError as e:
        raise InvalidUrlError(f"{scheme}://{host}:{port}/api/{version}/query/{dialect}",
                              f"unknown API version {version!r}") from e
    return f"{scheme}://{host}:{port}/api/{version.value}/query/{dialect}"


def validate_url(url: str) -> httpx.URL:
    """
    Parse an endpoint address

    Raises:
        InvalidUrlError: If the address is not an http(s) URL with a host
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidUrlError(url, str(e)) from e
    if parsed.scheme not in ("http", "https"):
        raise InvalidUrlError(url, f"unsupported scheme {parsed.scheme!r}")
    if not parsed.host:
        raise InvalidUrlError(url, "missing host")
    return parsed


class HttpTransport:
    """
    Sends query text over HTTP POST, one blocking request at a time

    Args:
        url: Query endpoint address
        timeout: Seconds to wait for connect, read and write
        client: Preconfigured httpx client to use instead of creating one
    """

    def __init__(self, url: str, timeout: float = 30.0,
                 client: Optional[httpx.Client] = None):
        self._url = validate_url(url)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    @property
    def url(self) -> str:
        return str(self._url)

    def send(self, query: str) -> bytes:
        """
        POST the query and return the raw response body

        Raises:
            MalformedRequestError: If the request cannot be built
            RequestFailedError: On I/O failure or an HTTP error status
        """
        try:
            request = self._client.build_request(
                "POST", self._url,
                content=query.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise MalformedRequestError(self.url, str(e)) from e

        logger.debug("POST %s (%d bytes)", self.url, len(request.content))
        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            raise RequestFailedError(query, str(e)) from e

        if response.is_error:
            raise RequestFailedError(query, f"HTTP {response.status_code}: {response.text[:200]}")
        return response.content

    def close(self) -> None:
        """Close the underlying client if this transport created it"""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


__all__ = ['APIVersion', 'HttpTransport', 'build_url', 'validate_url',
           'DEFAULT_HOST', 'DEFAULT_PORT']
