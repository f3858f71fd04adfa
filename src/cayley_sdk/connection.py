"""
Database connection

This module provides the main entry point for working with a running Cayley
database: finding nodes with query paths, running raw query strings and
saving morphisms.
"""

import logging
from typing import Optional, Union

import httpx

from .config import CayleySettings
from .error import MorphismNotSavedError, QueryNotFinalizedError
from .morphism import Reusable
from .query import Path
from .result import GraphNodes, decode_nodes
from .transport import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    APIVersion,
    HttpTransport,
    build_url,
)

logger = logging.getLogger(__name__)


def _check_followed(path: Path) -> None:
    for reusable in path.followed():
        if not reusable.is_saved():
            raise MorphismNotSavedError(reusable.name)


class Graph:
    """
    Cayley database connection

    * Use ``Graph.default()`` to connect to ``localhost:64210``.
    * Use ``Graph(host, port, version)`` to locate the database manually.
    * Use ``Graph.from_settings()`` to read the location from ``CAYLEY_*``
      environment variables.

    Examples:
        >>> with Graph.default() as graph:
        ...     nodes = graph.find(Vertex.start(Node("C")).out(Predicate("follows")).all())
    """

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 version: Union[APIVersion, str] = APIVersion.DEFAULT,
                 scheme: str = "http", timeout: float = 30.0,
                 transport=None, client: Optional[httpx.Client] = None):
        """
        Args:
            host: Database host name
            port: Database HTTP port
            version: API version segment of the endpoint
            scheme: ``http`` or ``https``
            timeout: Seconds to wait on each request
            transport: Object with ``send(query) -> bytes``; overrides the
                HTTP transport entirely
            client: httpx client for the default HTTP transport

        Raises:
            InvalidUrlError: If the endpoint address is not valid
        """
        self._url = build_url(host, port, version, scheme)
        if transport is None:
            transport = HttpTransport(self._url, timeout=timeout, client=client)
        self._transport = transport

    @classmethod
    def default(cls) -> 'Graph':
        """
        Create a Graph connected to the latest API at ``localhost:64210``
        """
        return cls()

    @classmethod
    def from_settings(cls, settings: Optional[CayleySettings] = None, **kwargs) -> 'Graph':
        """
        Create a Graph from settings, reading the environment when none are given
        """
        settings = settings or CayleySettings()
        return cls(host=settings.host, port=settings.port,
                   version=settings.api_version, scheme=settings.scheme,
                   timeout=settings.timeout, **kwargs)

    @property
    def url(self) -> str:
        """Get the query endpoint address"""
        return self._url

    def find(self, query: Path) -> GraphNodes:
        """
        Execute a finalized query path and return the decoded rows

        Args:
            query: A path finalized with all(), get_limit() or another
                terminal operation

        Returns:
            GraphNodes with the rows in the order the store returned them

        Raises:
            QueryNotFinalizedError: If no terminal operation was applied
            QueryCompilationError: If the path cannot be rendered
            MorphismNotSavedError: If the path follows an unsaved morphism
            RequestFailedError: If the request fails
        """
        if not query.is_finalized():
            raise QueryNotFinalizedError(
                f"apply all(), get_limit() or another terminal operation to {query!r}")

        compiled = query.compile()

        _check_followed(query)
        return self.exec(compiled)

    def exec(self, query: str) -> GraphNodes:
        """
        Execute a raw query string and return the decoded rows

        Bypasses the path builders, for queries written by hand.

        Examples:
            >>> graph.exec('g.V("foo").In("bar").All()')
        """
        logger.debug("Executing query: %s", query)
        body = self._transport.send(query)
        return decode_nodes(body)

    def save(self, reusable: Reusable) -> None:
        """
        Store a morphism under its own name

        Raises:
            ReusableCannotBeSavedError: If the morphism body fails to compile
            MorphismNotSavedError: If the body follows an unsaved morphism
            RequestFailedError: If the request fails
        """
        statement = reusable.save_statement()
        _check_followed(reusable)
        self.exec(statement)
        reusable.mark_saved()
        logger.debug("Saved morphism %r", reusable.name)

    def save_as(self, reusable: Reusable, name: str) -> None:
        """
        Store a morphism under another name

        The morphism's own name and saved flag are left unchanged, since
        follow() references it by its own name.

        Raises:
            MorphismNotSavedError: If the body follows an unsaved morphism
        """
        statement = reusable.save_statement_as(name)
        _check_followed(reusable)
        self.exec(statement)
        logger.debug("Saved morphism %r as %r", reusable.name, name)

    def close(self) -> None:
        """Close the connection"""
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


__all__ = ['Graph']
