"""Transport interface.

This is the (small) contract a connection to the server follows. It lives
outside :mod:`rethinkwire.protocol` so the protocol remains transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..protocol.message import Query, Response


class Transport(ABC):
    """Minimal contract for a query/response channel."""

    @abstractmethod
    def connect(self) -> bool:
        """Establish the underlying socket and complete the handshake."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying socket."""

    @abstractmethod
    def send(self, query: Query) -> None:
        """Send one query."""

    @abstractmethod
    def receive(self) -> Response:
        """Receive the next response."""

    @property
    def is_open(self) -> bool:
        """Whether the underlying socket is currently open."""
        return False
