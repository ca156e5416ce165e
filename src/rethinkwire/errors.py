"""Driver exceptions.

Every exception raised on purpose by :mod:`rethinkwire` derives from
:class:`DriverError`. The kinds are siblings: a caller interested in one
failure mode catches that class, a caller interested in any failure catches
:class:`DriverError`.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class DriverError(Exception):
    """Base class for all driver errors."""


# Connection establishment

class ConnectionFailed(DriverError):
    """A socket could not be opened, or the server rejected the handshake.

    The *reason* is the underlying cause; for a rejected handshake it is
    the server's response line, verbatim.
    """

    def __init__(self, reason: str):
        DriverError.__init__(self, reason)
        self.reason = reason


class AddressResolutionFailed(ConnectionFailed):
    """The host/port pair could not be resolved to a socket address."""


class NotConnected(DriverError):
    """An operation required a connected :class:`Connection`."""


# Transport

class TransportError(DriverError):
    """The underlying stream failed during a read or a write."""


class TruncatedRead(TransportError):
    """The stream closed before delivering the promised number of bytes."""

    def __init__(self, expected: int, actual: int):
        message = f"{actual} bytes read, when {expected} bytes promised."
        TransportError.__init__(self, message)
        self.expected = expected
        self.actual = actual


# Payload encoding

class SerializationError(DriverError):
    """A message or value could not be encoded."""


class DeserializationError(DriverError):
    """Received bytes did not decode as a well-formed message.

    This indicates a protocol mismatch or a corrupted stream; retrying the
    same read will not help.
    """


class UnsupportedDatumType(DeserializationError):
    """A raw datum carried a type tag outside the known kinds."""

    def __init__(self, tag: Any):
        DeserializationError.__init__(self, f"unsupported datum type: {tag!r}")
        self.tag = tag


# Connection-level wrappers

class ConnectionWriteFailed(DriverError):
    """Sending a query over a connection failed; see ``__cause__``."""


class ConnectionReadFailed(DriverError):
    """Receiving a response over a connection failed; see ``__cause__``."""


# Errors reported by the server in a response

class ReqlError(DriverError):
    """The server answered a query with an error response.

    :ivar token: The token of the failed query.
    :ivar backtrace: The backtrace frames sent by the server, if any.
    """

    def __init__(self, message: str, token: Optional[int] = None, backtrace: Optional[Sequence] = None):
        DriverError.__init__(self, message)
        self.message = message
        self.token = token
        self.backtrace = list(backtrace or ())


class ReqlClientError(ReqlError):
    """The server considers the query malformed at the protocol level."""


class ReqlCompileError(ReqlError):
    """The query could not be compiled by the server."""


class ReqlRuntimeError(ReqlError):
    """The query failed while the server was evaluating it."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
