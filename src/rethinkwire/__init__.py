""" Python implementation of the client side of the RethinkDB wire protocol:
    the connect-time handshake, length-prefixed query/response framing, and
    the Datum value model.
"""

# Submodules used by multiple other components.

from . import errors
from . import config
from . import protocol
from . import transport

# Primary public-facing interfaces.

from .connection import Connection, connect
from .config import Options
from .errors import (
    AddressResolutionFailed,
    ConnectionFailed,
    ConnectionReadFailed,
    ConnectionWriteFailed,
    DeserializationError,
    DriverError,
    NotConnected,
    ReqlClientError,
    ReqlCompileError,
    ReqlError,
    ReqlRuntimeError,
    SerializationError,
    TransportError,
    TruncatedRead,
    UnsupportedDatumType,
)
from .protocol import Datum, DatumType, Query, QueryType, Response, ResponseType, Term

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
