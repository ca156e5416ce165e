""" The :class:`Connection` owns one socket to one server. It runs the
    handshake exactly once, then sends queries and receives responses over
    the framed stream, strictly one at a time.
"""

from __future__ import annotations

import socket
from typing import List, Optional

import msgspec.structs
import structlog

from . import config
from .errors import (
    AddressResolutionFailed,
    ConnectionFailed,
    ConnectionReadFailed,
    ConnectionWriteFailed,
    DeserializationError,
    NotConnected,
    ReqlClientError,
    ReqlCompileError,
    ReqlRuntimeError,
    SerializationError,
    TransportError,
)
from .protocol import factory
from .protocol.datum import response_values
from .protocol.fields import DatumType, QueryType, ResponseType, Version
from .protocol.message import Query, Response, TermPair
from .transport import framing, handshake
from .transport.base import Transport


log = structlog.get_logger()

_error_classes = {
    ResponseType.CLIENT_ERROR: ReqlClientError,
    ResponseType.COMPILE_ERROR: ReqlCompileError,
    ResponseType.RUNTIME_ERROR: ReqlRuntimeError,
}


class Connection(Transport):
    """ A blocking connection to a single server. The *host*, *port*,
        *db*, and *auth_key* are fixed for the lifetime of the instance.
        Nothing happens on the network until :func:`connect` is called.

        There is no automatic reconnection: a failed :func:`send` or
        :func:`receive` leaves the state untouched, and it is up to the
        caller to decide what to do next. The socket is closed by
        :func:`close`, on exit from a ``with`` block, or when the instance
        is garbage collected.

        A connection is not safe for concurrent use; callers that need
        concurrent queries should open one connection per thread.
    """

    def __init__(self, host=config.DEFAULT_HOST, port=config.DEFAULT_PORT,
                 db=config.DEFAULT_DB, auth_key=config.DEFAULT_AUTH_KEY,
                 version=Version.V0_2):

        self._host = host
        self._port = int(port)
        self._db = db
        self._auth_key = auth_key
        self._version = Version(version)

        # Rejects a credential the chosen handshake cannot carry.
        handshake.encode(auth_key, self._version)

        self._socket: Optional[socket.socket] = None
        self._connected = False


    def __repr__(self):
        if self.connected:
            state = 'connected'
        else:
            state = 'not connected'
        return '<Connection %s:%d db=%r, %s>' % (self._host, self._port, self._db, state)


    def __enter__(self):
        self.connect()
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __del__(self):
        try:
            self.close()
        except AttributeError:
            # __init__ never completed.
            pass


    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def db(self) -> str:
        return self._db

    @property
    def auth_key(self) -> str:
        return self._auth_key

    @property
    def is_open(self) -> bool:
        return self._socket is not None and self._socket.fileno() != -1

    @property
    def connected(self) -> bool:
        return self._connected and self.is_open


    def _resolve(self):
        """ Return the address candidates for the configured host and port.
        """

        try:
            return socket.getaddrinfo(self._host, self._port, type=socket.SOCK_STREAM)
        except socket.gaierror as exc:
            raise AddressResolutionFailed(f"{self._host}:{self._port}: {exc}") from exc


    def _open(self):
        """ Return a connected socket, trying each resolved address in turn.
        """

        addresses = self._resolve()
        failure = None

        for family, socktype, proto, _canonname, address in addresses:
            sock = None
            try:
                sock = socket.socket(family, socktype, proto)
                sock.connect(address)
            except OSError as exc:
                if sock is not None:
                    sock.close()
                failure = exc
                continue
            return sock

        if failure is None:
            failure = 'no addresses to connect to'

        raise ConnectionFailed(f"{self._host}:{self._port}: {failure}")


    def connect(self) -> bool:
        """ Open the socket and run the handshake. If the connection is
            already established this returns immediately without touching
            the socket. Returns True on success; any failure raises a
            :class:`ConnectionFailed` (or :class:`AddressResolutionFailed`)
            and leaves the connection not connected.
        """

        if self.connected:
            return True

        self.close()
        log.info("connect_started", host=self._host, port=self._port, db=self._db)

        try:
            self._socket = self._open()
            handshake.perform(self._socket, self._auth_key, self._version)
        except ConnectionFailed as exc:
            log.warning("connect_failed", host=self._host, port=self._port, reason=str(exc))
            self.close()
            raise
        except OSError as exc:
            log.warning("connect_failed", host=self._host, port=self._port, reason=str(exc))
            self.close()
            raise ConnectionFailed(str(exc)) from exc

        self._connected = True
        log.info("connected", host=self._host, port=self._port)
        return True


    def close(self) -> None:
        """ Close the socket, if any. The connection may be re-established
            afterwards with :func:`connect`.
        """

        sock = self._socket
        self._socket = None
        self._connected = False

        if sock is not None:
            sock.close()
            log.debug("connection_closed", host=self._host, port=self._port)


    def send(self, query: Query) -> None:
        """ Write one *query* to the server. Any failure is raised as a
            :class:`ConnectionWriteFailed` chained to its cause.
        """

        if not self.connected:
            raise NotConnected('send requires a connected Connection')

        try:
            framing.write_query(self._socket, query)
        except (SerializationError, TransportError) as exc:
            raise ConnectionWriteFailed(f"write query: {exc}") from exc


    def receive(self) -> Response:
        """ Read the next response from the server. Any failure is raised
            as a :class:`ConnectionReadFailed` chained to its cause.
        """

        if not self.connected:
            raise NotConnected('receive requires a connected Connection')

        try:
            return framing.read_response(self._socket)
        except (DeserializationError, TransportError) as exc:
            raise ConnectionReadFailed(f"read response: {exc}") from exc


    def run(self, query: Query) -> Response:
        """ Send *query*, wait for its response, and return it. Error
            responses from the server are raised as the matching
            :class:`ReqlError` subclass.
        """

        query = self._with_default_db(query)
        self.send(query)
        response = self.receive()

        if response.token != query.token:
            raise DeserializationError(
                f"response token {response.token} does not match query token {query.token}")

        try:
            kind = ResponseType(response.type)
        except ValueError:
            return response

        error_class = _error_classes.get(kind)
        if error_class is None:
            return response

        values = response_values(response)
        if values and values[0].type == DatumType.R_STR:
            message = values[0].value
        else:
            message = 'server reported %s' % (kind.name)

        raise error_class(message, response.token, response.backtrace)


    def _with_default_db(self, query):
        """ Return *query* with this connection's database as the default
            'db' global optarg, unless the query names one already.
        """

        if query.type != QueryType.START or not self._db:
            return query

        for pair in query.global_optargs:
            if pair.key == 'db':
                return query

        pairs = list(query.global_optargs)
        pairs.append(TermPair('db', factory.db(self._db)))
        return msgspec.structs.replace(query, global_optargs=pairs)


    def create_db(self, name: str) -> Response:
        """ Create the database *name* on the server.
        """

        return self.run(factory.start(factory.db_create(name)))


    def drop_db(self, name: str) -> Response:
        return self.run(factory.start(factory.db_drop(name)))


    def list_dbs(self) -> List[str]:
        response = self.run(factory.start(factory.db_list()))
        names = list()

        for value in response_values(response):
            value = value.to_python()
            if isinstance(value, list):
                names.extend(value)
            else:
                names.append(value)

        return names


# end of class Connection


def connect(host=config.DEFAULT_HOST, port=config.DEFAULT_PORT,
            db=config.DEFAULT_DB, auth_key=config.DEFAULT_AUTH_KEY) -> Connection:
    """ Create a :class:`Connection` and establish it.
    """

    connection = Connection(host, port, db, auth_key)
    connection.connect()
    return connection


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
