"""Length-prefixed framing over a stream socket.

Wire format, for every query sent and every response received once the
handshake is complete:

    [4-byte length (uint32, little-endian)] [payload bytes]

The *stream* arguments are connected stream sockets, or any object with
compatible ``sendall()`` and ``recv()`` methods.
"""

from __future__ import annotations

import struct

import structlog

from ..errors import TransportError, TruncatedRead
from ..protocol.message import Query, Response
from . import codec


HDR = struct.Struct("<I")
MAX_FRAME = 0xFFFFFFFF

log = structlog.get_logger()


def write_frame(stream, payload: bytes) -> None:
    """Send *payload* preceded by its length, as a single write."""

    if len(payload) > MAX_FRAME:
        raise TransportError(f"payload of {len(payload)} bytes does not fit in a frame")

    frame = HDR.pack(len(payload)) + payload

    try:
        stream.sendall(frame)
    except OSError as exc:
        raise TransportError(f"unable to write to the socket: {exc}") from exc


def recv_exact(stream, n: int) -> bytes:
    """Read exactly *n* bytes, or raise :class:`TruncatedRead`."""

    buf = bytearray()
    while len(buf) < n:
        try:
            chunk = stream.recv(n - len(buf))
        except OSError as exc:
            raise TransportError(f"unable to read from the socket: {exc}") from exc

        if not chunk:
            raise TruncatedRead(n, len(buf))
        buf.extend(chunk)

    return bytes(buf)


def read_frame(stream) -> bytes:
    """Read one frame and return its payload."""

    hdr = recv_exact(stream, HDR.size)
    (length,) = HDR.unpack(hdr)
    return recv_exact(stream, length)


def write_query(stream, query: Query) -> None:
    payload = codec.encode_query(query)
    write_frame(stream, payload)
    log.debug("query_sent", token=query.token, type=query.type, size=len(payload))


def read_response(stream) -> Response:
    payload = read_frame(stream)
    response = codec.decode_response(payload)
    log.debug("response_received", token=response.token, type=response.type, size=len(payload))
    return response
