"""Connect-time handshake.

Sent once over a freshly opened socket, as raw bytes with no frame prefix:

    [4 bytes: protocol version magic, uint32 little-endian]
    [4 bytes: credential length N, uint32 little-endian]
    [N bytes: credential, no terminator]

The server answers with text terminated by a NUL byte. The first line of
that text is the status: "SUCCESS" for an accepted handshake, otherwise an
error message that is reported to the caller verbatim.
"""

from __future__ import annotations

import struct

import structlog

from ..errors import ConnectionFailed
from ..protocol.fields import HANDSHAKE_SUCCESS, Version


HDR = struct.Struct("<I")

# Longest reply accepted before the terminating NUL.
REPLY_LIMIT = 4096

log = structlog.get_logger()


def encode(auth_key: str = "", version: Version = Version.V0_2) -> bytes:
    """Return the handshake bytes for *auth_key*.

    The V0_1 handshake predates credentials and is the magic number alone.
    """

    version = Version(version)
    request = HDR.pack(version)

    if version == Version.V0_1:
        if auth_key:
            raise ValueError("the V0_1 handshake cannot carry an auth key")
        return request

    key = auth_key.encode("utf-8")
    return request + HDR.pack(len(key)) + key


def read_reply(stream) -> str:
    """Read the server's reply up to the terminating NUL and return its
    first line.

    The reply is read one byte at a time so that nothing past the NUL is
    taken off the socket.
    """

    buf = bytearray()
    while True:
        try:
            char = stream.recv(1)
        except OSError as exc:
            raise ConnectionFailed(f"unable to read handshake reply: {exc}") from exc

        if not char:
            raise ConnectionFailed("unexpected end of stream during handshake")
        if char == b"\0":
            break
        if len(buf) >= REPLY_LIMIT:
            raise ConnectionFailed(f"handshake reply exceeds {REPLY_LIMIT} bytes")
        buf.extend(char)

    text = buf.decode("utf-8", errors="replace")
    return text.split("\n", 1)[0]


def perform(stream, auth_key: str = "", version: Version = Version.V0_2) -> str:
    """Run the handshake over *stream*.

    Returns the server's status line on success; raises
    :class:`ConnectionFailed` carrying the status line otherwise.
    """

    request = encode(auth_key, version)

    try:
        stream.sendall(request)
    except OSError as exc:
        raise ConnectionFailed(f"unable to write handshake: {exc}") from exc

    status = read_reply(stream)

    if status.startswith(HANDSHAKE_SUCCESS):
        log.debug("handshake_succeeded", version=Version(version).name)
        return status

    log.warning("handshake_failed", version=Version(version).name, status=status)
    raise ConnectionFailed(status)
