"""Payload codec for protocol messages.

Messages are encoded as msgpack maps whose keys are the envelope field
names. Decoding is typed: the bytes must describe a structurally valid
:class:`Query` or :class:`Response`, otherwise :class:`DeserializationError`
is raised.
"""

from __future__ import annotations

import msgspec

from ..errors import DeserializationError, SerializationError
from ..protocol.message import Query, Response


_encoder = msgspec.msgpack.Encoder()
_query_decoder = msgspec.msgpack.Decoder(Query)
_response_decoder = msgspec.msgpack.Decoder(Response)

_decoders = {
    Query: _query_decoder,
    Response: _response_decoder,
}

_TOKEN_MAX = 0x7FFFFFFFFFFFFFFF


def _encode(message, kind) -> bytes:

    if not isinstance(message, kind):
        raise SerializationError(f"expected a {kind.__name__}, got {type(message).__name__}")

    token = message.token
    if isinstance(token, bool) or not isinstance(token, int) or not 0 <= token <= _TOKEN_MAX:
        raise SerializationError(f"invalid token: {token!r}")

    try:
        payload = _encoder.encode(message)
    except (msgspec.EncodeError, TypeError, ValueError, OverflowError, RecursionError) as exc:
        raise SerializationError(f"unable to encode {kind.__name__}: {exc}") from exc

    # Struct fields are not checked at construction; refuse to emit bytes
    # that the matching decoder would reject.
    try:
        _decoders[kind].decode(payload)
    except (msgspec.DecodeError, RecursionError) as exc:
        raise SerializationError(f"malformed {kind.__name__}: {exc}") from exc

    return payload


def _decode(decoder, payload: bytes, kind):
    try:
        return decoder.decode(payload)
    except (msgspec.DecodeError, RecursionError) as exc:
        raise DeserializationError(f"unable to parse the {kind.__name__} object: {exc}") from exc


def encode_query(query: Query) -> bytes:
    return _encode(query, Query)


def decode_query(payload: bytes) -> Query:
    return _decode(_query_decoder, payload, Query)


def encode_response(response: Response) -> bytes:
    return _encode(response, Response)


def decode_response(payload: bytes) -> Response:
    return _decode(_response_decoder, payload, Response)
