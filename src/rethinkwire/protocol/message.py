""" Structured representations of the messages exchanged with the server,
    and the raw form of the values embedded in them.

    The classes here are plain :class:`msgspec.Struct` types: they carry no
    behavior beyond holding fields, and the payload codec in
    :mod:`rethinkwire.transport.codec` maps them directly to and from bytes.
    Field names are the names used on the wire.
"""

from __future__ import annotations

import itertools
import threading
from typing import List, Optional

import msgspec


class RawDatum(msgspec.Struct, omit_defaults=True):
    """ One node of a raw value tree: a type tag plus whichever field that
        tag selects. The tag is left as a plain integer so that unknown tags
        survive decoding and can be rejected by :meth:`Datum.parse`.
    """

    type: int
    r_bool: Optional[bool] = None
    r_num: Optional[float] = None
    r_str: Optional[str] = None
    r_array: List[RawDatum] = msgspec.field(default_factory=list)
    r_object: List[DatumPair] = msgspec.field(default_factory=list)


class DatumPair(msgspec.Struct):
    key: str
    val: RawDatum


class Term(msgspec.Struct, omit_defaults=True):
    """ A node of a query tree. Only DATUM terms carry a *datum*; every
        other op-code is opaque here and is produced by the query builder.
    """

    type: int
    datum: Optional[RawDatum] = None
    args: List[Term] = msgspec.field(default_factory=list)
    optargs: List[TermPair] = msgspec.field(default_factory=list)


class TermPair(msgspec.Struct):
    key: str
    val: Term


class Query(msgspec.Struct, omit_defaults=True):
    """ An outbound message. The *token* correlates the query with the
        response that answers it; this layer sets and reads it but never
        interprets it.
    """

    type: int
    token: int
    query: Optional[Term] = None
    global_optargs: List[TermPair] = msgspec.field(default_factory=list)


class Frame(msgspec.Struct, omit_defaults=True):
    """ One step of an error backtrace: either a positional argument index
        (*pos*) or an optional argument name (*opt*).
    """

    type: int
    pos: Optional[int] = None
    opt: Optional[str] = None


class Response(msgspec.Struct, omit_defaults=True):
    """ An inbound message answering the query with the same *token*.
    """

    type: int
    token: int
    response: List[RawDatum] = msgspec.field(default_factory=list)
    backtrace: List[Frame] = msgspec.field(default_factory=list)


# Tokens are signed 64 bit integers on the server side; stay positive.

_token_min = 1
_token_max = 0x7FFFFFFFFFFFFFFF
_token_lock = threading.Lock()
_token_ticker = itertools.count(_token_min)


def next_token():
    """ Return the next query token. Tokens are unique within this process
        until the counter wraps around at the protocol maximum.
    """

    global _token_ticker

    with _token_lock:
        token = next(_token_ticker)

        if token >= _token_max:
            _token_ticker = itertools.count(_token_min)

    return token


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
