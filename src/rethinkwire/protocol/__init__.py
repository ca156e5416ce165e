from . import fields
from . import message
from . import datum
from . import factory

from .datum import Datum
from .fields import DatumType, QueryType, ResponseType, TermType, Version
from .message import Query, RawDatum, Response, Term


"""
rethinkwire Protocol Layer
==========================

This package defines the messages and values exchanged with the server,
independent of how bytes are moved. The protocol layer MUST NOT depend on
the transport package.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Connection (connection.py)
    connect() / send() / receive() / run()

    │
    ▼
Message Constructors (factory.py)
    - START / CONTINUE / STOP queries
    - DATUM and administrative terms
    - Token assignment

    │
    ▼
Value Model (datum.py)
    Immutable Datum: null, bool, number, string, array, object
    Datum <-> RawDatum <-> native Python

    │
    ▼
Message Model (message.py)
    Query, Response, Term, RawDatum structures

    │
    ▼
Field Vocabulary (fields.py)
    Protocol enumerations and magic numbers

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Codec (transport/codec.py)
    Maps Query/Response <-> payload bytes

Framing and Handshake (transport/framing.py, transport/handshake.py)
    Length-prefixed frames, connect-time version/credential exchange

Socket
    Moves bytes

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
