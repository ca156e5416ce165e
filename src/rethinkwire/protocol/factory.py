"""Convenience constructors for protocol messages."""

from __future__ import annotations

from typing import Any, Optional

from .datum import Datum
from .fields import QueryType, TermType
from .message import Query, Term, TermPair, next_token


def datum(value: Any) -> Term:
    """Wrap a Python value (or a :class:`Datum`) in a DATUM term."""
    return Term(TermType.DATUM, datum=Datum.from_python(value).serialize())


def start(term: Term, token: Optional[int] = None, **global_optargs: Any) -> Query:
    """Build a START query for *term*.

    Global optargs that are not already terms are wrapped as DATUM terms.
    """

    if token is None:
        token = next_token()

    pairs = []
    for key, value in global_optargs.items():
        if not isinstance(value, Term):
            value = datum(value)
        pairs.append(TermPair(key, value))

    return Query(QueryType.START, token, term, pairs)


def continue_(token: int) -> Query:
    return Query(QueryType.CONTINUE, token)


def stop(token: int) -> Query:
    return Query(QueryType.STOP, token)


def noreply_wait(token: Optional[int] = None) -> Query:
    if token is None:
        token = next_token()
    return Query(QueryType.NOREPLY_WAIT, token)


# A few administrative terms.

def db(name: str) -> Term:
    return Term(TermType.DB, args=[datum(name)])


def db_create(name: str) -> Term:
    return Term(TermType.DB_CREATE, args=[datum(name)])


def db_drop(name: str) -> Term:
    return Term(TermType.DB_DROP, args=[datum(name)])


def db_list() -> Term:
    return Term(TermType.DB_LIST)
