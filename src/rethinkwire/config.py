""" Connection settings: the built-in defaults, and an :class:`Options`
    bundle that can be populated from a URL or from the environment.
"""

from __future__ import annotations

import dataclasses
import os
import urllib.parse
from typing import Mapping, Optional


DEFAULT_HOST = 'localhost'
DEFAULT_PORT = 28015
DEFAULT_DB = 'test'
DEFAULT_AUTH_KEY = ''

URL_SCHEME = 'rethinkdb'

ENVIRONMENT = {
    'host': 'RETHINKDB_HOST',
    'port': 'RETHINKDB_PORT',
    'db': 'RETHINKDB_DB',
    'auth_key': 'RETHINKDB_AUTH_KEY',
}


def _port(value) -> int:

    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError('invalid port number: ' + repr(value)) from None

    if port < 1 or port > 65535:
        raise ValueError('port number out of range: ' + str(port))

    return port


@dataclasses.dataclass(frozen=True)
class Options:
    """ The four values needed to establish a :class:`Connection`.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db: str = DEFAULT_DB
    auth_key: str = DEFAULT_AUTH_KEY

    def __post_init__(self):
        object.__setattr__(self, 'port', _port(self.port))

        if not self.host:
            raise ValueError('a host is required')


    def __repr__(self):
        # Never echo the credential.
        return 'Options(host=%r, port=%d, db=%r)' % (self.host, self.port, self.db)


    @classmethod
    def from_url(cls, url: str) -> Options:
        """ Parse a URL of the form::

                rethinkdb://[auth_key@]host[:port][/db]

            The host is required; any other component left out takes its
            default value.
        """

        parsed = urllib.parse.urlsplit(url)

        if parsed.scheme != URL_SCHEME:
            raise ValueError('expected a %s:// URL, got %r' % (URL_SCHEME, url))

        try:
            port = parsed.port
        except ValueError:
            raise ValueError('invalid port in URL: ' + repr(url)) from None

        if not parsed.hostname:
            raise ValueError('no host in URL: ' + repr(url))

        kwargs = dict()
        kwargs['host'] = parsed.hostname

        if port is not None:
            kwargs['port'] = port
        if parsed.username:
            kwargs['auth_key'] = urllib.parse.unquote(parsed.username)

        db = parsed.path.strip('/')
        if db:
            kwargs['db'] = urllib.parse.unquote(db)

        return cls(**kwargs)


    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> Options:
        """ Build options from RETHINKDB_* environment variables; unset
            variables take their default value.
        """

        if environ is None:
            environ = os.environ

        kwargs = dict()
        for field, variable in ENVIRONMENT.items():
            try:
                kwargs[field] = environ[variable]
            except KeyError:
                continue

        return cls(**kwargs)


    def connect(self):
        """ Return an established :class:`Connection` using these options.
        """

        from .connection import connect
        return connect(self.host, self.port, self.db, self.auth_key)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
