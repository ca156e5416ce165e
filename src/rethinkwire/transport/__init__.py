"""Transport layer: payload codec, framing, and the connect-time handshake."""

from . import codec
from . import framing
from . import handshake

from .base import Transport
from .framing import read_frame, read_response, write_frame, write_query
