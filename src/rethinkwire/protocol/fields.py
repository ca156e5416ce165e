"""Protocol constants.

Keep these in one place to avoid magic numbers in message handling. The
numeric values are fixed by the server's protocol definition.
"""

from enum import IntEnum


class Version(IntEnum):
    """ Magic numbers sent as the first four bytes of a handshake.
    """

    V0_1 = 0x3F61BA36
    V0_2 = 0x723081E1


class DatumType(IntEnum):

    R_NULL = 1
    R_BOOL = 2
    R_NUM = 3
    R_STR = 4
    R_ARRAY = 5
    R_OBJECT = 6


class QueryType(IntEnum):

    START = 1
    CONTINUE = 2
    STOP = 3
    NOREPLY_WAIT = 4


class ResponseType(IntEnum):

    SUCCESS_ATOM = 1
    SUCCESS_SEQUENCE = 2
    SUCCESS_PARTIAL = 3
    WAIT_COMPLETE = 4

    CLIENT_ERROR = 16
    COMPILE_ERROR = 17
    RUNTIME_ERROR = 18


class TermType(IntEnum):
    """ The handful of term op-codes used by the convenience constructors.
        Any other op-code is passed through untouched as a plain integer.
    """

    DATUM = 1
    DB = 14
    DB_CREATE = 57
    DB_DROP = 58
    DB_LIST = 59


HANDSHAKE_SUCCESS = "SUCCESS"
