""" The :class:`Datum` is the value type exchanged with the server: null,
    boolean, number, string, array, or object, nested to any finite depth.
    A :class:`Datum` is immutable; arrays are held as tuples and objects as
    read-only mappings, so a child is only ever reachable through its parent.
"""

import math
import types

from ..errors import DeserializationError, SerializationError, UnsupportedDatumType
from .fields import DatumType
from .message import DatumPair, RawDatum


class Datum:
    """ A single tagged value. The *type* is one of the six
        :class:`DatumType` kinds, and the *value* is the Python representation
        of the payload for that kind:

        ========  =====================================
        R_NULL    None
        R_BOOL    bool
        R_NUM     float
        R_STR     str
        R_ARRAY   tuple of :class:`Datum`
        R_OBJECT  read-only mapping of str to :class:`Datum`
        ========  =====================================

        Two instances are equal if they have the same type and recursively
        equal contents. Array order is significant; object key order is not.
    """

    __slots__ = ('_type', '_value')

    def __init__(self, type, value=None):

        try:
            type = DatumType(type)
        except ValueError:
            raise UnsupportedDatumType(type) from None

        if type == DatumType.R_NULL:
            if value is not None:
                raise TypeError('R_NULL datum cannot carry a value')

        elif type == DatumType.R_BOOL:
            if not isinstance(value, bool):
                raise TypeError('R_BOOL datum requires a bool, not ' + _typename(value))

        elif type == DatumType.R_NUM:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError('R_NUM datum requires a number, not ' + _typename(value))
            value = float(value)
            if not math.isfinite(value):
                raise ValueError('R_NUM datum requires a finite number, not ' + repr(value))

        elif type == DatumType.R_STR:
            if not isinstance(value, str):
                raise TypeError('R_STR datum requires a str, not ' + _typename(value))

        elif type == DatumType.R_ARRAY:
            value = tuple(value)
            for item in value:
                if not isinstance(item, Datum):
                    raise TypeError('R_ARRAY elements must be Datum instances')

        elif type == DatumType.R_OBJECT:
            contents = dict()
            for key, item in dict(value).items():
                if not isinstance(key, str):
                    raise TypeError('R_OBJECT keys must be str, not ' + _typename(key))
                if not isinstance(item, Datum):
                    raise TypeError('R_OBJECT values must be Datum instances')
                contents[key] = item
            value = types.MappingProxyType(contents)

        self._type = type
        self._value = value


    @classmethod
    def null(cls):
        return cls(DatumType.R_NULL)


    @classmethod
    def boolean(cls, value):
        return cls(DatumType.R_BOOL, value)


    @classmethod
    def number(cls, value):
        return cls(DatumType.R_NUM, value)


    @classmethod
    def string(cls, value):
        return cls(DatumType.R_STR, value)


    @classmethod
    def array(cls, items=()):
        return cls(DatumType.R_ARRAY, items)


    @classmethod
    def object(cls, items=None):
        if items is None:
            items = dict()
        return cls(DatumType.R_OBJECT, items)


    @property
    def type(self):
        return self._type


    @property
    def value(self):
        return self._value


    def __eq__(self, other):

        if not isinstance(other, Datum):
            return NotImplemented

        pending = [(self, other)]

        while pending:
            one, two = pending.pop()

            if one is two:
                continue
            if one._type != two._type:
                return False

            if one._type == DatumType.R_ARRAY:
                if len(one._value) != len(two._value):
                    return False
                pending.extend(zip(one._value, two._value))

            elif one._type == DatumType.R_OBJECT:
                if one._value.keys() != two._value.keys():
                    return False
                pending.extend((item, two._value[key]) for key, item in one._value.items())

            elif one._value != two._value:
                return False

        return True


    def __hash__(self):

        if self._type == DatumType.R_OBJECT:
            return hash((self._type, frozenset(self._value.items())))

        return hash((self._type, self._value))


    def __repr__(self):

        if self._type == DatumType.R_NULL:
            return 'Datum(R_NULL)'

        if self._type == DatumType.R_OBJECT:
            value = dict(self._value)
        elif self._type == DatumType.R_ARRAY:
            value = list(self._value)
        else:
            value = self._value

        return 'Datum(%s, %r)' % (self._type.name, value)


    @classmethod
    def parse(cls, raw):
        """ Build a :class:`Datum` from a :class:`RawDatum` tree, as decoded
            from a message payload. Arrays and objects are parsed in full,
            preserving element order. Any tag outside the six known kinds
            raises :class:`UnsupportedDatumType`; a repeated key within one
            object, or a number that is not finite, raises
            :class:`DeserializationError`.

            A scalar field absent from the raw node takes the wire format's
            default for that field: False, 0.0, or the empty string.
        """

        # Parents are listed before their children; building in reverse
        # order completes every child before the parent that holds it.

        order = list()
        pending = [raw]

        while pending:
            node = pending.pop()

            try:
                type = DatumType(node.type)
            except ValueError:
                raise UnsupportedDatumType(node.type) from None

            order.append((type, node))

            if type == DatumType.R_ARRAY:
                pending.extend(node.r_array)
            elif type == DatumType.R_OBJECT:
                pending.extend(pair.val for pair in node.r_object)

        built = list()

        for type, node in reversed(order):
            if type == DatumType.R_ARRAY:
                datum = cls.array(_take(built, len(node.r_array)))

            elif type == DatumType.R_OBJECT:
                items = _take(built, len(node.r_object))
                contents = dict()
                for pair, item in zip(node.r_object, items):
                    if pair.key in contents:
                        raise DeserializationError('duplicate key in R_OBJECT datum: ' + repr(pair.key))
                    contents[pair.key] = item
                datum = cls.object(contents)

            else:
                datum = cls._parse_scalar(type, node)

            built.append(datum)

        return built[0]


    @classmethod
    def _parse_scalar(cls, type, node):

        if type == DatumType.R_NULL:
            return cls.null()

        if type == DatumType.R_BOOL:
            return cls.boolean(bool(node.r_bool))

        if type == DatumType.R_NUM:
            if node.r_num is None:
                return cls.number(0.0)
            if not math.isfinite(node.r_num):
                raise DeserializationError('non-finite number in R_NUM datum: ' + repr(node.r_num))
            return cls.number(node.r_num)

        if node.r_str is None:
            return cls.string('')
        return cls.string(node.r_str)


    def serialize(self):
        """ Return the :class:`RawDatum` tree for this value; this is the
            inverse of :meth:`parse`.
        """

        order = list()
        pending = [self]

        while pending:
            datum = pending.pop()
            order.append(datum)

            if datum._type == DatumType.R_ARRAY:
                pending.extend(datum._value)
            elif datum._type == DatumType.R_OBJECT:
                pending.extend(datum._value.values())

        built = list()

        for datum in reversed(order):
            type = datum._type
            value = datum._value

            if type == DatumType.R_NULL:
                raw = RawDatum(type)
            elif type == DatumType.R_BOOL:
                raw = RawDatum(type, r_bool=value)
            elif type == DatumType.R_NUM:
                raw = RawDatum(type, r_num=value)
            elif type == DatumType.R_STR:
                raw = RawDatum(type, r_str=value)
            elif type == DatumType.R_ARRAY:
                raw = RawDatum(type, r_array=_take(built, len(value)))
            else:
                items = _take(built, len(value))
                pairs = [DatumPair(key, item) for key, item in zip(value.keys(), items)]
                raw = RawDatum(type, r_object=pairs)

            built.append(raw)

        return built[0]


    @classmethod
    def from_python(cls, value):
        """ Convert a native Python value to a :class:`Datum`. Integers are
            widened to floats, lists and tuples become arrays, and dictionaries
            with string keys become objects. Anything else, including
            non-finite numbers, raises :class:`SerializationError`.
        """

        try:
            return cls._from_python(value)
        except RecursionError:
            raise SerializationError('value is nested too deeply to convert') from None


    @classmethod
    def _from_python(cls, value):

        if isinstance(value, Datum):
            return value

        if value is None:
            return cls.null()

        if isinstance(value, bool):
            return cls.boolean(value)

        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                raise SerializationError('integer too large for a number datum: ' + str(value)) from None

            if not math.isfinite(number):
                raise SerializationError('non-finite number cannot be sent: ' + repr(value))
            return cls.number(number)

        if isinstance(value, str):
            return cls.string(value)

        if isinstance(value, (list, tuple)):
            return cls.array(cls._from_python(item) for item in value)

        if isinstance(value, dict):
            contents = dict()
            for key, item in value.items():
                if not isinstance(key, str):
                    raise SerializationError('object keys must be str, not ' + _typename(key))
                contents[key] = cls._from_python(item)
            return cls.object(contents)

        raise SerializationError('cannot convert %s to a datum' % (_typename(value)))


    def to_python(self):
        """ Return the native Python equivalent: None, bool, float, str,
            list, or dict.
        """

        type = self._type
        value = self._value

        if type == DatumType.R_ARRAY:
            return [item.to_python() for item in value]

        if type == DatumType.R_OBJECT:
            return {key: item.to_python() for key, item in value.items()}

        return value


# end of class Datum



def response_values(response):
    """ Return the list of :class:`Datum` values carried by a response.
    """

    return [Datum.parse(raw) for raw in response.response]


def _take(stack, count):
    """ Remove and return the last *count* entries of *stack*, in order.
    """

    if count == 0:
        return list()

    items = stack[-count:]
    del stack[-count:]
    return items


def _typename(value):
    return type(value).__name__


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
