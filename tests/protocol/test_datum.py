import pytest

import rethinkwire
from rethinkwire.protocol.datum import Datum, response_values
from rethinkwire.protocol.fields import DatumType
from rethinkwire.protocol.message import DatumPair, RawDatum, Response


def nested_values():

    deep = Datum.array()
    for depth in range(50):
        deep = Datum.object({'level': Datum.number(depth), 'child': deep})

    return (
        Datum.null(),
        Datum.boolean(True),
        Datum.boolean(False),
        Datum.number(0),
        Datum.number(-35.5),
        Datum.number(1e300),
        Datum.string(''),
        Datum.string('unicode ☃'),
        Datum.array(),
        Datum.object(),
        Datum.array([Datum.array(), Datum.object(), Datum.null()]),
        Datum.object({'a': Datum.array([Datum.number(1), Datum.string('two')]), 'b': Datum.object()}),
        deep,
    )


def test_basics():

    assert Datum.null().type == DatumType.R_NULL
    assert Datum.null().value is None

    number = Datum.number(44)
    assert number.type == DatumType.R_NUM
    assert isinstance(number.value, float)
    assert number.value == 44.0

    array = Datum.array([Datum.string('x')])
    assert isinstance(array.value, tuple)

    obj = Datum.object({'key': Datum.boolean(True)})
    with pytest.raises(TypeError):
        obj.value['other'] = Datum.null()


def test_round_trip():

    for value in nested_values():
        raw = value.serialize()
        assert isinstance(raw, RawDatum)
        assert Datum.parse(raw) == value


def test_deep_nesting():

    array = Datum.array()
    for depth in range(1000):
        array = Datum.array([Datum.number(depth), array])

    obj = Datum.null()
    for depth in range(1000):
        obj = Datum.object({'child': obj})

    for value in (array, obj):
        raw = value.serialize()
        assert Datum.parse(raw) == value

    response = Response(1, 1, [array.serialize(), obj.serialize()])
    assert response_values(response) == [array, obj]

    assert Datum.parse(array.serialize()) != Datum.parse(obj.serialize())


def test_deep_python_value():

    native = list()
    for depth in range(100000):
        native = [native]

    with pytest.raises(rethinkwire.SerializationError):
        Datum.from_python(native)


def test_non_finite_numbers():

    for bad in (float('nan'), float('inf'), float('-inf')):
        with pytest.raises(ValueError):
            Datum.number(bad)

        with pytest.raises(rethinkwire.DeserializationError):
            Datum.parse(RawDatum(DatumType.R_NUM, r_num=bad))

    nested = RawDatum(DatumType.R_ARRAY, r_array=[RawDatum(DatumType.R_NUM, r_num=float('nan'))])
    with pytest.raises(rethinkwire.DeserializationError):
        Datum.parse(nested)


def test_round_trip_through_codec():

    values = nested_values()
    response = Response(1, 99, [value.serialize() for value in values])

    encoded = rethinkwire.transport.codec.encode_response(response)
    decoded = rethinkwire.transport.codec.decode_response(encoded)

    assert response_values(decoded) == list(values)


def test_array_order_matters():

    one = Datum.array([Datum.number(1), Datum.number(2)])
    two = Datum.array([Datum.number(2), Datum.number(1)])
    assert one != two


def test_object_order_ignored():

    one = Datum.object({'a': Datum.number(1), 'b': Datum.number(2)})
    two = Datum.object({'b': Datum.number(2), 'a': Datum.number(1)})
    assert one == two
    assert hash(one) == hash(two)

    raw_one = RawDatum(DatumType.R_OBJECT, r_object=[
        DatumPair('a', RawDatum(DatumType.R_NUM, r_num=1.0)),
        DatumPair('b', RawDatum(DatumType.R_NUM, r_num=2.0)),
    ])
    raw_two = RawDatum(DatumType.R_OBJECT, r_object=list(reversed(raw_one.r_object)))
    assert Datum.parse(raw_one) == Datum.parse(raw_two)


def test_variant_matters():

    assert Datum.boolean(True) != Datum.number(1)
    assert Datum.string('1') != Datum.number(1)
    assert Datum.null() != Datum.array()
    assert Datum.array() != Datum.object()


def test_unsupported_type():

    with pytest.raises(rethinkwire.UnsupportedDatumType) as caught:
        Datum.parse(RawDatum(7))
    assert caught.value.tag == 7

    nested = RawDatum(DatumType.R_ARRAY, r_array=[RawDatum(DatumType.R_NULL), RawDatum(0)])
    with pytest.raises(rethinkwire.UnsupportedDatumType):
        Datum.parse(nested)

    inside = RawDatum(DatumType.R_OBJECT, r_object=[DatumPair('bad', RawDatum(99))])
    with pytest.raises(rethinkwire.UnsupportedDatumType):
        Datum.parse(inside)

    with pytest.raises(rethinkwire.UnsupportedDatumType):
        Datum(42, None)


def test_duplicate_keys():

    raw = RawDatum(DatumType.R_OBJECT, r_object=[
        DatumPair('a', RawDatum(DatumType.R_NULL)),
        DatumPair('a', RawDatum(DatumType.R_BOOL, r_bool=True)),
    ])

    with pytest.raises(rethinkwire.DeserializationError):
        Datum.parse(raw)


def test_missing_scalar_fields():

    assert Datum.parse(RawDatum(DatumType.R_BOOL)) == Datum.boolean(False)
    assert Datum.parse(RawDatum(DatumType.R_NUM)) == Datum.number(0.0)
    assert Datum.parse(RawDatum(DatumType.R_STR)) == Datum.string('')


def test_constructor_checks():

    with pytest.raises(TypeError):
        Datum(DatumType.R_NULL, 1)
    with pytest.raises(TypeError):
        Datum.boolean(1)
    with pytest.raises(TypeError):
        Datum.number(True)
    with pytest.raises(TypeError):
        Datum.number('1')
    with pytest.raises(TypeError):
        Datum.string(b'bytes')
    with pytest.raises(TypeError):
        Datum.array([1, 2])
    with pytest.raises(TypeError):
        Datum.object({1: Datum.null()})
    with pytest.raises(TypeError):
        Datum.object({'a': 'not a datum'})


def test_from_python():

    native = {
        'name': 'widget',
        'count': 3,
        'ratio': 0.25,
        'enabled': False,
        'tags': ['a', 'b'],
        'nothing': None,
        'nested': {'empty': [], 'also': {}},
    }

    value = Datum.from_python(native)
    assert value.type == DatumType.R_OBJECT
    assert value.value['count'] == Datum.number(3.0)
    assert value.value['enabled'] == Datum.boolean(False)
    assert value.value['tags'] == Datum.array([Datum.string('a'), Datum.string('b')])

    converted = value.to_python()
    assert converted == native
    assert isinstance(converted['count'], float)

    assert Datum.from_python((1, 2)) == Datum.from_python([1, 2])
    assert Datum.from_python(value) is value


def test_from_python_errors():

    for bad in ({1: 'one'}, float('nan'), float('inf'), object(), b'bytes', {'set': {1, 2}}, 10 ** 400):
        with pytest.raises(rethinkwire.SerializationError):
            Datum.from_python(bad)


def test_repr():

    assert repr(Datum.null()) == 'Datum(R_NULL)'
    assert repr(Datum.string('x')) == "Datum(R_STR, 'x')"
    assert 'R_ARRAY' in repr(Datum.array([Datum.null()]))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
