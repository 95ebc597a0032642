"""
Tests for the array literal parser and serializer.
"""
import random

import numpy as np
import pytest
from valuecodec.arrays import array_parser, array_serializer
from valuecodec.exceptions import MalformedArrayLiteral, TypeConversionError
from valuecodec.inference import typed
from valuecodec.types import parse_bool, parse_number, serialize_bool


def test_empty_array():
    """Test empty arrays in both directions"""
    assert array_serializer([]) == '{}'
    assert array_serializer(()) == '{}'
    assert array_parser('{}') == []


def test_nested_empty_array():
    """Test that nested empty arrays never synthesize empty strings"""
    assert array_parser('{{}}') == [[]]
    assert array_parser('{{{}}}') == [[[]]]
    assert array_parser('{{},{}}') == [[], []]


def test_mixed_nesting():
    """Test scalars and sub-arrays at the same level"""
    assert array_parser('{1,{2,3},4}', parse_number) == [1, [2, 3], 4]
    assert array_parser('{{1},{2}}') == [['1'], ['2']]
    assert array_parser('{{1,2},{3,4}}', parse_number) == [[1, 2], [3, 4]]


def test_serializer_quotes_every_scalar():
    """Test scalars are always quoted and nested arrays never are"""
    assert array_serializer([1, 2, 3]) == '{"1","2","3"}'
    assert array_serializer([[1, 2], [3, 4]]) == '{{"1","2"},{"3","4"}}'
    assert array_serializer([True, False], serialize_bool) == '{"t","f"}'


def test_quoting_and_escaping():
    """Test backslashes and quotes are escaped inside quoted elements"""
    result = array_serializer(['a"b', 'c\\d'])
    assert result == '{"a\\"b","c\\\\d"}'
    assert array_parser(result) == ['a"b', 'c\\d']


def test_round_trip_tricky_strings(tricky_strings):
    """Test strings with structural characters survive a round trip"""
    assert array_parser(array_serializer(tricky_strings)) == tricky_strings
    nested = [tricky_strings[:5], tricky_strings[5:10]]
    assert array_parser(array_serializer(nested)) == nested


def _random_nested(rng, depth, scalars):
    if not depth:
        return [rng.choice(scalars) for _ in range(rng.randint(0, 4))]
    return [_random_nested(rng, depth - 1, scalars) for _ in range(rng.randint(1, 3))]


def test_round_trip_generated(tricky_strings):
    """Test random nested arrays of tricky strings and NULLs survive a round trip"""
    rng = random.Random(20231015)
    scalars = [*tricky_strings, None]
    for _ in range(200):
        value = _random_nested(rng, rng.randint(0, 3), scalars)
        assert array_parser(array_serializer(value)) == value


def test_deeply_nested_array():
    """Test nesting depth is not limited by the call stack"""
    depth = 400
    result = array_parser('{' * depth + '}' * depth)
    for _ in range(depth - 1):
        assert len(result) == 1
        result = result[0]
    assert result == []

    result = array_parser('{' * depth + '"x",NULL' + '}' * depth)
    for _ in range(depth - 1):
        result = result[0]
    assert result == ['x', None]


def test_round_trip_typed_elements():
    """Test round trips with inverse element functions"""
    numbers = [[1, -2, 3], [4, 5, 60000]]
    assert array_parser(array_serializer(numbers, str), parse_number) == numbers

    floats = [1.5, -0.25, 1e20]
    assert array_parser(array_serializer(floats, str), parse_number) == floats

    flags = [True, False, True]
    assert array_parser(array_serializer(flags, serialize_bool), parse_bool) == flags


def test_adjacent_quoted_elements():
    """Test quoted elements with no delimiter between them"""
    assert array_parser('{"a""b"}') == ['a', 'b']
    assert array_parser('{"a""b","c"}') == ['a', 'b', 'c']


def test_bare_and_quoted_elements():
    """Test bare tokens mixed with quoted tokens"""
    assert array_parser('{a,"b c",d}') == ['a', 'b c', 'd']
    assert array_parser('{"",x}') == ['', 'x']


def test_null_elements():
    """Test bare NULL tokens decode to None and quoted ones stay strings"""
    assert array_parser('{1,NULL,3}', int) == [1, None, 3]
    assert array_parser('{null}') == [None]
    assert array_parser('{"NULL"}') == ['NULL']
    assert array_parser('{NULL}', parse_null=False) == ['NULL']
    assert array_serializer([1, None]) == '{"1",NULL}'
    assert array_parser(array_serializer(['a', None, 'NULL'])) == ['a', None, 'NULL']


def test_tagged_elements_are_unwrapped():
    """Test explicitly typed elements serialize their underlying value"""
    assert array_serializer([typed(1, 20), typed(2, 20)], str) == '{"1","2"}'


def test_numpy_array():
    """Test NumPy arrays serialize like nested lists"""
    assert array_serializer(np.array([[1, 2], [3, 4]])) == '{{"1","2"},{"3","4"}}'


def test_mixed_nesting_serialization_fails():
    """Test that a scalar among nested arrays is rejected"""
    with pytest.raises(TypeConversionError):
        array_serializer([[1], 2])


def test_bare_fragment():
    """Test text without braces is read as the contents of one array"""
    assert array_parser('a,b') == ['a', 'b']
    assert array_parser('1', parse_number) == [1]
    assert array_parser('') == []


def test_dimension_prefix():
    """Test explicit bounds decoration is skipped"""
    assert array_parser('[0:1]={1,2}', parse_number) == [1, 2]
    assert array_parser('[1:1][1:2]={{a,b}}') == [['a', 'b']]


def test_box_delimiter():
    """Test arrays of types with a semicolon delimiter"""
    text = '{(1,1),(0,0);(2,2),(1,1)}'
    assert array_parser(text, delimiter=';') == ['(1,1),(0,0)', '(2,2),(1,1)']
    assert array_serializer(['a', 'b'], delimiter=';') == '{"a";"b"}'


class TestMalformedArrays:
    """Test malformed literals fail instead of truncating"""

    @pytest.mark.parametrize('text', [
        '{1,2',
        '{"abc}',
        '{1}}',
        '{1,,2}',
        '{1,}',
        '{"a\\',
        '{a"b"}',
        '{a{b}}',
        '1}',
        '{',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedArrayLiteral):
            array_parser(text)

    def test_error_carries_position(self):
        with pytest.raises(MalformedArrayLiteral) as excinfo:
            array_parser('{1,2')
        assert excinfo.value.position == 4
        assert excinfo.value.text == '{1,2'

    @pytest.mark.parametrize('text', [
        '{' * 400,
        '{' * 400 + '}' * 399,
        '{' * 400 + '}' * 401,
        '{' * 400 + '"a"',
    ])
    def test_deep_unbalanced(self, text):
        with pytest.raises(MalformedArrayLiteral):
            array_parser(text)

    def test_scan_state_is_per_call(self):
        """A failed parse does not leak state into the next one"""
        with pytest.raises(MalformedArrayLiteral):
            array_parser('{"open')
        assert array_parser('{1,2}') == ['1', '2']
