"""
Shared fixtures for codec tests.
"""
import datetime
import decimal

import pytest
from valuecodec import Codec, CodecOptions, get_default_registry


@pytest.fixture
def registry():
    """Return the default type registry"""
    return get_default_registry()


@pytest.fixture
def codec():
    """Return a codec built from default options"""
    return Codec(CodecOptions())


@pytest.fixture(scope='module')
def value_dict():
    """Return a dictionary of test values for all major types"""
    return {
        'int_value': 42,
        'big_int': 9223372036854775807,
        'bool_true': True,
        'bool_false': False,
        'float_value': 1.5,
        'decimal_value': decimal.Decimal('123456.789123'),
        'text_value': 'Lorem ipsum dolor sit amet',
        'date_value': datetime.date(2023, 5, 15),
        'time_value': datetime.time(14, 30, 45),
        'datetime_value': datetime.datetime(2023, 5, 15, 14, 30, 45),
        'binary_value': b'\x01\x02\x03\x04\x05',
        'null_value': None,
    }


@pytest.fixture(scope='module')
def tricky_strings():
    """Strings that need quoting or escaping inside array literals"""
    return ['', ' ', '{', '}', ',', ';', '"', '\\', '\\"', 'a"b', 'c\\d',
            'NULL', 'null', '{a,b}', '"quoted"', 'trailing\\', 'multi\nline']
