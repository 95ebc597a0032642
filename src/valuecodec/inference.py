"""
Wire type inference for outbound values.

Every value is first classified into one of a closed set of kinds, and the
kind decides the wire type identifier. Precedence, highest first:

1. An explicit tag (TypedValue)
2. Date/time values
3. Sequences (inferred from their first element)
4. Binary values
5. Primitive kind (number, big integer, boolean); everything else is
   left unspecified (0) for the store to infer
"""
import datetime
import decimal
import enum
import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
from valuecodec.convert import TypeConverter
from valuecodec.oids import BOOL_OID, BYTEA_OID, INT8_OID, JSONB_OID
from valuecodec.oids import TIMESTAMPTZ_OID, UNSPECIFIED_OID

logger = logging.getLogger(__name__)

INT4_MIN = -2**31
INT4_MAX = 2**31 - 1


@dataclass(frozen=True)
class TypedValue:
    """A value tagged with the wire type identifier to send it as.

    For a sequence value the tag names the element type.
    """
    value: Any
    type: int


def typed(value: Any, type: int) -> TypedValue:
    """Tag a value with an explicit wire type identifier.
    """
    return TypedValue(value, type)


def json_value(value: Any) -> TypedValue:
    """Tag a value to be sent as JSON.
    """
    return TypedValue(value, JSONB_OID)


class ValueKind(enum.Enum):
    TAGGED = 'tagged'
    TIMESTAMP = 'timestamp'
    SEQUENCE = 'sequence'
    BINARY = 'binary'
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    BIGINT = 'bigint'
    NUMBER = 'number'
    TEXT = 'text'
    OTHER = 'other'


KIND_OIDS: dict[ValueKind, int] = {
    ValueKind.TIMESTAMP: TIMESTAMPTZ_OID,
    ValueKind.BINARY: BYTEA_OID,
    ValueKind.BOOLEAN: BOOL_OID,
    ValueKind.INTEGER: UNSPECIFIED_OID,
    ValueKind.BIGINT: INT8_OID,
    ValueKind.NUMBER: UNSPECIFIED_OID,
    ValueKind.TEXT: UNSPECIFIED_OID,
    ValueKind.OTHER: UNSPECIFIED_OID,
}


def is_sequence(value: Any) -> bool:
    """Check if a value is encoded as an array (strings and bytes are not)."""
    return isinstance(value, list | tuple | np.ndarray)


def classify(value: Any) -> ValueKind:
    """Classify a plain Python value into its ValueKind.
    """
    if isinstance(value, TypedValue):
        return ValueKind.TAGGED
    if isinstance(value, datetime.date | datetime.time):
        return ValueKind.TIMESTAMP
    if is_sequence(value):
        return ValueKind.SEQUENCE
    if isinstance(value, bytes | bytearray | memoryview):
        return ValueKind.BINARY
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER if INT4_MIN <= value <= INT4_MAX else ValueKind.BIGINT
    if isinstance(value, float | decimal.Decimal):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    return ValueKind.OTHER


def infer_type(value: Any) -> int:
    """Determine the wire type identifier to send a value as.

    >>> infer_type(typed('x', 23))
    23
    >>> infer_type(42)
    0
    >>> infer_type(datetime.date(2023, 5, 15))
    1184
    >>> infer_type([[True, False]])
    16
    >>> infer_type([])
    0
    """
    value = TypeConverter.convert_value(value)
    kind = classify(value)

    if kind is ValueKind.TAGGED:
        return value.type
    if kind is ValueKind.SEQUENCE:
        return infer_type(value[0]) if len(value) else UNSPECIFIED_OID
    return KIND_OIDS[kind]


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
