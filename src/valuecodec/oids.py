"""
Wire type identifiers (PostgreSQL OIDs) used by the codec.

Identifiers are looked up in psycopg's builtin type table rather than
hard-coded, together with the array identifier and element delimiter of
each scalar type.
"""
from psycopg.postgres import types as pg_types

_oid = lambda x: pg_types.get(x).oid
_aoid = lambda x: pg_types.get(x).array_oid

UNSPECIFIED_OID = 0
BOOL_OID = _oid('bool')
BYTEA_OID = _oid('bytea')
INT8_OID = _oid('int8')
INT2_OID = _oid('int2')
INT4_OID = _oid('int4')
TEXT_OID = _oid('text')
OID_OID = _oid('oid')
JSON_OID = _oid('json')
FLOAT4_OID = _oid('float4')
FLOAT8_OID = _oid('float8')
DATE_OID = _oid('date')
TIME_OID = _oid('time')
TIMESTAMP_OID = _oid('timestamp')
TIMESTAMPTZ_OID = _oid('timestamptz')
JSONB_OID = _oid('jsonb')

# Scalar types whose arrays the registry can encode and decode
ARRAY_ELEMENT_TYPES = (
    'bool', 'bytea', 'int8', 'int2', 'int4', 'text', 'oid', 'json',
    'float4', 'float8', 'date', 'time', 'timestamp', 'timestamptz',
    'jsonb', 'varchar', 'bpchar', 'numeric', 'uuid', 'box',
)

# element oid -> array oid
array_oids: dict[int, int] = {}
# array oid -> (element oid, delimiter)
array_elements: dict[int, tuple[int, str]] = {}

for name in ARRAY_ELEMENT_TYPES:
    info = pg_types.get(name)
    array_oids[info.oid] = info.array_oid
    array_elements[info.array_oid] = (info.oid, info.delimiter)


def array_type(oid: int) -> int | None:
    """Return the array identifier for an element identifier, if known.
    """
    return array_oids.get(oid)


def element_type(oid: int) -> int | None:
    """Return the element identifier for an array identifier, if known.
    """
    entry = array_elements.get(oid)
    return entry[0] if entry else None


def array_delimiter(oid: int) -> str:
    """Return the element delimiter used by an array identifier.
    """
    entry = array_elements.get(oid)
    return entry[1] if entry else ','
