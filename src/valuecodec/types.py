"""
Type registry for wire values.

This module provides:
- TypeDescriptor: one semantic type with its wire identifiers and functions
- BUILTIN_TYPES: the built-in type table
- TypeRegistry: immutable serializers/parsers keyed by wire type identifier
- build_registry / merge_user_types: registry construction
- get_default_registry: the process-wide registry built from BUILTIN_TYPES

Usage:
    registry = merge_user_types({
        'money': {'to': 790, 'from': 790, 'serialize': str, 'parse': parse_money},
    })
    registry.parse(790, '$1.50')
    registry.serialize(typed(Decimal('1.50'), 790))
"""
import datetime
import json
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import dateutil.parser
import dateutil.tz
from more_itertools import always_iterable
from valuecodec.arrays import array_parser, array_serializer
from valuecodec.convert import TypeConverter
from valuecodec.exceptions import TypeConversionError, ValidationError
from valuecodec.exceptions import ValueParseError
from valuecodec.inference import TypedValue, infer_type, is_sequence
from valuecodec.oids import BOOL_OID, BYTEA_OID, DATE_OID, FLOAT4_OID
from valuecodec.oids import FLOAT8_OID, INT2_OID, INT4_OID, JSON_OID
from valuecodec.oids import JSONB_OID, OID_OID, TEXT_OID, TIME_OID
from valuecodec.oids import TIMESTAMP_OID, TIMESTAMPTZ_OID, UNSPECIFIED_OID
from valuecodec.oids import array_delimiter, array_type, element_type

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], str]
Parser = Callable[[str], Any]

_TIME_ONLY = re.compile(r'^\d{2}:\d{2}')
_OFFSET_SECONDS = re.compile(r'([+-])(\d{2}):(\d{2}):(\d{2})$')
_isoparser = dateutil.parser.isoparser()

# Sequences tagged with these types are encoded whole, not as arrays
DOCUMENT_OIDS = frozenset((JSON_OID, JSONB_OID))


def parse_number(text: str) -> int | float:
    """Parse numeric wire text, keeping integral values as int.

    >>> parse_number('42')
    42
    >>> parse_number('-1.5')
    -1.5
    >>> parse_number('1e3')
    1000.0
    """
    try:
        return int(text)
    except ValueError:
        return float(text)


def parse_date(text: str) -> datetime.date | datetime.time | datetime.datetime:
    """Parse ISO 8601 wire text into date, time or datetime.

    >>> parse_date('2023-05-15')
    datetime.date(2023, 5, 15)
    >>> parse_date('14:30:45')
    datetime.time(14, 30, 45)
    >>> parse_date('2023-05-15 14:30:45')
    datetime.datetime(2023, 5, 15, 14, 30, 45)
    """
    if _TIME_ONLY.match(text):
        return _isoparser.parse_isotime(text)
    if len(text) == 10:
        return _isoparser.parse_isodate(text)
    try:
        return _isoparser.isoparse(text)
    except ValueError:
        pass

    # local mean time offsets carry seconds (+HH:MM:SS)
    match = _OFFSET_SECONDS.search(text)
    if match is None:
        return dateutil.parser.parse(text)
    sign, hours, minutes, seconds = match.groups()
    offset = int(hours) * 3600 + int(minutes) * 60 + int(seconds)
    value = _isoparser.isoparse(text[:match.start()])
    return value.replace(tzinfo=dateutil.tz.tzoffset(None, -offset if sign == '-' else offset))


def serialize_date(value: datetime.date | datetime.time) -> str:
    """Convert date/time/datetime to ISO 8601 string.

    >>> serialize_date(datetime.datetime(2023, 5, 15, 14, 30, 45))
    '2023-05-15T14:30:45'
    """
    return value.isoformat()


def serialize_bool(value: Any) -> str:
    return 't' if value is True else 'f'


def parse_bool(text: str) -> bool:
    return text == 't'


def serialize_bytea(value: bytes | bytearray | memoryview) -> str:
    return '\\x' + bytes(value).hex()


def parse_bytea(text: str) -> bytes:
    return bytes.fromhex(text[2:])


def serialize_string(value: Any) -> str:
    return str(value)


@dataclass(frozen=True)
class TypeDescriptor:
    """One semantic type: the identifier it is sent as, the identifiers it
    is parsed from, and the functions converting to and from wire text.
    """
    to: int
    from_: int | Iterable[int] | None = None
    serialize: Serializer = serialize_string
    parse: Parser | None = None

    @classmethod
    def coerce(cls, name: str, entry: 'TypeDescriptor | Mapping[str, Any]') -> 'TypeDescriptor':
        """Accept a TypeDescriptor or a mapping with to/from/serialize/parse keys."""
        if isinstance(entry, TypeDescriptor):
            return entry
        if not isinstance(entry, Mapping) or 'to' not in entry:
            raise ValidationError(f'Type {name!r} must be a TypeDescriptor or a mapping with a "to" key')
        return cls(to=entry['to'],
                   from_=entry.get('from'),
                   serialize=entry.get('serialize') or serialize_string,
                   parse=entry.get('parse'))

    def from_oids(self) -> tuple[int, ...]:
        return tuple(always_iterable(self.from_))


BUILTIN_TYPES: dict[str, TypeDescriptor] = {
    'string': TypeDescriptor(
        to=TEXT_OID,
        from_=None,
        serialize=serialize_string),
    'number': TypeDescriptor(
        to=UNSPECIFIED_OID,
        from_=(INT2_OID, INT4_OID, OID_OID, FLOAT4_OID, FLOAT8_OID),
        serialize=serialize_string,
        parse=parse_number),
    'json': TypeDescriptor(
        to=JSONB_OID,
        from_=(JSON_OID, JSONB_OID),
        serialize=json.dumps,
        parse=json.loads),
    'boolean': TypeDescriptor(
        to=BOOL_OID,
        from_=BOOL_OID,
        serialize=serialize_bool,
        parse=parse_bool),
    'date': TypeDescriptor(
        to=TIMESTAMPTZ_OID,
        from_=(DATE_OID, TIME_OID, TIMESTAMP_OID, TIMESTAMPTZ_OID),
        serialize=serialize_date,
        parse=parse_date),
    'bytea': TypeDescriptor(
        to=BYTEA_OID,
        from_=BYTEA_OID,
        serialize=serialize_bytea,
        parse=parse_bytea),
}


class TypeRegistry:
    """Serializers and parsers keyed by wire type identifier.

    Both mappings are read-only; merging user types produces a new registry.
    """

    def __init__(self, serializers: Mapping[int, Serializer],
                 parsers: Mapping[int, Parser | None], parse_null: bool = True) -> None:
        self.serializers = MappingProxyType(dict(serializers))
        self.parsers = MappingProxyType(dict(parsers))
        self.parse_null = parse_null

    def __repr__(self) -> str:
        return (f'TypeRegistry(serializers={sorted(self.serializers)!r}, '
                f'parsers={sorted(self.parsers)!r})')

    def parse(self, oid: int, text: str | None) -> Any:
        """Convert wire text of the given type to a Python value.

        Unknown identifiers return the text unchanged.

        Raises
            ValueParseError: If the type's parser rejects the text
            MalformedArrayLiteral: If array text is not a valid array literal
        """
        if text is None:
            return None

        if oid in self.parsers:
            parser = self.parsers[oid]
            if parser is None:
                return text
            try:
                return parser(text)
            except (ValueError, TypeError, OverflowError) as exc:
                raise ValueParseError(oid, text) from exc

        element = element_type(oid)
        if element is not None:
            try:
                return array_parser(text, self.parsers.get(element),
                                    delimiter=array_delimiter(oid),
                                    parse_null=self.parse_null)
            except (ValueError, TypeError, OverflowError) as exc:
                raise ValueParseError(oid, text) from exc

        logger.debug(f'No parser for type {oid}, returning raw text')
        return text

    def serialize(self, value: Any, type: int | None = None) -> str | None:
        """Convert a Python value to wire text.

        The type is inferred when not given. Sequences are written as array
        literals using the element type's serializer.
        """
        value = TypeConverter.convert_params(value)
        if value is None:
            return None

        oid = infer_type(value) if type is None else type
        if isinstance(value, TypedValue):
            value = TypeConverter.convert_params(value.value)
            if value is None:
                return None

        serializer = self.serializers.get(oid)
        if serializer is None:
            logger.debug(f'No serializer for type {oid}, using str()')

        try:
            if is_sequence(value) and oid not in DOCUMENT_OIDS:
                return array_serializer(value, serializer,
                                        delimiter=array_delimiter(array_type(oid)))
            return serializer(value) if serializer else str(value)
        except (ValueError, TypeError, AttributeError) as exc:
            raise TypeConversionError(f'Cannot serialize {value!r} as type {oid}') from exc

    def wire_type(self, value: Any, type: int | None = None) -> int:
        """Identifier to declare for an outgoing value.

        Sequences are declared with the array identifier of their element
        type when one is known.
        """
        value = TypeConverter.convert_value(value)
        oid = infer_type(value) if type is None else type
        if isinstance(value, TypedValue):
            value = value.value
        if is_sequence(value) and oid not in DOCUMENT_OIDS:
            return array_type(oid) or oid
        return oid


def build_registry(table: Mapping[str, TypeDescriptor | Mapping[str, Any]],
                   parse_null: bool = True) -> TypeRegistry:
    """Build a registry from a semantic type table.

    Each descriptor registers its serializer under ``to`` and its parser
    under every identifier in ``from``.
    """
    if not isinstance(table, Mapping):
        raise ValidationError(f'Type table must be a mapping (not {type(table).__name__})')

    serializers: dict[int, Serializer] = {}
    parsers: dict[int, Parser | None] = {}
    for name, entry in table.items():
        descriptor = TypeDescriptor.coerce(name, entry)
        for oid in descriptor.from_oids():
            parsers[oid] = descriptor.parse
        serializers[descriptor.to] = descriptor.serialize
    return TypeRegistry(serializers, parsers, parse_null=parse_null)


_default_registry: TypeRegistry | None = None


def get_default_registry() -> TypeRegistry:
    """Get the registry built from the built-in type table.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = build_registry(BUILTIN_TYPES)
    return _default_registry


def merge_user_types(user_table: Mapping[str, Any] | None,
                     base: TypeRegistry | None = None,
                     parse_null: bool = True) -> TypeRegistry:
    """Layer user types over a base registry (default: the built-in one).

    User entries override on key collision; all other base entries pass
    through unchanged. The base registry is never modified.
    """
    base = base or get_default_registry()
    user = build_registry(user_table or {})
    if user.serializers or user.parsers:
        logger.debug(f'Merging user types: serializers={sorted(user.serializers)}, '
                     f'parsers={sorted(user.parsers)}')
    return TypeRegistry({**base.serializers, **user.serializers},
                        {**base.parsers, **user.parsers},
                        parse_null=parse_null)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
