"""
Value codec for a PostgreSQL-style text wire format.

All conversions can be called either as:
- Module functions: valuecodec.parse(oid, text)
- Codec methods: Codec(CodecOptions(types=...)).parse(oid, text)

The module functions use a codec built from the default options.
"""
__version__ = '0.1.0'

from typing import Any

from valuecodec.arrays import array_parser, array_serializer
from valuecodec.codec import Codec
from valuecodec.diagnostics import ERROR_FIELDS, RETRY_ROUTINES
from valuecodec.diagnostics import is_retry_routine, map_error_fields
from valuecodec.escaping import escape_identifier
from valuecodec.exceptions import CodecError, MalformedArrayLiteral
from valuecodec.exceptions import TypeConversionError, ValidationError
from valuecodec.exceptions import ValueParseError
from valuecodec.inference import TypedValue, infer_type, json_value, typed
from valuecodec.naming import from_camel, from_kebab, from_pascal, to_camel
from valuecodec.naming import to_kebab, to_pascal
from valuecodec.options import CodecOptions
from valuecodec.types import BUILTIN_TYPES, TypeDescriptor, TypeRegistry
from valuecodec.types import build_registry, get_default_registry
from valuecodec.types import merge_user_types

_default_codec: Codec | None = None


def _codec() -> Codec:
    global _default_codec
    if _default_codec is None:
        _default_codec = Codec()
    return _default_codec


def parse(oid: int, text: str | None) -> Any:
    """Convert wire text of the given type to a Python value.
    """
    return _codec().parse(oid, text)


def serialize(value: Any, type: int | None = None) -> str | None:
    """Convert a Python value to wire text, inferring the type when not given.
    """
    return _codec().serialize(value, type)


def wire_type(value: Any, type: int | None = None) -> int:
    """Identifier to declare for an outgoing value.
    """
    return _codec().wire_type(value, type)


__all__ = [
    'Codec',
    'CodecOptions',
    'parse',
    'serialize',
    'wire_type',
    'infer_type',
    'typed',
    'json_value',
    'TypedValue',
    'array_parser',
    'array_serializer',
    'escape_identifier',
    'to_camel',
    'to_pascal',
    'to_kebab',
    'from_camel',
    'from_pascal',
    'from_kebab',
    'ERROR_FIELDS',
    'RETRY_ROUTINES',
    'map_error_fields',
    'is_retry_routine',
    'BUILTIN_TYPES',
    'TypeDescriptor',
    'TypeRegistry',
    'build_registry',
    'merge_user_types',
    'get_default_registry',
    'CodecError',
    'MalformedArrayLiteral',
    'ValueParseError',
    'TypeConversionError',
    'ValidationError',
]
