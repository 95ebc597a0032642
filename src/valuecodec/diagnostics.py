"""
Protocol diagnostic fields.

Error and notice messages arrive as single-character field codes. This
module maps them to descriptive names and flags the server routines whose
errors are worth retrying (a stale prepared statement or cached plan).
"""
import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

ERROR_FIELDS: dict[str, str] = {
    'S': 'severity_local',
    'V': 'severity',
    'C': 'code',
    'M': 'message',
    'D': 'detail',
    'H': 'hint',
    'P': 'position',
    'p': 'internal_position',
    'q': 'internal_query',
    'W': 'where',
    's': 'schema_name',
    't': 'table_name',
    'c': 'column_name',
    'd': 'data_type_name',
    'n': 'constraint_name',
    'F': 'file',
    'L': 'line',
    'R': 'routine',
}

# Same table keyed by the code's byte value, as read off the wire
ERROR_FIELDS_BY_BYTE: dict[int, str] = {ord(k): v for k, v in ERROR_FIELDS.items()}

RETRY_ROUTINES: frozenset[str] = frozenset({
    'FetchPreparedStatement',
    'RevalidateCachedQuery',
    'transformAssignedExpr',
})


def map_error_fields(raw: Mapping[str | int, str]) -> dict[str, str]:
    """Build an error mapping keyed by descriptive field name.

    Codes may be given as characters or byte values. Unknown codes are
    dropped.

    >>> map_error_fields({'S': 'ERROR', 'C': '42P01', ord('M'): 'no table'})
    {'severity_local': 'ERROR', 'code': '42P01', 'message': 'no table'}
    """
    fields = {}
    for code, value in raw.items():
        name = ERROR_FIELDS_BY_BYTE.get(code) if isinstance(code, int) else ERROR_FIELDS.get(code)
        if name is None:
            logger.debug(f'Dropping unknown diagnostic field {code!r}')
            continue
        fields[name] = value
    return fields


def is_retry_routine(fields: Mapping[str, str]) -> bool:
    """Check if a mapped error was raised by a routine worth retrying.
    """
    return fields.get('routine') in RETRY_ROUTINES


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
