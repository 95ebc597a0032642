"""
String escaping for identifiers and array elements.

This module provides the low-level quoting rules used at the wire boundary:
- Identifier quoting with support for schema-qualified (dotted) names
- Backslash/quote escaping of array literal elements
"""
import re

_PATTERNS = {
    'backslash': re.compile(r'\\'),
    'quote': re.compile(r'"'),
}


def escape_identifier(name: str) -> str:
    """Safely quote a database identifier.

    Internal double quotes are doubled and every dotted segment is quoted
    on its own, so schema-qualified names stay qualified.

    >>> escape_identifier('users')
    '"users"'
    >>> escape_identifier('public.users')
    '"public"."users"'
    >>> escape_identifier('a.b"c')
    '"a"."b""c"'
    """
    return '"' + name.replace('"', '""').replace('.', '"."') + '"'


def array_escape(text: str) -> str:
    r"""Escape backslashes and double quotes inside an array element.

    >>> array_escape('a"b')
    'a\\"b'
    >>> array_escape('c\\d')
    'c\\\\d'
    """
    text = _PATTERNS['backslash'].sub(r'\\\\', text)
    return _PATTERNS['quote'].sub(r'\\"', text)


def quote_array_element(text: str) -> str:
    """Escape an array element and wrap it in double quotes.
    """
    return '"' + array_escape(text) + '"'


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
