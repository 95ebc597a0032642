"""
Array literal codec.

Converts between nested Python sequences and the brace-delimited array
literal text used on the wire:

    {}                      empty array
    {"1","2"}               quoted elements
    {1,{2,3},4}             nested arrays, bare elements
    {"a\\"b",NULL}          escaped quote, NULL element

Both directions take an element function (normally a registry entry for the
element type) so the same machinery handles arrays of numbers,
strings, booleans, dates or binary values.
"""
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from valuecodec.escaping import quote_array_element
from valuecodec.exceptions import MalformedArrayLiteral, TypeConversionError
from valuecodec.inference import TypedValue, is_sequence

logger = logging.getLogger(__name__)

NULL_TOKEN = 'NULL'

# Explicit bounds prefix, e.g. '[0:2]={1,2,3}'
_DIMENSIONS = re.compile(r'(?:\[-?\d+:-?\d+\])+=')

ElementSerializer = Callable[[Any], str]
ElementParser = Callable[[str], Any]


def _serialize_element(value: Any, serializer: ElementSerializer | None) -> str:
    if isinstance(value, TypedValue):
        value = value.value
    if value is None:
        return NULL_TOKEN
    return quote_array_element(serializer(value) if serializer else str(value))


def array_serializer(elements: Sequence[Any],
                     serializer: ElementSerializer | None = None,
                     delimiter: str = ',') -> str:
    """Serialize a (nested) sequence to an array literal.

    Nested sequences are never quoted; scalars always are. ``None`` becomes
    the bare ``NULL`` token.

    >>> array_serializer([])
    '{}'
    >>> array_serializer([[1, 2], [3, 4]])
    '{{"1","2"},{"3","4"}}'
    >>> array_serializer(['a"b', None])
    '{"a\\\\"b",NULL}'
    """
    if isinstance(elements, np.ndarray):
        elements = elements.tolist()

    if not len(elements):
        return '{}'

    if is_sequence(elements[0]):
        parts = []
        for x in elements:
            if not is_sequence(x):
                raise TypeConversionError(
                    f'Cannot mix nested arrays and scalars in one array: {x!r}')
            parts.append(array_serializer(x, serializer, delimiter))
        return '{' + delimiter.join(parts) + '}'

    return '{' + delimiter.join(_serialize_element(x, serializer) for x in elements) + '}'


class _ArrayScanner:
    """Scan state for a single parse call."""

    __slots__ = ('text', 'pos', 'parser', 'delimiter', 'parse_null', 'stops')

    def __init__(self, text: str, parser: ElementParser | None,
                 delimiter: str, parse_null: bool) -> None:
        self.text = text
        self.pos = 0
        self.parser = parser
        self.delimiter = delimiter
        self.parse_null = parse_null
        self.stops = frozenset((delimiter, '{', '}', '"'))

    def fail(self, message: str) -> None:
        raise MalformedArrayLiteral(message, self.text, self.pos)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ''

    def emit(self, token: str) -> Any:
        return self.parser(token) if self.parser else token

    def parse(self, braced: bool) -> list:
        """Parse delimited elements, keeping the open arrays on a stack.

        Braced text ends at the brace matching the opening one; otherwise
        elements run to the end of the text.
        """
        root = []
        stack = [root]
        if braced:
            self.pos += 1
            if self.peek() == '}':
                self.pos += 1
                return root

        while True:
            char = self.peek()
            quoted = char == '"'
            if char == '{':
                self.pos += 1
                child = []
                stack[-1].append(child)
                if self.peek() != '}':
                    stack.append(child)
                    continue
                self.pos += 1
            elif quoted:
                stack[-1].append(self.parse_quoted())
            else:
                stack[-1].append(self.parse_bare())

            # after an element: close finished arrays up to the next separator
            while True:
                char = self.peek()
                if char == self.delimiter:
                    self.pos += 1
                    break
                if char == '"' and quoted:
                    # back-to-back quoted elements, no delimiter between them
                    break
                if char == '}':
                    if len(stack) == 1:
                        if not braced:
                            self.fail('Unexpected closing brace')
                        self.pos += 1
                        return root
                    stack.pop()
                    self.pos += 1
                    quoted = False
                elif not char:
                    if braced or len(stack) > 1:
                        self.fail('Unterminated array')
                    return root
                else:
                    self.fail(f'Unexpected character {char!r}')

    def parse_quoted(self) -> Any:
        text = self.text
        buf = []
        self.pos += 1
        while self.pos < len(text):
            char = text[self.pos]
            if char == '\\':
                self.pos += 1
                if self.pos >= len(text):
                    self.fail('Dangling escape')
                buf.append(text[self.pos])
            elif char == '"':
                self.pos += 1
                return self.emit(''.join(buf))
            else:
                buf.append(char)
            self.pos += 1
        self.fail('Unterminated quoted element')

    def parse_bare(self) -> Any:
        text = self.text
        start = self.pos
        while self.pos < len(text) and text[self.pos] not in self.stops:
            self.pos += 1
        token = text[start:self.pos]
        if not token:
            self.fail('Empty array element')
        if self.parse_null and token.upper() == NULL_TOKEN:
            return None
        return self.emit(token)


def array_parser(text: str, parser: ElementParser | None = None,
                 delimiter: str = ',', parse_null: bool = True) -> list:
    """Parse an array literal into a (nested) list.

    Text that does not start with a brace is read as the contents of a
    single array ending at the end of the text.

    >>> array_parser('{}')
    []
    >>> array_parser('{{}}')
    [[]]
    >>> array_parser('{1,{2,3},4}', int)
    [1, [2, 3], 4]
    >>> array_parser('{"a""b",NULL}')
    ['a', 'b', None]
    """
    match = _DIMENSIONS.match(text)
    if match:
        text = text[match.end():]

    if not text:
        return []

    scanner = _ArrayScanner(text, parser, delimiter, parse_null)
    result = scanner.parse(braced=text[0] == '{')
    if scanner.pos != len(text):
        scanner.fail('Unexpected text after array')
    return result


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
