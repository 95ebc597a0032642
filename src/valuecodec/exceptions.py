"""
Codec-specific exception classes.
"""


class CodecError(Exception):
    """Base class for all value codec errors.
    """


class MalformedArrayLiteral(CodecError):
    """Array literal text that does not follow the array grammar.
    """

    def __init__(self, message: str, text: str, position: int) -> None:
        super().__init__(f'{message} at position {position}: {text!r}')
        self.text = text
        self.position = position


class ValueParseError(CodecError):
    """Error converting wire text to a Python value.
    """

    def __init__(self, oid: int, text: str) -> None:
        super().__init__(f'Cannot parse {text!r} as type {oid}')
        self.oid = oid
        self.text = text


class TypeConversionError(CodecError):
    """Error converting a Python value to wire text.
    """


class ValidationError(CodecError):
    """Error in input validation.
    """
