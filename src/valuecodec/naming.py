"""
Naming convention translation between store-side snake_case and
application-side camelCase, PascalCase and kebab-case.

All translators are total over ASCII identifiers. Round trips are only
guaranteed for snake_case names without leading, trailing or doubled
underscores.
"""
import re
from collections.abc import Callable
from dataclasses import dataclass

from valuecodec.exceptions import ValidationError

_UPPER = re.compile(r'([A-Z])')


def _join_underscored(x: str, first: str) -> str:
    chars = [first]
    i = 1
    while i < len(x):
        if x[i] == '_':
            i += 1
            if i < len(x):
                chars.append(x[i].upper())
        else:
            chars.append(x[i])
        i += 1
    return ''.join(chars)


def to_camel(x: str) -> str:
    """snake_case to camelCase.

    >>> to_camel('user_first_name')
    'userFirstName'
    """
    if not x:
        return x
    return _join_underscored(x, x[0])


def to_pascal(x: str) -> str:
    """snake_case to PascalCase.

    >>> to_pascal('user_first_name')
    'UserFirstName'
    """
    if not x:
        return x
    return _join_underscored(x, x[0].upper())


def to_kebab(x: str) -> str:
    """
    >>> to_kebab('user_first_name')
    'user-first-name'
    """
    return x.replace('_', '-')


def from_camel(x: str) -> str:
    """camelCase to snake_case.

    >>> from_camel('userFirstName')
    'user_first_name'
    """
    return _UPPER.sub(r'_\1', x).lower()


def from_pascal(x: str) -> str:
    """PascalCase to snake_case, without a leading underscore.

    >>> from_pascal('UserFirstName')
    'user_first_name'
    """
    return (x[:1] + _UPPER.sub(r'_\1', x[1:])).lower()


def from_kebab(x: str) -> str:
    return x.replace('-', '_')


@dataclass(frozen=True)
class NamingTransform:
    """Pair of translators applied to column names.

    ``from_wire`` turns a store-side name into an application name;
    ``to_wire`` turns it back.
    """
    from_wire: Callable[[str], str]
    to_wire: Callable[[str], str]


TRANSFORMS: dict[str, NamingTransform] = {
    'camel': NamingTransform(from_wire=to_camel, to_wire=from_camel),
    'pascal': NamingTransform(from_wire=to_pascal, to_wire=from_pascal),
    'kebab': NamingTransform(from_wire=to_kebab, to_wire=from_kebab),
}


def get_transform(name: str) -> NamingTransform:
    """Look up a naming transform preset by name.
    """
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise ValidationError(f'transform must be one of: {sorted(TRANSFORMS)}') from None


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
