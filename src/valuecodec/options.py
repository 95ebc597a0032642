from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from valuecodec.exceptions import ValidationError
from valuecodec.naming import NamingTransform, get_transform

__all__ = ['CodecOptions']


@dataclass
class CodecOptions:
    """Options

    - types: user type table layered over the built-in types (default: None)
    - transform: column naming transform, one of `camel`, `pascal`, `kebab`,
      or a NamingTransform (default: None, names pass through)
    - null_parse: decode bare NULL array elements to None (default: True)

    A plain dataclass built from keyword arguments only; options are never
    read from config files or the environment.
    """
    types: Mapping[str, Any] | None = None
    transform: str | NamingTransform | None = None
    null_parse: bool = True

    def __post_init__(self):
        if self.types is not None and not isinstance(self.types, Mapping):
            raise ValidationError(f'types must be a mapping (not {type(self.types).__name__})')
        if isinstance(self.transform, str):
            self.transform = get_transform(self.transform)
        elif self.transform is not None and not isinstance(self.transform, NamingTransform):
            raise ValidationError('transform must be a preset name or a NamingTransform')
