"""
Codec facade combining options, the type registry, type inference and
column naming.
"""
import logging
from typing import Any

from valuecodec.inference import infer_type
from valuecodec.options import CodecOptions
from valuecodec.types import TypeRegistry, merge_user_types

logger = logging.getLogger(__name__)


class Codec:
    """Converts values and column names for one set of options.
    """

    def __init__(self, options: CodecOptions | None = None) -> None:
        self.options = options or CodecOptions()
        self.registry: TypeRegistry = merge_user_types(
            self.options.types, parse_null=self.options.null_parse)

    def parse(self, oid: int, text: str | None) -> Any:
        """Convert wire text of the given type to a Python value.
        """
        return self.registry.parse(oid, text)

    def serialize(self, value: Any, type: int | None = None) -> str | None:
        """Convert a Python value to wire text.
        """
        return self.registry.serialize(value, type)

    def wire_type(self, value: Any, type: int | None = None) -> int:
        return self.registry.wire_type(value, type)

    def infer_type(self, value: Any) -> int:
        return infer_type(value)

    def column_from_wire(self, name: str) -> str:
        """Translate a store-side column name to the application name.
        """
        transform = self.options.transform
        return transform.from_wire(name) if transform else name

    def column_to_wire(self, name: str) -> str:
        """Translate an application name to the store-side column name.
        """
        transform = self.options.transform
        return transform.to_wire(name) if transform else name

