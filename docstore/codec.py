from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json, to_jsonable_python

from .interfaces import Codec


@lru_cache(maxsize=256)
def _adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


class JsonCodec(Codec):
    """
    Encodes values to plain JSON elements and validates them back into the
    requested type with pydantic, so models, dataclasses, dates and
    containers of them round-trip.

    Decoding is strict: "1" is not an int, 1.0 is not an int and 1 is not a
    bool. Elements are validated as JSON, so ISO strings still become dates
    and objects still become models or dataclasses.
    """

    def encode(self, value: Any) -> Any:
        try:
            return to_jsonable_python(value)
        except PydanticSerializationError as e:
            raise ValueError(f"value of type {type(value).__name__} is not JSON-serializable") from e

    def decode(self, element: Any, target_type: Any = Any) -> Any:
        if target_type is Any:
            return element
        try:
            return _adapter(target_type).validate_json(to_json(element), strict=True)
        except ValidationError as e:
            raise ValueError(str(e)) from e
