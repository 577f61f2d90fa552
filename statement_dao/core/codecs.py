"""Per-field value codecs applied when binding and mapping dataclass models.

Two codecs exist:

- ``enum``: bind `Enum` members by `.value`, map stored values back to members.
- ``json``: bind `dict`/`list` values as JSON text, map JSON text back.

A codec is picked from the field annotation (`Enum` subclasses, `dict`,
`list`, and their `Optional[...]` forms) or forced with
``field(metadata={"codec": "json"})``.
"""

from __future__ import annotations

import json
import types
from dataclasses import Field, fields, is_dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Type, Union, get_args, get_origin, get_type_hints

SUPPORTED_CODECS = frozenset({"enum", "json"})


def encode_field(cls: Type[Any], name: str, value: Any) -> Any:
    """Convert one model field value into a DB parameter value."""

    if value is None:
        return None
    codec, enum_type = _field_codec(cls, name)
    if codec == "enum":
        if isinstance(value, Enum):
            return value.value
        return _to_enum(enum_type, value, name).value
    if codec == "json":
        if isinstance(value, (str, bytes, bytearray)):
            return value
        return json.dumps(value)
    return value


def decode_field(cls: Type[Any], name: str, value: Any) -> Any:
    """Convert one DB column value into the model field's Python value."""

    if value is None:
        return None
    codec, enum_type = _field_codec(cls, name)
    if codec == "enum":
        return _to_enum(enum_type, value, name)
    if codec == "json":
        if isinstance(value, (bytes, bytearray, memoryview)):
            value = bytes(value).decode("utf-8")
        if not isinstance(value, str):
            return value
        try:
            return json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValueError(
                f"Cannot decode JSON for field {name!r}: {value!r}."
            ) from exc
    return value


@lru_cache(maxsize=None)
def _field_codec(cls: Type[Any], name: str) -> tuple[Optional[str], Optional[type[Enum]]]:
    if not is_dataclass(cls):
        return None, None
    field = _field_map(cls).get(name)
    if field is None:
        return None, None

    annotation = _unwrap_optional(_type_hints(cls).get(name, field.type))
    enum_type = None
    if get_origin(annotation) is None and isinstance(annotation, type) and issubclass(annotation, Enum):
        enum_type = annotation
    forced = _metadata_codec(field)

    if forced == "enum" or (forced is None and enum_type is not None):
        if enum_type is None:
            raise ValueError(
                f"Field {name!r} uses enum codec but has no Enum annotation."
            )
        return "enum", enum_type
    if forced == "json":
        return "json", None
    if annotation in (dict, list) or get_origin(annotation) in (dict, list):
        return "json", None
    return None, None


def _metadata_codec(field: Field[Any]) -> Optional[str]:
    codec = field.metadata.get("codec")
    if codec is None:
        return None
    if not isinstance(codec, str):
        raise TypeError(
            f"Field {field.name!r} metadata codec must be a string, "
            f"got {type(codec).__name__}."
        )
    normalized = codec.strip().lower()
    if normalized not in SUPPORTED_CODECS:
        raise ValueError(
            f"Unsupported codec {codec!r} on field {field.name!r}. "
            "Supported codecs: 'json', 'enum'."
        )
    return normalized


def _to_enum(enum_type: type[Enum], value: Any, name: str) -> Enum:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        pass
    if isinstance(value, str) and value in enum_type.__members__:
        return enum_type[value]
    raise ValueError(
        f"Invalid value {value!r} for enum {enum_type.__name__} on field {name!r}."
    )


@lru_cache(maxsize=None)
def _field_map(cls: Type[Any]) -> dict[str, Field[Any]]:
    return {field.name: field for field in fields(cls)}


@lru_cache(maxsize=None)
def _type_hints(cls: Type[Any]) -> dict[str, Any]:
    try:
        return dict(get_type_hints(cls))
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to raw `Field.type`.
        return {}


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation
    args = get_args(annotation)
    non_none = [arg for arg in args if arg is not type(None)]
    if len(non_none) == 1 and len(args) == 2:
        return non_none[0]
    return annotation
