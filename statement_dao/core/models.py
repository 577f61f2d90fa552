"""Model reflection helpers for binding fields and mapping result rows.

Two model styles are supported:

- dataclasses, whose fields come from `dataclasses.fields`;
- plain "bean" classes with a no-argument constructor, whose fields are the
  public class annotations plus the public attributes set by `__init__`.

Objects implementing `ParameterSource` decide their own bound parameters.
"""

from __future__ import annotations

import inspect
from dataclasses import fields, is_dataclass
from functools import lru_cache
from typing import (
    Any,
    ClassVar,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    get_origin,
    get_type_hints,
)

from .codecs import decode_field, encode_field
from .contracts import ParameterSource
from .types import NamedParams, RowMapping

T = TypeVar("T")


def type_name(cls: Type[Any]) -> str:
    """Return a qualified, human-readable type name for error messages."""

    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", repr(cls))
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def require_model_class(model: Any) -> None:
    """Validate that a model descriptor is a class."""

    if not isinstance(model, type):
        raise TypeError(
            f"Model must be a class, got {type(model).__name__} instance."
        )


def model_fields(cls: Type[Any]) -> List[str]:
    """Return the field names of a model class.

    For dataclasses this is the declared field order. For bean classes it is
    the public annotated attributes followed by any other public attribute
    set by the no-argument constructor.
    """

    require_model_class(cls)
    if is_dataclass(cls):
        return [field.name for field in fields(cls)]
    return _bean_fields(cls, _new_bean(cls))


def bean_params(obj: Any) -> NamedParams:
    """Return an object's field names and values as named SQL parameters."""

    if isinstance(obj, ParameterSource):
        return dict(obj.to_params())

    cls = type(obj)
    if is_dataclass(obj):
        return {
            field.name: encode_field(cls, field.name, getattr(obj, field.name))
            for field in fields(obj)
        }
    return {
        name: getattr(obj, name)
        for name in _bean_fields(cls, obj)
        if hasattr(obj, name)
    }


def row_to_model(cls: Type[T], row: RowMapping) -> T:
    """Map one result row onto a new model instance.

    Columns are matched to fields by exact name first, then ignoring case and
    underscores (``FIRST_NAME`` and ``firstName`` both fill ``first_name``).
    Unmatched columns are ignored; unmatched fields keep their defaults.
    """

    if is_dataclass(cls):
        return _row_to_dataclass(cls, row)

    obj = _new_bean(cls)
    index = _field_index(_bean_fields(cls, obj))
    for column, value in row.items():
        name = _match_column(index, column)
        if name is not None:
            setattr(obj, name, value)
    return obj


def _row_to_dataclass(cls: Type[T], row: RowMapping) -> T:
    init_fields, other_fields = _dataclass_layout(cls)
    index = _field_index(init_fields + other_fields)

    kwargs: Dict[str, Any] = {}
    late: Dict[str, Any] = {}
    for column, value in row.items():
        name = _match_column(index, column)
        if name is None:
            continue
        decoded = decode_field(cls, name, value)
        if name in other_fields:
            late[name] = decoded
        else:
            kwargs[name] = decoded

    obj = cls(**kwargs)
    for name, value in late.items():
        setattr(obj, name, value)
    return obj


@lru_cache(maxsize=None)
def _dataclass_layout(cls: Type[Any]) -> tuple[List[str], List[str]]:
    init_fields = [field.name for field in fields(cls) if field.init]
    other_fields = [field.name for field in fields(cls) if not field.init]
    return init_fields, other_fields


def _field_index(names: Iterable[str]) -> Dict[str, str]:
    index: Dict[str, str] = {}
    for name in names:
        index[name] = name
        index.setdefault(_normalize(name), name)
    return index


def _match_column(index: Mapping[str, str], column: str) -> Optional[str]:
    name = index.get(column)
    if name is not None:
        return name
    return index.get(_normalize(column))


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


def _new_bean(cls: Type[T]) -> T:
    if _required_init_params(cls):
        raise TypeError(
            f"{type_name(cls)} must be a dataclass or constructible with no arguments."
        )
    return cls()


def _required_init_params(cls: Type[Any]) -> List[str]:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); let the call decide.
        return []
    return [
        param.name
        for param in signature.parameters.values()
        if param.default is param.empty
        and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def _bean_fields(cls: Type[Any], obj: Any) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        hints = _resolved_hints(klass)
        for name, annotation in inspect.get_annotations(klass).items():
            if name.startswith("_") or name in names:
                continue
            if _is_class_var(hints.get(name, annotation)):
                continue
            names.append(name)
    for name in getattr(obj, "__dict__", {}):
        if not name.startswith("_") and name not in names:
            names.append(name)
    return names


def _resolved_hints(klass: Type[Any]) -> Dict[str, Any]:
    try:
        return get_type_hints(klass)
    except (NameError, TypeError):
        return {}


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        # Unresolvable forward reference; only the outermost name counts.
        return annotation.split("[", 1)[0].strip() in ("ClassVar", "typing.ClassVar")
    return annotation is ClassVar or get_origin(annotation) is ClassVar
