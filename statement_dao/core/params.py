"""Parameter bindings accepted by statement DAOs.

A `Binding` is a tagged union over the accepted parameter shapes:

- `Unbound`: no parameters at all;
- `BeanBinding`: a model instance whose fields become named parameters;
- `NamedBinding`: a mapping whose keys are named parameters;
- `PositionalBinding`: an ordered sequence of positional parameters.

Callers can pass a `Binding` explicitly. Untyped values go through `bind()`,
which infers the shape and rejects anything else with `InvalidParameterError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Sequence, Tuple, Type

from .errors import InvalidParameterError
from .models import bean_params, type_name
from .types import QueryParams


class Binding(ABC):
    """Base class for parameter bindings."""

    kind: ClassVar[str] = "binding"

    @abstractmethod
    def params(self) -> QueryParams:
        """Return DB-API parameters (`dict`, `list`, or `None`)."""


@dataclass(frozen=True)
class Unbound(Binding):
    kind: ClassVar[str] = "none"

    def params(self) -> QueryParams:
        return None


UNBOUND = Unbound()


@dataclass(frozen=True)
class BeanBinding(Binding):
    obj: Any

    kind: ClassVar[str] = "bean"

    def params(self) -> QueryParams:
        return bean_params(self.obj)


@dataclass(frozen=True)
class NamedBinding(Binding):
    values: Mapping[str, Any]

    kind: ClassVar[str] = "named"

    def params(self) -> QueryParams:
        return dict(self.values)


@dataclass(frozen=True)
class PositionalBinding(Binding):
    values: Sequence[Any]

    kind: ClassVar[str] = "positional"

    def params(self) -> QueryParams:
        return list(self.values)


def accepted_shapes(model: Optional[Type[Any]]) -> Tuple[str, ...]:
    """Return the names of the parameter shapes accepted for `model`."""

    shapes: Tuple[str, ...] = ("Mapping", "list/tuple")
    if model is None:
        return shapes
    return (type_name(model),) + shapes


def bind(value: Any, model: Optional[Type[Any]] = None) -> Binding:
    """Classify a runtime parameter value into a `Binding`.

    Dispatch order: `None`, explicit `Binding`, instance of `model`, mapping,
    list/tuple. Strings and bytes are never positional sequences.

    Args:
        value: Parameter value supplied by the caller.
        model: Configured model class, or `None` when the DAO has none.

    Raises:
        InvalidParameterError: If `value` matches none of the accepted shapes,
            or is an explicit `Binding` whose contents have the wrong shape
            (including a `BeanBinding` whose object is not a `model` instance).
    """

    if value is None:
        return UNBOUND

    if isinstance(value, Binding):
        _check_binding(value, model)
        return value

    if model is not None and isinstance(value, model):
        return BeanBinding(value)
    if isinstance(value, Mapping):
        return NamedBinding(value)
    if isinstance(value, (list, tuple)):
        return PositionalBinding(value)

    raise InvalidParameterError(accepted_shapes(model), type_name(type(value)))


def _check_binding(binding: Binding, model: Optional[Type[Any]]) -> None:
    if isinstance(binding, BeanBinding):
        if model is None or not isinstance(binding.obj, model):
            raise InvalidParameterError(
                accepted_shapes(model), type_name(type(binding.obj))
            )
    elif isinstance(binding, NamedBinding):
        if not isinstance(binding.values, Mapping):
            raise InvalidParameterError(
                accepted_shapes(model), type_name(type(binding.values))
            )
    elif isinstance(binding, PositionalBinding):
        if not isinstance(binding.values, (list, tuple)):
            raise InvalidParameterError(
                accepted_shapes(model), type_name(type(binding.values))
            )
