"""Resolve a dotted field expression against a pydantic page model.

Each segment of the expression matches a model field by its Python name or by
its alias. The resolved ``BoundField`` carries everything an input-like element
needs: the binding name, the current value, and the validation metadata that
the model declares for the field.
"""
from __future__ import annotations

import datetime as dt
import types
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, SecretStr
from pydantic.fields import FieldInfo

from sweetkicks_core.forms.errors import BindingTargetNotFound


@dataclass(frozen=True)
class BoundField:
    name: str
    value: Any
    required: bool
    input_type: str = "text"
    min_length: int | None = None
    max_length: int | None = None
    minimum: Any | None = None
    maximum: Any | None = None

    @property
    def html_id(self) -> str:
        return self.name.replace(".", "_")

    @property
    def formatted_value(self) -> str | None:
        return format_value(self.value)


def format_value(value: Any) -> str | None:
    """String form of a model value as it goes into a ``value`` attribute.

    Returns None when no ``value`` attribute should be written at all.
    """

    if value is None:
        return None
    # Secrets are never echoed back to the client.
    if isinstance(value, SecretStr):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, dt.datetime):
        return value.replace(tzinfo=None).isoformat(timespec="minutes")
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, dt.time):
        return value.replace(tzinfo=None).isoformat(timespec="minutes")
    return str(value)


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def infer_input_type(annotation: Any) -> str:
    tp = _unwrap_optional(annotation)
    if not isinstance(tp, type):
        return "text"
    if issubclass(tp, SecretStr):
        return "password"
    # bool is an int subclass; keep it out of "number".
    if issubclass(tp, bool):
        return "text"
    if issubclass(tp, (int, float, Decimal)):
        return "number"
    if issubclass(tp, dt.datetime):
        return "datetime-local"
    if issubclass(tp, dt.date):
        return "date"
    if issubclass(tp, dt.time):
        return "time"
    return "text"


def _model_class(annotation: Any) -> type[BaseModel] | None:
    tp = _unwrap_optional(annotation)
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return tp
    return None


def _lookup_field(model_cls: type[BaseModel], segment: str) -> tuple[str, FieldInfo] | None:
    fields = model_cls.model_fields
    if segment in fields:
        return segment, fields[segment]
    for attr, info in fields.items():
        if info.alias == segment:
            return attr, info
    return None


def _constraint(info: FieldInfo, key: str) -> Any | None:
    for item in info.metadata:
        value = getattr(item, key, None)
        if value is not None:
            return value
    return None


def resolve_field(model: BaseModel, expression: str) -> BoundField:
    """Resolve ``expression`` (e.g. ``"Name"`` or ``"address.city"``) on ``model``.

    Raises BindingTargetNotFound when any segment names no field. A missing
    intermediate value (None) is not an error: the leaf resolves with value None.
    """

    model_name = type(model).__name__
    segments = [s.strip() for s in expression.split(".")]

    model_cls: type[BaseModel] | None = type(model)
    current: Any = model
    names: list[str] = []
    info: FieldInfo | None = None

    for index, segment in enumerate(segments):
        found = _lookup_field(model_cls, segment) if model_cls is not None else None
        if found is None:
            raise BindingTargetNotFound(expression, model_name)

        attr, info = found
        names.append(info.alias or attr)
        current = getattr(current, attr, None) if current is not None else None

        if index < len(segments) - 1:
            model_cls = _model_class(info.annotation)

    if info is None:
        raise BindingTargetNotFound(expression, model_name)

    min_length = _constraint(info, "min_length")
    return BoundField(
        name=".".join(names),
        value=current,
        required=info.is_required() or (min_length or 0) >= 1,
        input_type=infer_input_type(info.annotation),
        min_length=min_length,
        max_length=_constraint(info, "max_length"),
        minimum=_constraint(info, "ge"),
        maximum=_constraint(info, "le"),
    )
