from __future__ import annotations

from sweetkicks_core.forms.binder import (
    DEFAULT_BIND_ATTRIBUTE,
    DEFAULT_BOUND_TAGS,
    BindingTable,
    apply_bindings,
    bind_attributes,
)
from sweetkicks_core.forms.errors import BindingError, BindingTargetNotFound
from sweetkicks_core.forms.fields import BoundField, format_value, resolve_field

__all__ = [
    "DEFAULT_BIND_ATTRIBUTE",
    "DEFAULT_BOUND_TAGS",
    "BindingError",
    "BindingTable",
    "BindingTargetNotFound",
    "BoundField",
    "apply_bindings",
    "bind_attributes",
    "format_value",
    "resolve_field",
]
