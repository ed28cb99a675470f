from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Final

from bs4 import BeautifulSoup
from pydantic import BaseModel

from sweetkicks_core.forms.fields import BoundField, resolve_field

logger = logging.getLogger(__name__)

DEFAULT_BIND_ATTRIBUTE: Final[str] = "bind-for"
DEFAULT_BOUND_TAGS: Final[tuple[str, ...]] = ("input", "sl-input")


class BindingTable:
    """Tag name -> binding attribute.

    One generic binding procedure serves every entry; supporting another
    element is a matter of adding a row here.
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = {}
        for tag_name, bind_attribute in (entries or {}).items():
            self.register(tag_name, bind_attribute)

    @classmethod
    def for_tags(
        cls, tags: Iterable[str], *, bind_attribute: str = DEFAULT_BIND_ATTRIBUTE
    ) -> BindingTable:
        return cls({t: bind_attribute for t in tags})

    def register(self, tag_name: str, bind_attribute: str = DEFAULT_BIND_ATTRIBUTE) -> None:
        # html.parser lowercases names, so entries are stored the same way.
        self._entries[tag_name.strip().lower()] = bind_attribute.strip().lower()

    def bind_attribute_for(self, tag_name: str) -> str | None:
        return self._entries.get(tag_name.lower())

    def tag_names(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def bind_attributes(attrs: Mapping[str, Any], field: BoundField) -> dict[str, Any]:
    """Merge the attributes for ``field`` into a copy of ``attrs``.

    ``name``, ``value``, ``required`` and the length/range flags are owned by the
    binder and overwritten. ``id`` and ``type`` are only filled in when the
    author left them out. Nothing else is touched or removed.
    """

    out = dict(attrs)
    out.setdefault("id", field.html_id)
    out.setdefault("type", field.input_type)
    out["name"] = field.name

    value = field.formatted_value
    if value is not None:
        out["value"] = value

    if field.required:
        out["required"] = ""

    for attr, constraint in (
        ("minlength", field.min_length),
        ("maxlength", field.max_length),
        ("min", field.minimum),
        ("max", field.maximum),
    ):
        if constraint is not None:
            out[attr] = str(constraint)

    return out


def apply_bindings(html: str, model: BaseModel, table: BindingTable) -> str:
    """Bind every matching tag in ``html`` to ``model``.

    A tag matches when its name is in ``table`` and it carries that entry's
    binding attribute. Returns ``html`` unchanged when nothing matched.
    BindingTargetNotFound propagates to the caller.
    """

    if not len(table):
        return html

    soup = BeautifulSoup(html, "html.parser")
    bound = 0
    for tag in soup.find_all(table.tag_names()):
        bind_attribute = table.bind_attribute_for(tag.name)
        if bind_attribute is None:
            continue
        expression = tag.get(bind_attribute)
        if expression is None:
            continue

        field = resolve_field(model, str(expression))
        tag.attrs = bind_attributes(tag.attrs, field)
        bound += 1

    if not bound:
        return html

    logger.debug("Bound %d tag(s) to %s", bound, type(model).__name__)
    return str(soup)
