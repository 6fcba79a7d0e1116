# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
HTML attribute collection printed as part of a tag.

Example:
    attributes = Attribute({"id": "socks"})
    attributes.add_class("red", "wool")
    f"<div{attributes}>"  # '<div id="socks" class="red wool">'
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Optional

from markupsafe import Markup, escape


def _class_list(value: Any) -> list[str]:
    if value is None or value is False:
        return []
    if isinstance(value, str):
        return [part for part in value.split() if part]
    if isinstance(value, Iterable):
        out: list[str] = []
        for item in value:
            out.extend(_class_list(item))
        return out
    return [str(value)]


def _unique(values: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


class Attribute(MutableMapping):
    """Mapping of HTML attribute names to values, rendered as ' name="value"' pairs."""

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None):
        self._storage: dict[str, Any] = {}
        for name, value in (attributes or {}).items():
            self[name] = value

    def __getitem__(self, name: str) -> Any:
        return self._storage[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if name == "class":
            value = _unique(_class_list(value))
        elif isinstance(value, (list, tuple, set)):
            value = list(value)
        self._storage[name] = value

    def __delitem__(self, name: str) -> None:
        del self._storage[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def add_class(self, *classes: Any) -> Attribute:
        """Add classes, keeping existing ones and their order."""
        existing = self._storage.get("class", [])
        self["class"] = [*existing, *_class_list(list(classes))]
        return self

    def remove_class(self, *classes: Any) -> Attribute:
        if "class" in self._storage:
            removed = set(_class_list(list(classes)))
            self._storage["class"] = [c for c in self._storage["class"] if c not in removed]
        return self

    def has_class(self, name: str) -> bool:
        return name in self._storage.get("class", [])

    def set_attribute(self, name: str, value: Any) -> Attribute:
        self[name] = value
        return self

    def remove_attribute(self, *names: str) -> Attribute:
        for name in names:
            self._storage.pop(name, None)
        return self

    def has_attribute(self, name: str) -> bool:
        return name in self._storage

    def merge(self, other: Mapping[str, Any]) -> Attribute:
        """Merge other attributes in; classes are combined, other values replaced."""
        for name, value in other.items():
            if name == "class":
                self.add_class(value)
            else:
                self[name] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return {name: list(value) if isinstance(value, list) else value for name, value in self._storage.items()}

    def __copy__(self) -> Attribute:
        return Attribute(self.to_dict())

    def _render_value(self, value: Any) -> str:
        if isinstance(value, list):
            return " ".join(str(escape(v)) for v in value)
        return str(escape(value))

    def __html__(self) -> Markup:
        parts = []
        for name, value in self._storage.items():
            if value is None or value is False:
                continue
            if name == "class" and not value:
                continue
            if value is True:
                parts.append(f" {escape(name)}")
                continue
            parts.append(f' {escape(name)}="{self._render_value(value)}"')
        return Markup("".join(parts))

    def __str__(self) -> str:
        return str(self.__html__())

    def __repr__(self) -> str:
        return f"Attribute({self._storage!r})"
