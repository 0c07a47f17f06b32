# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Data forms: the key/value input supplying field values to CRUD calls.

The editor only needs has/get/set; remove and iterate are used by the
helpers that build forms from other sources. A form lives for one CRUD call
and may be mutated by it (create() injects the generated primary key).

Building forms from records:
    Dataclass instances use a per-field metadata tag, ``"-"`` skips a field:

        @dataclass
        class Student:
            name: str = field(metadata={"json": "name"})
            age: int = field(metadata={"json": "age"})
            secret: str = field(default="", metadata={"json": "-"})

        form = form_from_json_struct(Student("Ann", 12))

    Pydantic models use their aliases and honor ``exclude``:

        form = form_from_model(StudentModel(name="Ann", age=12))
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pydantic import BaseModel


@runtime_checkable
class DataForm(Protocol):
    """Abstract mapping from field name to value."""

    def has(self, name: str) -> bool: ...

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    def remove(self, name: str) -> None: ...

    def iterate(self, visit: Callable[[str, Any], None]) -> None: ...


class MapBackedDataForm(dict[str, Any]):
    """DataForm backed by a plain dict. Missing keys read as None."""

    def has(self, name: str) -> bool:
        return name in self

    def get(self, name: str, default: Any = None) -> Any:
        return super().get(name, default)

    def set(self, name: str, value: Any) -> None:
        self[name] = value

    def remove(self, name: str) -> None:
        self.pop(name, None)

    def iterate(self, visit: Callable[[str, Any], None]) -> None:
        for key, value in self.items():
            visit(key, value)


def _merge(form: MapBackedDataForm, additional: DataForm | None) -> MapBackedDataForm:
    if additional is not None:
        additional.iterate(form.set)
    return form


def form_from_struct(
    record: Any, tag: str, additional: DataForm | None = None
) -> MapBackedDataForm:
    """Build a form from a dataclass instance using a metadata tag.

    Only fields carrying ``tag`` in their metadata are copied, under the
    tag's value as key. A tag value of ``"-"`` skips the field. Values from
    ``additional`` are appended, overwriting existing keys.

    Raises:
        TypeError: If ``record`` is not a dataclass instance.
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise TypeError(f"value must be a dataclass instance, got {type(record).__name__}")

    form = MapBackedDataForm()
    for f in dataclasses.fields(record):
        key = f.metadata.get(tag)
        if key is None or key == "-":
            continue
        form.set(key, getattr(record, f.name))
    return _merge(form, additional)


def form_from_json_struct(record: Any, additional: DataForm | None = None) -> MapBackedDataForm:
    """form_from_struct() with the ``json`` tag."""
    return form_from_struct(record, "json", additional)


def form_from_model(model: BaseModel, additional: DataForm | None = None) -> MapBackedDataForm:
    """Build a form from a pydantic model (aliases as keys, excluded fields skipped)."""
    form = MapBackedDataForm(model.model_dump(by_alias=True))
    return _merge(form, additional)


__all__ = [
    "DataForm",
    "MapBackedDataForm",
    "form_from_json_struct",
    "form_from_model",
    "form_from_struct",
]
