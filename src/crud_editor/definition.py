# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Declarative table definitions loaded from JSON.

A definition file describes one table:

    {
        "table": "students",
        "dialect": "postgresql",
        "fields": [
            {"name": "id", "options": ["primary_key", "read"]},
            {"name": "name", "options": ["always"]},
            {"name": "school_id", "options": ["create", "read", "filter"]}
        ],
        "soft_delete": ["deleted_at"],
        "pagination": {"strategy": "keyset", "field": "id"}
    }

Option names map to the combinators in fields.OPTIONS.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .dialects import Dialect
from .editor import EditorConfig
from .fields import OPTIONS, new_field
from .pagination import PaginationStrategy


class FieldDefinition(BaseModel):
    name: str
    options: list[str] = Field(default_factory=list)

    @field_validator("options")
    @classmethod
    def known_options(cls, value: list[str]) -> list[str]:
        unknown = [o for o in value if o not in OPTIONS]
        if unknown:
            raise ValueError(f"unknown field options {unknown}; expected {sorted(OPTIONS)}")
        return value


class PaginationDefinition(BaseModel):
    strategy: PaginationStrategy = PaginationStrategy.NONE
    field: str | None = None


class TableDefinition(BaseModel):
    """Validated description of a table editor."""

    table: str
    dialect: str = "sqlite"
    fields: list[FieldDefinition]
    soft_delete: list[str] = Field(default_factory=list)
    pagination: PaginationDefinition = Field(default_factory=PaginationDefinition)

    @field_validator("dialect")
    @classmethod
    def known_dialect(cls, value: str) -> str:
        return Dialect.from_name(value).dialect_id

    def to_config(self, dialect: Dialect | None = None) -> EditorConfig:
        """Return an EditorConfig, optionally overriding the dialect."""
        fields = [new_field(f.name, *(OPTIONS[o] for o in f.options)) for f in self.fields]
        config = EditorConfig(self.table, dialect or Dialect.from_name(self.dialect), *fields)
        if self.soft_delete:
            config.soft_delete(True, *self.soft_delete)
        if self.pagination.strategy is not PaginationStrategy.NONE:
            extra = [self.pagination.field] if self.pagination.field else []
            config.paginate(self.pagination.strategy, *extra)
        return config


def load_definition(path: str | Path) -> TableDefinition:
    """Read and validate a JSON table definition."""
    data = json.loads(Path(path).read_text())
    return TableDefinition.model_validate(data)


__all__ = ["FieldDefinition", "PaginationDefinition", "TableDefinition", "load_definition"]
