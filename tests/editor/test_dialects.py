# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for dialects module - quoting and placeholder rules."""

from __future__ import annotations

import pytest

from crud_editor.dialects import (
    Dialect,
    build_placeholders,
    count_bound,
    is_null_check,
    parameterize_fields,
)


class TestBuildPlaceholders:
    """Tests for build_placeholders()."""

    def test_postgresql_numbered(self):
        assert build_placeholders(5, Dialect.POSTGRESQL) == "$1,$2,$3,$4,$5"

    @pytest.mark.parametrize("dialect", [Dialect.MYSQL, Dialect.SQLITE])
    def test_mysql_sqlite_positional(self, dialect):
        assert build_placeholders(5, dialect) == "?,?,?,?,?"

    @pytest.mark.parametrize("dialect", list(Dialect))
    @pytest.mark.parametrize("count", [0, 1, 7])
    def test_exact_count(self, dialect, count):
        rendered = build_placeholders(count, dialect)
        assert (rendered.split(",") if rendered else []) == [
            dialect.placeholder(i + 1) for i in range(count)
        ]


class TestDialectRules:
    """Tests for per-dialect quote char, placeholder and RETURNING support."""

    def test_quote_chars(self):
        assert Dialect.MYSQL.quote_char == "`"
        assert Dialect.SQLITE.quote_char == "`"
        assert Dialect.POSTGRESQL.quote_char == '"'

    def test_only_postgresql_supports_returning(self):
        assert Dialect.POSTGRESQL.supports_returning
        assert not Dialect.MYSQL.supports_returning
        assert not Dialect.SQLITE.supports_returning

    def test_quote_and_unquote(self):
        assert Dialect.POSTGRESQL.quote("name") == '"name"'
        assert Dialect.POSTGRESQL.unquote('"name"') == "name"
        assert Dialect.SQLITE.unquote("`name`") == "name"

    def test_unquote_leaves_bare_names(self):
        assert Dialect.SQLITE.unquote("name") == "name"
        assert Dialect.SQLITE.unquote('"name"') == '"name"'

    def test_quote_null_check_quotes_column_only(self):
        assert Dialect.POSTGRESQL.quote("deleted_at IS NULL") == '"deleted_at" IS NULL'
        assert Dialect.MYSQL.quote("deleted_at IS NOT NULL") == "`deleted_at` IS NOT NULL"

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("mysql", Dialect.MYSQL),
            ("PostgreSQL", Dialect.POSTGRESQL),
            ("postgres", Dialect.POSTGRESQL),
            (" sqlite ", Dialect.SQLITE),
        ],
    )
    def test_from_name(self, name, expected):
        assert Dialect.from_name(name) is expected

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown dialect"):
            Dialect.from_name("oracle")

    def test_str_is_dialect_id(self):
        assert str(Dialect.POSTGRESQL) == "postgresql"


class TestParameterizeFields:
    """Tests for parameterize_fields()."""

    def test_comma_separated_assignments(self):
        fields = ['"name"', '"age"']
        assert parameterize_fields(fields, Dialect.POSTGRESQL) == '"name"=$1,"age"=$2'

    def test_and_joined_conditions(self):
        fields = ["`a`", "`b`"]
        assert parameterize_fields(fields, Dialect.SQLITE, use_and=True) == "`a`=? AND `b`=?"

    def test_start_index(self):
        fields = ['"a"', '"b"']
        assert (
            parameterize_fields(fields, Dialect.POSTGRESQL, use_and=True, start=4)
            == '"a"=$4 AND "b"=$5'
        )

    def test_null_check_consumes_no_index(self):
        fields = ['"a"', '"deleted_at" IS NULL', '"b"']
        assert (
            parameterize_fields(fields, Dialect.POSTGRESQL, use_and=True)
            == '"a"=$1 AND "deleted_at" IS NULL AND "b"=$2'
        )
        assert count_bound(fields) == 2

    def test_is_null_check(self):
        assert is_null_check('"x" IS NULL')
        assert is_null_check('"x" IS NOT NULL')
        assert not is_null_check('"x"')

    def test_empty(self):
        assert parameterize_fields([], Dialect.MYSQL) == ""
