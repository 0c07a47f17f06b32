# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""End-to-end editor tests against PostgreSQL.

Requires a server on localhost:5433, skipped otherwise.
"""

from __future__ import annotations

import pytest

from crud_editor import Dialect, MapBackedDataForm, keyset_paging, offset_paging

pytestmark = pytest.mark.postgres


@pytest.fixture
def students(student_editor_factory):
    return student_editor_factory(Dialect.POSTGRESQL).build()


@pytest.fixture
def schools(school_editor_factory):
    return school_editor_factory(Dialect.POSTGRESQL).build()


async def add_student(editor, db, name, school_id, age=10):
    form = MapBackedDataForm(name=name, age=age, created_at="2025-01-01", school_id=school_id)
    return await editor.create(form, db)


class TestPostgresEditor:
    async def test_create_returning(self, pg_db, students):
        row = await add_student(students, pg_db, "Ann", 1, age=12)
        assert isinstance(row["id"], int)
        assert row["name"] == "Ann"
        assert row["updated_at"] is None

    async def test_update_returning(self, pg_db, students):
        created = await add_student(students, pg_db, "Ann", 1)
        form = MapBackedDataForm(
            id=created["id"], name="Anna", age=11, updated_at="2025-02-01", school_id=1
        )
        row = await students.update(form, pg_db)
        assert row["name"] == "Anna"
        assert row["updated_at"] == "2025-02-01"

    async def test_update_filtered_out(self, pg_db, students):
        created = await add_student(students, pg_db, "Ann", 1)
        form = MapBackedDataForm(id=created["id"], name="Eve", age=1, school_id=9)
        assert not (await students.update(form, pg_db)).has_data()

    async def test_soft_delete(self, pg_db, students):
        created = await add_student(students, pg_db, "Ann", 1)
        form = MapBackedDataForm(id=created["id"], school_id=1, deleted_at="2025-03-01")
        assert await students.delete(form, pg_db) == created
        stored = await pg_db.fetch_one(
            'SELECT "deleted_at" FROM "students" WHERE "id"=$1', [created["id"]]
        )
        assert stored == {"deleted_at": "2025-03-01"}

    async def test_hard_delete(self, pg_db, schools):
        created = await schools.create(MapBackedDataForm(school_name="North"), pg_db)
        assert await schools.delete(MapBackedDataForm(id=created["id"]), pg_db) == created
        gone = await schools.single_read(MapBackedDataForm(id=created["id"]), pg_db)
        assert not gone.has_data()

    async def test_keyset_read(self, pg_db, students):
        for name in ("Ann", "Bob", "Cid"):
            await add_student(students, pg_db, name, 1)
        form = MapBackedDataForm(school_id=1)
        first = await students.read(form, pg_db, keyset_paging(0, 2))
        second = await students.read(form, pg_db, keyset_paging(first[-1]["id"], 2))
        assert [r["name"] for r in first + second] == ["Ann", "Bob", "Cid"]

    async def test_offset_read(self, pg_db, schools):
        for name in ("North", "South", "East"):
            await schools.create(MapBackedDataForm(school_name=name), pg_db)
        page = await schools.read(MapBackedDataForm(), pg_db, offset_paging(1, 2))
        assert [r["school_name"] for r in page] == ["East"]
