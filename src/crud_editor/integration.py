# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Read FastAPI/Starlette request data into a data form.

No validation is done on the data: the form holds whatever the client sent.

Usage:
    @app.post("/students")
    async def create_student(request: Request):
        form = await read_json(request)
        async with db.connection():
            return await students.create(form, db)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .form import MapBackedDataForm

if TYPE_CHECKING:
    from fastapi import Request


async def read_form(request: Request) -> MapBackedDataForm:
    """Read query parameters and form fields (first value per key).

    Form fields override query parameters with the same name.
    """
    form = MapBackedDataForm()
    for key in request.query_params.keys():
        form.set(key, request.query_params.getlist(key)[0])
    if request.method in ("POST", "PUT", "PATCH"):
        body = await request.form()
        for key in body.keys():
            form.set(key, body.getlist(key)[0])
    return form


async def read_json(request: Request) -> MapBackedDataForm:
    """Read a JSON object body.

    Raises:
        ValueError: If the body is not a JSON object.
    """
    data = await request.json()
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return MapBackedDataForm(data)


__all__ = ["read_form", "read_json"]
