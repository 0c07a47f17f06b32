# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for reading FastAPI requests into data forms."""

from __future__ import annotations

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from crud_editor.integration import read_form, read_json


@pytest.fixture
def client():
    app = FastAPI()

    @app.api_route("/form", methods=["GET", "POST"])
    async def form_endpoint(request: Request):
        return dict(await read_form(request))

    @app.post("/json")
    async def json_endpoint(request: Request):
        try:
            form = await read_json(request)
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        return {"keys": sorted(form), "name": form.get("name")}

    return TestClient(app)


class TestReadForm:
    def test_query_params(self, client):
        response = client.get("/form", params={"school_id": "3", "name": "Ann"})
        assert response.status_code == 200
        assert response.json() == {"school_id": "3", "name": "Ann"}

    def test_first_value_wins(self, client):
        response = client.get("/form?school_id=3&school_id=4")
        assert response.json() == {"school_id": "3"}

    def test_form_fields_override_query(self, client):
        response = client.post("/form?name=Query&age=9", data={"name": "Body"})
        assert response.json() == {"name": "Body", "age": "9"}


class TestReadJson:
    def test_object(self, client):
        response = client.post("/json", json={"name": "Ann", "age": 12})
        assert response.json() == {"keys": ["age", "name"], "name": "Ann"}

    def test_non_object_rejected(self, client):
        response = client.post("/json", json=[1, 2])
        assert response.status_code == 400
        assert response.json() == {"error": "expected a JSON object, got list"}
