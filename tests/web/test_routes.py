# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the explicit RouteTable."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.testclient import TestClient

from corsgate.kernel.exceptions import ConfigurationError
from corsgate.web.routes import RouteTable


async def read(request: Request) -> PlainTextResponse:
    """Read an item."""
    return PlainTextResponse("read")


async def write(request: Request) -> PlainTextResponse:
    return PlainTextResponse("write")


class TestRouteTable:
    def test_add_with_prefix(self):
        table = RouteTable(prefix="/api/")
        definition = table.add("get", "/items", read)

        assert definition.method == "GET"
        assert definition.path == "/api/items"
        assert definition.summary == "Read an item."
        assert table.resolve("GET", "/api/items") is definition

    def test_decorators(self):
        table = RouteTable()

        @table.post("/items")
        async def create(request):
            return PlainTextResponse("created")

        assert table.resolve("POST", "/items").handler is create
        assert len(table) == 1

    def test_duplicate_rejected(self):
        table = RouteTable()
        table.add("GET", "/items", read)
        with pytest.raises(ConfigurationError) as exc_info:
            table.add("GET", "/items", write)
        assert exc_info.value.code == "ROUTE_DUPLICATE"

    def test_same_path_different_methods(self):
        table = RouteTable()
        table.add("GET", "/items", read)
        table.add("PUT", "/items", write)

        client = TestClient(Starlette(routes=table.to_starlette_routes()))
        assert client.get("/items").text == "read"
        assert client.put("/items").text == "write"
        assert client.delete("/items").status_code == 405

    def test_include(self):
        banking = RouteTable(prefix="/api/banking")
        banking.add("GET", "/balance", read)
        root = RouteTable()
        root.include(banking)

        assert [(d.method, d.path) for d in root] == [("GET", "/api/banking/balance")]

    def test_resolve_unknown(self):
        assert RouteTable().resolve("GET", "/missing") is None
