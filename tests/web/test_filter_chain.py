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
"""Tests for WebFilterChainMiddleware — ordering, short-circuit, conditional skip."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from corsgate.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from corsgate.web.adapters.starlette.filters import TRANSACTION_ID_HEADER, TransactionIdFilter
from corsgate.web.filters import OncePerRequestFilter
from corsgate.web.ordering import HIGHEST_PRECEDENCE, get_order, order
from corsgate.web.ports.filter import WebFilter

# ---------------------------------------------------------------------------
# Test filters
# ---------------------------------------------------------------------------

seen: list[str] = []


@order(HIGHEST_PRECEDENCE + 10)
class OuterFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        seen.append("outer")
        response = await call_next(request)
        response.headers["X-Outer"] = "applied"
        return response


@order(HIGHEST_PRECEDENCE + 20)
class InnerFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        seen.append("inner")
        response = await call_next(request)
        response.headers["X-Inner"] = "applied"
        return response


@order(5)
class ApiOnlyFilter(OncePerRequestFilter):
    url_patterns = ["/api/**"]
    exclude_patterns = ["/api/health"]

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Api-Filter"] = "applied"
        return response


@order(10)
class ShortCircuitFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        return JSONResponse({"error": "blocked"}, status_code=403)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _ok_handler(request: Request) -> PlainTextResponse:
    seen.append("handler")
    return PlainTextResponse("OK")


def _make_app(*filters) -> Starlette:
    return Starlette(
        routes=[
            Route("/test", _ok_handler),
            Route("/api/data", _ok_handler),
            Route("/api/banking/balance", _ok_handler),
            Route("/api/health", _ok_handler),
        ],
        middleware=[Middleware(WebFilterChainMiddleware, filters=list(filters))],
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFilterChainOrdering:
    def setup_method(self):
        seen.clear()

    def test_filters_sorted_by_order_regardless_of_registration(self):
        client = TestClient(_make_app(InnerFilter(), OuterFilter()))
        resp = client.get("/test")

        assert resp.status_code == 200
        assert resp.headers["X-Outer"] == "applied"
        assert resp.headers["X-Inner"] == "applied"
        assert seen == ["outer", "inner", "handler"]

    def test_get_order(self):
        assert get_order(OuterFilter) < get_order(InnerFilter) < get_order(ApiOnlyFilter)

    def test_undecorated_order_is_zero(self):
        class Plain(OncePerRequestFilter):
            async def do_filter(self, request, call_next):
                return await call_next(request)

        assert get_order(Plain) == 0

    def test_filters_satisfy_protocol(self):
        assert isinstance(OuterFilter(), WebFilter)


class TestFilterChainConditionalSkip:
    def test_pattern_filter_applies_to_nested_path(self):
        client = TestClient(_make_app(ApiOnlyFilter()))
        assert client.get("/api/banking/balance").headers.get("X-Api-Filter") == "applied"

    def test_pattern_filter_skips_non_matching_path(self):
        client = TestClient(_make_app(ApiOnlyFilter()))
        assert "X-Api-Filter" not in client.get("/test").headers

    def test_exclude_pattern(self):
        client = TestClient(_make_app(ApiOnlyFilter()))
        assert "X-Api-Filter" not in client.get("/api/health").headers


class TestFilterChainShortCircuit:
    def setup_method(self):
        seen.clear()

    def test_short_circuit_skips_handler(self):
        client = TestClient(_make_app(ShortCircuitFilter()))
        resp = client.get("/test")

        assert resp.status_code == 403
        assert resp.json() == {"error": "blocked"}
        assert "handler" not in seen

    def test_outer_filter_decorates_short_circuit_response(self):
        client = TestClient(_make_app(OuterFilter(), ShortCircuitFilter()))
        resp = client.get("/test")

        assert resp.status_code == 403
        assert resp.headers["X-Outer"] == "applied"


class TestTransactionIdFilter:
    def test_generates_transaction_id(self):
        resp = TestClient(_make_app(TransactionIdFilter())).get("/test")
        assert resp.headers[TRANSACTION_ID_HEADER]

    def test_propagates_transaction_id(self):
        resp = TestClient(_make_app(TransactionIdFilter())).get("/test", headers={TRANSACTION_ID_HEADER: "tx-42"})
        assert resp.headers[TRANSACTION_ID_HEADER] == "tx-42"

    def test_middleware_exposes_sorted_filters(self):
        middleware = WebFilterChainMiddleware(_ok_handler, filters=[InnerFilter(), OuterFilter()])
        assert [type(f) for f in middleware.filters] == [OuterFilter, InnerFilter]
