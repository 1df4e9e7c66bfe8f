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
"""Tests for the corsgate exception handler."""

from __future__ import annotations

from starlette.requests import Request
from starlette.testclient import TestClient

from corsgate.cors.policy import CorsPolicy
from corsgate.cors.source import PolicySource
from corsgate.kernel.exceptions import ConfigurationError, ValidationException
from corsgate.web.adapters.starlette.app import create_app
from corsgate.web.routes import RouteTable

ORIGIN = "http://localhost:3000"


async def invalid(request: Request):
    raise ValidationException("amount must be positive", code="INVALID_TRANSFER", context={"field": "amount"})


async def misconfigured(request: Request):
    raise ConfigurationError("boom")


def _client() -> TestClient:
    table = RouteTable()
    table.add("POST", "/api/invalid", invalid)
    table.add("GET", "/api/misconfigured", misconfigured)
    policies = PolicySource([CorsPolicy(path_pattern="/api/**", allowed_origins=[ORIGIN])])
    return TestClient(create_app(policies=policies, routes=table))


class TestExceptionHandler:
    def test_validation_exception_is_422(self):
        resp = _client().post("/api/invalid", headers={"X-Transaction-Id": "tx-1"})

        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["message"] == "amount must be positive"
        assert error["code"] == "INVALID_TRANSFER"
        assert error["transaction_id"] == "tx-1"
        assert error["path"] == "/api/invalid"
        assert error["context"] == {"field": "amount"}

    def test_error_response_still_gets_cors_headers(self):
        resp = _client().post("/api/invalid", headers={"Origin": ORIGIN})

        assert resp.status_code == 422
        assert resp.headers["access-control-allow-origin"] == ORIGIN

    def test_code_defaults_to_class_name(self):
        resp = _client().get("/api/misconfigured")

        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == "ConfigurationError"
        assert "context" not in resp.json()["error"]
