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
"""Demo controllers: banking balance/transfer and a generic data API.

Authentication is permit-all; these handlers only exist to be called
cross-origin through the CORS filter.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel, ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from corsgate.demo.models import ApiResponse, TransferRequest
from corsgate.kernel.exceptions import ValidationException
from corsgate.web.routes import RouteTable

logger = structlog.get_logger("corsgate.demo")

BALANCE_MESSAGE = "Balance: ₹10,000"


def _respond(payload: BaseModel) -> JSONResponse:
    return JSONResponse(payload.model_dump())


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError
        raise ValidationException("Request body is not valid JSON", code="INVALID_JSON") from exc


async def balance(request: Request) -> JSONResponse:
    """Check account balance."""
    return _respond(ApiResponse(status="success", message=BALANCE_MESSAGE))


async def transfer(request: Request) -> JSONResponse:
    """Transfer funds (preflighted: JSON body)."""
    try:
        body = TransferRequest.model_validate(await _read_json(request))
    except ValidationError as exc:
        raise ValidationException(
            "Invalid transfer request",
            code="INVALID_TRANSFER",
            context={"errors": [e["msg"] for e in exc.errors()]},
        ) from exc

    logger.info("transfer_requested", amount=body.amount, to_account=body.to_account)
    return _respond(ApiResponse(status="success", message=f"Transferred ₹{body.amount} to account"))


async def get_data(request: Request) -> JSONResponse:
    """Data readable from allowed origins."""
    return JSONResponse({"message": "This data is accessible from allowed origins"})


async def submit(request: Request) -> JSONResponse:
    """Echo a submitted JSON object."""
    payload = await _read_json(request)
    if not isinstance(payload, dict):
        raise ValidationException("Request body must be a JSON object", code="INVALID_PAYLOAD")
    return _respond(ApiResponse(status="success", message=f"Data received: {payload}"))


async def handle_options(request: Request) -> Response:
    """Answer OPTIONS without a body; CORS headers come from the filter chain."""
    return Response(status_code=200)


def _with_options(table: RouteTable, *paths: str) -> RouteTable:
    for path in paths:
        table.add("OPTIONS", path, handle_options)
    return table


def banking_routes() -> RouteTable:
    table = RouteTable(prefix="/api/banking")
    table.add("GET", "/balance", balance)
    table.add("POST", "/transfer", transfer)
    return _with_options(table, "", "/balance", "/transfer")


def api_routes() -> RouteTable:
    table = RouteTable(prefix="/api")
    table.add("GET", "/data", get_data)
    table.add("POST", "/submit", submit)
    return _with_options(table, "/data", "/submit")


def demo_routes() -> RouteTable:
    """Every demo endpoint in one table."""
    table = RouteTable()
    table.include(banking_routes())
    table.include(api_routes())
    return table
