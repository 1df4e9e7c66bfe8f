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
"""Exception handler — structured JSON error bodies for corsgate exceptions.

Registered for :class:`CorsGateException` only, so Starlette routes it
through its inner exception middleware and the response still passes back
through the filter chain (and so still receives CORS headers).
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from corsgate.kernel.exceptions import ConfigurationError, CorsGateException, ValidationException

_STATUS_MAP: dict[type, int] = {
    ValidationException: 422,
    ConfigurationError: 500,
}


def _get_status_code(exc: Exception) -> int:
    for exc_type, status in _STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return status
    return 500


async def corsgate_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a :class:`CorsGateException` as ``{"error": {...}}``."""
    transaction_id = getattr(request.state, "transaction_id", None) or str(uuid.uuid4())
    status = _get_status_code(exc)
    body: dict[str, Any] = {
        "error": {
            "message": str(exc),
            "code": getattr(exc, "code", None) or type(exc).__name__,
            "transaction_id": transaction_id,
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status,
            "path": request.url.path,
        }
    }
    context = getattr(exc, "context", None)
    if context:
        body["error"]["context"] = context
    return JSONResponse(body, status_code=status)
