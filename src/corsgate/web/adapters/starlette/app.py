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
"""corsgate web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware

from corsgate.cors.evaluator import CorsEvaluator
from corsgate.cors.source import PolicySource
from corsgate.kernel.exceptions import CorsGateException
from corsgate.web.adapters.starlette.errors import corsgate_exception_handler
from corsgate.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from corsgate.web.adapters.starlette.filters import (
    CorsFilter,
    RequestLoggingFilter,
    TransactionIdFilter,
)
from corsgate.web.ports.filter import WebFilter
from corsgate.web.routes import RouteTable

logger = structlog.get_logger("corsgate.web")


def create_app(
    policies: PolicySource | None = None,
    routes: RouteTable | None = None,
    debug: bool = False,
    extra_filters: Sequence[WebFilter] = (),
    lifespan: Any = None,
) -> Starlette:
    """Create a Starlette application with the corsgate filter chain.

    The chain, in order: transaction id, request logging, CORS (when
    *policies* is given), then any *extra_filters* by their ``@order``.
    Without *policies* no CORS headers are ever emitted.
    """
    filters: list[WebFilter] = [
        TransactionIdFilter(),
        RequestLoggingFilter(),
    ]
    if policies is not None:
        filters.append(CorsFilter(CorsEvaluator(policies)))
    filters.extend(extra_filters)

    table = routes if routes is not None else RouteTable()

    app = Starlette(
        debug=debug,
        middleware=[Middleware(WebFilterChainMiddleware, filters=filters)],
        routes=table.to_starlette_routes(),
        lifespan=lifespan,
    )
    app.add_exception_handler(CorsGateException, corsgate_exception_handler)

    app.state.corsgate_routes = list(table)
    app.state.corsgate_policies = policies

    for definition in table:
        logger.debug("route_registered", method=definition.method, path=definition.path)

    return app
