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
"""CORS filter — the evaluator as a stage of the filter chain.

The work is split into three plain functions so each can be exercised
without a running server:

1. :func:`evaluate_request` — Starlette request -> :class:`CorsDecision`
2. dispatch — ``call_next`` runs the route table (skipped for preflights)
3. :func:`decorate_response` — attach the decision's headers

Preflights to a scoped path are answered here with ``200`` and never reach
a handler.  A denied request gets no ``Access-Control-*`` headers and no
special status; the browser performs the block.
"""

from __future__ import annotations

from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from corsgate.cors.decision import CorsDecision, Verdict
from corsgate.cors.evaluator import CorsEvaluator
from corsgate.cors.request import IncomingRequest
from corsgate.web.filters import OncePerRequestFilter
from corsgate.web.ordering import HIGHEST_PRECEDENCE, order
from corsgate.web.ports.filter import CallNext

logger = structlog.get_logger("corsgate.cors")


def evaluate_request(evaluator: CorsEvaluator, request: Request) -> CorsDecision:
    """Snapshot the CORS inputs of *request* and evaluate them."""
    incoming = IncomingRequest.from_headers(request.method, request.url.path, request.headers)
    return evaluator.evaluate(incoming)


def preflight_response(decision: CorsDecision) -> Response:
    """Terminal response for a preflight: empty ``200`` plus the decision's headers."""
    response = Response(status_code=200)
    decision.apply_to(response.headers)
    return response


def decorate_response(response: Response, decision: CorsDecision) -> Response:
    decision.apply_to(response.headers)
    return response


@order(HIGHEST_PRECEDENCE + 300)
class CorsFilter(OncePerRequestFilter):
    """Evaluates every request against the configured policies."""

    def __init__(self, evaluator: CorsEvaluator) -> None:
        self._evaluator = evaluator

    @property
    def evaluator(self) -> CorsEvaluator:
        return self._evaluator

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        decision = evaluate_request(self._evaluator, request)
        self._log(request, decision)

        if decision.is_preflight and decision.verdict is not Verdict.NOT_APPLICABLE:
            return preflight_response(decision)

        response = cast(Response, await call_next(request))
        return decorate_response(response, decision)

    @staticmethod
    def _log(request: Request, decision: CorsDecision) -> None:
        if decision.is_denied:
            logger.info(
                "cors_request_denied",
                method=request.method,
                path=request.url.path,
                origin=request.headers.get("origin"),
                kind=decision.kind.value,
                reason=decision.reason,
            )
        elif decision.is_allowed and decision.is_preflight:
            logger.debug(
                "cors_preflight_allowed",
                path=request.url.path,
                origin=request.headers.get("origin"),
                requested_method=request.headers.get("access-control-request-method"),
            )
