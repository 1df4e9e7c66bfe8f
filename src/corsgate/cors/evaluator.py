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
"""CORS policy evaluator.

Classifies a request, checks it against a :class:`CorsPolicy` and composes
the response headers.  Evaluation is pure: no I/O, no shared state, and it
never raises for any request.  A denial is expressed by returning no
``Access-Control-*`` headers at all; the browser performs the block.
"""

from __future__ import annotations

from corsgate.cors.decision import VARY, CorsDecision
from corsgate.cors.policy import WILDCARD, CorsPolicy
from corsgate.cors.request import (
    ACCESS_CONTROL_REQUEST_HEADERS,
    ACCESS_CONTROL_REQUEST_METHOD,
    ORIGIN,
    IncomingRequest,
    RequestKind,
)
from corsgate.cors.source import PolicySource

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"

PREFLIGHT_VARY = ", ".join((ORIGIN, ACCESS_CONTROL_REQUEST_METHOD, ACCESS_CONTROL_REQUEST_HEADERS))

# Denial reasons (logged, never sent)
REASON_MALFORMED_PREFLIGHT = "malformed_preflight"
REASON_ORIGIN_NOT_ALLOWED = "origin_not_allowed"
REASON_METHOD_NOT_ALLOWED = "method_not_allowed"
REASON_HEADERS_NOT_ALLOWED = "headers_not_allowed"
REASON_NO_POLICY = "no_policy_for_path"


def classify(request: IncomingRequest) -> RequestKind:
    """Classify *request* by the CORS headers it carries."""
    is_options = request.method.upper() == "OPTIONS"
    has_requested_method = request.requested_method is not None

    if request.origin is None:
        if is_options and has_requested_method:
            return RequestKind.MALFORMED_PREFLIGHT
        return RequestKind.SAME_ORIGIN
    if is_options and has_requested_method:
        return RequestKind.PREFLIGHT
    return RequestKind.SIMPLE


def _allow_origin_value(policy: CorsPolicy, origin: str) -> str:
    # the wildcard is only echoed when credentials are off
    if policy.any_origin and not policy.allow_credentials:
        return WILDCARD
    return origin


def _evaluate_preflight(policy: CorsPolicy, request: IncomingRequest, origin: str) -> CorsDecision:
    requested_method = (request.requested_method or "").strip().upper()
    if not requested_method or not policy.allows_method(requested_method):
        return CorsDecision.denied(RequestKind.PREFLIGHT, REASON_METHOD_NOT_ALLOWED)

    requested_headers = request.requested_header_names
    if not all(policy.allows_header(h) for h in requested_headers):
        return CorsDecision.denied(RequestKind.PREFLIGHT, REASON_HEADERS_NOT_ALLOWED)

    headers: dict[str, str] = {ALLOW_ORIGIN: _allow_origin_value(policy, origin)}

    if policy.any_method:
        headers[ALLOW_METHODS] = requested_method
    else:
        headers[ALLOW_METHODS] = ", ".join(policy.allowed_methods)

    if policy.any_header:
        if requested_headers:
            headers[ALLOW_HEADERS] = ", ".join(requested_headers)
    elif policy.allowed_headers:
        headers[ALLOW_HEADERS] = ", ".join(policy.allowed_headers)

    if policy.max_age_seconds is not None:
        headers[MAX_AGE] = str(policy.max_age_seconds)
    if policy.allow_credentials:
        headers[ALLOW_CREDENTIALS] = "true"
    headers[VARY] = PREFLIGHT_VARY

    return CorsDecision.allowed(RequestKind.PREFLIGHT, headers)


def _evaluate_simple(policy: CorsPolicy, origin: str) -> CorsDecision:
    headers: dict[str, str] = {ALLOW_ORIGIN: _allow_origin_value(policy, origin)}
    if policy.allow_credentials:
        headers[ALLOW_CREDENTIALS] = "true"
    if policy.exposed_headers:
        headers[EXPOSE_HEADERS] = ", ".join(policy.exposed_headers)
    headers[VARY] = ORIGIN
    return CorsDecision.allowed(RequestKind.SIMPLE, headers)


def evaluate(policy: CorsPolicy, request: IncomingRequest) -> CorsDecision:
    """Evaluate *request* against a single *policy*."""
    kind = classify(request)

    if kind is RequestKind.SAME_ORIGIN:
        return CorsDecision.not_applicable(kind)
    if kind is RequestKind.MALFORMED_PREFLIGHT:
        return CorsDecision.denied(kind, REASON_MALFORMED_PREFLIGHT)

    origin = request.origin or ""
    if not policy.allows_origin(origin):
        return CorsDecision.denied(kind, REASON_ORIGIN_NOT_ALLOWED)

    if kind is RequestKind.PREFLIGHT:
        return _evaluate_preflight(policy, request, origin)
    return _evaluate_simple(policy, origin)


class CorsEvaluator:
    """Selects the policy for a request path and evaluates against it.

    Holds a reference to an immutable :class:`PolicySource`; swapping in a
    new source is the only way to reconfigure.
    """

    def __init__(self, source: PolicySource) -> None:
        self._source = source

    @property
    def source(self) -> PolicySource:
        return self._source

    def evaluate(self, request: IncomingRequest) -> CorsDecision:
        kind = classify(request)
        if kind is RequestKind.SAME_ORIGIN:
            return CorsDecision.not_applicable(kind)

        policy = self._source.resolve(request.path)
        if policy is None:
            if kind is RequestKind.MALFORMED_PREFLIGHT:
                return CorsDecision.denied(kind, REASON_MALFORMED_PREFLIGHT)
            return CorsDecision.not_applicable(kind, REASON_NO_POLICY)
        return evaluate(policy, request)
