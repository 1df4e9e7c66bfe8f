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
"""Per-request snapshot of the CORS-relevant parts of an HTTP request."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

ORIGIN = "Origin"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"


class RequestKind(Enum):
    """How a request participates in the CORS protocol."""

    PREFLIGHT = "preflight"
    SIMPLE = "simple"
    SAME_ORIGIN = "same_origin"
    MALFORMED_PREFLIGHT = "malformed_preflight"


def _lookup(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    if value is None:
        target = name.lower()
        for key, candidate in headers.items():
            if key.lower() == target:
                value = candidate
                break
    return value


@dataclass(frozen=True)
class IncomingRequest:
    """The inputs the evaluator needs, and nothing else.

    Attributes:
        method: HTTP method of the request itself.
        path: Target resource path, used to select the policy.
        origin: ``Origin`` header value, ``None`` when absent.
        requested_method: ``Access-Control-Request-Method`` (preflight only).
        requested_headers: Raw ``Access-Control-Request-Headers`` value.
    """

    method: str
    path: str = "/"
    origin: str | None = None
    requested_method: str | None = None
    requested_headers: str | None = None

    @classmethod
    def from_headers(cls, method: str, path: str, headers: Mapping[str, str]) -> IncomingRequest:
        """Build a request from any header mapping, matching names case-insensitively."""
        return cls(
            method=method.upper(),
            path=path or "/",
            origin=_lookup(headers, ORIGIN),
            requested_method=_lookup(headers, ACCESS_CONTROL_REQUEST_METHOD),
            requested_headers=_lookup(headers, ACCESS_CONTROL_REQUEST_HEADERS),
        )

    @property
    def requested_header_names(self) -> tuple[str, ...]:
        """Requested header tokens: split on comma, trimmed, empties dropped."""
        if not self.requested_headers:
            return ()
        return tuple(h.strip() for h in self.requested_headers.split(",") if h.strip())
