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
"""Outcome of a CORS evaluation."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from enum import Enum

from corsgate.cors.request import RequestKind

VARY = "Vary"


class Verdict(Enum):
    NOT_APPLICABLE = "not_applicable"
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True)
class CorsDecision:
    """Verdict plus the ordered response headers to attach.

    ``reason`` is a short machine-readable tag explaining a denial.  It is
    meant for logs only and never reaches the client.
    """

    verdict: Verdict
    kind: RequestKind
    response_headers: dict[str, str] = field(default_factory=dict)
    reason: str | None = None

    @classmethod
    def not_applicable(cls, kind: RequestKind, reason: str | None = None) -> CorsDecision:
        return cls(Verdict.NOT_APPLICABLE, kind, {}, reason)

    @classmethod
    def denied(cls, kind: RequestKind, reason: str) -> CorsDecision:
        return cls(Verdict.DENIED, kind, {}, reason)

    @classmethod
    def allowed(cls, kind: RequestKind, headers: dict[str, str]) -> CorsDecision:
        return cls(Verdict.ALLOWED, kind, headers)

    @property
    def is_allowed(self) -> bool:
        return self.verdict is Verdict.ALLOWED

    @property
    def is_denied(self) -> bool:
        return self.verdict is Verdict.DENIED

    @property
    def is_preflight(self) -> bool:
        """True for preflights, including malformed ones that must be answered here."""
        return self.kind in (RequestKind.PREFLIGHT, RequestKind.MALFORMED_PREFLIGHT)

    def apply_to(self, headers: MutableMapping[str, str]) -> None:
        """Write the decision's headers onto a response header mapping.

        ``Vary`` is merged with any value already present; every other
        header is overwritten.
        """
        for name, value in self.response_headers.items():
            if name == VARY:
                headers[VARY] = merge_vary(headers.get(VARY), value)
            else:
                headers[name] = value


def merge_vary(existing: str | None, addition: str) -> str:
    """Union of two ``Vary`` values, preserving order, case-insensitive."""
    tokens: list[str] = []
    seen: set[str] = set()
    for raw in (existing or "", addition):
        for token in raw.split(","):
            token = token.strip()
            if token and token.lower() not in seen:
                seen.add(token.lower())
                tokens.append(token)
    return ", ".join(tokens)
