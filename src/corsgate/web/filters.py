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
"""OncePerRequestFilter — base class for WebFilter with path-pattern scoping.

Framework-agnostic: accesses ``request.url.path`` via attribute protocol
so no Starlette import is needed.  Patterns use the same Ant-style syntax
as CORS policy scopes (``/api/**``).
"""

from __future__ import annotations

import abc
from functools import cache
from typing import Any

from corsgate.cors.source import PathPattern
from corsgate.web.ports.filter import CallNext


@cache
def _pattern(raw: str) -> PathPattern:
    return PathPattern(raw)


class OncePerRequestFilter(abc.ABC):
    """Abstract base class for :class:`WebFilter` implementations.

    Attributes:
        url_patterns: Ant-style patterns this filter applies to.
            If empty (default), the filter applies to *all* paths.
        exclude_patterns: Patterns to skip even when ``url_patterns``
            matches.
    """

    url_patterns: list[str] = []
    exclude_patterns: list[str] = []

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` if the request path is outside this filter's scope."""
        path: str = request.url.path

        if self.url_patterns and not any(_pattern(p).matches(path) for p in self.url_patterns):
            return True

        return any(_pattern(p).matches(path) for p in self.exclude_patterns)

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Execute the filter logic.  Must call ``await call_next(request)`` to proceed."""
        ...
