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
"""Explicit route table: (method, path) -> handler.

Handlers are registered by plain function calls (or the small decorator
helpers), never discovered by scanning.  The table is converted into
Starlette routes by the app factory.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any

from starlette.routing import Route

from corsgate.kernel.exceptions import ConfigurationError

Handler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class RouteDefinition:
    """A single registered endpoint."""

    method: str
    path: str
    handler: Handler
    summary: str = ""


class RouteTable:
    """Collects handlers under an optional path prefix.

    Usage::

        table = RouteTable(prefix="/api/banking")

        @table.get("/balance")
        async def balance(request: Request) -> JSONResponse:
            ...

        table.add("POST", "/transfer", transfer)
    """

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix.rstrip("/")
        self._routes: dict[tuple[str, str], RouteDefinition] = {}

    def add(self, method: str, path: str, handler: Handler, *, summary: str = "") -> RouteDefinition:
        """Register *handler* for ``method path``.

        Raises:
            ConfigurationError: if the pair is already registered.
        """
        full_path = (self._prefix + path) or "/"
        key = (method.upper(), full_path)
        if key in self._routes:
            raise ConfigurationError(
                f"Route {key[0]} {full_path} is already registered",
                code="ROUTE_DUPLICATE",
                context={"method": key[0], "path": full_path},
            )
        definition = RouteDefinition(key[0], full_path, handler, summary or (handler.__doc__ or "").strip())
        self._routes[key] = definition
        return definition

    def include(self, other: RouteTable) -> None:
        """Merge every route of *other* into this table."""
        for definition in other:
            self.add(definition.method, definition.path, definition.handler, summary=definition.summary)

    def get(self, path: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self._decorator("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self._decorator("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self._decorator("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self._decorator("DELETE", path, **kwargs)

    def _decorator(self, method: str, path: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        def decorator(func: Handler) -> Handler:
            self.add(method, path, func, **kwargs)
            return func

        return decorator

    def __iter__(self) -> Iterator[RouteDefinition]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def resolve(self, method: str, path: str) -> RouteDefinition | None:
        """Exact lookup of a registered route."""
        return self._routes.get((method.upper(), path))

    def to_starlette_routes(self) -> list[Route]:
        """Convert the table into Starlette routes, one per (method, path)."""
        return [Route(d.path, endpoint=d.handler, methods=[d.method]) for d in self]
