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
"""CORS policy model.

A :class:`CorsPolicy` is built once from configuration and never mutated.
Invalid combinations are rejected here, at load time, so that request-time
evaluation can stay total.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from corsgate.kernel.exceptions import ConfigurationError

WILDCARD = "*"

_ALLOWED_SCHEMES = ("http", "https")


def _as_tuple(values: Iterable[str]) -> tuple[str, ...]:
    if isinstance(values, str):
        values = values.split(",")
    return tuple(v.strip() for v in values if v and v.strip())


def _dedupe(values: Iterable[str], key: Callable[[str], str] = lambda v: v) -> tuple[str, ...]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        k = key(value)
        if k not in seen:
            seen.add(k)
            result.append(value)
    return tuple(result)


def _validate_origin(origin: str) -> None:
    parts = urlsplit(origin)
    valid = (
        parts.scheme in _ALLOWED_SCHEMES
        and bool(parts.hostname)
        and parts.path == ""
        and not parts.query
        and not parts.fragment
        and not origin.endswith("/")
        and "@" not in parts.netloc
    )
    if valid:
        try:
            parts.port  # noqa: B018 - raises on a malformed port
        except ValueError:
            valid = False
    if not valid:
        raise ConfigurationError(
            f"Invalid allowed origin {origin!r}: expected 'scheme://host[:port]'",
            code="CORS_CONFIG_INVALID_ORIGIN",
            context={"origin": origin},
        )


@dataclass(frozen=True)
class CorsPolicy:
    """Cross-Origin Resource Sharing policy for one path scope.

    Mirrors Spring's CorsConfiguration.  Lists given to the constructor are
    normalised to tuples; methods are upper-cased, headers de-duplicated
    case-insensitively.

    Attributes:
        allowed_origins: Exact origins, or the single wildcard ``"*"``.
        allowed_methods: Method tokens; ``"*"`` allows any method.
        allowed_headers: Request header names; ``"*"`` allows any header.
        exposed_headers: Response header names readable by the script.
        allow_credentials: Whether cookies and auth headers may flow.
        max_age_seconds: Preflight cache lifetime; ``None`` means unset.
        path_pattern: Ant-style path scope (``/api/**``).
    """

    allowed_origins: tuple[str, ...] = ()
    allowed_methods: tuple[str, ...] = ("GET", "HEAD")
    allowed_headers: tuple[str, ...] = ()
    exposed_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age_seconds: int | None = None
    path_pattern: str = "/**"
    _header_keys: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        origins = _dedupe(_as_tuple(self.allowed_origins))
        methods = _dedupe(m.upper() for m in _as_tuple(self.allowed_methods))
        headers = _dedupe(_as_tuple(self.allowed_headers), key=str.lower)
        exposed = _dedupe(_as_tuple(self.exposed_headers), key=str.lower)

        object.__setattr__(self, "allowed_origins", origins)
        object.__setattr__(self, "allowed_methods", methods)
        object.__setattr__(self, "allowed_headers", headers)
        object.__setattr__(self, "exposed_headers", exposed)
        object.__setattr__(self, "_header_keys", frozenset(h.lower() for h in headers))

        if WILDCARD in origins and len(origins) > 1:
            raise ConfigurationError(
                "Wildcard origin '*' cannot be combined with explicit origins",
                code="CORS_CONFIG_MIXED_WILDCARD",
                context={"path_pattern": self.path_pattern, "allowed_origins": list(origins)},
            )

        if self.allow_credentials and WILDCARD in origins:
            raise ConfigurationError(
                "allow_credentials cannot be used with the wildcard origin '*'; "
                "list the permitted origins explicitly",
                code="CORS_CONFIG_WILDCARD_CREDENTIALS",
                context={"path_pattern": self.path_pattern},
            )

        for origin in origins:
            if origin != WILDCARD:
                _validate_origin(origin)

        max_age = self.max_age_seconds
        if max_age is not None and (isinstance(max_age, bool) or not isinstance(max_age, int) or max_age < 0):
            raise ConfigurationError(
                f"max_age_seconds must be a non-negative integer, got {max_age!r}",
                code="CORS_CONFIG_INVALID_MAX_AGE",
                context={"path_pattern": self.path_pattern},
            )

        if not self.path_pattern.startswith("/"):
            raise ConfigurationError(
                f"path_pattern must start with '/', got {self.path_pattern!r}",
                code="CORS_CONFIG_INVALID_PATTERN",
                context={"path_pattern": self.path_pattern},
            )

    @property
    def any_origin(self) -> bool:
        return self.allowed_origins == (WILDCARD,)

    @property
    def any_method(self) -> bool:
        return WILDCARD in self.allowed_methods

    @property
    def any_header(self) -> bool:
        return WILDCARD in self.allowed_headers

    def allows_origin(self, origin: str) -> bool:
        """Exact, case-sensitive origin comparison; wildcard only without credentials."""
        if self.any_origin:
            return not self.allow_credentials
        return origin in self.allowed_origins

    def allows_method(self, method: str) -> bool:
        return self.any_method or method.upper() in self.allowed_methods

    def allows_header(self, header: str) -> bool:
        return self.any_header or header.lower() in self._header_keys
