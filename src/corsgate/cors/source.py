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
"""Path-scoped policy lookup.

Mirrors Spring's UrlBasedCorsConfigurationSource: each policy is registered
under an Ant-style pattern and the most specific matching pattern wins.
A wildcard-free pattern beats any wildcard pattern; among wildcard patterns
specificity is the length of the literal prefix before the first wildcard.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from corsgate.cors.policy import CorsPolicy
from corsgate.kernel.exceptions import ConfigurationError

_WILDCARD_CHARS = ("*", "?")


def _compile(pattern: str) -> re.Pattern[str]:
    regex = ""
    i = 0
    while i < len(pattern):
        if pattern.startswith("/**", i) and (i + 3 == len(pattern) or pattern[i + 3] == "/"):
            # zero or more whole segments
            regex += "(?:/.*)?"
            i += 3
        elif pattern.startswith("**", i):
            regex += ".*"
            i += 2
        elif pattern[i] == "*":
            regex += "[^/]*"
            i += 1
        elif pattern[i] == "?":
            regex += "[^/]"
            i += 1
        else:
            regex += re.escape(pattern[i])
            i += 1
    return re.compile(regex)


@dataclass(frozen=True)
class PathPattern:
    """Compiled Ant-style path pattern (``/api/**``, ``/api/*/items``, ``/api/data``)."""

    pattern: str
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", _compile(self.pattern))

    @property
    def literal_prefix(self) -> str:
        positions = [self.pattern.find(c) for c in _WILDCARD_CHARS if c in self.pattern]
        return self.pattern[: min(positions)] if positions else self.pattern

    @property
    def is_exact(self) -> bool:
        return not any(c in self.pattern for c in _WILDCARD_CHARS)

    @property
    def specificity(self) -> tuple[bool, int]:
        return self.is_exact, len(self.literal_prefix)

    def matches(self, path: str) -> bool:
        return self._regex.fullmatch(path) is not None


class PolicySource:
    """Immutable collection of path-scoped policies.

    Two wildcard policies whose patterns share the same literal prefix could
    tie on specificity for the same path; that ambiguity is rejected here.
    """

    def __init__(self, policies: Iterable[CorsPolicy] = ()) -> None:
        entries = [(PathPattern(p.path_pattern), p) for p in policies]

        by_prefix: dict[tuple[bool, str], str] = {}
        for pattern, _policy in entries:
            prefix = pattern.literal_prefix
            scope = (pattern.is_exact, prefix)
            if scope in by_prefix:
                raise ConfigurationError(
                    f"Ambiguous CORS path scopes {by_prefix[scope]!r} and {pattern.pattern!r}: "
                    f"both have the literal prefix {prefix!r}",
                    code="CORS_CONFIG_AMBIGUOUS_SCOPE",
                    context={"patterns": [by_prefix[scope], pattern.pattern]},
                )
            by_prefix[scope] = pattern.pattern

        # most specific first, so resolve() can stop at the first match
        entries.sort(key=lambda e: e[0].specificity, reverse=True)
        self._entries: tuple[tuple[PathPattern, CorsPolicy], ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CorsPolicy]:
        return (policy for _pattern, policy in self._entries)

    def resolve(self, path: str) -> CorsPolicy | None:
        """Return the exact-match policy for *path*, else the matching one with the longest literal prefix."""
        for pattern, policy in self._entries:
            if pattern.matches(path):
                return policy
        return None
