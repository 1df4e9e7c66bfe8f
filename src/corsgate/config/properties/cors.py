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
"""CORS configuration properties (corsgate.cors.*)."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from corsgate.core.config import config_properties


class CorsPolicyProperties(BaseModel):
    """One path-scoped policy entry.

    List fields accept either a YAML list or a comma-separated string, so
    a single ``${ENV_VAR}`` placeholder can carry a whole list.
    """

    path_pattern: str = "/**"
    allowed_origins: list[str] = Field(default_factory=list)
    allowed_methods: list[str] = Field(default_factory=lambda: ["GET", "HEAD"])
    allowed_headers: list[str] = Field(default_factory=list)
    exposed_headers: list[str] = Field(default_factory=list)
    allow_credentials: bool = False
    max_age: int | None = None

    @field_validator(
        "allowed_origins",
        "allowed_methods",
        "allowed_headers",
        "exposed_headers",
        mode="before",
    )
    @classmethod
    def _split_csv(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @field_validator("max_age", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@config_properties(prefix="corsgate.cors")
class CorsProperties(BaseModel):
    """Configuration for the CORS subsystem (corsgate.cors.*)."""

    enabled: bool = True
    policies: list[CorsPolicyProperties] = Field(default_factory=list)
