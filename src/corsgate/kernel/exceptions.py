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
"""Unified exception hierarchy for corsgate.

All errors raised by the package inherit from CorsGateException.

Categories:
- ConfigurationError: invalid CORS policy or configuration, fatal at startup
- ValidationException: malformed request payloads reaching a handler

A CORS denial is never an exception. It is a normal evaluation outcome,
represented by the absence of ``Access-Control-*`` response headers.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CorsGateException(Exception):
    """Base exception for all corsgate errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFIG_INVALID").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(CorsGateException):
    """Invalid policy or configuration detected while loading.

    Raised only at configuration-load time; the process must refuse to
    start serving traffic.
    """


# =============================================================================
# Request Exceptions
# =============================================================================


class ValidationException(CorsGateException):
    """Input validation failures in a request body."""
