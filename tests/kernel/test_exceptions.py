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
"""Tests for the corsgate exception hierarchy."""

from __future__ import annotations

from corsgate.kernel.exceptions import ConfigurationError, CorsGateException, ValidationException


class TestCorsGateException:
    def test_basic_creation(self):
        exc = CorsGateException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = CorsGateException("bad origin", code="CORS_CONFIG_INVALID_ORIGIN", context={"origin": "x"})
        assert exc.code == "CORS_CONFIG_INVALID_ORIGIN"
        assert exc.context["origin"] == "x"

    def test_context_not_shared_between_instances(self):
        exc = CorsGateException("a")
        exc.context["key"] = "value"
        assert CorsGateException("b").context == {}


class TestExceptionHierarchy:
    def test_configuration_error_is_corsgate(self):
        assert issubclass(ConfigurationError, CorsGateException)

    def test_validation_is_corsgate(self):
        assert issubclass(ValidationException, CorsGateException)

    def test_configuration_error_is_not_validation(self):
        assert not issubclass(ConfigurationError, ValidationException)
