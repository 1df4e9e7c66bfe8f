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
"""Tests for CorsPolicy construction and load-time invariants."""

from __future__ import annotations

import dataclasses

import pytest

from corsgate.cors.policy import WILDCARD, CorsPolicy
from corsgate.kernel.exceptions import ConfigurationError


class TestCorsPolicyDefaults:
    def test_defaults(self):
        policy = CorsPolicy()

        assert policy.allowed_origins == ()
        assert policy.allowed_methods == ("GET", "HEAD")
        assert policy.allowed_headers == ()
        assert policy.exposed_headers == ()
        assert policy.allow_credentials is False
        assert policy.max_age_seconds is None
        assert policy.path_pattern == "/**"


class TestCorsPolicyNormalisation:
    def test_lists_become_tuples(self):
        policy = CorsPolicy(
            allowed_origins=["http://localhost:3000"],
            allowed_methods=["get", "post"],
            allowed_headers=["Content-Type"],
        )
        assert policy.allowed_origins == ("http://localhost:3000",)
        assert policy.allowed_methods == ("GET", "POST")
        assert policy.allowed_headers == ("Content-Type",)

    def test_comma_separated_string_is_split(self):
        policy = CorsPolicy(allowed_methods="GET, POST ,PUT")
        assert policy.allowed_methods == ("GET", "POST", "PUT")

    def test_headers_deduplicated_case_insensitively(self):
        policy = CorsPolicy(allowed_headers=["Content-Type", "content-type", "Authorization"])
        assert policy.allowed_headers == ("Content-Type", "Authorization")

    def test_frozen(self):
        policy = CorsPolicy()
        with pytest.raises(dataclasses.FrozenInstanceError):
            policy.allow_credentials = True  # type: ignore[misc]

    def test_equal_policies_compare_equal(self):
        a = CorsPolicy(allowed_origins=["http://a.example"], allowed_headers=["X-A"])
        b = CorsPolicy(allowed_origins=("http://a.example",), allowed_headers=("X-A",))
        assert a == b


class TestCorsPolicyInvariants:
    def test_wildcard_with_credentials_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            CorsPolicy(allowed_origins=[WILDCARD], allow_credentials=True)
        assert exc_info.value.code == "CORS_CONFIG_WILDCARD_CREDENTIALS"

    def test_wildcard_without_credentials_accepted(self):
        policy = CorsPolicy(allowed_origins=[WILDCARD])
        assert policy.any_origin is True

    def test_wildcard_mixed_with_origins_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            CorsPolicy(allowed_origins=[WILDCARD, "http://localhost:3000"])
        assert exc_info.value.code == "CORS_CONFIG_MIXED_WILDCARD"

    @pytest.mark.parametrize(
        "origin",
        [
            "localhost:3000",
            "http://localhost:3000/",
            "http://localhost:3000/app",
            "ftp://files.example",
            "http://",
            "http://localhost:notaport",
            "http://user@localhost:3000",
        ],
    )
    def test_malformed_origin_rejected(self, origin):
        with pytest.raises(ConfigurationError) as exc_info:
            CorsPolicy(allowed_origins=[origin])
        assert exc_info.value.code == "CORS_CONFIG_INVALID_ORIGIN"
        assert exc_info.value.context["origin"] == origin

    def test_https_origin_with_port_accepted(self):
        policy = CorsPolicy(allowed_origins=["https://bank.example:8443"])
        assert policy.allowed_origins == ("https://bank.example:8443",)

    def test_negative_max_age_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            CorsPolicy(max_age_seconds=-1)
        assert exc_info.value.code == "CORS_CONFIG_INVALID_MAX_AGE"

    def test_zero_max_age_is_valid_and_distinct_from_unset(self):
        assert CorsPolicy(max_age_seconds=0).max_age_seconds == 0
        assert CorsPolicy().max_age_seconds is None

    def test_relative_path_pattern_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            CorsPolicy(path_pattern="api/**")
        assert exc_info.value.code == "CORS_CONFIG_INVALID_PATTERN"


class TestCorsPolicyMatching:
    def test_origin_match_is_exact_and_case_sensitive(self):
        policy = CorsPolicy(allowed_origins=["http://localhost:3001"])
        assert policy.allows_origin("http://localhost:3001") is True
        assert policy.allows_origin("HTTP://LOCALHOST:3001") is False
        assert policy.allows_origin("http://localhost:3001.evil.example") is False
        assert policy.allows_origin("http://localhost") is False

    def test_no_suffix_matching(self):
        policy = CorsPolicy(allowed_origins=["https://bank.example"])
        assert policy.allows_origin("https://evil-bank.example") is False
        assert policy.allows_origin("https://sub.bank.example") is False

    def test_header_match_is_case_insensitive(self):
        policy = CorsPolicy(allowed_headers=["Content-Type"])
        assert policy.allows_header("content-type") is True
        assert policy.allows_header("CONTENT-TYPE") is True
        assert policy.allows_header("Authorization") is False

    def test_method_wildcard(self):
        policy = CorsPolicy(allowed_methods=["*"])
        assert policy.allows_method("PATCH") is True

    def test_empty_origins_allow_nothing(self):
        policy = CorsPolicy()
        assert policy.allows_origin("http://localhost:3000") is False
