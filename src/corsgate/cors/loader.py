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
"""Builds the immutable policy source from configuration."""

from __future__ import annotations

import structlog

from corsgate.config.properties.cors import CorsPolicyProperties, CorsProperties
from corsgate.core.config import Config
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.source import PolicySource

logger = structlog.get_logger("corsgate.cors")


def to_policy(props: CorsPolicyProperties) -> CorsPolicy:
    """Convert one bound property entry into a validated :class:`CorsPolicy`."""
    return CorsPolicy(
        allowed_origins=tuple(props.allowed_origins),
        allowed_methods=tuple(props.allowed_methods),
        allowed_headers=tuple(props.allowed_headers),
        exposed_headers=tuple(props.exposed_headers),
        allow_credentials=props.allow_credentials,
        max_age_seconds=props.max_age,
        path_pattern=props.path_pattern,
    )


def load_policy_source(config: Config) -> PolicySource:
    """Bind ``corsgate.cors`` and build a :class:`PolicySource`.

    Raises:
        ConfigurationError: when the section fails validation, a policy
            violates an invariant, or two path scopes are ambiguous.
    """
    props = config.bind(CorsProperties)
    if not props.enabled:
        logger.info("cors_disabled")
        return PolicySource()

    source = PolicySource(to_policy(p) for p in props.policies)
    logger.info(
        "cors_policies_loaded",
        count=len(source),
        patterns=[p.path_pattern for p in source],
    )
    return source
