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
"""Bootstrap: configuration -> logging -> policies -> Starlette app."""

from __future__ import annotations

import os
from pathlib import Path

from starlette.applications import Starlette

from corsgate.config.properties.web import WebProperties
from corsgate.core.config import Config, active_profiles_from_env
from corsgate.cors.loader import load_policy_source
from corsgate.demo.controllers import demo_routes
from corsgate.logging.structlog_adapter import StructlogAdapter
from corsgate.web.adapters.starlette.app import create_app


CONFIG_DIR_ENV_VAR = "CORSGATE_CONFIG_DIR"


def load_config(base_dir: str | Path | None = None) -> Config:
    """Load configuration from *base_dir* with profiles from the environment.

    Without *base_dir*, ``CORSGATE_CONFIG_DIR`` is used, then the working
    directory.
    """
    if base_dir is None:
        base_dir = os.environ.get(CONFIG_DIR_ENV_VAR, ".")
    return Config.from_sources(base_dir, active_profiles=active_profiles_from_env())


def build_application(config: Config | None = None) -> Starlette:
    """Build the demo app.

    Raises:
        ConfigurationError: on any invalid policy; the process must not
            start serving traffic.
    """
    config = config if config is not None else load_config()
    StructlogAdapter().configure(config)

    policies = load_policy_source(config)
    web = config.bind(WebProperties)
    return create_app(policies=policies, routes=demo_routes(), debug=web.debug)


def create_demo_app() -> Starlette:
    """Zero-argument factory for ``uvicorn --factory``."""
    return build_application()
