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
"""'corsgate run' — serve the demo API with uvicorn."""

from __future__ import annotations

import os
from pathlib import Path

import click
from rich.markup import escape

from corsgate.cli.console import console
from corsgate.config.properties.web import WebProperties
from corsgate.demo.application import CONFIG_DIR_ENV_VAR, build_application, load_config
from corsgate.kernel.exceptions import ConfigurationError

APP_FACTORY = "corsgate.demo.application:create_demo_app"


@click.command()
@click.option("--host", default=None, help="Bind address (default: corsgate.web.host).")
@click.option("--port", default=None, type=int, help="Port number (default: corsgate.web.port).")
@click.option("--reload", "use_reload", is_flag=True, help="Enable auto-reload for development.")
@click.option("--config-dir", default=".", type=click.Path(file_okay=False), help="Directory holding corsgate.yaml.")
def run_command(host: str | None, port: int | None, use_reload: bool, config_dir: str) -> None:
    """Start the demo API server."""
    import uvicorn

    try:
        config = load_config(config_dir)
        web = config.bind(WebProperties)
        # fail fast before binding the socket
        app = build_application(config)
    except ConfigurationError as exc:
        console.print(f"[error]Configuration error:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None

    host = host or web.host
    port = port or web.port
    console.print(f"[info]Serving on[/info] http://{host}:{port}")

    if use_reload:
        # reload needs an import string; the worker re-reads configuration from the same directory
        os.environ[CONFIG_DIR_ENV_VAR] = str(Path(config_dir).resolve())
        uvicorn.run(APP_FACTORY, factory=True, host=host, port=port, reload=True, log_level="warning")
        return
    uvicorn.run(app, host=host, port=port, log_level="warning")
