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
"""'corsgate policies' — validate configuration and list the loaded policies."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from corsgate.cli.console import console
from corsgate.cors.loader import load_policy_source
from corsgate.demo.application import load_config
from corsgate.kernel.exceptions import ConfigurationError


def _join(values: tuple[str, ...]) -> str:
    return ", ".join(values) if values else "-"


@click.command()
@click.option("--config-dir", default=".", type=click.Path(file_okay=False), help="Directory holding corsgate.yaml.")
def policies_command(config_dir: str) -> None:
    """Validate the CORS configuration and print every policy."""
    try:
        config = load_config(config_dir)
        source = load_policy_source(config)
    except ConfigurationError as exc:
        console.print(f"[error]Configuration error[/error] [dim]({exc.code})[/dim]: {escape(str(exc))}")
        raise SystemExit(1) from None

    for loaded in config.loaded_sources:
        console.print(f"[dim]loaded {loaded}[/dim]")

    if not len(source):
        console.print("[warning]No CORS policies configured; cross-origin reads will be blocked.[/warning]")
        return

    table = Table(title="[corsgate]CORS policies[/corsgate]", border_style="dim", show_lines=True)
    table.add_column("Path", style="bold")
    table.add_column("Origins")
    table.add_column("Methods")
    table.add_column("Headers")
    table.add_column("Exposed")
    table.add_column("Credentials")
    table.add_column("Max age")

    for policy in source:
        table.add_row(
            policy.path_pattern,
            _join(policy.allowed_origins),
            _join(policy.allowed_methods),
            _join(policy.allowed_headers),
            _join(policy.exposed_headers),
            "yes" if policy.allow_credentials else "no",
            "unset" if policy.max_age_seconds is None else str(policy.max_age_seconds),
        )
    console.print(table)
    console.print("[success]Configuration is valid.[/success]")
