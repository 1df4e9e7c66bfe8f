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
"""'corsgate check' — evaluate a hypothetical request against the configuration."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from corsgate.cli.console import console
from corsgate.cors.decision import Verdict
from corsgate.cors.evaluator import CorsEvaluator
from corsgate.cors.loader import load_policy_source
from corsgate.cors.request import IncomingRequest
from corsgate.demo.application import load_config
from corsgate.kernel.exceptions import ConfigurationError

EXIT_DENIED = 2

_VERDICT_STYLE = {
    Verdict.ALLOWED: "success",
    Verdict.DENIED: "error",
    Verdict.NOT_APPLICABLE: "warning",
}


@click.command()
@click.option("--origin", default=None, help="Origin header value (omit for a same-origin request).")
@click.option("--method", default="GET", show_default=True, help="HTTP method of the request.")
@click.option("--path", default="/", show_default=True, help="Target path.")
@click.option("--request-method", default=None, help="Access-Control-Request-Method (preflight).")
@click.option("--request-headers", default=None, help="Access-Control-Request-Headers (preflight).")
@click.option("--config-dir", default=".", type=click.Path(file_okay=False), help="Directory holding corsgate.yaml.")
def check_command(
    origin: str | None,
    method: str,
    path: str,
    request_method: str | None,
    request_headers: str | None,
    config_dir: str,
) -> None:
    """Show the CORS verdict and headers for a request.

    Exits with status 2 when the request would be denied.
    """
    try:
        source = load_policy_source(load_config(config_dir))
    except ConfigurationError as exc:
        console.print(f"[error]Configuration error:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None

    request = IncomingRequest(
        method=method.upper(),
        path=path,
        origin=origin,
        requested_method=request_method,
        requested_headers=request_headers,
    )
    decision = CorsEvaluator(source).evaluate(request)

    style = _VERDICT_STYLE[decision.verdict]
    console.print(f"Kind:    [info]{decision.kind.value}[/info]")
    console.print(f"Verdict: [{style}]{decision.verdict.value}[/{style}]")
    if decision.reason:
        console.print(f"Reason:  [dim]{decision.reason}[/dim]")

    if decision.response_headers:
        table = Table(title="Response headers", border_style="dim")
        table.add_column("Header", style="bold")
        table.add_column("Value")
        for name, value in decision.response_headers.items():
            table.add_row(name, value)
        console.print(table)
    else:
        console.print("[dim]No CORS headers.[/dim]")

    if decision.is_denied:
        raise SystemExit(EXIT_DENIED)
