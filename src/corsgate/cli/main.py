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
"""corsgate CLI — serve the demo API and inspect CORS decisions."""

from __future__ import annotations

import click

from corsgate.cli.check import check_command
from corsgate.cli.console import print_banner
from corsgate.cli.policies import policies_command
from corsgate.cli.run import run_command


class CorsGateCLI(click.Group):
    """Click group that shows the banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=CorsGateCLI)
@click.version_option(package_name="corsgate")
def cli() -> None:
    """corsgate — CORS policy evaluation for HTTP APIs."""


cli.add_command(run_command, name="run")
cli.add_command(check_command, name="check")
cli.add_command(policies_command, name="policies")
