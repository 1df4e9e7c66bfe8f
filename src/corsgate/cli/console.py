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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

CORSGATE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "corsgate": "bold magenta",
    "dim": "dim",
})

console = Console(theme=CORSGATE_THEME)


def print_banner() -> None:
    """Print the corsgate banner line."""
    from corsgate import __version__

    console.print(f"[corsgate]corsgate[/corsgate] [dim]:: CORS policy gateway :: (v{__version__})[/dim]\n")
