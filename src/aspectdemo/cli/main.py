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
"""AspectDemo CLI — run the login endpoint and inspect advice wiring."""

from __future__ import annotations

import os
from pathlib import Path

import click
from rich.table import Table

from aspectdemo.aop.pipeline import qualified_name
from aspectdemo.cli.console import console
from aspectdemo.config.properties.server import ServerProperties
from aspectdemo.core.application import AspectDemoApplication
from aspectdemo.core.config import Config
from aspectdemo.server.uvicorn_adapter import UvicornServerAdapter

USER_OPERATIONS = ("log_in", "log_out")


@click.group()
@click.version_option(package_name="aspectdemo")
def cli() -> None:
    """AspectDemo — login endpoint observed through logging aspects."""


@cli.command("run")
@click.option("--host", default=None, help="Bind address (default: from aspectdemo.yaml or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Port number (default: from aspectdemo.yaml or 8080).")
@click.option("--reload", "use_reload", is_flag=True, help="Enable auto-reload for development.")
@click.option("--profile", "profiles", multiple=True, help="Active config profile (repeatable).")
def run_command(host: str | None, port: int | None, use_reload: bool, profiles: tuple[str, ...]) -> None:
    """Start the application server."""
    if profiles:
        # Read again by the app factory inside the server process.
        os.environ["ASPECTDEMO_PROFILES_ACTIVE"] = ",".join(profiles)
    config = Config.from_sources(Path.cwd(), active_profiles=list(profiles))
    server = config.bind(ServerProperties)
    if host is not None:
        server.host = host
    if port is not None:
        server.port = port

    console.print(f"[aspectdemo]AspectDemo[/aspectdemo] listening on [info]http://{server.host}:{server.port}/[/info]")
    UvicornServerAdapter().serve(server, reload=use_reload)


@cli.command("info")
def info_command() -> None:
    """Show the advice resolved for each UserService operation."""
    application = AspectDemoApplication(Config.from_sources(Path.cwd()))
    registry = application.registry
    users = application.users

    table = Table(title="[aspectdemo]Advice chains[/aspectdemo]", border_style="dim")
    table.add_column("Operation", style="bold")
    table.add_column("Phase", style="info")
    table.add_column("Pointcut")
    table.add_column("Advice", style="dim")

    for method_name in USER_OPERATIONS:
        operation = qualified_name(users, method_name)
        for binding in registry.resolve(operation):
            table.add_row(
                operation,
                binding.phase.value,
                binding.pointcut,
                getattr(binding.handler, "__qualname__", repr(binding.handler)),
            )

    console.print(table)


def main() -> None:
    cli()
