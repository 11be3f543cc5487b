"""Data Flow Streams CLI"""

from __future__ import annotations
import os
import logging
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table as RichTable

from .artifacts import parse_resource, resource_version, resource_without_version
from .client import DataFlowClient
from .dsl import Stream

# Set up logging and console
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    help="Data Flow Streams CLI - Create, deploy and manage streams on a Data Flow server."
)


def env_default(name: str, default: str | None = None) -> str | None:
    """Get environment variable with DATAFLOW_ prefix."""
    return os.environ.get(f"DATAFLOW_{name}", default)


def parse_properties(values: List[str]) -> Dict[str, str]:
    """Parse repeated ``key=value`` options into a dict."""
    properties = {}
    for value in values:
        key, sep, prop = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{value}'")
        properties[key.strip()] = prop.strip()
    return properties


@app.callback()
def main(
    ctx: typer.Context,
    host: str = typer.Option(
        env_default("HOST", "localhost"), help="Data Flow server host; env DATAFLOW_HOST"
    ),
    port: int = typer.Option(
        int(env_default("PORT", "9393")), help="Data Flow server port; env DATAFLOW_PORT"
    ),
    username: Optional[str] = typer.Option(
        env_default("USERNAME"), help="Basic auth user; env DATAFLOW_USERNAME"
    ),
    password: Optional[str] = typer.Option(
        env_default("PASSWORD"), help="Basic auth password; env DATAFLOW_PASSWORD"
    ),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Connect to a Data Flow server."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.obj = {
        "host": host,
        "port": port,
        "username": username,
        "password": password,
    }


def _client(ctx: typer.Context) -> DataFlowClient:
    return DataFlowClient(**ctx.obj)


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Stream name"),
    definition: str = typer.Argument(..., help="Stream DSL, e.g. 'time | log'"),
    deploy: bool = typer.Option(False, help="Deploy the stream after creating it"),
    property: List[str] = typer.Option(
        [], "--property", "-p", help="Deployment property key=value (repeatable)"),
):
    """Create a stream from a DSL definition."""
    try:
        properties = parse_properties(property)
        if properties and not deploy:
            raise typer.BadParameter("--property requires --deploy")
        stream_definition = Stream.builder(_client(ctx)).name(name).definition(definition).create()
        console.print(f"✓ Created stream '{name}': {definition}")
        if deploy:
            stream_definition.deploy(properties)
            console.print(f"🚀 Deployment requested for '{name}'")
    except typer.BadParameter:
        raise
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def deploy(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Stream name"),
    property: List[str] = typer.Option(
        [], "--property", "-p", help="Deployment property key=value (repeatable)"),
):
    """Deploy an existing stream."""
    try:
        properties = parse_properties(property)
        _client(ctx).stream_operations.deploy(name, properties)
        console.print(f"🚀 Deployment requested for '{name}'")
    except typer.BadParameter:
        raise
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def undeploy(ctx: typer.Context, name: str = typer.Argument(..., help="Stream name")):
    """Undeploy a stream, keeping its definition."""
    try:
        _client(ctx).stream_operations.undeploy(name)
        console.print(f"✓ Undeployed '{name}'")
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def destroy(ctx: typer.Context, name: str = typer.Argument(..., help="Stream name")):
    """Destroy a stream and its definition."""
    try:
        _client(ctx).stream_operations.destroy(name)
        console.print(f"✓ Destroyed '{name}'")
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def status(ctx: typer.Context, name: str = typer.Argument(..., help="Stream name")):
    """Show the status of a stream."""
    try:
        resource = _client(ctx).stream_operations.get_stream_definition(name)
        console.print(f"{resource.name}: {resource.status or 'unknown'}")
        if resource.status_description:
            console.print(resource.status_description, style="dim")
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command(name="list")
def list_streams(ctx: typer.Context):
    """List streams registered on the server."""
    try:
        streams = _client(ctx).stream_operations.list()
        if not streams:
            console.print("No streams found")
            return

        rich_table = RichTable(title="Streams")
        rich_table.add_column("Name", style="cyan")
        rich_table.add_column("Definition", style="green")
        rich_table.add_column("Status", style="yellow")
        for stream in streams:
            rich_table.add_row(stream.name, stream.dsl_text, stream.status or "")
        console.print(rich_table)
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def artifact(uri: str = typer.Argument(..., help="maven://g:a:v or docker:repo:tag")):
    """Show the version-less identifier and version of an artifact URI."""
    try:
        resource = parse_resource(uri)
        console.print(f"Resource: {resource_without_version(resource)}")
        console.print(f"Version:  {resource_version(resource)}")
    except ValueError as e:
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"Data Flow Streams SDK v{__version__}")


if __name__ == "__main__":
    app()
