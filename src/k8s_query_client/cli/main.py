"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console

from k8s_query_client import __version__
from k8s_query_client.cli.commands.base import CliState
from k8s_query_client.cli.commands.resources import register_resource_commands
from k8s_query_client.integrations.kubernetes.config import (
    ConnectionConfig,
    QueryClientSettings,
)
from k8s_query_client.logging.config import configure_logging

app = typer.Typer(
    name="kq",
    help="Read-only, validated queries against a Kubernetes cluster.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kq version {__version__}")
        raise typer.Exit()


def resolve_settings(
    kubeconfig: str | None,
    context: str | None,
    in_cluster: bool,
) -> QueryClientSettings:
    """Apply command-line connection flags on top of environment settings."""
    settings = QueryClientSettings.from_env()
    connection = settings.connection.model_dump()
    if kubeconfig:
        connection["kubeconfig"] = kubeconfig
        connection["mode"] = "kubeconfig"
    if context:
        connection["context"] = context
    if in_cluster:
        connection["mode"] = "service_account"
    return settings.model_copy(update={"connection": ConnectionConfig.model_validate(connection)})


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    kubeconfig: str | None = typer.Option(
        None,
        "--kubeconfig",
        help="Path to the kubeconfig file (defaults to KQ_KUBECONFIG or ~/.kube/config).",
    ),
    context: str | None = typer.Option(
        None,
        "--context",
        help="Kubeconfig context to use instead of current-context.",
    ),
    in_cluster: bool = typer.Option(
        False,
        "--in-cluster",
        help="Use the pod's service account instead of a kubeconfig.",
    ),
) -> None:
    """Read-only, validated queries against a Kubernetes cluster."""
    if in_cluster and kubeconfig:
        console.print("[red]Error:[/red] --in-cluster cannot be combined with --kubeconfig")
        raise typer.Exit(1)

    configure_logging(verbose=verbose, debug=debug)

    try:
        settings = resolve_settings(kubeconfig, context, in_cluster)
    except ValidationError as e:
        console.print("[red]Error:[/red] Invalid configuration")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  {location}: {error['msg']}")
        raise typer.Exit(1) from None

    ctx.obj = CliState(settings=settings)


register_resource_commands(app)


if __name__ == "__main__":
    app()
