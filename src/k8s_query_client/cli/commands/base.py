"""Shared options, client factory and error handling for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from k8s_query_client.client import KubernetesQueryClient, from_config
from k8s_query_client.cli.output import OutputFormat
from k8s_query_client.integrations.kubernetes.config import QueryClientSettings
from k8s_query_client.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConfigurationError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
    QueryValidationError,
)

console = Console()


@dataclass(frozen=True)
class CliState:
    """Settings resolved by the root callback and shared with every command."""

    settings: QueryClientSettings

    def open_client(self) -> KubernetesQueryClient:
        """Build a query client from the resolved connection settings."""
        return KubernetesQueryClient(from_config(self.settings.connection))


def get_state(ctx: typer.Context) -> CliState:
    """Return the CLI state stored on the root context."""
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        state = CliState(settings=QueryClientSettings.from_env())
        ctx.find_root().obj = state
    return state


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

OutputOption = Annotated[
    OutputFormat,
    typer.Option(
        "--output",
        "-o",
        help="Output format: table, json, or yaml",
        case_sensitive=False,
    ),
]

NameArgument = Annotated[str, typer.Argument(help="Resource name")]

NamespaceOption = Annotated[
    str,
    typer.Option(
        "--namespace",
        "-n",
        help="Kubernetes namespace",
    ),
]

LabelSelectorOption = Annotated[
    str | None,
    typer.Option(
        "--selector",
        "-l",
        help="Label selector (e.g., 'app=nginx,tier=frontend')",
    ),
]

FieldSelectorOption = Annotated[
    str | None,
    typer.Option(
        "--field-selector",
        help="Field selector (e.g., 'status.phase=Running')",
    ),
]

TimeoutOption = Annotated[
    int | None,
    typer.Option(
        "--timeout",
        help="Per-request timeout in seconds (defaults to KQ_TIMEOUT or 30)",
    ),
]

LimitOption = Annotated[
    int | None,
    typer.Option(
        "--limit",
        help="Page size for list requests (defaults to KQ_LIMIT or 500)",
    ),
]


# =============================================================================
# Error Handling
# =============================================================================


def handle_query_error(error: KubernetesError) -> None:
    """Print a query error with a hint where one helps.

    Args:
        error: The error to report.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, QueryValidationError):
        console.print(f"[red]Error:[/red] Invalid argument '{error.field}'")
        console.print(f"  {escape(error.message)}")

    elif isinstance(error, KubernetesConfigurationError):
        console.print("[red]Error:[/red] Cannot set up Kubernetes client")
        console.print(f"  {escape(error.message)}")
        console.print(
            "\n[dim]Hint: Check --kubeconfig/--context (or KQ_KUBECONFIG/KQ_CONTEXT), "
            "or use --in-cluster inside a pod.[/dim]"
        )

    elif isinstance(error, KubernetesConnectionError):
        console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        console.print(f"  {escape(error.message)}")
        console.print("\n[dim]Hint: Check that the cluster is reachable.[/dim]")

    elif isinstance(error, KubernetesAuthError):
        console.print("[red]Error:[/red] Authentication/authorization failed")
        console.print(f"  {escape(error.message)}")
        console.print("\n[dim]Hint: Check your credentials, token, or RBAC permissions.[/dim]")

    elif isinstance(error, KubernetesNotFoundError):
        console.print("[red]Error:[/red] Resource not found")
        console.print(f"  {escape(error.message)}")

    elif isinstance(error, KubernetesValidationError):
        console.print("[red]Error:[/red] Request rejected by the API server")
        console.print(f"  {escape(error.message)}")

    elif isinstance(error, KubernetesTimeoutError):
        console.print("[red]Error:[/red] Request timed out")
        console.print(f"  {escape(error.message)}")
        console.print("\n[dim]Hint: Try increasing --timeout or KQ_TIMEOUT.[/dim]")

    else:
        console.print(f"[red]Error:[/red] {escape(error.message)}")
        if error.status_code:
            console.print(f"  HTTP Status: {error.status_code}")

    raise typer.Exit(1)
