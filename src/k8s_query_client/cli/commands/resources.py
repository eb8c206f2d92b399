"""``get`` and ``list`` commands for each queryable resource kind.

Every kind gets the same two commands, built from a ``ResourceCommands``
description of which query API methods to call and which columns to show.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import typer

from k8s_query_client.cli.commands.base import (
    FieldSelectorOption,
    LabelSelectorOption,
    LimitOption,
    NameArgument,
    NamespaceOption,
    OutputOption,
    TimeoutOption,
    console,
    get_state,
    handle_query_error,
)
from k8s_query_client.cli.output import OutputFormat, get_formatter
from k8s_query_client.client import KubernetesQueryClient
from k8s_query_client.integrations.kubernetes.exceptions import KubernetesError

# =============================================================================
# Column Definitions
# =============================================================================

POD_COLUMNS = [
    ("name", "Name"),
    ("namespace", "Namespace"),
    ("phase", "Status"),
    ("ready_count", "Ready"),
    ("restarts", "Restarts"),
    ("node_name", "Node"),
    ("pod_ip", "IP"),
    ("age", "Age"),
]

SERVICE_COLUMNS = [
    ("name", "Name"),
    ("namespace", "Namespace"),
    ("type", "Type"),
    ("cluster_ip", "Cluster IP"),
    ("external_ip", "External IP"),
    ("ports", "Ports"),
    ("age", "Age"),
]

DEPLOYMENT_COLUMNS = [
    ("name", "Name"),
    ("namespace", "Namespace"),
    ("ready_replicas", "Ready"),
    ("replicas", "Desired"),
    ("updated_replicas", "Up-to-date"),
    ("available_replicas", "Available"),
    ("age", "Age"),
]

NAMESPACE_COLUMNS = [
    ("name", "Name"),
    ("status", "Status"),
    ("age", "Age"),
]


@dataclass(frozen=True)
class ResourceCommands:
    """How the CLI queries one resource kind."""

    name: str
    title: str
    accessor: str
    get_method: str
    list_by_label_method: str
    list_by_field_method: str
    columns: list[tuple[str, str]]
    namespaced: bool = True

    def query_api(self, client: KubernetesQueryClient) -> Any:
        return getattr(client, self.accessor)


RESOURCES = [
    ResourceCommands(
        name="pods",
        title="Pods",
        accessor="pods",
        get_method="get_pod_by_name",
        list_by_label_method="list_pods_by_label",
        list_by_field_method="list_pods_by_field",
        columns=POD_COLUMNS,
    ),
    ResourceCommands(
        name="services",
        title="Services",
        accessor="services",
        get_method="get_service_by_name",
        list_by_label_method="list_services_by_label",
        list_by_field_method="list_services_by_field",
        columns=SERVICE_COLUMNS,
    ),
    ResourceCommands(
        name="deployments",
        title="Deployments",
        accessor="deployments",
        get_method="get_deployment_by_name",
        list_by_label_method="list_deployments_by_label",
        list_by_field_method="list_deployments_by_field",
        columns=DEPLOYMENT_COLUMNS,
    ),
    ResourceCommands(
        name="namespaces",
        title="Namespaces",
        accessor="namespaces",
        get_method="get_namespace_by_name",
        list_by_label_method="list_namespaces_by_label",
        list_by_field_method="list_namespaces_by_field",
        columns=NAMESPACE_COLUMNS,
        namespaced=False,
    ),
]


# =============================================================================
# Command Bodies
# =============================================================================


def _run_get(
    ctx: typer.Context,
    resource: ResourceCommands,
    name: str,
    namespace: str | None,
    output: OutputFormat,
) -> None:
    state = get_state(ctx)
    try:
        with state.open_client() as client:
            method = getattr(resource.query_api(client), resource.get_method)
            args = (namespace, name) if resource.namespaced else (name,)
            record = method(*args)
        get_formatter(output, console).format_resource(record, title=f"{resource.title}: {name}")
    except KubernetesError as e:
        handle_query_error(e)


def _run_list(
    ctx: typer.Context,
    resource: ResourceCommands,
    namespace: str | None,
    label_selector: str | None,
    field_selector: str | None,
    timeout: int | None,
    limit: int | None,
    output: OutputFormat,
) -> None:
    if (label_selector is None) == (field_selector is None):
        console.print("[red]Error:[/red] Specify exactly one of --selector or --field-selector")
        raise typer.Exit(1)

    state = get_state(ctx)
    defaults = state.settings.defaults
    budget = defaults.timeout_delta if timeout is None else timedelta(seconds=timeout)
    page_size = defaults.limit if limit is None else limit

    if label_selector is not None:
        method_name, selector = resource.list_by_label_method, label_selector
    else:
        method_name, selector = resource.list_by_field_method, field_selector

    try:
        with state.open_client() as client:
            method = getattr(resource.query_api(client), method_name)
            args = (namespace,) if resource.namespaced else ()
            records = method(*args, selector, budget, page_size)
        get_formatter(output, console).format_list(records, resource.columns, title=resource.title)
    except KubernetesError as e:
        handle_query_error(e)


# =============================================================================
# Registration
# =============================================================================


def build_resource_app(resource: ResourceCommands) -> typer.Typer:
    """Build the ``get``/``list`` command group for one resource kind."""
    resource_app = typer.Typer(
        name=resource.name,
        help=f"Query Kubernetes {resource.name}",
        no_args_is_help=True,
    )
    if resource.namespaced:

        @resource_app.command("get")
        def get_namespaced(
            ctx: typer.Context,
            name: NameArgument,
            namespace: NamespaceOption = "default",
            output: OutputOption = OutputFormat.TABLE,
        ) -> None:
            """Get one resource by name."""
            _run_get(ctx, resource, name, namespace, output)

        @resource_app.command("list")
        def list_namespaced(
            ctx: typer.Context,
            namespace: NamespaceOption = "default",
            label_selector: LabelSelectorOption = None,
            field_selector: FieldSelectorOption = None,
            timeout: TimeoutOption = None,
            limit: LimitOption = None,
            output: OutputOption = OutputFormat.TABLE,
        ) -> None:
            """List resources in a namespace matching a selector."""
            _run_list(
                ctx, resource, namespace, label_selector, field_selector, timeout, limit, output
            )

    else:

        @resource_app.command("get")
        def get_cluster_scoped(
            ctx: typer.Context,
            name: NameArgument,
            output: OutputOption = OutputFormat.TABLE,
        ) -> None:
            """Get one resource by name."""
            _run_get(ctx, resource, name, None, output)

        @resource_app.command("list")
        def list_cluster_scoped(
            ctx: typer.Context,
            label_selector: LabelSelectorOption = None,
            field_selector: FieldSelectorOption = None,
            timeout: TimeoutOption = None,
            limit: LimitOption = None,
            output: OutputOption = OutputFormat.TABLE,
        ) -> None:
            """List resources matching a selector."""
            _run_list(ctx, resource, None, label_selector, field_selector, timeout, limit, output)

    return resource_app


def register_resource_commands(app: typer.Typer) -> None:
    """Add one command group per queryable resource kind to ``app``."""
    for resource in RESOURCES:
        app.add_typer(build_resource_app(resource), name=resource.name)
