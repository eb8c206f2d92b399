"""Kubernetes query client composition root.

``KubernetesQueryClient`` applies connection options in order, installs the
resulting ``ClusterHandle`` and derives one query API per resource kind from
it. Exactly one connection option may be applied to a client.

Example:
    ```python
    from k8s_query_client import KubernetesQueryClient, with_kubeconfig

    with KubernetesQueryClient(with_kubeconfig("~/.kube/config")) as client:
        pods = client.pods.list_pods_by_label(
            "default", "app=web", timedelta(seconds=30), 100
        )
    ```
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any, TypeAlias, TypeVar

import structlog

from k8s_query_client.integrations.kubernetes.config import ConnectionConfig
from k8s_query_client.integrations.kubernetes.connection import (
    ConnectionStrategy,
    KubeconfigConnection,
    ServiceAccountConnection,
)
from k8s_query_client.integrations.kubernetes.exceptions import (
    AlreadyConfiguredError,
    KubernetesConfigurationError,
)
from k8s_query_client.integrations.kubernetes.handle import ClusterHandle
from k8s_query_client.integrations.kubernetes.loader import (
    CredentialLoader,
    KubeconfigFileLoader,
)
from k8s_query_client.services.kubernetes import (
    DeploymentAPI,
    NamespaceAPI,
    PodAPI,
    ServiceAPI,
)

logger = structlog.get_logger()

ClientOption: TypeAlias = "Callable[[KubernetesQueryClient], None]"

_T = TypeVar("_T")


class KubernetesQueryClient:
    """Entry point bundling a cluster handle with its query APIs.

    Options are applied in the order given. The first option that fails
    aborts construction; the remaining options are not applied and any
    handle already installed is closed.

    Raises:
        KubernetesConfigurationError: If an option fails, or if no option
            produced a handle.
    """

    def __init__(self, *options: ClientOption) -> None:
        self._configured = False
        self._handle: ClusterHandle | None = None
        self._pods: PodAPI | None = None
        self._services: ServiceAPI | None = None
        self._deployments: DeploymentAPI | None = None
        self._namespaces: NamespaceAPI | None = None

        for option in options:
            try:
                option(self)
            except Exception as e:
                self._discard()
                raise KubernetesConfigurationError(
                    message=f"failed to configure kubernetes client: {e}",
                    original_error=e,
                ) from e

        missing = self._missing_components()
        if missing:
            raise KubernetesConfigurationError(
                message=f"failed to validate kubernetes client: {', '.join(missing)} not configured",
            )

        logger.debug("query_client_ready", source=self.handle.source, context=self.handle.context)

    def install(self, strategy: ConnectionStrategy) -> None:
        """Connect with ``strategy`` and derive the query APIs from its handle.

        Args:
            strategy: Connection strategy to use.

        Raises:
            AlreadyConfiguredError: If this client already holds a handle.
            KubernetesConnectionError: If the strategy fails to connect.
        """
        if self._configured:
            raise AlreadyConfiguredError()

        handle = strategy.connect()
        self._handle = handle
        self._pods = PodAPI(handle)
        self._services = ServiceAPI(handle)
        self._deployments = DeploymentAPI(handle)
        self._namespaces = NamespaceAPI(handle)
        self._configured = True
        logger.debug("installed_connection", strategy=strategy.name)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def configured(self) -> bool:
        """Whether a connection has been installed."""
        return self._configured

    @property
    def handle(self) -> ClusterHandle:
        """Cluster handle shared by every query API."""
        return self._require(self._handle, "handle")

    @property
    def pods(self) -> PodAPI:
        """Pod query API."""
        return self._require(self._pods, "pods")

    @property
    def services(self) -> ServiceAPI:
        """Service query API."""
        return self._require(self._services, "services")

    @property
    def deployments(self) -> DeploymentAPI:
        """Deployment query API."""
        return self._require(self._deployments, "deployments")

    @property
    def namespaces(self) -> NamespaceAPI:
        """Namespace query API."""
        return self._require(self._namespaces, "namespaces")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the underlying cluster handle."""
        if self._handle is not None:
            self._handle.close()

    def __enter__(self) -> KubernetesQueryClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    # =========================================================================
    # Internals
    # =========================================================================

    def _missing_components(self) -> list[str]:
        slots = {
            "handle": self._handle,
            "pods": self._pods,
            "services": self._services,
            "deployments": self._deployments,
            "namespaces": self._namespaces,
        }
        return [name for name, value in slots.items() if value is None]

    def _discard(self) -> None:
        if self._handle is not None:
            self._handle.close()

    @staticmethod
    def _require(value: _T | None, name: str) -> _T:
        if value is None:
            raise KubernetesConfigurationError(message=f"kubernetes client has no {name}")
        return value


# =============================================================================
# Options
# =============================================================================


def with_strategy(strategy: ConnectionStrategy) -> ClientOption:
    """Connect using an arbitrary connection strategy."""

    def apply(client: KubernetesQueryClient) -> None:
        client.install(strategy)

    return apply


def with_kubeconfig(
    path_or_loader: str | os.PathLike[str] | CredentialLoader,
    context: str | None = None,
) -> ClientOption:
    """Connect using a kubeconfig file or credential loader.

    Args:
        path_or_loader: Kubeconfig path, or a loader returning kubeconfig bytes.
        context: Context to activate instead of ``current-context``.
    """
    if isinstance(path_or_loader, str | os.PathLike):
        loader: CredentialLoader = KubeconfigFileLoader(os.path.expanduser(path_or_loader))
    else:
        loader = path_or_loader
    return with_strategy(KubeconfigConnection(loader, context=context))


def with_service_account() -> ClientOption:
    """Connect using the in-cluster service account."""
    return with_strategy(ServiceAccountConnection())


def from_config(config: ConnectionConfig) -> ClientOption:
    """Pick a connection option from a ``ConnectionConfig``."""
    if config.mode == "service_account":
        return with_service_account()
    return with_kubeconfig(config.kubeconfig, context=config.context)
