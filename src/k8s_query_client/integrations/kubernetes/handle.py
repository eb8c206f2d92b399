"""Kubernetes cluster handle.

A ``ClusterHandle`` owns one ``ApiClient`` bound to a resolved
``Configuration`` together with the API groups the query facades need. It is
fully built at construction time and never mutated afterwards, so a single
handle can be shared by concurrent callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import structlog

from k8s_query_client.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import ApiClient, AppsV1Api, Configuration, CoreV1Api

logger = structlog.get_logger()

_ALLOWED_SCHEMES = ("http", "https")


class ClusterHandle:
    """Authenticated connection to a Kubernetes API server.

    Example:
        ```python
        from k8s_query_client.integrations.kubernetes import ServiceAccountConnection

        with ServiceAccountConnection().connect() as handle:
            namespaces = handle.core_v1.list_namespace(limit=10)
        ```
    """

    def __init__(
        self,
        api_client: ApiClient,
        *,
        source: str,
        context: str | None = None,
    ) -> None:
        """Initialize the handle and its API groups.

        Args:
            api_client: Configured kubernetes ``ApiClient``.
            source: Connection strategy that produced the client.
            context: Kubeconfig context the client was resolved from, if any.
        """
        from kubernetes.client import AppsV1Api, CoreV1Api

        self._api_client = api_client
        self._source = source
        self._context = context
        self._core_v1: CoreV1Api = CoreV1Api(api_client)
        self._apps_v1: AppsV1Api = AppsV1Api(api_client)

    @classmethod
    def from_configuration(
        cls,
        configuration: Configuration,
        *,
        source: str,
        context: str | None = None,
    ) -> ClusterHandle:
        """Build a handle from a resolved client configuration.

        Args:
            configuration: Configuration produced by a connection strategy.
            source: Connection strategy name, for logging and diagnostics.
            context: Kubeconfig context name, if any.

        Returns:
            A ready-to-use cluster handle.

        Raises:
            KubernetesConnectionError: If the configured endpoint is unusable.
        """
        from kubernetes.client import ApiClient

        host = getattr(configuration, "host", None) or ""
        parsed = urlparse(host)
        if parsed.scheme not in _ALLOWED_SCHEMES or not parsed.netloc:
            raise KubernetesConnectionError(
                message=f"client construction failed: malformed endpoint {host!r}",
            )

        try:
            api_client = ApiClient(configuration=configuration)
        except Exception as e:
            raise KubernetesConnectionError(
                message=f"client construction failed: {e}",
                original_error=e,
            ) from e

        logger.debug("cluster_handle_created", source=source, context=context, host=host)
        return cls(api_client, source=source, context=context)

    # =========================================================================
    # API Groups
    # =========================================================================

    @property
    def core_v1(self) -> CoreV1Api:
        """CoreV1Api instance (pods, services, namespaces)."""
        return self._core_v1

    @property
    def apps_v1(self) -> AppsV1Api:
        """AppsV1Api instance (deployments)."""
        return self._apps_v1

    @property
    def api_client(self) -> ApiClient:
        """Underlying kubernetes ``ApiClient``."""
        return self._api_client

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def source(self) -> str:
        """Name of the connection strategy that produced this handle."""
        return self._source

    @property
    def context(self) -> str | None:
        """Kubeconfig context name, or None for in-cluster connections."""
        return self._context

    @property
    def host(self) -> str:
        """API server endpoint."""
        return str(self._api_client.configuration.host)

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        operation: str,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a transport exception into a ``KubernetesError``.

        Args:
            e: The original exception (ApiException, urllib3 error, ...).
            operation: What was attempted, used as the message prefix
                (e.g. "failed to get pod 'web' in namespace 'default'").
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException
        from urllib3.exceptions import HTTPError
        from urllib3.exceptions import TimeoutError as TransportTimeoutError

        if isinstance(e, TransportTimeoutError):
            return KubernetesTimeoutError(message=f"{operation}: {e}")

        if isinstance(e, HTTPError):
            return KubernetesConnectionError(message=f"{operation}: {e}", original_error=e)

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=f"{operation}: {e}",
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status
        reason = e.reason or f"Kubernetes API error: {status}"

        if status in (401, 403):
            return KubernetesAuthError(
                message=f"{operation}: {reason}",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                message=f"{operation}: {reason}",
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=f"{operation}: {reason}",
                status_code=status,
            )

        return KubernetesError(
            message=f"{operation}: {reason}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the underlying API client and release its connection pool."""
        self._api_client.close()
        logger.debug("cluster_handle_closed", source=self._source)

    def __enter__(self) -> ClusterHandle:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
