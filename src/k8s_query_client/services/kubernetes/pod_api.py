"""Pod query API."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from k8s_query_client.integrations.kubernetes.models.workloads import PodSummary
from k8s_query_client.services.kubernetes.base import ResourceQueryAPI
from k8s_query_client.services.kubernetes.pagination import SelectorKind


class PodAPI(ResourceQueryAPI[PodSummary]):
    """Read-only queries for Pods within a namespace.

    List operations follow continue tokens until every matching pod has
    been collected.
    """

    _entity_name = "pod"
    _plural = "pods"
    _resource_type = "Pod"
    _model_class = PodSummary

    def get_pod_by_name(self, namespace: str, name: str) -> PodSummary:
        """Get a single pod.

        Args:
            namespace: Namespace of the pod (must be non-empty).
            name: Name of the pod (must be non-empty).

        Returns:
            Pod summary.

        Raises:
            QueryValidationError: If namespace or name is empty.
            KubernetesNotFoundError: If the pod does not exist.
        """
        return self._get(namespace, name)

    def list_pods_by_label(
        self,
        namespace: str,
        label_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[PodSummary]:
        """List pods in a namespace matching a label selector.

        Args:
            namespace: Namespace scope for the query (must be non-empty).
            label_selector: Label selector, e.g. ``app=web,tier=frontend``.
            timeout: Per-request timeout (at least one second).
            limit: Maximum number of pods per page (greater than 0).

        Returns:
            All matching pods across all pages.
        """
        return self._list(namespace, SelectorKind.LABEL, label_selector, timeout, limit)

    def list_pods_by_field(
        self,
        namespace: str,
        field_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[PodSummary]:
        """List pods in a namespace matching a field selector.

        Args:
            namespace: Namespace scope for the query (must be non-empty).
            field_selector: Field selector, e.g. ``status.phase=Running``.
            timeout: Per-request timeout (at least one second).
            limit: Maximum number of pods per page (greater than 0).

        Returns:
            All matching pods across all pages.
        """
        return self._list(namespace, SelectorKind.FIELD, field_selector, timeout, limit)

    def _read(self, name: str, namespace: str | None) -> Any:
        return self._handle.core_v1.read_namespaced_pod(
            name=name, namespace=namespace, _request_timeout=self._read_timeout
        )

    def _list_page(self, namespace: str | None, request: dict[str, Any]) -> Any:
        return self._handle.core_v1.list_namespaced_pod(namespace=namespace, **request)
