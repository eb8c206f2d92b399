"""Deployment query API."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from k8s_query_client.integrations.kubernetes.models.workloads import DeploymentSummary
from k8s_query_client.services.kubernetes.base import ResourceQueryAPI
from k8s_query_client.services.kubernetes.pagination import SelectorKind


class DeploymentAPI(ResourceQueryAPI[DeploymentSummary]):
    """Read-only queries for Deployments (apps/v1) within a namespace."""

    _entity_name = "deployment"
    _plural = "deployments"
    _resource_type = "Deployment"
    _model_class = DeploymentSummary

    def get_deployment_by_name(self, namespace: str, name: str) -> DeploymentSummary:
        """Get a single deployment.

        Args:
            namespace: Namespace of the deployment.
            name: Deployment name.

        Returns:
            Deployment summary.
        """
        return self._get(namespace, name)

    def list_deployments_by_label(
        self,
        namespace: str,
        label_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[DeploymentSummary]:
        """List deployments in a namespace matching a label selector."""
        return self._list(namespace, SelectorKind.LABEL, label_selector, timeout, limit)

    def list_deployments_by_field(
        self,
        namespace: str,
        field_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[DeploymentSummary]:
        """List deployments in a namespace matching a field selector."""
        return self._list(namespace, SelectorKind.FIELD, field_selector, timeout, limit)

    def _read(self, name: str, namespace: str | None) -> Any:
        return self._handle.apps_v1.read_namespaced_deployment(
            name=name, namespace=namespace, _request_timeout=self._read_timeout
        )

    def _list_page(self, namespace: str | None, request: dict[str, Any]) -> Any:
        return self._handle.apps_v1.list_namespaced_deployment(namespace=namespace, **request)
