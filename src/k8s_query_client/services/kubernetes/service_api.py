"""Service query API."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from k8s_query_client.integrations.kubernetes.models.networking import ServiceSummary
from k8s_query_client.services.kubernetes.base import ResourceQueryAPI
from k8s_query_client.services.kubernetes.pagination import SelectorKind


class ServiceAPI(ResourceQueryAPI[ServiceSummary]):
    """Read-only queries for Services within a namespace."""

    _entity_name = "service"
    _plural = "services"
    _resource_type = "Service"
    _model_class = ServiceSummary

    def get_service_by_name(self, namespace: str, name: str) -> ServiceSummary:
        """Get a single service.

        Args:
            namespace: Namespace of the service.
            name: Service name.

        Returns:
            Service summary.
        """
        return self._get(namespace, name)

    def list_services_by_label(
        self,
        namespace: str,
        label_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[ServiceSummary]:
        """List services in a namespace matching a label selector.

        Args:
            namespace: Namespace scope for the query.
            label_selector: Label selector.
            timeout: Per-request timeout (at least one second).
            limit: Page size.

        Returns:
            All matching services across all pages.
        """
        return self._list(namespace, SelectorKind.LABEL, label_selector, timeout, limit)

    def list_services_by_field(
        self,
        namespace: str,
        field_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[ServiceSummary]:
        """List services in a namespace matching a field selector.

        Args:
            namespace: Namespace scope for the query.
            field_selector: Field selector, e.g. ``metadata.name=api``.
            timeout: Per-request timeout (at least one second).
            limit: Page size.

        Returns:
            All matching services across all pages.
        """
        return self._list(namespace, SelectorKind.FIELD, field_selector, timeout, limit)

    def _read(self, name: str, namespace: str | None) -> Any:
        return self._handle.core_v1.read_namespaced_service(
            name=name, namespace=namespace, _request_timeout=self._read_timeout
        )

    def _list_page(self, namespace: str | None, request: dict[str, Any]) -> Any:
        return self._handle.core_v1.list_namespaced_service(namespace=namespace, **request)
