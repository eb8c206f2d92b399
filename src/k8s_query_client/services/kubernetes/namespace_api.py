"""Namespace query API.

Namespaces are cluster-scoped, so none of these operations take a
namespace argument.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from k8s_query_client.integrations.kubernetes.models.cluster import NamespaceSummary
from k8s_query_client.services.kubernetes.base import ResourceQueryAPI
from k8s_query_client.services.kubernetes.pagination import SelectorKind


class NamespaceAPI(ResourceQueryAPI[NamespaceSummary]):
    """Read-only queries for Namespaces."""

    _entity_name = "namespace"
    _plural = "namespaces"
    _resource_type = "Namespace"
    _namespaced = False
    _model_class = NamespaceSummary

    def get_namespace_by_name(self, name: str) -> NamespaceSummary:
        """Get a single namespace.

        Args:
            name: Namespace name (must be non-empty).

        Returns:
            Namespace summary.
        """
        return self._get(None, name)

    def list_namespaces_by_label(
        self,
        label_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[NamespaceSummary]:
        """List namespaces matching a label selector.

        Args:
            label_selector: Label selector, e.g. ``env=prod``.
            timeout: Per-request timeout (at least one second).
            limit: Page size.

        Returns:
            All matching namespaces across all pages.
        """
        return self._list(None, SelectorKind.LABEL, label_selector, timeout, limit)

    def list_namespaces_by_field(
        self,
        field_selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[NamespaceSummary]:
        """List namespaces matching a field selector.

        Args:
            field_selector: Field selector, e.g. ``status.phase=Active``.
            timeout: Per-request timeout (at least one second).
            limit: Page size.

        Returns:
            All matching namespaces across all pages.
        """
        return self._list(None, SelectorKind.FIELD, field_selector, timeout, limit)

    def _read(self, name: str, namespace: str | None) -> Any:
        return self._handle.core_v1.read_namespace(name=name, _request_timeout=self._read_timeout)

    def _list_page(self, namespace: str | None, request: dict[str, Any]) -> Any:
        return self._handle.core_v1.list_namespace(**request)
