"""Base query API for Kubernetes resource kinds.

Provides the shared get-by-name and paginated list flow used by every
resource facade: argument validation, continue-token pagination, structured
logging and error translation. Subclasses only say how to read one object
and how to fetch one list page.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Generic, NoReturn, TypeVar

import structlog

from k8s_query_client.integrations.kubernetes.handle import ClusterHandle
from k8s_query_client.integrations.kubernetes.models.base import K8sEntityBase
from k8s_query_client.integrations.kubernetes.validation import (
    require,
    require_field_selector,
    require_label_selector,
    require_min_duration,
    require_positive,
)
from k8s_query_client.services.kubernetes.pagination import (
    ListOptions,
    SelectorKind,
    collect_pages,
)

logger = structlog.get_logger()

DEFAULT_READ_TIMEOUT_SECONDS = 30

T = TypeVar("T", bound=K8sEntityBase)


class ResourceQueryAPI(ABC, Generic[T]):
    """Abstract base class for Kubernetes resource query facades.

    Type Parameters:
        T: The record model returned for this resource kind.

    Class Attributes:
        _entity_name: Singular lowercase kind, used in messages and logs.
        _plural: Plural lowercase kind, used in list messages and logs.
        _resource_type: Kubernetes kind name (e.g., "Pod").
        _namespaced: Whether objects of this kind live in a namespace.
        _model_class: Record model built from each SDK object.

    Example:
        >>> class PodAPI(ResourceQueryAPI[PodSummary]):
        ...     _entity_name = "pod"
        ...     _plural = "pods"
        ...     _resource_type = "Pod"
        ...     _model_class = PodSummary
    """

    _entity_name: str = ""
    _plural: str = ""
    _resource_type: str = ""
    _namespaced: bool = True
    _model_class: type[T]

    def __init__(
        self,
        handle: ClusterHandle,
        read_timeout: int = DEFAULT_READ_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the query API.

        Args:
            handle: Connected cluster handle shared by all facades.
            read_timeout: Client-side bound, in seconds, on each get-by-name
                request.
        """
        self._handle = handle
        self._read_timeout = read_timeout
        self._log = logger.bind(entity=self._entity_name)

    @property
    def handle(self) -> ClusterHandle:
        """Cluster handle this facade queries."""
        return self._handle

    # =========================================================================
    # Transport Hooks
    # =========================================================================

    @abstractmethod
    def _read(self, name: str, namespace: str | None) -> Any:
        """Fetch one SDK object by name."""

    @abstractmethod
    def _list_page(self, namespace: str | None, request: dict[str, Any]) -> Any:
        """Fetch one SDK list page for the given request arguments."""

    # =========================================================================
    # Query Flow
    # =========================================================================

    def _get(self, namespace: str | None, name: str) -> T:
        """Validate arguments and fetch a single record by name."""
        if self._namespaced:
            require(namespace, "namespace")
        require(name, f"{self._entity_name} name")

        self._log.debug(f"getting_{self._entity_name}", name=name, namespace=namespace)
        try:
            obj = self._read(name, namespace)
        except Exception as e:
            self._handle_api_error(e, self._describe_get(name, namespace), name, namespace)

        record = self._model_class.from_k8s_object(obj)
        self._log.debug(f"got_{self._entity_name}", name=name, namespace=namespace)
        return record

    def _list(
        self,
        namespace: str | None,
        selector_kind: SelectorKind,
        selector: str,
        timeout: timedelta,
        limit: int,
    ) -> list[T]:
        """Validate arguments and collect every matching record across pages.

        The timeout is applied in whole seconds to every page request, both as
        the server-side ``timeout_seconds`` and as the client-side request
        timeout. It bounds each request, not the whole paginated call.
        """
        self._validate_list_input(namespace, timeout, limit)
        if selector_kind is SelectorKind.LABEL:
            require_label_selector(selector)
        else:
            require_field_selector(selector)

        options = ListOptions(
            selector_kind=selector_kind,
            selector=selector,
            limit=limit,
            timeout_seconds=int(timeout.total_seconds()),
        )

        self._log.debug(
            f"listing_{self._plural}",
            namespace=namespace,
            selector_kind=selector_kind.value,
            selector=selector,
            limit=limit,
            timeout_seconds=options.timeout_seconds,
        )

        def fetch_page(cursor: str | None) -> Any:
            try:
                return self._list_page(namespace, options.to_request(cursor))
            except Exception as e:
                self._handle_api_error(e, self._describe_list(namespace), None, namespace)

        records = collect_pages(fetch_page, self._model_class.from_k8s_object)

        self._log.debug(f"listed_{self._plural}", namespace=namespace, count=len(records))
        return records

    def _validate_list_input(self, namespace: str | None, timeout: timedelta, limit: int) -> None:
        """Check namespace, timeout and limit, stopping at the first failure."""
        if self._namespaced:
            require(namespace, "namespace")
        require_min_duration(timeout, "timeout")
        require_positive(limit, "limit")

    # =========================================================================
    # Error Handling
    # =========================================================================

    def _describe_get(self, name: str, namespace: str | None) -> str:
        if namespace:
            return f"failed to get {self._entity_name} '{name}' in namespace '{namespace}'"
        return f"failed to get {self._entity_name} '{name}'"

    def _describe_list(self, namespace: str | None) -> str:
        if namespace:
            return f"failed to list {self._plural} in namespace '{namespace}'"
        return f"failed to list {self._plural}"

    def _handle_api_error(
        self,
        e: Exception,
        operation: str,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Translate a transport exception and re-raise.

        Args:
            e: The original exception (typically ApiException).
            operation: Description of the failed operation.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Raises:
            KubernetesError: Always raises an appropriate subclass.
        """
        error = ClusterHandle.translate_api_exception(
            e,
            operation,
            resource_type=self._resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
        self._log.debug("query_failed", operation=operation, error=str(error))
        raise error from e
