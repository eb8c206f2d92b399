"""Connection strategies producing a ``ClusterHandle``.

Two interchangeable strategies are provided:

- ``KubeconfigConnection``: kubeconfig bytes from a ``CredentialLoader`` are
  parsed, the active context is resolved, and a handle is built from it.
- ``ServiceAccountConnection``: credentials are discovered from the pod's
  mounted service account token and the in-cluster environment.

Each failing stage raises ``KubernetesConnectionError`` whose message names
the stage (``kubeconfig load failed``, ``kubeconfig parse failed``,
``in-cluster config discovery failed``, ``client construction failed``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog
import yaml

from k8s_query_client.integrations.kubernetes.exceptions import KubernetesConnectionError
from k8s_query_client.integrations.kubernetes.handle import ClusterHandle

if TYPE_CHECKING:
    from kubernetes.client import Configuration

    from k8s_query_client.integrations.kubernetes.loader import CredentialLoader

logger = structlog.get_logger()


class ConnectionStrategy(Protocol):
    """Anything that can produce a connected ``ClusterHandle``."""

    name: str

    def connect(self) -> ClusterHandle:
        """Resolve credentials and build a cluster handle."""
        ...


class KubeconfigConnection:
    """Connect using a kubeconfig document supplied by a credential loader."""

    name = "kubeconfig"

    def __init__(self, loader: CredentialLoader, context: str | None = None) -> None:
        """Initialize the strategy.

        Args:
            loader: Source of the kubeconfig bytes.
            context: Context to activate instead of the document's
                ``current-context``.
        """
        self._loader = loader
        self._context = context

    def connect(self) -> ClusterHandle:
        """Load, parse and construct a handle from the kubeconfig.

        Raises:
            KubernetesConnectionError: If any stage fails.
        """
        raw = self._load()
        configuration, context = self._parse(raw)
        handle = ClusterHandle.from_configuration(configuration, source=self.name, context=context)
        logger.info("loaded_kubeconfig", context=context, host=handle.host)
        return handle

    def _load(self) -> bytes:
        try:
            return self._loader.load()
        except Exception as e:
            raise KubernetesConnectionError(
                message=f"kubeconfig load failed: {e}",
                original_error=e,
            ) from e

    def _parse(self, raw: bytes) -> tuple[Configuration, str]:
        from kubernetes import config
        from kubernetes.client import Configuration

        try:
            document: Any = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise KubernetesConnectionError(
                message=f"kubeconfig parse failed: {e}",
                original_error=e,
            ) from e

        if not isinstance(document, dict):
            raise KubernetesConnectionError(
                message="kubeconfig parse failed: expected a mapping at the document root",
            )

        context = self._context or document.get("current-context")
        if not context:
            raise KubernetesConnectionError(
                message="kubeconfig parse failed: no active context "
                "(current-context is unset and no context was given)",
            )

        configuration = Configuration()
        try:
            config.load_kube_config_from_dict(
                config_dict=document,
                context=context,
                client_configuration=configuration,
                persist_config=False,
            )
        except Exception as e:
            raise KubernetesConnectionError(
                message=f"kubeconfig parse failed: context {context!r}: {e}",
                original_error=e,
            ) from e

        return configuration, context


class ServiceAccountConnection:
    """Connect using in-cluster service account credentials."""

    name = "service_account"

    def connect(self) -> ClusterHandle:
        """Discover in-cluster credentials and construct a handle.

        Raises:
            KubernetesConnectionError: If discovery or construction fails.
        """
        from kubernetes import config
        from kubernetes.client import Configuration

        configuration = Configuration()
        try:
            config.load_incluster_config(client_configuration=configuration)
        except Exception as e:
            raise KubernetesConnectionError(
                message=f"in-cluster config discovery failed: {e}",
                original_error=e,
            ) from e

        handle = ClusterHandle.from_configuration(configuration, source=self.name)
        logger.info("loaded_incluster_config", host=handle.host)
        return handle
