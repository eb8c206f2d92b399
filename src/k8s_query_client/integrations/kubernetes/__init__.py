"""Kubernetes integration - connection strategies, handle and configuration models."""

from k8s_query_client.integrations.kubernetes.config import (
    ConnectionConfig,
    QueryClientSettings,
    QueryDefaults,
)
from k8s_query_client.integrations.kubernetes.connection import (
    ConnectionStrategy,
    KubeconfigConnection,
    ServiceAccountConnection,
)
from k8s_query_client.integrations.kubernetes.exceptions import (
    AlreadyConfiguredError,
    KubernetesAuthError,
    KubernetesConfigurationError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
    QueryValidationError,
)
from k8s_query_client.integrations.kubernetes.handle import ClusterHandle
from k8s_query_client.integrations.kubernetes.loader import (
    CredentialLoader,
    KubeconfigFileLoader,
)

__all__ = [
    "AlreadyConfiguredError",
    "ClusterHandle",
    "ConnectionConfig",
    "ConnectionStrategy",
    "CredentialLoader",
    "KubeconfigConnection",
    "KubeconfigFileLoader",
    "KubernetesAuthError",
    "KubernetesConfigurationError",
    "KubernetesConnectionError",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesTimeoutError",
    "KubernetesValidationError",
    "QueryClientSettings",
    "QueryDefaults",
    "QueryValidationError",
    "ServiceAccountConnection",
]
