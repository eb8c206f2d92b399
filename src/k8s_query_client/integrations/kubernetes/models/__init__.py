"""Kubernetes query result models."""

from k8s_query_client.integrations.kubernetes.models.base import (
    K8sEntityBase,
    OwnerReference,
)
from k8s_query_client.integrations.kubernetes.models.cluster import NamespaceSummary
from k8s_query_client.integrations.kubernetes.models.networking import (
    ServicePort,
    ServiceSummary,
)
from k8s_query_client.integrations.kubernetes.models.workloads import (
    ContainerStatus,
    DeploymentSummary,
    PodSummary,
)

__all__ = [
    "ContainerStatus",
    "DeploymentSummary",
    "K8sEntityBase",
    "NamespaceSummary",
    "OwnerReference",
    "PodSummary",
    "ServicePort",
    "ServiceSummary",
]
