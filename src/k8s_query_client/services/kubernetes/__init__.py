"""Kubernetes query services.

Provides one read-only query API per supported resource kind, all sharing
the same validation and pagination flow.
"""

from k8s_query_client.services.kubernetes.base import ResourceQueryAPI
from k8s_query_client.services.kubernetes.deployment_api import DeploymentAPI
from k8s_query_client.services.kubernetes.namespace_api import NamespaceAPI
from k8s_query_client.services.kubernetes.pagination import (
    ListOptions,
    SelectorKind,
    collect_pages,
)
from k8s_query_client.services.kubernetes.pod_api import PodAPI
from k8s_query_client.services.kubernetes.service_api import ServiceAPI

__all__ = [
    "DeploymentAPI",
    "ListOptions",
    "NamespaceAPI",
    "PodAPI",
    "ResourceQueryAPI",
    "SelectorKind",
    "ServiceAPI",
    "collect_pages",
]
