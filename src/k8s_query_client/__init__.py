"""k8s_query_client - validated, paginating queries over the Kubernetes API."""

from k8s_query_client.__version__ import __version__
from k8s_query_client.client import (
    ClientOption,
    KubernetesQueryClient,
    from_config,
    with_kubeconfig,
    with_service_account,
    with_strategy,
)

__all__ = [
    "ClientOption",
    "KubernetesQueryClient",
    "__version__",
    "from_config",
    "with_kubeconfig",
    "with_service_account",
    "with_strategy",
]
