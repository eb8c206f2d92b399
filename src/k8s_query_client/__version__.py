"""Version information for k8s_query_client."""

__version__ = "0.1.0"
