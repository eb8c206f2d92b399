"""Command-line interface for k8s_query_client."""
