"""Logging configuration for k8s_query_client."""

from k8s_query_client.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
