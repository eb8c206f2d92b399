"""Credential loaders for kubeconfig-based connections."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

import structlog

from k8s_query_client.integrations.kubernetes.exceptions import KubernetesConnectionError
from k8s_query_client.integrations.kubernetes.validation import require_regular_file

logger = structlog.get_logger()


class CredentialLoader(Protocol):
    """Source of raw kubeconfig bytes."""

    def load(self) -> bytes:
        """Return the raw kubeconfig document."""
        ...


class KubeconfigFileLoader:
    """Load kubeconfig bytes from a file on disk.

    The path is checked on every ``load()`` call, not at construction, so a
    loader can be created before the file exists.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = path

    @property
    def path(self) -> str | os.PathLike[str]:
        """Configured kubeconfig path."""
        return self._path

    def load(self) -> bytes:
        """Read the kubeconfig file.

        Returns:
            The file contents.

        Raises:
            QueryValidationError: If the path is empty, missing or not a regular file.
            KubernetesConnectionError: If the file cannot be read.
        """
        path: Path = require_regular_file(self._path, "kubeconfig path")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise KubernetesConnectionError(
                message=f"failed to read kubeconfig {path}: {e}",
                original_error=e,
            ) from e

        logger.debug("read_kubeconfig", path=str(path), size=len(data))
        return data
