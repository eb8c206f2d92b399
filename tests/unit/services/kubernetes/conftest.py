"""Shared fixtures for Kubernetes query API tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client import V1ListMeta, V1ObjectMeta, V1Pod, V1PodList


def make_pod(name: str, namespace: str = "default", **labels: str) -> V1Pod:
    """Build a minimal V1Pod."""
    return V1Pod(metadata=V1ObjectMeta(name=name, namespace=namespace, labels=labels or None))


def make_page(items: list[Any], cursor: str | None = None) -> V1PodList:
    """Build a list page carrying ``cursor`` as its continue token."""
    return V1PodList(items=items, metadata=V1ListMeta(_continue=cursor))


@pytest.fixture
def mock_handle() -> MagicMock:
    """Create a mock cluster handle with API group sub-mocks.

    ``core_v1`` and ``apps_v1`` are auto-created MagicMocks; set
    ``return_value`` or ``side_effect`` on the transport methods under test.
    """
    return MagicMock()


@pytest.fixture
def pod_factory() -> Callable[..., V1Pod]:
    """Return the V1Pod builder."""
    return make_pod


@pytest.fixture
def page_factory() -> Callable[..., V1PodList]:
    """Return the list page builder."""
    return make_page
