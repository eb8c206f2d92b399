"""Shared pytest fixtures for k8s_query_client tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from k8s_query_client.cli.main import app

KUBECONFIG_TEMPLATE = """\
apiVersion: v1
kind: Config
clusters:
  - name: test-cluster
    cluster:
      server: {server}
      insecure-skip-tls-verify: true
  - name: other-cluster
    cluster:
      server: https://other.example.com:6443
      insecure-skip-tls-verify: true
users:
  - name: test-user
    user:
      token: test-token
contexts:
  - name: test-context
    context:
      cluster: test-cluster
      user: test-user
      namespace: default
  - name: other-context
    context:
      cluster: other-cluster
      user: test-user
current-context: {current_context}
"""


def _write_kubeconfig(
    directory: Path,
    server: str = "https://test.example.com:6443",
    current_context: str = "test-context",
) -> Path:
    """Write a token-authenticated kubeconfig into ``directory``."""
    path = directory / "config"
    path.write_text(KUBECONFIG_TEMPLATE.format(server=server, current_context=current_context))
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_kubeconfig(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing kubeconfig files under tmp_path."""

    def factory(**kwargs: str) -> Path:
        return _write_kubeconfig(tmp_path, **kwargs)

    return factory


@pytest.fixture
def kubeconfig_file(make_kubeconfig: Callable[..., Path]) -> Path:
    """Create a valid kubeconfig file."""
    return make_kubeconfig()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KQ_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def capture_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Fixture to capture log output."""
    caplog.set_level(logging.DEBUG)
    return caplog


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app
