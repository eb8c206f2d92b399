"""Unit tests for the KubernetesQueryClient composition root."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from k8s_query_client import (
    KubernetesQueryClient,
    from_config,
    with_kubeconfig,
    with_service_account,
    with_strategy,
)
from k8s_query_client.integrations.kubernetes.config import ConnectionConfig
from k8s_query_client.integrations.kubernetes.exceptions import (
    AlreadyConfiguredError,
    KubernetesConfigurationError,
    KubernetesConnectionError,
)
from k8s_query_client.integrations.kubernetes.handle import ClusterHandle
from k8s_query_client.services.kubernetes import (
    DeploymentAPI,
    NamespaceAPI,
    PodAPI,
    ServiceAPI,
)


class FakeStrategy:
    """Connection strategy returning a handle over a mock API client."""

    def __init__(self, name: str = "fake", error: Exception | None = None) -> None:
        self.name = name
        self.error = error
        self.api_client = MagicMock()
        self.connect_calls = 0

    def connect(self) -> ClusterHandle:
        self.connect_calls += 1
        if self.error is not None:
            raise self.error
        return ClusterHandle(self.api_client, source=self.name)


class BytesLoader:
    """Credential loader serving fixed bytes."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.calls = 0

    def load(self) -> bytes:
        self.calls += 1
        return self.data


@pytest.mark.unit
@pytest.mark.kubernetes
class TestConstruction:
    """Test building a client from options."""

    def test_with_strategy_populates_every_facade(self) -> None:
        """Test a single option yields a handle and all four query APIs."""
        strategy = FakeStrategy()
        client = KubernetesQueryClient(with_strategy(strategy))

        assert client.configured
        assert client.handle.source == "fake"
        assert isinstance(client.pods, PodAPI)
        assert isinstance(client.services, ServiceAPI)
        assert isinstance(client.deployments, DeploymentAPI)
        assert isinstance(client.namespaces, NamespaceAPI)
        for api in (client.pods, client.services, client.deployments, client.namespaces):
            assert api.handle is client.handle

    def test_with_kubeconfig_path(self, kubeconfig_file: Path) -> None:
        """Test connecting from a kubeconfig file on disk."""
        with KubernetesQueryClient(with_kubeconfig(kubeconfig_file)) as client:
            assert client.handle.host == "https://test.example.com:6443"
            assert client.handle.context == "test-context"

    def test_with_kubeconfig_context(self, kubeconfig_file: Path) -> None:
        """Test the context argument selects another context."""
        with KubernetesQueryClient(
            with_kubeconfig(str(kubeconfig_file), context="other-context")
        ) as client:
            assert client.handle.host == "https://other.example.com:6443"

    def test_with_kubeconfig_loader(self, kubeconfig_file: Path) -> None:
        """Test any credential loader can be passed instead of a path."""
        loader = BytesLoader(kubeconfig_file.read_bytes())

        with KubernetesQueryClient(with_kubeconfig(loader)) as client:
            assert client.handle.source == "kubeconfig"
        assert loader.calls == 1

    @patch("kubernetes.config")
    def test_with_service_account(self, mock_config: MagicMock) -> None:
        """Test connecting with in-cluster credentials."""

        def discover(client_configuration: object) -> None:
            client_configuration.host = "https://10.96.0.1:443"  # type: ignore[attr-defined]

        mock_config.load_incluster_config.side_effect = discover

        with KubernetesQueryClient(with_service_account()) as client:
            assert client.handle.source == "service_account"

    def test_from_config_kubeconfig(self, kubeconfig_file: Path) -> None:
        """Test from_config picks the kubeconfig strategy."""
        config = ConnectionConfig(kubeconfig=str(kubeconfig_file), context="other-context")

        with KubernetesQueryClient(from_config(config)) as client:
            assert client.handle.context == "other-context"

    @patch("kubernetes.config")
    def test_from_config_service_account(self, mock_config: MagicMock) -> None:
        """Test from_config picks the service account strategy."""
        mock_config.load_incluster_config.side_effect = ConnectionError("no token")

        with pytest.raises(KubernetesConfigurationError, match="in-cluster config discovery"):
            KubernetesQueryClient(from_config(ConnectionConfig(mode="service_account")))

    def test_no_options(self) -> None:
        """Test a client without a connection fails validation."""
        with pytest.raises(KubernetesConfigurationError) as exc_info:
            KubernetesQueryClient()

        assert str(exc_info.value).startswith("failed to validate kubernetes client:")
        assert "pods" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestFailures:
    """Test option failures abort construction."""

    def test_failing_option_wraps_error(self) -> None:
        """Test a failing strategy aborts with a configuration error."""
        cause = KubernetesConnectionError("kubeconfig load failed: boom")

        with pytest.raises(KubernetesConfigurationError) as exc_info:
            KubernetesQueryClient(with_strategy(FakeStrategy(error=cause)))

        assert str(exc_info.value) == (
            "failed to configure kubernetes client: kubeconfig load failed: boom"
        )
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.original_error is cause

    def test_missing_kubeconfig(self, tmp_path: Path) -> None:
        """Test a missing kubeconfig file is reported through the load stage."""
        with pytest.raises(KubernetesConfigurationError, match="kubeconfig load failed"):
            KubernetesQueryClient(with_kubeconfig(tmp_path / "missing"))

    def test_later_options_not_applied(self) -> None:
        """Test options after a failing one never run."""
        later = FakeStrategy()

        with pytest.raises(KubernetesConfigurationError):
            KubernetesQueryClient(
                with_strategy(FakeStrategy(error=RuntimeError("first failed"))),
                with_strategy(later),
            )

        assert later.connect_calls == 0


@pytest.mark.unit
@pytest.mark.kubernetes
class TestExclusivity:
    """Test only one connection can be installed."""

    def test_second_option_in_constructor(self) -> None:
        """Test two options in one constructor call are rejected."""
        first = FakeStrategy("first")
        second = FakeStrategy("second")

        with pytest.raises(KubernetesConfigurationError, match="already configured") as exc_info:
            KubernetesQueryClient(with_strategy(first), with_strategy(second))

        assert isinstance(exc_info.value.__cause__, AlreadyConfiguredError)
        assert second.connect_calls == 0
        first.api_client.close.assert_called_once()

    @pytest.mark.parametrize(
        "second_option",
        [with_service_account, lambda: with_kubeconfig("/nonexistent/config")],
        ids=["service_account_after_strategy", "kubeconfig_after_strategy"],
    )
    def test_applying_option_to_configured_client(self, second_option: object) -> None:
        """Test a configured client rejects further options and keeps its query APIs."""
        client = KubernetesQueryClient(with_strategy(FakeStrategy("first")))
        pods, handle = client.pods, client.handle

        with pytest.raises(AlreadyConfiguredError, match="kubernetes client already configured"):
            second_option()(client)  # type: ignore[operator]

        assert client.pods is pods
        assert client.handle is handle
        assert client.handle.source == "first"

    @patch("kubernetes.config")
    def test_kubeconfig_after_service_account(
        self, mock_config: MagicMock, kubeconfig_file: Path
    ) -> None:
        """Test the reverse order is rejected the same way."""

        def discover(client_configuration: object) -> None:
            client_configuration.host = "https://10.96.0.1:443"  # type: ignore[attr-defined]

        mock_config.load_incluster_config.side_effect = discover

        with pytest.raises(KubernetesConfigurationError, match="already configured"):
            KubernetesQueryClient(with_service_account(), with_kubeconfig(kubeconfig_file))


@pytest.mark.unit
@pytest.mark.kubernetes
class TestLifecycle:
    """Test closing the client."""

    def test_context_manager_closes_handle(self) -> None:
        """Test leaving the context closes the API client."""
        strategy = FakeStrategy()

        with KubernetesQueryClient(with_strategy(strategy)):
            pass

        strategy.api_client.close.assert_called_once()

    def test_close(self) -> None:
        """Test close delegates to the handle."""
        strategy = FakeStrategy()
        client = KubernetesQueryClient(with_strategy(strategy))

        client.close()

        strategy.api_client.close.assert_called_once()
