"""Kubernetes query client configuration models."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_KUBECONFIG = "~/.kube/config"


class ConnectionConfig(BaseModel):
    """How the query client connects to the cluster."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["kubeconfig", "service_account"] = "kubeconfig"
    kubeconfig: str = DEFAULT_KUBECONFIG
    context: str | None = None

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str) -> str:
        """Expand ~ in kubeconfig path."""
        if not v:
            raise ValueError("kubeconfig must not be empty")
        return str(Path(v).expanduser())


class QueryDefaults(BaseModel):
    """Default budgets applied when a caller does not supply one."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: int = 30
    limit: int = 500

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is at least one second."""
        if v < 1:
            raise ValueError("timeout must be at least 1 second")
        return v

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        """Validate limit is positive."""
        if v <= 0:
            raise ValueError("limit must be positive")
        return v

    @property
    def timeout_delta(self) -> timedelta:
        """Default timeout as a ``timedelta``."""
        return timedelta(seconds=self.timeout)


class QueryClientSettings(BaseModel):
    """Complete query client configuration."""

    model_config = ConfigDict(extra="forbid")

    connection: ConnectionConfig = ConnectionConfig()
    defaults: QueryDefaults = QueryDefaults()

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> QueryClientSettings:
        """Create settings with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KQ_MODE: Connection mode (kubeconfig, service_account)
            KQ_KUBECONFIG: Kubeconfig path
            KQ_CONTEXT: Kubeconfig context to activate
            KQ_TIMEOUT: Default per-request timeout in seconds
            KQ_LIMIT: Default page size
        """
        config_dict = {key: dict(value) for key, value in (base_config or {}).items()}
        connection = config_dict.setdefault("connection", {})
        defaults = config_dict.setdefault("defaults", {})

        if mode := os.environ.get("KQ_MODE"):
            connection["mode"] = mode

        if kubeconfig := os.environ.get("KQ_KUBECONFIG"):
            connection["kubeconfig"] = kubeconfig

        if context := os.environ.get("KQ_CONTEXT"):
            connection["context"] = context

        if timeout := os.environ.get("KQ_TIMEOUT"):
            defaults["timeout"] = timeout

        if limit := os.environ.get("KQ_LIMIT"):
            defaults["limit"] = limit

        return cls.model_validate(config_dict)
