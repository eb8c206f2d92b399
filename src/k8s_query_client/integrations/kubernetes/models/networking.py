"""Service query records."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from k8s_query_client.integrations.kubernetes.models.base import (
    K8sEntityBase,
    _metadata_fields,
    _safe_get,
)


class ServicePort(BaseModel):
    """Service port definition."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(default="", description="Port name")
    port: int = Field(description="Service port number")
    target_port: str | None = Field(default=None, description="Target port")
    protocol: str = Field(default="TCP", description="Protocol")
    node_port: int | None = Field(default=None, description="Node port")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> ServicePort:
        """Create from a kubernetes V1ServicePort object."""
        target_port = getattr(obj, "target_port", None)
        return cls(
            name=getattr(obj, "name", "") or "",
            port=getattr(obj, "port", 0) or 0,
            target_port=str(target_port) if target_port is not None else None,
            protocol=getattr(obj, "protocol", "TCP") or "TCP",
            node_port=getattr(obj, "node_port", None),
        )

    def __str__(self) -> str:
        if self.node_port:
            return f"{self.port}:{self.node_port}/{self.protocol}"
        return f"{self.port}/{self.protocol}"


class ServiceSummary(K8sEntityBase):
    """Service query record."""

    _entity_name: ClassVar[str] = "service"

    type: str = Field(default="ClusterIP", description="Service type")
    cluster_ip: str | None = Field(default=None, description="Cluster IP")
    external_ip: str | None = Field(default=None, description="External IP or hostname")
    ports: list[ServicePort] = Field(default_factory=list, description="Service ports")
    selector: dict[str, str] | None = Field(default=None, description="Pod selector")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> ServiceSummary:
        """Create from a kubernetes V1Service object."""
        spec = getattr(obj, "spec", None)

        # Explicit external IPs win over load balancer ingress
        external_ip = None
        if external_ips := _safe_get(spec, "external_i_ps"):
            external_ip = external_ips[0]
        elif lb_ingress := _safe_get(obj, "status", "load_balancer", "ingress"):
            external_ip = getattr(lb_ingress[0], "ip", None) or getattr(
                lb_ingress[0], "hostname", None
            )

        selector = _safe_get(spec, "selector")
        return cls(
            **_metadata_fields(obj),
            type=_safe_get(spec, "type", default="ClusterIP"),
            cluster_ip=_safe_get(spec, "cluster_ip"),
            external_ip=external_ip,
            ports=[ServicePort.from_k8s_object(p) for p in _safe_get(spec, "ports") or []],
            selector=dict(selector) if selector else None,
        )
