"""Pod and Deployment query records."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from k8s_query_client.integrations.kubernetes.models.base import (
    K8sEntityBase,
    _metadata_fields,
    _safe_get,
)


class ContainerStatus(BaseModel):
    """Container status within a pod."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(default="", description="Container name")
    image: str | None = Field(default=None, description="Container image")
    ready: bool = Field(default=False, description="Whether container is ready")
    restart_count: int = Field(default=0, description="Number of restarts")
    state: str = Field(default="unknown", description="Current state")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> ContainerStatus:
        """Create from a kubernetes V1ContainerStatus object."""
        state = "unknown"
        if obj_state := getattr(obj, "state", None):
            if getattr(obj_state, "running", None):
                state = "running"
            elif getattr(obj_state, "waiting", None):
                state = str(_safe_get(obj_state, "waiting", "reason", default="Waiting"))
            elif getattr(obj_state, "terminated", None):
                state = str(_safe_get(obj_state, "terminated", "reason", default="Terminated"))

        return cls(
            name=getattr(obj, "name", "") or "",
            image=getattr(obj, "image", None),
            ready=getattr(obj, "ready", False) or False,
            restart_count=getattr(obj, "restart_count", 0) or 0,
            state=state,
        )

    def __str__(self) -> str:
        return self.name


class PodSummary(K8sEntityBase):
    """Pod query record."""

    _entity_name: ClassVar[str] = "pod"

    phase: str = Field(default="Unknown", description="Pod phase")
    node_name: str | None = Field(default=None, description="Node the pod is scheduled on")
    pod_ip: str | None = Field(default=None, description="Pod IP address")
    restarts: int = Field(default=0, description="Total container restarts")
    ready_count: int = Field(default=0, description="Number of ready containers")
    total_count: int = Field(default=0, description="Number of containers in the spec")
    containers: list[ContainerStatus] = Field(
        default_factory=list, description="Container statuses"
    )

    @classmethod
    def from_k8s_object(cls, obj: Any) -> PodSummary:
        """Create from a kubernetes V1Pod object."""
        statuses = _safe_get(obj, "status", "container_statuses") or []
        containers = [ContainerStatus.from_k8s_object(cs) for cs in statuses]

        return cls(
            **_metadata_fields(obj),
            phase=_safe_get(obj, "status", "phase", default="Unknown"),
            node_name=_safe_get(obj, "spec", "node_name"),
            pod_ip=_safe_get(obj, "status", "pod_ip"),
            restarts=sum(c.restart_count for c in containers),
            ready_count=sum(1 for c in containers if c.ready),
            total_count=len(_safe_get(obj, "spec", "containers") or []),
            containers=containers,
        )


class DeploymentSummary(K8sEntityBase):
    """Deployment query record."""

    _entity_name: ClassVar[str] = "deployment"

    replicas: int = Field(default=0, description="Desired replicas")
    ready_replicas: int = Field(default=0, description="Ready replicas")
    available_replicas: int = Field(default=0, description="Available replicas")
    updated_replicas: int = Field(default=0, description="Updated replicas")
    strategy: str | None = Field(default=None, description="Deployment strategy")
    selector: dict[str, str] | None = Field(default=None, description="Pod match labels")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> DeploymentSummary:
        """Create from a kubernetes V1Deployment object."""
        match_labels = _safe_get(obj, "spec", "selector", "match_labels")
        return cls(
            **_metadata_fields(obj),
            replicas=_safe_get(obj, "spec", "replicas", default=0) or 0,
            ready_replicas=_safe_get(obj, "status", "ready_replicas", default=0) or 0,
            available_replicas=_safe_get(obj, "status", "available_replicas", default=0) or 0,
            updated_replicas=_safe_get(obj, "status", "updated_replicas", default=0) or 0,
            strategy=_safe_get(obj, "spec", "strategy", "type"),
            selector=dict(match_labels) if match_labels else None,
        )
