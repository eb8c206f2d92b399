"""Base models for Kubernetes query results."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field


class OwnerReference(BaseModel):
    """Kubernetes owner reference."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    api_version: str | None = None
    kind: str | None = None
    name: str | None = None
    uid: str | None = None

    @classmethod
    def from_k8s_object(cls, obj: Any) -> OwnerReference:
        """Create from a kubernetes V1OwnerReference object."""
        if obj is None:
            return cls()
        return cls(
            api_version=getattr(obj, "api_version", None),
            kind=getattr(obj, "kind", None),
            name=getattr(obj, "name", None),
            uid=getattr(obj, "uid", None),
        )


class K8sEntityBase(BaseModel):
    """Base class for all Kubernetes query records.

    Records are frozen: a result set handed back to a caller cannot be
    altered through another reference to the same record.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(description="Resource name")
    namespace: str | None = Field(default=None, description="Resource namespace")
    uid: str | None = Field(default=None, description="Kubernetes UID")
    resource_version: str | None = Field(default=None, description="Resource version")
    creation_timestamp: str | None = Field(default=None, description="Creation time")
    labels: dict[str, str] | None = Field(default=None, description="Resource labels")
    annotations: dict[str, str] | None = Field(default=None, description="Resource annotations")
    owner_references: list[OwnerReference] = Field(
        default_factory=list, description="Owning objects"
    )

    _entity_name: ClassVar[str] = "entity"

    @classmethod
    def from_k8s_object(cls, obj: Any) -> Self:
        """Create a record from a kubernetes SDK object."""
        raise NotImplementedError(f"{cls.__name__} does not support SDK conversion")

    @property
    def age(self) -> str:
        """Human-readable age string."""
        if not self.creation_timestamp:
            return "Unknown"
        try:
            created = datetime.fromisoformat(self.creation_timestamp.replace("Z", "+00:00"))
            delta = datetime.now(UTC) - created
            days = delta.days
            hours, remainder = divmod(delta.seconds, 3600)
            minutes = remainder // 60
            if days > 0:
                return f"{days}d"
            if hours > 0:
                return f"{hours}h"
            return f"{minutes}m"
        except (ValueError, TypeError):
            return "Unknown"


def _safe_get(obj: Any, *attrs: str, default: Any = None) -> Any:
    """Safely traverse nested attributes on kubernetes SDK objects."""
    current = obj
    for attr in attrs:
        if current is None:
            return default
        current = getattr(current, attr, None)
    return current if current is not None else default


def _get_timestamp(obj: Any) -> str | None:
    """Extract ISO timestamp string from a datetime or string."""
    if obj is None:
        return None
    if isinstance(obj, str):
        return obj
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def _get_mapping(obj: Any, attr: str) -> dict[str, str] | None:
    """Extract a metadata string map, returning None if empty."""
    mapping = _safe_get(obj, "metadata", attr)
    return dict(mapping) if mapping else None


def _metadata_fields(obj: Any, *, namespaced: bool = True) -> dict[str, Any]:
    """Collect the ``K8sEntityBase`` fields from an object's metadata."""
    owners = _safe_get(obj, "metadata", "owner_references") or []
    return {
        "name": _safe_get(obj, "metadata", "name", default=""),
        "namespace": _safe_get(obj, "metadata", "namespace") if namespaced else None,
        "uid": _safe_get(obj, "metadata", "uid"),
        "resource_version": _safe_get(obj, "metadata", "resource_version"),
        "creation_timestamp": _get_timestamp(_safe_get(obj, "metadata", "creation_timestamp")),
        "labels": _get_mapping(obj, "labels"),
        "annotations": _get_mapping(obj, "annotations"),
        "owner_references": [OwnerReference.from_k8s_object(o) for o in owners],
    }
