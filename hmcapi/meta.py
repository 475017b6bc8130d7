"""Shared API building blocks: group version, object metadata, conditions, providers, type registry."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import yaml

PROVIDER_CAPA_NAME = "cluster-api-provider-aws"
PROVIDER_AZURE_NAME = "cluster-api-provider-azure"
PROVIDER_VSPHERE_NAME = "cluster-api-provider-vsphere"
PROVIDER_K0SMOTRON_NAME = "k0smotron"
PROVIDER_SVELTOS_NAME = "projectsveltos"
PROVIDER_SVELTOS_TARGET_NAMESPACE = "projectsveltos"
PROVIDER_SVELTOS_CREATE_NAMESPACE = True

TEMPLATE_KEY = ".spec.template"
VERSION_KEY = ".spec.version"


def _format_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value[:-1] + "+00:00" if value.endswith("Z") else value)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with its version."""

    group: str
    version: str

    def api_version(self) -> str:
        """Return the value used in an object's ``apiVersion`` field."""
        return f"{self.group}/{self.version}" if self.group else self.version


GROUP_VERSION = GroupVersion(group="hmc.mirantis.com", version="v1alpha1")


@dataclass
class ObjectMeta:
    """Metadata carried by every stored object."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    generation: int = 0
    deletion_timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "name": self.name,
            "namespace": self.namespace,
            "labels": dict(self.labels),
            "annotations": dict(self.annotations),
            "finalizers": list(self.finalizers),
            "generation": self.generation,
            "deletionTimestamp": _format_time(self.deletion_timestamp),
        }
        return {key: value for key, value in data.items() if value}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ObjectMeta:
        data = data or {}
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
            finalizers=list(data.get("finalizers") or []),
            generation=int(data.get("generation", 0)),
            deletion_timestamp=_parse_time(data.get("deletionTimestamp")),
        )


class ConditionStatus(str, Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition:
    """One aspect of an object's current state."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    observed_generation: int = 0
    last_transition_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "status": ConditionStatus(self.status).value,
            "reason": self.reason,
            "message": self.message,
            "lastTransitionTime": _format_time(self.last_transition_time),
        }
        if self.observed_generation:
            data["observedGeneration"] = self.observed_generation
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Condition:
        return cls(
            type=data["type"],
            status=ConditionStatus(data["status"]),
            reason=data.get("reason", ""),
            message=data.get("message", ""),
            observed_generation=int(data.get("observedGeneration", 0)),
            last_transition_time=_parse_time(data.get("lastTransitionTime")),
        )


def find_status_condition(conditions: list[Condition], condition_type: str) -> Condition | None:
    """Return the condition of the given type, or None."""
    return next((c for c in conditions if c.type == condition_type), None)


def is_status_condition_true(conditions: list[Condition], condition_type: str) -> bool:
    condition = find_status_condition(conditions, condition_type)
    return condition is not None and condition.status == ConditionStatus.TRUE


def set_status_condition(conditions: list[Condition], new_condition: Condition) -> bool:
    """Add or update a condition in place; return whether anything changed.

    The transition time only moves when the status changes.
    """
    existing = find_status_condition(conditions, new_condition.type)
    if existing is None:
        added = replace(new_condition)
        added.last_transition_time = added.last_transition_time or _now()
        conditions.append(added)
        return True

    changed = False
    if existing.status != new_condition.status:
        existing.status = new_condition.status
        existing.last_transition_time = new_condition.last_transition_time or _now()
        changed = True
    for name in ("reason", "message", "observed_generation"):
        value = getattr(new_condition, name)
        if getattr(existing, name) != value:
            setattr(existing, name, value)
            changed = True
    return changed


@dataclass
class Providers:
    """CAPI providers grouped by kind."""

    infrastructure: list[str] = field(default_factory=list)
    bootstrap: list[str] = field(default_factory=list)
    control_plane: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        pairs = (
            ("infrastructure", self.infrastructure),
            ("bootstrap", self.bootstrap),
            ("controlPlane", self.control_plane),
        )
        return {key: list(value) for key, value in pairs if value}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Providers:
        data = data or {}
        return cls(
            infrastructure=list(data.get("infrastructure") or []),
            bootstrap=list(data.get("bootstrap") or []),
            control_plane=list(data.get("controlPlane") or []),
        )


def parse_config(raw: str | bytes | dict | None) -> dict[str, Any] | None:
    """Parse a raw JSON or YAML config into a mapping of Helm values.

    ``None`` and empty documents give ``None``; anything that is not a mapping raises ValueError.
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return dict(raw)
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        values = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid config: {exc}") from exc
    if values is None:
        return None
    if not isinstance(values, dict):
        raise ValueError(f"config must be a mapping, got {type(values).__name__}")
    return values


class Scheme:
    """Registry mapping kinds of one group version to their classes."""

    def __init__(self, group_version: GroupVersion) -> None:
        self.group_version = group_version
        self._types: dict[str, type] = {}

    def register(self, kind: str, cls: type) -> type:
        existing = self._types.setdefault(kind, cls)
        if existing is not cls:
            raise ValueError(f"kind {kind!r} is already registered to {existing.__name__}")
        return cls

    def lookup(self, kind: str) -> type:
        try:
            return self._types[kind]
        except KeyError:
            raise KeyError(
                f"no kind {kind!r} is registered for {self.group_version.api_version()}"
            ) from None

    def kinds(self) -> list[str]:
        return sorted(self._types)


SCHEME = Scheme(GROUP_VERSION)