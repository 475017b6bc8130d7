"""ManagedCluster resource: a cluster deployed from a ClusterTemplate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from hmcapi.meta import (
    GROUP_VERSION,
    SCHEME,
    Condition,
    ConditionStatus,
    ObjectMeta,
    parse_config,
    set_status_condition,
)

BLOCKING_FINALIZER = "hmc.mirantis.com/cleanup"
MANAGED_CLUSTER_FINALIZER = "hmc.mirantis.com/managed-cluster"

FLUX_HELM_CHART_NAME_KEY = "helm.toolkit.fluxcd.io/name"
HMC_MANAGED_LABEL_KEY = "hmc.mirantis.com/managed"
HMC_MANAGED_LABEL_VALUE = "true"

CLUSTER_NAME_LABEL_KEY = "cluster.x-k8s.io/cluster-name"

MANAGED_CLUSTER_KIND = "ManagedCluster"

# Condition types
TEMPLATE_READY_CONDITION = "TemplateReady"
HELM_CHART_READY_CONDITION = "HelmChartReady"
HELM_RELEASE_READY_CONDITION = "HelmReleaseReady"
READY_CONDITION = "Ready"

# Condition reasons
SUCCEEDED_REASON = "Succeeded"
FAILED_REASON = "Failed"
PROGRESSING_REASON = "Progressing"


@dataclass
class ManagedClusterSpec:
    """Desired state of a ManagedCluster."""

    template: str = ""
    config: str | bytes | dict[str, Any] | None = None
    dry_run: bool = False

    def validate(self) -> None:
        """Raise ValueError if the template reference is empty."""
        if not self.template:
            raise ValueError("spec.template should be at least 1 chars long")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"template": self.template}
        config = parse_config(self.config)
        if config is not None:
            data["config"] = config
        if self.dry_run:
            data["dryRun"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ManagedClusterSpec:
        data = data or {}
        return cls(
            template=data.get("template", ""),
            config=data.get("config"),
            dry_run=bool(data.get("dryRun", False)),
        )


@dataclass
class ManagedClusterStatus:
    """Observed state of a ManagedCluster."""

    conditions: list[Condition] = field(default_factory=list)
    observed_generation: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.conditions:
            data["conditions"] = [c.to_dict() for c in self.conditions]
        if self.observed_generation:
            data["observedGeneration"] = self.observed_generation
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ManagedClusterStatus:
        data = data or {}
        return cls(
            conditions=[Condition.from_dict(c) for c in data.get("conditions") or []],
            observed_generation=int(data.get("observedGeneration", 0)),
        )


@dataclass
class ManagedCluster:
    """A cluster deployed from a template."""

    KIND: ClassVar[str] = MANAGED_CLUSTER_KIND
    NAMESPACED: ClassVar[bool] = True

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ManagedClusterSpec = field(default_factory=ManagedClusterSpec)
    status: ManagedClusterStatus = field(default_factory=ManagedClusterStatus)

    def helm_values(self) -> dict[str, Any] | None:
        """Return the Helm values given in the config, or None when there is none."""
        return parse_config(self.spec.config)

    def init_conditions(self) -> None:
        """Set every condition this cluster tracks to Unknown / Progressing."""
        pending = [
            (TEMPLATE_READY_CONDITION, "Template is not yet ready"),
            (HELM_CHART_READY_CONDITION, "HelmChart is not yet ready"),
        ]
        if not self.spec.dry_run:
            pending.append((HELM_RELEASE_READY_CONDITION, "HelmRelease is not yet ready"))
        pending.append((READY_CONDITION, "ManagedCluster is not yet ready"))
        for condition_type, message in pending:
            set_status_condition(
                self.status.conditions,
                Condition(
                    type=condition_type,
                    status=ConditionStatus.UNKNOWN,
                    reason=PROGRESSING_REASON,
                    message=message,
                ),
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": self.KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ManagedCluster:
        kind = data.get("kind")
        if kind and kind != cls.KIND:
            raise ValueError(f"expected kind {cls.KIND!r}, got {kind!r}")
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=ManagedClusterSpec.from_dict(data.get("spec")),
            status=ManagedClusterStatus.from_dict(data.get("status")),
        )


SCHEME.register(ManagedCluster.KIND, ManagedCluster)