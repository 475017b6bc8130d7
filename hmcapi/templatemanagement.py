"""TemplateManagement resource: rules for distributing templates to namespaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from hmcapi.meta import GROUP_VERSION, SCHEME, ObjectMeta

TEMPLATE_MANAGEMENT_KIND = "TemplateManagement"


def _non_empty(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value}


@dataclass
class LabelSelector:
    """A structured label query."""

    match_labels: dict[str, str] = field(default_factory=dict)
    match_expressions: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _non_empty({
            "matchLabels": dict(self.match_labels),
            "matchExpressions": [dict(e) for e in self.match_expressions],
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> LabelSelector | None:
        if data is None:
            return None
        return cls(
            match_labels=dict(data.get("matchLabels") or {}),
            match_expressions=[dict(e) for e in data.get("matchExpressions") or []],
        )


@dataclass
class TargetNamespaces:
    """Namespaces chosen by a string selector, a structured selector or a list of names."""

    string_selector: str = ""
    selector: LabelSelector | None = None
    names: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError if more than one way of selecting namespaces is set."""
        if sum([bool(self.string_selector), self.selector is not None, bool(self.names)]) > 1:
            raise ValueError(
                "only one of spec.targetNamespaces.selector or spec.targetNamespaces.stringSelector "
                "or spec.targetNamespaces.list can be specified"
            )

    def to_dict(self) -> dict[str, Any]:
        data = _non_empty({"stringSelector": self.string_selector, "list": list(self.names)})
        if self.selector is not None:
            data["selector"] = self.selector.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TargetNamespaces:
        data = data or {}
        return cls(
            string_selector=data.get("stringSelector", ""),
            selector=LabelSelector.from_dict(data.get("selector")),
            names=list(data.get("list") or []),
        )


@dataclass
class AccessRule:
    """Distributes the templates of the named chains to the target namespaces."""

    target_namespaces: TargetNamespaces = field(default_factory=TargetNamespaces)
    cluster_template_chains: list[str] = field(default_factory=list)
    service_template_chains: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _non_empty({
            "targetNamespaces": self.target_namespaces.to_dict(),
            "clusterTemplateChains": list(self.cluster_template_chains),
            "serviceTemplateChains": list(self.service_template_chains),
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> AccessRule:
        data = data or {}
        return cls(
            target_namespaces=TargetNamespaces.from_dict(data.get("targetNamespaces")),
            cluster_template_chains=list(data.get("clusterTemplateChains") or []),
            service_template_chains=list(data.get("serviceTemplateChains") or []),
        )


@dataclass
class TemplateManagementSpec:
    access_rules: list[AccessRule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _non_empty({"accessRules": [r.to_dict() for r in self.access_rules]})

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TemplateManagementSpec:
        return cls(access_rules=[AccessRule.from_dict(r) for r in (data or {}).get("accessRules") or []])


@dataclass
class TemplateManagementStatus:
    error: str = ""
    current: list[AccessRule] = field(default_factory=list)
    observed_generation: int = 0

    def to_dict(self) -> dict[str, Any]:
        return _non_empty({
            "error": self.error,
            "current": [r.to_dict() for r in self.current],
            "observedGeneration": self.observed_generation,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TemplateManagementStatus:
        data = data or {}
        return cls(
            error=data.get("error", ""),
            current=[AccessRule.from_dict(r) for r in data.get("current") or []],
            observed_generation=int(data.get("observedGeneration", 0)),
        )


@dataclass
class TemplateManagement:
    """The cluster-wide template distribution configuration."""

    KIND: ClassVar[str] = TEMPLATE_MANAGEMENT_KIND
    NAMESPACED: ClassVar[bool] = False

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: TemplateManagementSpec = field(default_factory=TemplateManagementSpec)
    status: TemplateManagementStatus = field(default_factory=TemplateManagementStatus)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": self.KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemplateManagement:
        kind = data.get("kind")
        if kind and kind != cls.KIND:
            raise ValueError(f"expected kind {cls.KIND!r}, got {kind!r}")
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=TemplateManagementSpec.from_dict(data.get("spec")),
            status=TemplateManagementStatus.from_dict(data.get("status")),
        )


SCHEME.register(TemplateManagement.KIND, TemplateManagement)