"""Template and template chain resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from hmcapi.meta import GROUP_VERSION, SCHEME, ObjectMeta, Providers

# Chart annotations naming the CAPI providers associated with a template.
CHART_ANNOTATION_INFRA_PROVIDERS = "hmc.mirantis.com/infrastructure-providers"
CHART_ANNOTATION_BOOTSTRAP_PROVIDERS = "hmc.mirantis.com/bootstrap-providers"
CHART_ANNOTATION_CONTROL_PLANE_PROVIDERS = "hmc.mirantis.com/control-plane-providers"


def _check_kind(cls: type, data: dict[str, Any]) -> None:
    kind = data.get("kind")
    if kind and kind != cls.KIND:
        raise ValueError(f"expected kind {cls.KIND!r}, got {kind!r}")


@dataclass
class CrossNamespaceSourceReference:
    """Reference to a source resource holding a Helm chart."""

    kind: str
    name: str
    api_version: str = ""
    namespace: str = ""

    def to_dict(self) -> dict[str, str]:
        data = {"kind": self.kind, "name": self.name}
        if self.api_version:
            data["apiVersion"] = self.api_version
        if self.namespace:
            data["namespace"] = self.namespace
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> CrossNamespaceSourceReference | None:
        if not data:
            return None
        return cls(
            kind=data.get("kind", ""),
            name=data.get("name", ""),
            api_version=data.get("apiVersion", ""),
            namespace=data.get("namespace", ""),
        )


@dataclass
class HelmSpec:
    """Reference to the Helm chart behind a template."""

    chart_ref: CrossNamespaceSourceReference | None = None
    chart_name: str = ""
    chart_version: str = ""

    def validate(self) -> None:
        """Raise ValueError unless exactly one of chart name and chart ref is set."""
        if bool(self.chart_name) == (self.chart_ref is not None):
            raise ValueError("either chartName or chartRef must be set")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.chart_ref is not None:
            data["chartRef"] = self.chart_ref.to_dict()
        if self.chart_name:
            data["chartName"] = self.chart_name
        if self.chart_version:
            data["chartVersion"] = self.chart_version
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> HelmSpec:
        data = data or {}
        return cls(
            chart_ref=CrossNamespaceSourceReference.from_dict(data.get("chartRef")),
            chart_name=data.get("chartName", ""),
            chart_version=data.get("chartVersion", ""),
        )


@dataclass
class TemplateSpecCommon:
    helm: HelmSpec = field(default_factory=HelmSpec)
    providers: Providers = field(default_factory=Providers)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"helm": self.helm.to_dict()}
        providers = self.providers.to_dict()
        if providers:
            data["providers"] = providers
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TemplateSpecCommon:
        data = data or {}
        return cls(
            helm=HelmSpec.from_dict(data.get("helm")),
            providers=Providers.from_dict(data.get("providers")),
        )


@dataclass
class TemplateValidationStatus:
    validation_error: str = ""
    valid: bool = False


@dataclass
class TemplateStatusCommon:
    validation: TemplateValidationStatus = field(default_factory=TemplateValidationStatus)
    description: str = ""
    config: dict[str, Any] | None = None
    chart_ref: CrossNamespaceSourceReference | None = None
    providers: Providers = field(default_factory=Providers)
    observed_generation: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"valid": self.validation.valid}
        if self.validation.validation_error:
            data["validationError"] = self.validation.validation_error
        if self.description:
            data["description"] = self.description
        if self.config is not None:
            data["config"] = self.config
        if self.chart_ref is not None:
            data["chartRef"] = self.chart_ref.to_dict()
        providers = self.providers.to_dict()
        if providers:
            data["providers"] = providers
        if self.observed_generation:
            data["observedGeneration"] = self.observed_generation
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TemplateStatusCommon:
        data = data or {}
        return cls(
            validation=TemplateValidationStatus(
                validation_error=data.get("validationError", ""),
                valid=bool(data.get("valid", False)),
            ),
            description=data.get("description", ""),
            config=data.get("config"),
            chart_ref=CrossNamespaceSourceReference.from_dict(data.get("chartRef")),
            providers=Providers.from_dict(data.get("providers")),
            observed_generation=int(data.get("observedGeneration", 0)),
        )


@dataclass
class Template:
    """Common shape of every template kind."""

    KIND: ClassVar[str] = ""
    NAMESPACED: ClassVar[bool] = True

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: TemplateSpecCommon = field(default_factory=TemplateSpecCommon)
    status: TemplateStatusCommon = field(default_factory=TemplateStatusCommon)

    def validate_update(self, old: Template) -> None:
        """Raise ValueError if the spec differs from the stored one."""
        if not isinstance(old, type(self)):
            raise TypeError(f"cannot compare {type(self).__name__} with {type(old).__name__}")
        if self.spec != old.spec:
            raise ValueError("Spec is immutable")

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": self.KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        _check_kind(cls, data)
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=TemplateSpecCommon.from_dict(data.get("spec")),
            status=TemplateStatusCommon.from_dict(data.get("status")),
        )


@dataclass
class ClusterTemplate(Template):
    KIND: ClassVar[str] = "ClusterTemplate"
    NAMESPACED: ClassVar[bool] = True


@dataclass
class ServiceTemplate(Template):
    KIND: ClassVar[str] = "ServiceTemplate"
    NAMESPACED: ClassVar[bool] = True


@dataclass
class ProviderTemplate(Template):
    KIND: ClassVar[str] = "ProviderTemplate"
    NAMESPACED: ClassVar[bool] = False


@dataclass
class AvailableUpgrade:
    name: str


@dataclass
class SupportedTemplate:
    name: str
    available_upgrades: list[AvailableUpgrade] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.available_upgrades:
            data["availableUpgrades"] = [{"name": u.name} for u in self.available_upgrades]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SupportedTemplate:
        return cls(
            name=data["name"],
            available_upgrades=[
                AvailableUpgrade(name=u["name"]) for u in data.get("availableUpgrades") or []
            ],
        )


@dataclass
class TemplateChainSpec:
    supported_templates: list[SupportedTemplate] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        if not self.supported_templates:
            return {}
        return {"supportedTemplates": [t.to_dict() for t in self.supported_templates]}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TemplateChainSpec:
        data = data or {}
        return cls(
            supported_templates=[
                SupportedTemplate.from_dict(t) for t in data.get("supportedTemplates") or []
            ]
        )


@dataclass
class TemplateChain:
    """Common shape of the template chain kinds."""

    KIND: ClassVar[str] = ""
    NAMESPACED: ClassVar[bool] = False

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: TemplateChainSpec = field(default_factory=TemplateChainSpec)

    def validate_update(self, old: TemplateChain) -> None:
        """Raise ValueError if the spec differs from the stored one."""
        if not isinstance(old, type(self)):
            raise TypeError(f"cannot compare {type(self).__name__} with {type(old).__name__}")
        if self.spec != old.spec:
            raise ValueError("Spec is immutable")

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": self.KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        _check_kind(cls, data)
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=TemplateChainSpec.from_dict(data.get("spec")),
        )


@dataclass
class ClusterTemplateChain(TemplateChain):
    KIND: ClassVar[str] = "ClusterTemplateChain"


@dataclass
class ServiceTemplateChain(TemplateChain):
    KIND: ClassVar[str] = "ServiceTemplateChain"


for _cls in (
    ClusterTemplate,
    ServiceTemplate,
    ProviderTemplate,
    ClusterTemplateChain,
    ServiceTemplateChain,
):
    SCHEME.register(_cls.KIND, _cls)