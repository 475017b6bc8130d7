"""Management resource: the management cluster's components and providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from hmcapi.meta import (
    GROUP_VERSION,
    PROVIDER_AZURE_NAME,
    PROVIDER_CAPA_NAME,
    PROVIDER_K0SMOTRON_NAME,
    PROVIDER_SVELTOS_NAME,
    PROVIDER_VSPHERE_NAME,
    SCHEME,
    ObjectMeta,
    Providers,
    parse_config,
)

CORE_HMC_NAME = "hmc"
CORE_CAPI_NAME = "capi"

MANAGEMENT_KIND = "Management"
MANAGEMENT_NAME = "hmc"
MANAGEMENT_FINALIZER = "hmc.mirantis.com/management"
TEMPLATE_MANAGEMENT_NAME = "hmc"


@dataclass
class Component:
    """A management component and the template it is installed from."""

    config: str | bytes | dict[str, Any] | None = None
    template: str = ""

    def helm_values(self) -> dict[str, Any] | None:
        """Return the Helm values given in the config, or None when there is none."""
        return parse_config(self.config)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        config = parse_config(self.config)
        if config is not None:
            data["config"] = config
        if self.template:
            data["template"] = self.template
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Component:
        data = data or {}
        return cls(config=data.get("config"), template=data.get("template", ""))


@dataclass
class Provider(Component):
    """A named CAPI provider component."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Provider:
        data = data or {}
        return cls(
            config=data.get("config"),
            template=data.get("template", ""),
            name=data.get("name", ""),
        )


@dataclass
class Core:
    """The mandatory core components."""

    hmc: Component = field(default_factory=Component)
    capi: Component = field(default_factory=Component)

    def to_dict(self) -> dict[str, Any]:
        return {"hmc": self.hmc.to_dict(), "capi": self.capi.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Core | None:
        if data is None:
            return None
        return cls(hmc=Component.from_dict(data.get("hmc")), capi=Component.from_dict(data.get("capi")))


@dataclass
class ManagementSpec:
    """Desired state of a Management."""

    release: str = ""
    core: Core | None = None
    providers: list[Provider] = field(default_factory=list)

    def set_providers_defaults(self) -> None:
        """Replace the providers with the default set."""
        self.providers = [
            Provider(name=PROVIDER_K0SMOTRON_NAME),
            Provider(name=PROVIDER_CAPA_NAME),
            Provider(name=PROVIDER_AZURE_NAME),
            Provider(name=PROVIDER_VSPHERE_NAME),
            Provider(name=PROVIDER_SVELTOS_NAME),
        ]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"release": self.release}
        if self.core is not None:
            data["core"] = self.core.to_dict()
        if self.providers:
            data["providers"] = [p.to_dict() for p in self.providers]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ManagementSpec:
        data = data or {}
        return cls(
            release=data.get("release", ""),
            core=Core.from_dict(data.get("core")),
            providers=[Provider.from_dict(p) for p in data.get("providers") or []],
        )


@dataclass
class ComponentStatus:
    """Outcome of installing one component."""

    template: str = ""
    success: bool = False
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.template:
            data["template"] = self.template
        if self.success:
            data["success"] = True
        if self.error:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ComponentStatus:
        data = data or {}
        return cls(
            template=data.get("template", ""),
            success=bool(data.get("success", False)),
            error=data.get("error", ""),
        )


@dataclass
class ManagementStatus:
    """Observed state of a Management."""

    observed_generation: int = 0
    available_providers: Providers = field(default_factory=Providers)
    components: dict[str, ComponentStatus] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.observed_generation:
            data["observedGeneration"] = self.observed_generation
        available = self.available_providers.to_dict()
        if available:
            data["availableProviders"] = available
        if self.components:
            data["components"] = {name: s.to_dict() for name, s in self.components.items()}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ManagementStatus:
        data = data or {}
        return cls(
            observed_generation=int(data.get("observedGeneration", 0)),
            available_providers=Providers.from_dict(data.get("availableProviders")),
            components={
                name: ComponentStatus.from_dict(s) for name, s in (data.get("components") or {}).items()
            },
        )


@dataclass
class Management:
    """The cluster-wide Management object."""

    KIND: ClassVar[str] = MANAGEMENT_KIND
    NAMESPACED: ClassVar[bool] = False

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ManagementSpec = field(default_factory=ManagementSpec)
    status: ManagementStatus = field(default_factory=ManagementStatus)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": self.KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Management:
        kind = data.get("kind")
        if kind and kind != cls.KIND:
            raise ValueError(f"expected kind {cls.KIND!r}, got {kind!r}")
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=ManagementSpec.from_dict(data.get("spec")),
            status=ManagementStatus.from_dict(data.get("status")),
        )


SCHEME.register(Management.KIND, Management)