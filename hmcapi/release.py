"""Release resource: a versioned set of templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from hmcapi.management import ComponentStatus
from hmcapi.meta import GROUP_VERSION, SCHEME, Condition, ObjectMeta

RELEASE_KIND = "Release"


@dataclass
class CoreProviderTemplate:
    """Reference to the template of a core provider."""

    template: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"template": self.template}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> CoreProviderTemplate:
        return cls(template=(data or {}).get("template", ""))


@dataclass
class NamedProviderTemplate(CoreProviderTemplate):
    """Reference to the template of a named provider."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> NamedProviderTemplate:
        data = data or {}
        return cls(template=data.get("template", ""), name=data.get("name", ""))


@dataclass
class ReleaseSpec:
    """Desired state of a Release."""

    version: str = ""
    upgradeable_versions: list[str] = field(default_factory=list)
    hmc: CoreProviderTemplate = field(default_factory=CoreProviderTemplate)
    capi: CoreProviderTemplate = field(default_factory=CoreProviderTemplate)
    providers: list[NamedProviderTemplate] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "hmc": self.hmc.to_dict(),
            "capi": self.capi.to_dict(),
        }
        if self.upgradeable_versions:
            data["upgradeableVersions"] = list(self.upgradeable_versions)
        if self.providers:
            data["providers"] = [p.to_dict() for p in self.providers]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ReleaseSpec:
        data = data or {}
        return cls(
            version=data.get("version", ""),
            upgradeable_versions=list(data.get("upgradeableVersions") or []),
            hmc=CoreProviderTemplate.from_dict(data.get("hmc")),
            capi=CoreProviderTemplate.from_dict(data.get("capi")),
            providers=[NamedProviderTemplate.from_dict(p) for p in data.get("providers") or []],
        )


@dataclass
class ReleaseStatus:
    """Observed state of a Release."""

    templates: ComponentStatus = field(default_factory=ComponentStatus)
    conditions: list[Condition] = field(default_factory=list)
    ready: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"templates": self.templates.to_dict()}
        if self.conditions:
            data["conditions"] = [c.to_dict() for c in self.conditions]
        if self.ready:
            data["ready"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ReleaseStatus:
        data = data or {}
        return cls(
            templates=ComponentStatus.from_dict(data.get("templates")),
            conditions=[Condition.from_dict(c) for c in data.get("conditions") or []],
            ready=bool(data.get("ready", False)),
        )


@dataclass
class Release:
    """A versioned release of the management components."""

    KIND: ClassVar[str] = RELEASE_KIND
    NAMESPACED: ClassVar[bool] = False

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ReleaseSpec = field(default_factory=ReleaseSpec)
    status: ReleaseStatus = field(default_factory=ReleaseStatus)

    def provider_template(self, name: str) -> str:
        """Return the template of the first provider with this name, or an empty string."""
        return next((p.template for p in self.spec.providers if p.name == name), "")

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": self.KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Release:
        kind = data.get("kind")
        if kind and kind != cls.KIND:
            raise ValueError(f"expected kind {cls.KIND!r}, got {kind!r}")
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=ReleaseSpec.from_dict(data.get("spec")),
            status=ReleaseStatus.from_dict(data.get("status")),
        )


SCHEME.register(Release.KIND, Release)