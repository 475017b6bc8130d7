import pytest

from hmcapi.meta import GROUP_VERSION, SCHEME, ObjectMeta, Providers
from hmcapi.templates import (
    AvailableUpgrade,
    ClusterTemplate,
    ClusterTemplateChain,
    CrossNamespaceSourceReference,
    HelmSpec,
    ProviderTemplate,
    ServiceTemplate,
    ServiceTemplateChain,
    SupportedTemplate,
    TemplateChainSpec,
    TemplateSpecCommon,
    TemplateStatusCommon,
    TemplateValidationStatus,
)


def _ref():
    return CrossNamespaceSourceReference(kind="HelmChart", name="chart", namespace="ns")


def test_helm_spec_with_name_is_valid():
    spec = HelmSpec(chart_name="aws-standalone-cp", chart_version="0.0.1")
    spec.validate()
    assert spec.to_dict() == {"chartName": "aws-standalone-cp", "chartVersion": "0.0.1"}


def test_helm_spec_with_ref_is_valid():
    spec = HelmSpec(chart_ref=_ref())
    spec.validate()
    assert HelmSpec.from_dict(spec.to_dict()) == spec


@pytest.mark.parametrize("spec", [HelmSpec(), HelmSpec(chart_name="x", chart_ref=_ref())])
def test_helm_spec_needs_exactly_one(spec):
    with pytest.raises(ValueError, match="either chartName or chartRef must be set"):
        spec.validate()


def _template(cls, chart="chart"):
    return cls(
        metadata=ObjectMeta(name="t", namespace="default"),
        spec=TemplateSpecCommon(
            helm=HelmSpec(chart_name=chart),
            providers=Providers(infrastructure=["aws"]),
        ),
        status=TemplateStatusCommon(
            validation=TemplateValidationStatus(validation_error="bad", valid=False),
            description="d",
            config={"a": 1},
            chart_ref=_ref(),
            observed_generation=1,
        ),
    )


@pytest.mark.parametrize("cls", [ClusterTemplate, ServiceTemplate, ProviderTemplate])
def test_template_round_trip(cls):
    tmpl = _template(cls)
    data = tmpl.to_dict()
    assert data["kind"] == cls.KIND
    assert data["apiVersion"] == GROUP_VERSION.api_version()
    assert data["status"]["validationError"] == "bad"
    assert data["status"]["valid"] is False
    assert cls.from_dict(data) == tmpl


def test_template_spec_is_immutable():
    old = _template(ClusterTemplate)
    new = _template(ClusterTemplate, chart="other")
    with pytest.raises(ValueError, match="Spec is immutable"):
        new.validate_update(old)


def test_template_status_may_change():
    old = _template(ClusterTemplate)
    new = _template(ClusterTemplate)
    new.status.validation.valid = True
    new.validate_update(old)
    assert new.spec == old.spec


def test_template_update_across_kinds_rejected():
    with pytest.raises(TypeError):
        _template(ClusterTemplate).validate_update(_template(ServiceTemplate))


def test_from_dict_rejects_other_kind():
    data = _template(ServiceTemplate).to_dict()
    with pytest.raises(ValueError):
        ClusterTemplate.from_dict(data)


@pytest.mark.parametrize("cls", [ClusterTemplate, ServiceTemplate, ProviderTemplate])
def test_scheme_dispatches_serialised_template(cls):
    tmpl = _template(cls)
    data = tmpl.to_dict()
    assert SCHEME.lookup(data["kind"]).from_dict(data) == tmpl


@pytest.mark.parametrize(
    "cls",
    [ClusterTemplate, ServiceTemplate, ProviderTemplate, ClusterTemplateChain, ServiceTemplateChain],
)
def test_kinds_registered(cls):
    assert SCHEME.lookup(cls.KIND) is cls


def _chain(cls, upgrade="t2"):
    return cls(
        metadata=ObjectMeta(name="hmc-tc"),
        spec=TemplateChainSpec(
            supported_templates=[
                SupportedTemplate(name="t1", available_upgrades=[AvailableUpgrade(name=upgrade)]),
                SupportedTemplate(name=upgrade),
            ]
        ),
    )


@pytest.mark.parametrize("cls", [ClusterTemplateChain, ServiceTemplateChain])
def test_chain_round_trip(cls):
    chain = _chain(cls)
    data = chain.to_dict()
    assert data["kind"] == cls.KIND
    assert data["spec"]["supportedTemplates"][0]["availableUpgrades"] == [{"name": "t2"}]
    assert cls.from_dict(data) == chain


def test_chain_spec_is_immutable():
    old = _chain(ClusterTemplateChain)
    _chain(ClusterTemplateChain).validate_update(old)
    with pytest.raises(ValueError, match="Spec is immutable"):
        _chain(ClusterTemplateChain, upgrade="t3").validate_update(old)


def test_empty_chain_spec_serialises_to_empty():
    assert TemplateChainSpec().to_dict() == {}
    assert TemplateChainSpec.from_dict({}) == TemplateChainSpec()