from datetime import datetime, timezone

import pytest

from hmcapi.meta import (
    GROUP_VERSION,
    Condition,
    ConditionStatus,
    GroupVersion,
    ObjectMeta,
    Providers,
    Scheme,
    find_status_condition,
    is_status_condition_true,
    parse_config,
    set_status_condition,
)

T1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T2 = datetime(2024, 6, 1, tzinfo=timezone.utc)


def test_group_version_api_version():
    assert GROUP_VERSION.api_version() == "hmc.mirantis.com/v1alpha1"


def test_core_group_version_has_no_slash():
    assert GroupVersion(group="", version="v1").api_version() == "v1"


def test_set_condition_appends_copy_with_time():
    conditions = []
    cond = Condition(type="Ready", status=ConditionStatus.UNKNOWN, reason="Progressing")
    assert set_status_condition(conditions, cond) is True
    assert len(conditions) == 1
    assert conditions[0] is not cond
    assert isinstance(conditions[0].last_transition_time, datetime)
    assert cond.last_transition_time is None


def test_set_condition_status_change_moves_time():
    conditions = [Condition(type="Ready", status=ConditionStatus.FALSE, last_transition_time=T1)]
    changed = set_status_condition(
        conditions,
        Condition(type="Ready", status=ConditionStatus.TRUE, last_transition_time=T2),
    )
    assert changed is True
    assert conditions[0].status == ConditionStatus.TRUE
    assert conditions[0].last_transition_time == T2


def test_set_condition_same_status_keeps_time():
    conditions = [Condition(type="Ready", status=ConditionStatus.TRUE, message="a", last_transition_time=T1)]
    changed = set_status_condition(
        conditions,
        Condition(type="Ready", status=ConditionStatus.TRUE, message="b", last_transition_time=T2),
    )
    assert changed is True
    assert conditions[0].message == "b"
    assert conditions[0].last_transition_time == T1


def test_set_condition_identical_reports_no_change():
    conditions = [Condition(type="Ready", status=ConditionStatus.TRUE, reason="r", last_transition_time=T1)]
    assert set_status_condition(conditions, Condition(type="Ready", status=ConditionStatus.TRUE, reason="r")) is False
    assert len(conditions) == 1


def test_find_and_is_true():
    conditions = [
        Condition(type="Ready", status=ConditionStatus.TRUE),
        Condition(type="HelmChartReady", status=ConditionStatus.FALSE),
    ]
    assert find_status_condition(conditions, "Missing") is None
    assert find_status_condition(conditions, "HelmChartReady").status == ConditionStatus.FALSE
    assert is_status_condition_true(conditions, "Ready") is True
    assert is_status_condition_true(conditions, "HelmChartReady") is False
    assert is_status_condition_true(conditions, "Missing") is False


def test_condition_round_trip():
    cond = Condition(
        type="Ready", status=ConditionStatus.FALSE, reason="Failed", message="m",
        observed_generation=3, last_transition_time=T1,
    )
    assert Condition.from_dict(cond.to_dict()) == cond
    assert cond.to_dict()["status"] == "False"


def test_providers_round_trip_and_keys():
    providers = Providers(infrastructure=["aws"], bootstrap=["k0s"], control_plane=["k0smotron"])
    data = providers.to_dict()
    assert data == {"infrastructure": ["aws"], "bootstrap": ["k0s"], "controlPlane": ["k0smotron"]}
    assert Providers.from_dict(data) == providers


def test_empty_providers_serialise_to_empty():
    assert Providers().to_dict() == {}
    assert Providers.from_dict(None) == Providers()


def test_object_meta_round_trip():
    meta = ObjectMeta(
        name="n", namespace="ns", labels={"a": "b"}, finalizers=["f"],
        generation=2, deletion_timestamp=T1,
    )
    assert ObjectMeta.from_dict(meta.to_dict()) == meta


@pytest.mark.parametrize("raw", [None, "", b""])
def test_parse_config_empty(raw):
    assert parse_config(raw) is None


def test_parse_config_json_and_yaml():
    assert parse_config('{"a": 1}') == {"a": 1}
    assert parse_config(b"a:\n  b: x\n") == {"a": {"b": "x"}}


@pytest.mark.parametrize("raw", ["[1, 2]", "42", "a: [unclosed"])
def test_parse_config_rejects_non_mapping(raw):
    with pytest.raises(ValueError):
        parse_config(raw)


def test_scheme_register_and_lookup():
    scheme = Scheme(GROUP_VERSION)

    class A:
        pass

    class B:
        pass

    scheme.register("B", B)
    scheme.register("A", A)
    scheme.register("A", A)
    assert scheme.lookup("A") is A
    assert scheme.kinds() == ["A", "B"]
    with pytest.raises(ValueError):
        scheme.register("A", B)
    with pytest.raises(KeyError):
        scheme.lookup("C")