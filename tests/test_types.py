from gslbctl.ingress import IngressRule, IngressSpec
from gslbctl.types import (
    GROUP_VERSION,
    GroupVersion,
    Gslb,
    GslbList,
    GslbSpec,
    GslbStatus,
    HealthStatus,
    ObjectMeta,
    Strategy,
)


def test_group_version_values():
    assert GROUP_VERSION.group == "k8gb.absa.oss"
    assert GROUP_VERSION.version == "v1beta1"
    assert str(GROUP_VERSION) == "k8gb.absa.oss/v1beta1"
    assert GroupVersion("k8gb.absa.oss", "v1beta1") == GROUP_VERSION


def test_health_status_strings():
    assert str(HealthStatus("Healthy")) == "Healthy"
    assert str(HealthStatus("Unhealthy")) == "Unhealthy"
    assert str(HealthStatus("NotFound")) == "NotFound"


def test_health_status_from_value():
    assert HealthStatus("Healthy") is HealthStatus.HEALTHY
    assert HealthStatus.NOT_FOUND == "NotFound"


def test_strategy_defaults_are_zero():
    strategy = Strategy()
    assert strategy.type == ""
    assert strategy.primary_geo_tag == ""
    assert strategy.dns_ttl_seconds == 0
    assert strategy.split_brain_threshold_seconds == 0


def test_status_defaults_are_independent():
    first, second = GslbStatus(), GslbStatus()
    first.service_health["roundrobin.cloud.example.com"] = HealthStatus.HEALTHY
    first.healthy_records["roundrobin.cloud.example.com"] = ["10.0.0.1"]
    assert second.service_health == {}
    assert second.healthy_records == {}


def test_gslb_name_and_namespace():
    gslb = Gslb(metadata=ObjectMeta(name="test-gslb", namespace="test-gslb"))
    assert gslb.name == "test-gslb"
    assert gslb.namespace == "test-gslb"
    assert gslb.metadata.finalizers == []
    assert gslb.metadata.deletion_timestamp is None


def test_gslb_spec_holds_ingress_and_strategy():
    spec = GslbSpec(
        ingress=IngressSpec(rules=[IngressRule(host="roundrobin.cloud.example.com")]),
        strategy=Strategy(type="roundRobin", dns_ttl_seconds=30),
    )
    gslb = Gslb(spec=spec)
    assert gslb.spec.ingress.rules[0].host == "roundrobin.cloud.example.com"
    assert gslb.spec.strategy.type == "roundRobin"
    assert gslb.spec.strategy.dns_ttl_seconds == 30


def test_gslb_equality_follows_fields():
    a = Gslb(metadata=ObjectMeta(name="x"), spec=GslbSpec(strategy=Strategy(type="failover")))
    b = Gslb(metadata=ObjectMeta(name="x"), spec=GslbSpec(strategy=Strategy(type="failover")))
    assert a == b
    b.spec.strategy.primary_geo_tag = "eu"
    assert not a == b


def test_gslb_list_items():
    items = [Gslb(metadata=ObjectMeta(name="a")), Gslb(metadata=ObjectMeta(name="b"))]
    gslb_list = GslbList(items=items)
    assert [g.name for g in gslb_list.items] == ["a", "b"]
    assert GslbList().items == []