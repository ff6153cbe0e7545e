from gslbctl.depresolver.config import (
    Config,
    DNSServer,
    EdgeDNSType,
    InfobloxConfig,
    LogConfig,
    LogFormat,
)


def test_log_format_names():
    assert str(LogFormat(1)) == "json"
    assert str(LogFormat(2)) == "simple"
    assert str(LogFormat(4)) == "noformat"


def test_log_format_values_are_distinct_bits():
    assert LogFormat(1) is LogFormat.JSON
    assert LogFormat(2) is LogFormat.SIMPLE
    assert LogFormat(4) is LogFormat.NO_FORMAT


def test_edge_dns_type_values():
    assert EdgeDNSType("NoEdgeDNS") is EdgeDNSType.NO_EDGE_DNS
    assert EdgeDNSType("Infoblox") is EdgeDNSType.INFOBLOX
    assert EdgeDNSType("ExtDNS") is EdgeDNSType.EXTERNAL
    assert str(EdgeDNSType("MultipleProviders")) == "MultipleProviders"


def test_config_defaults():
    config = Config()
    assert config.reconcile_requeue_seconds == 30
    assert config.metrics_address == "0.0.0.0:8080"
    assert config.edge_dns_type is EdgeDNSType.NO_EDGE_DNS
    assert config.ext_clusters_geo_tags == []
    assert config.coredns_exposed is False
    assert config.split_brain_check is False


def test_log_defaults():
    log = LogConfig()
    assert log.level == "info"
    assert log.format is LogFormat.SIMPLE
    assert log.no_color is False


def test_infoblox_defaults():
    infoblox = InfobloxConfig()
    assert infoblox.port == 0
    assert infoblox.http_request_timeout == 20
    assert infoblox.http_pool_connections == 10


def test_config_lists_are_independent():
    first = Config()
    second = Config()
    first.ext_clusters_geo_tags.append("eu")
    assert second.ext_clusters_geo_tags == []


def test_dns_server_string_and_default_port():
    server = DNSServer("127.0.0.1", 7753)
    assert str(server) == "127.0.0.1:7753"
    assert DNSServer("1.1.1.1").port == 53