import pytest

from gslbctl.depresolver.validator import (
    GEO_TAG_REGEX,
    HOST_NAME_REGEX,
    HOST_NAMES_WITH_PORTS_REGEX1,
    HOST_NAMES_WITH_PORTS_REGEX2,
    IP_ADDRESS_REGEX,
    K8S_NAMESPACE_REGEX,
    VERSION_NUMBER_REGEX,
    ValidationError,
    field,
    is_not_empty,
)


def test_int_field_higher_than_zero():
    assert field("ReconcileRequeueSeconds", 30).is_higher_than_zero().error is None
    err = field("ReconcileRequeueSeconds", 0).is_higher_than_zero().error
    assert isinstance(err, ValidationError)
    assert str(err) == "'ReconcileRequeueSeconds' is less or equal to zero"


def test_higher_or_equal_to_zero():
    assert field("DNSTtlSeconds", 0).is_higher_or_equal_to_zero().error is None
    err = field("DNSTtlSeconds", -1).is_higher_or_equal_to_zero().error
    assert str(err) == "'DNSTtlSeconds' is less than zero"


def test_bounds():
    assert field("port", 53).is_less_or_equal_to(65535).error is None
    assert field("port", 70000).is_less_or_equal_to(65535).error is not None
    assert field("port", 53).is_higher_than(0).error is None
    assert isinstance(field("port", 0).is_higher_than(0).error, ValidationError)


def test_is_not_empty_checks_string():
    assert field("ClusterGeoTag", "eu").is_not_empty().error is None
    assert str(field("ClusterGeoTag", "").is_not_empty().error) == "'ClusterGeoTag' is empty"


def test_first_error_is_kept():
    v = field("x", "").is_not_empty().match_regexp(GEO_TAG_REGEX).has_items()
    assert str(v.error) == "'x' is empty"


def test_unsupported_type_is_an_error():
    v = field("x", 1.5).is_higher_than_zero()
    assert isinstance(v.error, ValidationError)
    assert "as int or string" in str(v.error)
    assert field("flag", True).error is not None


@pytest.mark.parametrize(
    "value, regex, ok",
    [
        ("af-south-1", GEO_TAG_REGEX, True),
        ("eu_west", GEO_TAG_REGEX, False),
        ("cloud.example.com", HOST_NAME_REGEX, True),
        ("-bad.example.com", HOST_NAME_REGEX, False),
        ("127.0.0.1", IP_ADDRESS_REGEX, True),
        ("256.0.0.1", IP_ADDRESS_REGEX, False),
        ("v0.1.2-alpha", VERSION_NUMBER_REGEX, True),
        ("0.1.2", VERSION_NUMBER_REGEX, True),
        ("01.2", VERSION_NUMBER_REGEX, False),
        ("k8gb", K8S_NAMESPACE_REGEX, True),
        ("K8GB", K8S_NAMESPACE_REGEX, False),
    ],
)
def test_match_regexp(value, regex, ok):
    assert (field("f", value).match_regexp(regex).error is None) is ok


def test_empty_value_skips_regexp():
    assert field("f", "").match_regexp(IP_ADDRESS_REGEX).error is None


def test_host_names_with_ports_need_both_expressions():
    good = "a.example.com:53, b.example.com"
    v = field("EdgeDNSServers", good)
    assert v.match_regexp(HOST_NAMES_WITH_PORTS_REGEX1).match_regexp(HOST_NAMES_WITH_PORTS_REGEX2).error is None
    bad = "a.example.com,"
    v = field("EdgeDNSServers", bad)
    assert v.match_regexp(HOST_NAMES_WITH_PORTS_REGEX1).match_regexp(HOST_NAMES_WITH_PORTS_REGEX2).error is not None


def test_match_regexps_any_of():
    assert field("server", "127.0.0.1").match_regexps(HOST_NAME_REGEX, IP_ADDRESS_REGEX).error is None
    err = field("server", "a_b").match_regexps(IP_ADDRESS_REGEX, K8S_NAMESPACE_REGEX).error
    assert isinstance(err, ValidationError)
    assert K8S_NAMESPACE_REGEX in str(err)


def test_list_items():
    assert field("ExtClustersGeoTags", ["eu", "us"]).has_items().has_unique_items().error is None
    assert "at least one item" in str(field("ExtClustersGeoTags", []).has_items().error)
    err = field("ExtClustersGeoTags", ["eu", "us", "eu"]).has_unique_items().error
    assert str(err) == "'ExtClustersGeoTags' contains redundant values '[eu us eu]'"


def test_module_is_not_empty():
    assert is_not_empty("a b") is True
    assert is_not_empty("   ") is False
    assert is_not_empty("") is False