"""Tests for the IPv4 network and DNS name helpers."""

from ipaddress import IPv4Address, IPv4Network

import pytest

from kubeaws.errors import ContainmentError, MalformedInputError
from kubeaws.netutil import (
    cidr_contains,
    cidrs_overlap,
    increment_ip,
    is_subdomain,
    kubernetes_service_ip,
    parse_cidr,
    parse_ip,
)

# --- parse_cidr / parse_ip ---


class TestParse:
    def test_parse_cidr_tolerates_host_bits(self):
        assert parse_cidr("10.4.3.0/16") == IPv4Network("10.4.0.0/16")

    @pytest.mark.parametrize("value", ["10.0.0.0/33", "10.0.0.0", "not-a-cidr", "::1/128"])
    def test_parse_cidr_invalid(self, value: str):
        with pytest.raises(MalformedInputError, match="podCIDR"):
            parse_cidr(value, "podCIDR")

    def test_parse_ip(self):
        assert parse_ip("10.0.0.50") == IPv4Address("10.0.0.50")

    @pytest.mark.parametrize("value", ["10.0.0", "10.0.0.256", "", "10.0.0.0/24"])
    def test_parse_ip_invalid(self, value: str):
        with pytest.raises(MalformedInputError, match="controllerIP"):
            parse_ip(value, "controllerIP")


# --- containment / overlap ---


class TestCidrRelations:
    def test_contains_subset(self):
        assert cidr_contains(IPv4Network("10.0.0.0/16"), IPv4Network("10.0.5.0/24"))

    def test_contains_equal(self):
        assert cidr_contains(IPv4Network("10.4.3.0/24"), IPv4Network("10.4.3.0/24"))

    def test_does_not_contain_larger(self):
        assert not cidr_contains(IPv4Network("10.4.2.0/23"), IPv4Network("10.4.0.0/16"))

    def test_does_not_contain_disjoint(self):
        assert not cidr_contains(IPv4Network("10.4.0.0/16"), IPv4Network("10.5.3.0/24"))

    def test_overlap_when_one_contains_other(self):
        assert cidrs_overlap(IPv4Network("10.4.0.0/16"), IPv4Network("10.4.2.0/23"))
        assert cidrs_overlap(IPv4Network("10.4.2.0/23"), IPv4Network("10.4.0.0/16"))

    def test_overlap_across_prefix_lengths(self):
        assert cidrs_overlap(IPv4Network("10.0.0.0/23"), IPv4Network("10.0.1.0/24"))

    def test_adjacent_networks_do_not_overlap(self):
        assert not cidrs_overlap(IPv4Network("10.0.0.0/24"), IPv4Network("10.0.1.0/24"))


# --- address derivation ---


class TestKubernetesServiceIP:
    def test_increment_ip(self):
        assert increment_ip(IPv4Address("10.0.0.255")) == IPv4Address("10.0.1.0")

    @pytest.mark.parametrize(
        ("service_cidr", "expected"),
        [
            ("172.5.10.10/22", "172.5.8.1"),
            ("10.5.70.10/18", "10.5.64.1"),
            ("172.4.155.98/27", "172.4.155.97"),
            ("10.6.142.100/28", "10.6.142.97"),
        ],
    )
    def test_inference(self, service_cidr: str, expected: str):
        assert str(kubernetes_service_ip(service_cidr)) == expected

    def test_accepts_network(self):
        assert kubernetes_service_ip(IPv4Network("10.3.0.0/24")) == IPv4Address("10.3.0.1")

    @pytest.mark.parametrize("service_cidr", ["255.255.255.255/32", "10.3.0.10/32"])
    def test_no_usable_host(self, service_cidr: str):
        with pytest.raises(ContainmentError, match="no usable host address"):
            kubernetes_service_ip(service_cidr)

    def test_slash_31_uses_upper_address(self):
        assert str(kubernetes_service_ip("255.255.255.254/31")) == "255.255.255.255"


# --- is_subdomain ---


class TestIsSubdomain:
    @pytest.mark.parametrize(
        ("sub", "parent"),
        [
            ("test.coreos.com", "coreos.com"),
            ("cgag.staging.coreos.com", "coreos.com"),
            ("staging.coreos.com.", "coreos.com."),
            ("a.b.c.", "b.c"),
            ("a.b.c.staging.core-os.net", "staging.core-os.net"),
            ("coreos.com", "coreos.com"),
        ],
    )
    def test_valid(self, sub: str, parent: str):
        assert is_subdomain(sub, parent)

    @pytest.mark.parametrize(
        ("sub", "parent"),
        [
            ("staging.coreos.com", "example.com"),
            ("staging.coreos.com", "cgag.staging.coreos.com"),
            ("notcoreos.com", "coreos.com"),
            ("test.CoreOS.com", "coreos.com"),
        ],
    )
    def test_invalid(self, sub: str, parent: str):
        assert not is_subdomain(sub, parent)
