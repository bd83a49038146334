"""Tests for kubeaws data models."""

import pytest
from pydantic import ValidationError

from kubeaws.models import (
    SUPPORTED_RELEASE_CHANNELS,
    ClusterConfig,
    ClusterSpec,
    ReleaseChannel,
    Subnet,
    is_supported_channel,
)


def _config(**overrides) -> ClusterConfig:
    values = {
        "external_dns_name": "k8s.example.com",
        "key_name": "key",
        "region": "us-west-1",
        "cluster_name": "test",
        "kms_key_arn": "arn:aws:kms:us-west-1:1:key/1",
        "release_channel": "alpha",
        "vpc_cidr": "10.0.0.0/16",
        "controller_ip": "10.0.0.50",
        "pod_cidr": "10.2.0.0/16",
        "service_cidr": "10.3.0.0/24",
        "dns_service_ip": "10.3.0.10",
        "create_record_set": False,
        "record_set_ttl": 300,
        "subnets": [Subnet(availability_zone="us-west-1a", instance_cidr="10.0.0.0/24")],
    }
    values.update(overrides)
    return ClusterConfig(**values)


# --- ReleaseChannel ---


class TestReleaseChannel:
    def test_supported_set(self):
        assert SUPPORTED_RELEASE_CHANNELS == {"alpha", "beta"}

    def test_membership(self):
        assert is_supported_channel(ReleaseChannel.BETA)
        assert is_supported_channel("alpha")
        assert not is_supported_channel("stable")
        assert not is_supported_channel("Alpha")


# --- ClusterSpec ---


class TestClusterSpec:
    def test_camel_case_aliases(self):
        spec = ClusterSpec.model_validate(
            {"vpcCIDR": "10.4.0.0/16", "dnsServiceIP": "10.3.0.10", "recordSetTTL": 60}
        )
        assert spec.vpc_cidr == "10.4.0.0/16"
        assert spec.dns_service_ip == "10.3.0.10"
        assert spec.record_set_ttl == 60

    def test_subnet_entries(self):
        spec = ClusterSpec.model_validate(
            {"subnets": [{"availabilityZone": "a", "instanceCIDR": "10.0.0.0/24"}]}
        )
        assert spec.subnets[0].availability_zone == "a"
        assert spec.subnets[0].instance_cidr == "10.0.0.0/24"

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            ClusterSpec.model_validate({"subnets": {"availabilityZone": "a"}})


# --- ClusterConfig ---


class TestClusterConfig:
    def test_frozen(self):
        config = _config()
        with pytest.raises(ValidationError):
            config.vpc_cidr = "10.9.0.0/16"

    def test_requires_a_subnet(self):
        with pytest.raises(ValidationError):
            _config(subnets=[])

    def test_kubernetes_service_ip(self):
        assert _config(service_cidr="172.5.10.10/22").kubernetes_service_ip == "172.5.8.1"

    def test_controller_subnet_is_first(self):
        config = _config(
            subnets=[
                Subnet(availability_zone="b", instance_cidr="10.0.1.0/24"),
                Subnet(availability_zone="a", instance_cidr="10.0.0.0/24"),
            ]
        )
        assert config.controller_subnet.availability_zone == "b"

    def test_to_dict_uses_descriptor_keys(self):
        data = _config().to_dict()
        assert data["vpcCIDR"] == "10.0.0.0/16"
        assert data["externalDNSName"] == "k8s.example.com"
        assert data["recordSetTTL"] == 300
        assert data["kubernetesServiceIP"] == "10.3.0.1"
        assert data["subnets"] == [
            {"availabilityZone": "us-west-1a", "instanceCIDR": "10.0.0.0/24"}
        ]


class TestSubnet:
    def test_equality_by_value(self):
        a = Subnet(availability_zone="a", instance_cidr="10.0.0.0/24")
        b = Subnet.model_validate({"availabilityZone": "a", "instanceCIDR": "10.0.0.0/24"})
        assert a == b

    def test_str(self):
        assert str(Subnet(availability_zone="", instance_cidr="10.0.0.0/24")) == "<any>:10.0.0.0/24"
