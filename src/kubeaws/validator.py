"""Cluster configuration validator.

Checks a populated ``ClusterConfig`` against the networking, DNS and
release-channel invariants. Validation fails fast: the first violated rule
is raised as a ``ClusterConfigError`` subclass.

Order:
1. Required identity fields
2. Release channel
3. Subnets inside the VPC, subnets pairwise disjoint
4. Pod / service CIDRs disjoint from the VPC and from each other
5. DNS service IP inside the service CIDR and distinct from the
   Kubernetes service IP
6. Controller IP inside the first subnet
7. Existing VPC / route table references
8. Record set settings
"""

from __future__ import annotations

import itertools
import logging

from kubeaws.defaults import DEFAULTS
from kubeaws.errors import (
    AddressConflictError,
    ContainmentError,
    MalformedInputError,
    OverlapError,
    RecordSetError,
    UnsupportedChannelError,
)
from kubeaws.models import SUPPORTED_RELEASE_CHANNELS, ClusterConfig, is_supported_channel
from kubeaws.netutil import (
    cidr_contains,
    cidrs_overlap,
    is_subdomain,
    kubernetes_service_ip,
    parse_cidr,
    parse_ip,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: dict[str, str] = {
    "external_dns_name": "externalDNSName",
    "key_name": "keyName",
    "region": "region",
    "cluster_name": "clusterName",
    "kms_key_arn": "kmsKeyArn",
}


def validate_cluster_config(config: ClusterConfig) -> ClusterConfig:
    """Run every check against *config* and return it unchanged.

    Raises:
        ClusterConfigError: The first violated rule.
    """
    validate_identity(config)
    validate_release_channel(config.release_channel)
    validate_network(config)
    validate_vpc_reference(config)
    validate_record_set(config)
    return config


def validate_identity(config: ClusterConfig) -> None:
    for attr, key in REQUIRED_FIELDS.items():
        if not getattr(config, attr):
            raise MalformedInputError(f"{key} must be set")


def validate_release_channel(channel: str) -> None:
    if not is_supported_channel(channel):
        supported = ", ".join(sorted(SUPPORTED_RELEASE_CHANNELS))
        raise UnsupportedChannelError(
            f"Unsupported releaseChannel {channel!r}: expected one of {supported}"
        )


def validate_network(config: ClusterConfig) -> None:
    """Check CIDR containment, disjointness and derived addresses."""
    vpc_net = parse_cidr(config.vpc_cidr, "vpcCIDR")

    subnet_nets = []
    for i, subnet in enumerate(config.subnets):
        net = parse_cidr(subnet.instance_cidr, f"instanceCIDR of subnet {i}")
        if not cidr_contains(vpc_net, net):
            raise ContainmentError(
                f"instanceCIDR {subnet.instance_cidr} of subnet {i} "
                f"({subnet.availability_zone or 'no availability zone'}) "
                f"is not within vpcCIDR {config.vpc_cidr}"
            )
        subnet_nets.append((i, subnet, net))

    for (i, a, a_net), (j, b, b_net) in itertools.combinations(subnet_nets, 2):
        if cidrs_overlap(a_net, b_net):
            raise OverlapError(
                f"instanceCIDR {a.instance_cidr} of subnet {i} overlaps "
                f"instanceCIDR {b.instance_cidr} of subnet {j}"
            )

    pod_net = parse_cidr(config.pod_cidr, "podCIDR")
    service_net = parse_cidr(config.service_cidr, "serviceCIDR")
    pairs = [
        ("vpcCIDR", config.vpc_cidr, vpc_net, "podCIDR", config.pod_cidr, pod_net),
        ("vpcCIDR", config.vpc_cidr, vpc_net, "serviceCIDR", config.service_cidr, service_net),
        ("podCIDR", config.pod_cidr, pod_net, "serviceCIDR", config.service_cidr, service_net),
    ]
    for a_key, a_val, a_net, b_key, b_val, b_net in pairs:
        if cidrs_overlap(a_net, b_net):
            raise OverlapError(f"{a_key} ({a_val}) overlaps with {b_key} ({b_val})")

    dns_ip = parse_ip(config.dns_service_ip, "dnsServiceIP")
    if dns_ip not in service_net:
        raise ContainmentError(
            f"dnsServiceIP {config.dns_service_ip} is not within "
            f"serviceCIDR {config.service_cidr}"
        )
    api_ip = kubernetes_service_ip(service_net)
    if dns_ip == api_ip:
        raise AddressConflictError(
            f"dnsServiceIP {config.dns_service_ip} conflicts with the kubernetes "
            f"service IP {api_ip} inferred from serviceCIDR {config.service_cidr}"
        )

    controller_ip = parse_ip(config.controller_ip, "controllerIP")
    _, controller_subnet, controller_net = subnet_nets[0]
    if controller_ip not in controller_net:
        raise ContainmentError(
            f"controllerIP {config.controller_ip} is not within instanceCIDR "
            f"{controller_subnet.instance_cidr} of the first subnet"
        )


def validate_vpc_reference(config: ClusterConfig) -> None:
    if config.route_table_id and not config.vpc_id:
        raise MalformedInputError("routeTableId can only be specified together with vpcId")


def validate_record_set(config: ClusterConfig) -> None:
    """Check hostedZone / recordSetTTL against createRecordSet."""
    if config.record_set_ttl < 1:
        raise RecordSetError(
            f"recordSetTTL must be a positive integer, got {config.record_set_ttl}"
        )

    if not config.create_record_set:
        if config.record_set_ttl != DEFAULTS.record_set_ttl:
            raise RecordSetError(
                "recordSetTTL should not be modified when createRecordSet is false"
            )
        return

    if not config.hosted_zone:
        raise RecordSetError("hostedZone cannot be blank when createRecordSet is true")
    if not is_subdomain(config.external_dns_name, config.hosted_zone):
        raise RecordSetError(
            f"externalDNSName {config.external_dns_name} must be equal to or "
            f"a subdomain of hostedZone {config.hosted_zone}"
        )
