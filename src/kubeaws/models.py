"""Core data models for kubeaws.

Defines the schemas for:
- Release channels (the closed set of supported version tracks)
- The raw cluster descriptor (every field optional, as written by the operator)
- Resolved subnets (availability-zone placements)
- The validated cluster configuration handed to provisioning
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from kubeaws.netutil import kubernetes_service_ip

# --- Enums ---


class ReleaseChannel(enum.StrEnum):
    ALPHA = "alpha"
    BETA = "beta"


SUPPORTED_RELEASE_CHANNELS: frozenset[str] = frozenset(c.value for c in ReleaseChannel)


def is_supported_channel(channel: str) -> bool:
    """Return True if *channel* is a supported release channel."""
    return channel in SUPPORTED_RELEASE_CHANNELS


# --- Descriptor Schema (input) ---


class SubnetSpec(BaseModel):
    """A subnet entry as written in the descriptor's ``subnets`` list."""

    model_config = ConfigDict(populate_by_name=True)

    availability_zone: str | None = Field(default=None, alias="availabilityZone")
    instance_cidr: str | None = Field(default=None, alias="instanceCIDR")


class ClusterSpec(BaseModel):
    """The cluster descriptor as supplied by the operator.

    ``None`` means the key was not set. Defaulting fills the scalars,
    topology resolution consumes ``availability_zone``, ``instance_cidr``
    and ``subnets``.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Identity / metadata
    external_dns_name: str | None = Field(default=None, alias="externalDNSName")
    key_name: str | None = Field(default=None, alias="keyName")
    region: str | None = None
    cluster_name: str | None = Field(default=None, alias="clusterName")
    kms_key_arn: str | None = Field(default=None, alias="kmsKeyArn")
    release_channel: str | None = Field(default=None, alias="releaseChannel")

    # Network
    vpc_cidr: str | None = Field(default=None, alias="vpcCIDR")
    availability_zone: str | None = Field(default=None, alias="availabilityZone")
    instance_cidr: str | None = Field(default=None, alias="instanceCIDR")
    controller_ip: str | None = Field(default=None, alias="controllerIP")
    pod_cidr: str | None = Field(default=None, alias="podCIDR")
    service_cidr: str | None = Field(default=None, alias="serviceCIDR")
    dns_service_ip: str | None = Field(default=None, alias="dnsServiceIP")
    vpc_id: str | None = Field(default=None, alias="vpcId")
    route_table_id: str | None = Field(default=None, alias="routeTableId")

    # DNS record set
    create_record_set: StrictBool | None = Field(default=None, alias="createRecordSet")
    hosted_zone: str | None = Field(default=None, alias="hostedZone")
    record_set_ttl: StrictInt | None = Field(default=None, alias="recordSetTTL")

    subnets: list[SubnetSpec] | None = None


# --- Resolved / validated schema ---


class Subnet(BaseModel):
    """One availability-zone placement with its instance address range."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    availability_zone: str = Field(alias="availabilityZone")
    instance_cidr: str = Field(alias="instanceCIDR")

    def __str__(self) -> str:
        return f"{self.availability_zone or '<any>'}:{self.instance_cidr}"


class ClusterConfig(BaseModel):
    """A fully populated cluster configuration.

    Produced by ``kubeaws.cluster.validate``. Address strings are kept
    exactly as supplied. ``subnets`` is the resolved topology; the first
    subnet hosts the controller.

    The top-level ``availability_zone`` and ``instance_cidr`` echo the
    descriptor and are ``""`` when it did not set them. The effective
    instance CIDR, default included, is always on ``subnets``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    external_dns_name: str = Field(alias="externalDNSName")
    key_name: str = Field(alias="keyName")
    region: str
    cluster_name: str = Field(alias="clusterName")
    kms_key_arn: str = Field(alias="kmsKeyArn")
    release_channel: str = Field(alias="releaseChannel")

    vpc_cidr: str = Field(alias="vpcCIDR")
    availability_zone: str = Field(default="", alias="availabilityZone")
    instance_cidr: str = Field(default="", alias="instanceCIDR")
    controller_ip: str = Field(alias="controllerIP")
    pod_cidr: str = Field(alias="podCIDR")
    service_cidr: str = Field(alias="serviceCIDR")
    dns_service_ip: str = Field(alias="dnsServiceIP")
    vpc_id: str = Field(default="", alias="vpcId")
    route_table_id: str = Field(default="", alias="routeTableId")

    create_record_set: bool = Field(alias="createRecordSet")
    hosted_zone: str = Field(default="", alias="hostedZone")
    record_set_ttl: int = Field(alias="recordSetTTL")

    subnets: tuple[Subnet, ...] = Field(min_length=1)

    @property
    def kubernetes_service_ip(self) -> str:
        """The API server's service IP: first host address of the service CIDR."""
        return str(kubernetes_service_ip(self.service_cidr))

    @property
    def controller_subnet(self) -> Subnet:
        return self.subnets[0]

    def to_dict(self) -> dict[str, Any]:
        """Return the descriptor form (camelCase keys) of this config."""
        data = self.model_dump(by_alias=True, mode="json")
        data["kubernetesServiceIP"] = self.kubernetes_service_ip
        return data
