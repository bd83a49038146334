"""Availability-zone / subnet topology resolution.

A descriptor can express its layout in one of three ways:

1. ``subnets: [...]``: one subnet per entry, order preserved.
2. top-level ``availabilityZone`` / ``instanceCIDR``: a single subnet.
3. neither: a single subnet with the default instance CIDR.

``resolve_topology`` classifies the input once; everything downstream works
on the resulting ordered tuple of subnets.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from kubeaws.defaults import DEFAULTS
from kubeaws.errors import TopologyConflictError
from kubeaws.models import Subnet, SubnetSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleSubnetTopology:
    """One implicit subnet built from the top-level fields."""

    availability_zone: str
    instance_cidr: str

    @property
    def subnets(self) -> tuple[Subnet, ...]:
        return (
            Subnet(
                availability_zone=self.availability_zone,
                instance_cidr=self.instance_cidr,
            ),
        )


@dataclass(frozen=True)
class MultiSubnetTopology:
    """An explicit, ordered subnet list."""

    entries: tuple[Subnet, ...]

    @property
    def subnets(self) -> tuple[Subnet, ...]:
        return self.entries


Topology = SingleSubnetTopology | MultiSubnetTopology


def resolve_topology(
    availability_zone: str | None,
    instance_cidr: str | None,
    subnets: Sequence[SubnetSpec] | None,
    default_instance_cidr: str = DEFAULTS.instance_cidr,
) -> Topology:
    """Classify the descriptor's topology fields.

    Raises:
        TopologyConflictError: If a subnet list is combined with the
            top-level fields, or a subnet entry has no availability zone.
    """
    if not subnets:
        return SingleSubnetTopology(
            availability_zone=availability_zone or "",
            instance_cidr=instance_cidr or default_instance_cidr,
        )

    if availability_zone:
        raise TopologyConflictError(
            "availabilityZone cannot be combined with subnets: "
            "specify either a single availability zone or a list of subnets"
        )
    if instance_cidr:
        raise TopologyConflictError(
            "instanceCIDR cannot be combined with subnets: "
            "set instanceCIDR on each subnet instead"
        )

    entries: list[Subnet] = []
    for i, entry in enumerate(subnets):
        if not entry.availability_zone:
            raise TopologyConflictError(f"Subnet at index {i} is missing availabilityZone")
        entries.append(
            Subnet(
                availability_zone=entry.availability_zone,
                instance_cidr=entry.instance_cidr or default_instance_cidr,
            )
        )
    return MultiSubnetTopology(entries=tuple(entries))


def resolve_subnets(
    availability_zone: str | None,
    instance_cidr: str | None,
    subnets: Sequence[SubnetSpec] | None,
) -> tuple[Subnet, ...]:
    """Resolve the topology fields straight to the ordered subnets."""
    resolved = resolve_topology(availability_zone, instance_cidr, subnets).subnets
    logger.debug("Resolved topology: %s", ", ".join(str(s) for s in resolved))
    return resolved
