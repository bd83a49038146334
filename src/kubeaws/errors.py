"""Exception hierarchy for cluster descriptor validation.

Every failure raised while parsing, defaulting, resolving or validating a
cluster descriptor inherits from ``ClusterConfigError`` so callers (the CLI,
provisioning glue) can catch a single type and surface the message.
"""

from __future__ import annotations


class ClusterConfigError(Exception):
    """Base exception for an invalid cluster descriptor."""


class MalformedInputError(ClusterConfigError):
    """A field is missing, has the wrong type, or cannot be parsed.

    Example:
        raise MalformedInputError("Invalid vpcCIDR: '10.0.0.0/33'")
    """


class TopologyConflictError(ClusterConfigError):
    """The availability-zone/subnet layout is ambiguous or incomplete.

    Raised when an explicit subnet list is combined with the top-level
    ``availabilityZone``/``instanceCIDR`` fields, or when a subnet entry
    has no availability zone.
    """


class ContainmentError(ClusterConfigError):
    """An address or network is not inside the network it must lie in."""


class OverlapError(ClusterConfigError):
    """Two networks that must be disjoint share addresses."""


class AddressConflictError(ClusterConfigError):
    """Two addresses that serve different roles are identical."""


class RecordSetError(ClusterConfigError):
    """The hosted zone / record set settings are inconsistent."""


class UnsupportedChannelError(ClusterConfigError):
    """The release channel is not one of the supported channels."""


class ClusterFileError(ClusterConfigError):
    """The descriptor file does not exist or cannot be read."""
