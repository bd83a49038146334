"""Built-in default values for a cluster descriptor.

The defaults are mutually consistent: a descriptor that sets no network
field at all validates as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from kubeaws.models import ClusterSpec, ReleaseChannel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterDefaults:
    """Default values applied to fields the operator left unset."""

    cluster_name: str = "kubernetes"
    release_channel: str = ReleaseChannel.ALPHA.value
    vpc_cidr: str = "10.0.0.0/16"
    instance_cidr: str = "10.0.0.0/24"
    controller_ip: str = "10.0.0.50"
    pod_cidr: str = "10.2.0.0/16"
    service_cidr: str = "10.3.0.0/24"
    dns_service_ip: str = "10.3.0.10"
    vpc_id: str = ""
    route_table_id: str = ""
    create_record_set: bool = False
    hosted_zone: str = ""
    record_set_ttl: int = 300


DEFAULTS = ClusterDefaults()

# Resolved by kubeaws.topology, never filled here.
_TOPOLOGY_FIELDS = frozenset({"instance_cidr"})


def apply_defaults(spec: ClusterSpec, defaults: ClusterDefaults = DEFAULTS) -> ClusterSpec:
    """Return a copy of *spec* with every unset scalar filled from *defaults*.

    Fields the operator set explicitly are never overwritten. The topology
    fields are left untouched so the resolver can still tell whether they
    were given.
    """
    updates = {}
    for f in fields(defaults):
        if f.name in _TOPOLOGY_FIELDS:
            continue
        if getattr(spec, f.name) is None:
            updates[f.name] = getattr(defaults, f.name)

    if updates:
        logger.debug("Defaulted fields: %s", ", ".join(sorted(updates)))
    return spec.model_copy(update=updates)
