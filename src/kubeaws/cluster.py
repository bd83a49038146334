"""Cluster descriptor pipeline.

raw mapping -> ClusterSpec -> defaults -> topology -> ClusterConfig -> validation

``validate`` is the entry point used by provisioning: it either returns a
fully populated, validated ``ClusterConfig`` or raises the first
``ClusterConfigError`` encountered.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from kubeaws.config import parse_descriptor, read_descriptor
from kubeaws.defaults import apply_defaults
from kubeaws.errors import ClusterConfigError, MalformedInputError
from kubeaws.models import ClusterConfig, ClusterSpec
from kubeaws.topology import resolve_subnets
from kubeaws.validator import validate_cluster_config

logger = logging.getLogger(__name__)


def parse_spec(raw: Mapping[str, Any]) -> ClusterSpec:
    """Parse an untyped descriptor mapping into a ``ClusterSpec``.

    Raises:
        MalformedInputError: If *raw* is not a mapping or a field has the
            wrong type.
    """
    if not isinstance(raw, Mapping):
        raise MalformedInputError(
            f"Cluster descriptor must be a mapping, got {type(raw).__name__}"
        )
    try:
        return ClusterSpec.model_validate(dict(raw))
    except ValidationError as e:
        raise MalformedInputError(f"Invalid cluster descriptor: {e}") from e


def validate(raw: Mapping[str, Any]) -> ClusterConfig:
    """Parse, default, resolve and validate a cluster descriptor.

    Raises:
        ClusterConfigError: The first violated rule.
    """
    spec = apply_defaults(parse_spec(raw))
    subnets = resolve_subnets(spec.availability_zone, spec.instance_cidr, spec.subnets)

    try:
        config = ClusterConfig(
            external_dns_name=spec.external_dns_name or "",
            key_name=spec.key_name or "",
            region=spec.region or "",
            cluster_name=spec.cluster_name,
            kms_key_arn=spec.kms_key_arn or "",
            release_channel=spec.release_channel,
            vpc_cidr=spec.vpc_cidr,
            availability_zone=spec.availability_zone or "",
            instance_cidr=spec.instance_cidr or "",
            controller_ip=spec.controller_ip,
            pod_cidr=spec.pod_cidr,
            service_cidr=spec.service_cidr,
            dns_service_ip=spec.dns_service_ip,
            vpc_id=spec.vpc_id,
            route_table_id=spec.route_table_id,
            create_record_set=spec.create_record_set,
            hosted_zone=spec.hosted_zone,
            record_set_ttl=spec.record_set_ttl,
            subnets=subnets,
        )
    except ValidationError as e:
        raise MalformedInputError(f"Invalid cluster descriptor: {e}") from e

    try:
        return validate_cluster_config(config)
    except ClusterConfigError as e:
        logger.debug("Rejected cluster %r: %s", config.cluster_name, e)
        raise


def cluster_from_bytes(data: bytes | str) -> ClusterConfig:
    """Validate a YAML-encoded cluster descriptor.

    An empty document is treated as an empty mapping.
    """
    return validate(parse_descriptor(data))


def load_cluster(path: str | Path) -> ClusterConfig:
    """Read and validate a cluster descriptor file.

    Raises:
        ClusterFileError: If the file cannot be read.
        ClusterConfigError: If the descriptor is invalid.
    """
    return validate(read_descriptor(path))
