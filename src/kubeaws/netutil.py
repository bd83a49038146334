"""IPv4 network and DNS name helpers.

Thin wrappers over :mod:`ipaddress` that turn parse failures into
``MalformedInputError`` and implement the containment, overlap and
subdomain relations the validator is built on.
"""

from __future__ import annotations

import ipaddress
from ipaddress import IPv4Address, IPv4Network

from kubeaws.errors import ContainmentError, MalformedInputError


def parse_cidr(value: str, field: str = "CIDR") -> IPv4Network:
    """Parse an IPv4 CIDR block.

    Host bits are tolerated (``10.4.3.0/16`` parses as ``10.4.0.0/16``),
    matching how operators write these values in descriptors.

    Raises:
        MalformedInputError: If *value* is not an IPv4 CIDR.
    """
    if not isinstance(value, str) or "/" not in value:
        raise MalformedInputError(f"Invalid {field}: {value!r} is not a CIDR block")
    try:
        return IPv4Network(value, strict=False)
    except ValueError as e:
        raise MalformedInputError(f"Invalid {field}: {value!r}: {e}") from e


def parse_ip(value: str, field: str = "IP") -> IPv4Address:
    """Parse an IPv4 address. Raises MalformedInputError on failure."""
    try:
        return IPv4Address(value)
    except ValueError as e:
        raise MalformedInputError(f"Invalid {field}: {value!r}: {e}") from e


def cidr_contains(outer: IPv4Network, inner: IPv4Network) -> bool:
    """Return True if every address of *inner* lies within *outer*."""
    if inner.prefixlen < outer.prefixlen:
        return False
    masked = int(inner.network_address) & int(outer.netmask)
    return masked == int(outer.network_address)


def cidrs_overlap(a: IPv4Network, b: IPv4Network) -> bool:
    """Return True if *a* and *b* share at least one address."""
    return (
        int(a.network_address) <= int(b.broadcast_address)
        and int(b.network_address) <= int(a.broadcast_address)
    )


def increment_ip(ip: IPv4Address) -> IPv4Address:
    return ipaddress.IPv4Address(int(ip) + 1)


def kubernetes_service_ip(service_cidr: str | IPv4Network) -> IPv4Address:
    """Infer the Kubernetes API service IP for a service CIDR.

    It is the network base address plus one, e.g. ``172.5.10.10/22`` gives
    ``172.5.8.1``.

    Raises:
        ContainmentError: If the service CIDR has no address after its
            base address (a ``/32``).
    """
    if not isinstance(service_cidr, IPv4Network):
        service_cidr = parse_cidr(service_cidr, "serviceCIDR")
    if service_cidr.num_addresses < 2:
        raise ContainmentError(
            f"serviceCIDR {service_cidr} has no usable host address "
            "for the kubernetes service IP"
        )
    return increment_ip(service_cidr.network_address)


def _labels(name: str) -> list[str]:
    return name.rstrip(".").split(".")


def is_subdomain(sub: str, parent: str) -> bool:
    """Return True if *sub* equals *parent* or lies beneath it.

    Labels are compared right-aligned after stripping trailing dots, so
    ``notcoreos.com`` is not a subdomain of ``coreos.com``.
    """
    sub_labels = _labels(sub)
    parent_labels = _labels(parent)
    if len(parent_labels) > len(sub_labels):
        return False
    offset = len(sub_labels) - len(parent_labels)
    return all(
        label == sub_labels[offset + i] for i, label in enumerate(parent_labels)
    )
