"""kubeaws CLI — command-line interface for cluster descriptors.

Commands:
    init        Write a starter cluster.yaml
    validate    Validate a cluster.yaml and show the resolved topology
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from kubeaws import __version__
from kubeaws.cluster import load_cluster
from kubeaws.config import DESCRIPTOR_FILENAME, find_cluster_file
from kubeaws.defaults import DEFAULTS
from kubeaws.errors import ClusterConfigError

# --- Root group ---


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr")
def cli(verbose: bool) -> None:
    """kubeaws: validate cluster descriptors before provisioning."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
            stream=sys.stderr,
            force=True,
        )


# --- init command ---


_INIT_TEMPLATE = """\
# Unique name of the cluster.
clusterName: {cluster_name}

# DNS name routable to the Kubernetes controller nodes from worker nodes
# and external clients.
externalDNSName: {external_dns_name}

# Name of the SSH keypair already loaded into the AWS account.
keyName: {key_name}

# Region to provision the cluster in.
region: {region}

# Availability zone to provision the cluster in. Remove this and use
# `subnets` below to spread the cluster over several zones.
availabilityZone: {availability_zone}

# ARN of the KMS key used to encrypt secrets.
kmsKeyArn: "{kms_key_arn}"

# Release channel of the node image (alpha, beta).
#releaseChannel: {release_channel}

# Create a record set for externalDNSName in hostedZone.
#createRecordSet: false
#hostedZone: ""
#recordSetTTL: {record_set_ttl}

# Existing VPC and route table to deploy into.
#vpcId:
#routeTableId:

# CIDR for the VPC and the instance subnet(s).
#vpcCIDR: "{vpc_cidr}"
#instanceCIDR: "{instance_cidr}"

# Spread the cluster over several availability zones. The first subnet
# hosts the controller.
#subnets:
#  - availabilityZone: {availability_zone}
#    instanceCIDR: "{instance_cidr}"

# IP address of the controller inside the first subnet.
#controllerIP: {controller_ip}

# CIDRs for pod and service IPs. Must not overlap the VPC or each other.
#podCIDR: "{pod_cidr}"
#serviceCIDR: "{service_cidr}"

# IP of the cluster DNS service, inside serviceCIDR.
#dnsServiceIP: {dns_service_ip}
"""


@cli.command()
@click.argument("directory", default=".")
@click.option("--external-dns-name", required=True, help="DNS name of the controller")
@click.option("--key-name", required=True, help="Name of the EC2 key pair")
@click.option("--region", required=True, help="AWS region")
@click.option("--availability-zone", required=True, help="Availability zone")
@click.option("--kms-key-arn", required=True, help="ARN of the KMS key")
@click.option("--cluster-name", default=DEFAULTS.cluster_name, help="Cluster name")
def init(
    directory: str,
    external_dns_name: str,
    key_name: str,
    region: str,
    availability_zone: str,
    kms_key_arn: str,
    cluster_name: str,
) -> None:
    """Write a starter cluster.yaml into DIRECTORY."""
    target = Path(directory) / DESCRIPTOR_FILENAME
    if target.exists():
        click.echo(click.style("FAIL", fg="red") + f"  {target} already exists")
        sys.exit(1)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        _INIT_TEMPLATE.format(
            cluster_name=cluster_name,
            external_dns_name=external_dns_name,
            key_name=key_name,
            region=region,
            availability_zone=availability_zone,
            kms_key_arn=kms_key_arn,
            release_channel=DEFAULTS.release_channel,
            record_set_ttl=DEFAULTS.record_set_ttl,
            vpc_cidr=DEFAULTS.vpc_cidr,
            instance_cidr=DEFAULTS.instance_cidr,
            controller_ip=DEFAULTS.controller_ip,
            pod_cidr=DEFAULTS.pod_cidr,
            service_cidr=DEFAULTS.service_cidr,
            dns_service_ip=DEFAULTS.dns_service_ip,
        ),
        encoding="utf-8",
    )
    click.echo(f"Created {target}")
    click.echo("Next: edit it, then run `kubeaws validate`.")


# --- validate command ---


@cli.command()
@click.argument("path", required=False)
@click.option("--json-output", is_flag=True, help="Output the normalized config as JSON")
def validate(path: str | None, json_output: bool) -> None:
    """Validate a cluster descriptor (default: discovered cluster.yaml)."""
    if path is None:
        found = find_cluster_file()
        if found is None:
            click.echo(
                click.style("FAIL", fg="red")
                + f"  no {DESCRIPTOR_FILENAME} found in this or any parent directory"
            )
            sys.exit(1)
        path = str(found)

    try:
        config = load_cluster(path)
    except ClusterConfigError as e:
        click.echo(click.style("FAIL", fg="red") + f"  {path}: {e}")
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return

    click.echo(
        click.style("OK", fg="green")
        + f"  {path}: cluster '{config.cluster_name}' "
        + f"({config.release_channel}), {len(config.subnets)} subnet(s)"
    )
    for i, subnet in enumerate(config.subnets):
        role = "  (controller)" if i == 0 else ""
        az = subnet.availability_zone or "<any>"
        click.echo(f"  subnet {i}: {az:<20} {subnet.instance_cidr}{role}")
    click.echo(f"  vpcCIDR:             {config.vpc_cidr}")
    click.echo(f"  podCIDR:             {config.pod_cidr}")
    click.echo(f"  serviceCIDR:         {config.service_cidr}")
    click.echo(f"  kubernetesServiceIP: {config.kubernetes_service_ip}")
    click.echo(f"  dnsServiceIP:        {config.dns_service_ip}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
