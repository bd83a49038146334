"""kubeaws: validation of cluster deployment descriptors before provisioning."""

__version__ = "0.1.0"

from kubeaws.cluster import cluster_from_bytes, load_cluster, validate
from kubeaws.config import find_cluster_file
from kubeaws.defaults import DEFAULTS, ClusterDefaults
from kubeaws.errors import (
    AddressConflictError,
    ClusterConfigError,
    ClusterFileError,
    ContainmentError,
    MalformedInputError,
    OverlapError,
    RecordSetError,
    TopologyConflictError,
    UnsupportedChannelError,
)
from kubeaws.models import (
    SUPPORTED_RELEASE_CHANNELS,
    ClusterConfig,
    ClusterSpec,
    ReleaseChannel,
    Subnet,
    SubnetSpec,
)
from kubeaws.netutil import is_subdomain

__all__ = [
    "AddressConflictError",
    "ClusterConfig",
    "ClusterConfigError",
    "ClusterDefaults",
    "ClusterFileError",
    "ClusterSpec",
    "ContainmentError",
    "DEFAULTS",
    "find_cluster_file",
    "cluster_from_bytes",
    "is_subdomain",
    "load_cluster",
    "MalformedInputError",
    "OverlapError",
    "RecordSetError",
    "ReleaseChannel",
    "Subnet",
    "SubnetSpec",
    "SUPPORTED_RELEASE_CHANNELS",
    "TopologyConflictError",
    "UnsupportedChannelError",
    "validate",
    "__version__",
]
