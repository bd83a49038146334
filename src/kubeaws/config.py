"""Cluster descriptor file discovery and reading.

Searches for ``cluster.yaml`` in the current directory and parent
directories and parses it into a plain mapping for ``kubeaws.cluster``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from kubeaws.errors import ClusterFileError, MalformedInputError

DESCRIPTOR_FILENAME = "cluster.yaml"


def find_cluster_file(start: Path | None = None) -> Path | None:
    """Walk from *start* (default ``cwd()``) up to the filesystem root.

    Returns the first ``cluster.yaml`` found, or ``None``.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / DESCRIPTOR_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def parse_descriptor(text: str | bytes, source: str = "<string>") -> dict[str, Any]:
    """Parse YAML descriptor text into a mapping.

    An empty document yields ``{}``.

    Raises:
        MalformedInputError: If the text is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedInputError(f"Invalid YAML in {source}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping in {source}, got {type(data).__name__}"
        raise MalformedInputError(msg)
    return data


def read_descriptor(path: str | Path) -> dict[str, Any]:
    """Read and parse a descriptor file.

    Raises:
        ClusterFileError: If the file does not exist or cannot be read.
        MalformedInputError: If its content is not a YAML mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise ClusterFileError(f"Cluster file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ClusterFileError(f"Cannot read {path}: {e}") from e
    return parse_descriptor(text, str(path))
