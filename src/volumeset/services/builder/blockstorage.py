"""Construction of host volumes needed by the block-storage client."""

from __future__ import annotations

from kubernetes_asyncio.client import (
    V1HostPathVolumeSource,
    V1Volume,
    V1VolumeMount,
)

from ...constants import BLOCK_STORAGE_HOST_PATHS

__all__ = [
    "HOST_PATH_DIRECTORY_OR_CREATE",
    "build_block_storage_mounts",
    "build_block_storage_volumes",
]

HOST_PATH_DIRECTORY_OR_CREATE = "DirectoryOrCreate"
"""Host path type that creates the directory on the node if missing."""


def build_block_storage_volumes() -> list[V1Volume]:
    """Construct the host path volumes used by the block-storage client.

    If the node lacks one of the paths that must already exist, the pod will
    fail to start. That is detected by Kubernetes, not here.

    Returns
    -------
    list of kubernetes_asyncio.client.V1Volume
        The fixed set of host path volumes.
    """
    volumes = []
    for host_path in BLOCK_STORAGE_HOST_PATHS:
        path_type = HOST_PATH_DIRECTORY_OR_CREATE if host_path.create else None
        source = V1HostPathVolumeSource(path=host_path.path, type=path_type)
        volumes.append(V1Volume(name=host_path.name, host_path=source))
    return volumes


def build_block_storage_mounts() -> list[V1VolumeMount]:
    """Construct the mounts of the block-storage host path volumes.

    Returns
    -------
    list of kubernetes_asyncio.client.V1VolumeMount
        One mount per host path volume, at the same path as on the host.
    """
    return [
        V1VolumeMount(
            name=p.name, mount_path=p.path, read_only=p.read_only
        )
        for p in BLOCK_STORAGE_HOST_PATHS
    ]
