"""Optional consistency checks for assembled volume sets."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from kubernetes_asyncio.client import V1Volume, V1VolumeMount

from ..exceptions import (
    DanglingMountError,
    DuplicateMountPathError,
    DuplicateVolumeError,
)

__all__ = ["validate_volume_set"]


def _duplicates(values: Iterable[str]) -> list[str]:
    counts = Counter(values)
    return [v for v, n in counts.items() if n > 1]


def validate_volume_set(
    volumes: list[V1Volume],
    mounts: list[V1VolumeMount],
    *,
    container: str | None = None,
) -> None:
    """Check that the mounts of a container match the pod volumes.

    The builder passes collisions through unchanged, so callers that want a
    guarantee before submitting a pod to Kubernetes run this on each
    container.

    Parameters
    ----------
    volumes
        Volumes of the pod.
    mounts
        Mounts of one container of that pod.
    container
        Name of the container, used only in error messages.

    Raises
    ------
    DuplicateVolumeError
        Raised if two volumes share a name.
    DanglingMountError
        Raised if a mount references a volume that is not defined.
    DuplicateMountPathError
        Raised if two mounts share a mount path.
    """
    if duplicates := _duplicates(v.name for v in volumes):
        raise DuplicateVolumeError(duplicates, container)
    names = {v.name for v in volumes}
    if missing := [m.name for m in mounts if m.name not in names]:
        raise DanglingMountError(missing, container)
    if duplicates := _duplicates(m.mount_path for m in mounts):
        raise DuplicateMountPathError(duplicates, container)
