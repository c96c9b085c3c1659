"""Construction of volumes projecting additional secrets."""

from __future__ import annotations

from collections.abc import Iterable

from kubernetes_asyncio.client import (
    V1SecretVolumeSource,
    V1Volume,
    V1VolumeMount,
)

from ...constants import MOUNT_PATH_CONFIG_ROOT, SECRET_VOLUME_MODE
from ...models.domain.volumes import VolumeSet

__all__ = ["build_secret_projections"]


def build_secret_projections(secret_names: Iterable[str]) -> VolumeSet:
    """Construct volumes and mounts for additional configuration secrets.

    Each secret is mounted read-only in its own directory under the
    configuration root. The directory is named after the position of the
    secret in the input rather than after the secret, so two secrets can
    never collide no matter what characters their names contain.

    Parameters
    ----------
    secret_names
        Names of the secrets, in the order in which they should be mounted.

    Returns
    -------
    VolumeSet
        One volume and one mount per secret, in input order.
    """
    result = VolumeSet()
    for index, secret_name in enumerate(secret_names):
        source = V1SecretVolumeSource(
            secret_name=secret_name, default_mode=SECRET_VOLUME_MODE
        )
        result.volumes.append(V1Volume(name=secret_name, secret=source))
        mount = V1VolumeMount(
            name=secret_name,
            mount_path=f"{MOUNT_PATH_CONFIG_ROOT}/secret-{index}",
            read_only=True,
        )
        result.mounts.append(mount)
    return result
