"""Models for composed volumes and mounts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, Self

from kubernetes_asyncio.client import V1Volume, V1VolumeMount

from ...constants import (
    DATA_DIR_ROOT,
    IMAGE_CACHE_SUBDIR,
    LOG_DIR_ROOT,
)

__all__ = [
    "ExtraVolumeProvider",
    "PodVolumes",
    "ServiceLayout",
    "VolumeSet",
]


@dataclass
class VolumeSet:
    """Volumes along with the mounts that reference them.

    Volumes are defined at the pod level and mounts at the container level,
    so the two are kept as independent lists joined by volume name rather
    than as pairs. Several mounts may share one volume.
    """

    volumes: list[V1Volume] = field(default_factory=list)
    """Kubernetes volume definitions."""

    mounts: list[V1VolumeMount] = field(default_factory=list)
    """Mount definitions for those volumes within a container."""

    def extend(self, other: VolumeSet) -> None:
        """Append the volumes and mounts of another set, preserving order."""
        self.volumes.extend(other.volumes)
        self.mounts.extend(other.mounts)


class ExtraVolumeProvider(Protocol):
    """Source of caller-supplied extra volumes.

    The builder does not interpret the propagation targets. It passes them
    through and concatenates whatever each provider returns.
    """

    def propagate(self, targets: Sequence[str]) -> list[VolumeSet]:
        """Return the volume fragments that apply to the given targets."""


@dataclass
class PodVolumes:
    """Volumes of a service pod and the mounts of each of its containers."""

    volumes: list[V1Volume]
    """Volumes defined at the pod level."""

    api_mounts: list[V1VolumeMount]
    """Mounts of the main API container."""

    httpd_mounts: list[V1VolumeMount]
    """Mounts of the reverse-proxy sidecar container."""

    def containers(self) -> dict[str, list[V1VolumeMount]]:
        """Return the mounts of each container keyed by container name."""
        return {"api": self.api_mounts, "httpd": self.httpd_mounts}


@dataclass(frozen=True)
class ServiceLayout:
    """Names and paths that depend on the service name."""

    service_name: str
    """Canonical name of the service."""

    data_dir: str
    """Path of the service data directory inside the container."""

    log_dir: str
    """Path of the service log directory inside the container."""

    image_cache_dir: str
    """Path of the image cache inside the container."""

    scripts_secret: str
    """Name of the secret holding the container scripts."""

    cache_volume: str
    """Name of the image cache volume."""

    @classmethod
    def for_service(cls, service_name: str) -> Self:
        """Derive the layout of a service from its canonical name.

        Parameters
        ----------
        service_name
            Canonical name of the service, such as ``glance``.

        Returns
        -------
        ServiceLayout
            Corresponding names and paths.
        """
        data_dir = f"{DATA_DIR_ROOT}/{service_name}"
        return cls(
            service_name=service_name,
            data_dir=data_dir,
            log_dir=f"{LOG_DIR_ROOT}/{service_name}",
            image_cache_dir=f"{data_dir}/{IMAGE_CACHE_SUBDIR}",
            scripts_secret=f"{service_name}-scripts",
            cache_volume=f"{service_name}-cache",
        )

    @property
    def api_config_key(self) -> str:
        """Key of the API container start configuration."""
        return f"{self.service_name}-api-config.json"

    @property
    def httpd_config_key(self) -> str:
        """Key of the reverse-proxy sidecar start configuration."""
        return f"{self.service_name}-httpd-config.json"
