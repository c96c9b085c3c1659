"""Models for caller-supplied extra volumes."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Annotated, Literal, override

from kubernetes_asyncio.client import (
    V1ConfigMapVolumeSource,
    V1EmptyDirVolumeSource,
    V1HostPathVolumeSource,
    V1NFSVolumeSource,
    V1PersistentVolumeClaimVolumeSource,
    V1SecretVolumeSource,
    V1Volume,
    V1VolumeMount,
)
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...constants import KUBERNETES_NAME_PATTERN
from ..domain.volumes import VolumeSet

__all__ = [
    "BaseVolumeSource",
    "ConfigMapVolumeSource",
    "EmptyDirVolumeSource",
    "ExtraVolMounts",
    "ExtraVolType",
    "ExtraVolumeConfig",
    "ExtraVolumeMountConfig",
    "HostPathVolumeSource",
    "NFSVolumeSource",
    "PVCVolumeSource",
    "SecretVolumeSource",
    "VolMounts",
]


class ExtraVolType(str, Enum):
    """Kind of backend an extra volume group provides.

    This is only a label for the humans reading the configuration. It does
    not change how the volumes are composed.
    """

    CEPH = "Ceph"
    NFS = "NFS"
    UNDEFINED = "Undefined"


class BaseVolumeSource(BaseModel):
    """Source of an extra volume.

    This is a base class that must be subclassed by the different supported
    ways a volume can be provided.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    type: Annotated[
        str, Field(title="Type of volume to mount", examples=["secret"])
    ]

    def to_kubernetes(self, name: str) -> V1Volume:
        """Convert to the Kubernetes representation.

        Parameters
        ----------
        name
            Name of the volume.

        Returns
        -------
        kubernetes_asyncio.client.V1Volume
            Corresponding volume.
        """
        raise NotImplementedError


class ConfigMapVolumeSource(BaseVolumeSource):
    """Config map whose keys are projected as files."""

    type: Literal["configMap"]

    config_map_name: Annotated[
        str,
        Field(
            title="Config map name",
            examples=["ceph-conf"],
            pattern=KUBERNETES_NAME_PATTERN,
        ),
    ]

    default_mode: Annotated[
        int | None,
        Field(title="Default file mode", examples=[0o644], ge=0, le=0o777),
    ] = None

    @override
    def to_kubernetes(self, name: str) -> V1Volume:
        source = V1ConfigMapVolumeSource(
            name=self.config_map_name, default_mode=self.default_mode
        )
        return V1Volume(name=name, config_map=source)


class EmptyDirVolumeSource(BaseVolumeSource):
    """Scratch directory that lives as long as the pod."""

    type: Literal["emptyDir"]

    medium: Annotated[
        str,
        Field(
            title="Storage medium",
            description='Set to ``"Memory"`` to back the volume with tmpfs',
            examples=["Memory"],
        ),
    ] = ""

    @override
    def to_kubernetes(self, name: str) -> V1Volume:
        source = V1EmptyDirVolumeSource(medium=self.medium)
        return V1Volume(name=name, empty_dir=source)


class HostPathVolumeSource(BaseVolumeSource):
    """Path on Kubernetes node to mount in the container."""

    type: Literal["hostPath"]

    path: Annotated[
        str,
        Field(
            title="Host path",
            description="Absolute host path to mount in the container",
            examples=["/etc/ceph"],
            pattern="^/.*",
        ),
    ]

    host_path_type: Annotated[
        str | None,
        Field(
            title="Host path type",
            description="Kubernetes host path type, such as DirectoryOrCreate",
            examples=["DirectoryOrCreate"],
        ),
    ] = None

    @override
    def to_kubernetes(self, name: str) -> V1Volume:
        source = V1HostPathVolumeSource(
            path=self.path, type=self.host_path_type
        )
        return V1Volume(name=name, host_path=source)


class NFSVolumeSource(BaseVolumeSource):
    """NFS volume to mount in the container."""

    type: Literal["nfs"]

    server: Annotated[
        str,
        Field(
            title="NFS server",
            description="Name or IP address of the NFS server for the volume",
            examples=["10.13.105.122"],
        ),
    ]

    server_path: Annotated[
        str,
        Field(
            title="Export path",
            description="Absolute path of NFS server export of the volume",
            examples=["/share1/images"],
            pattern="^/.*",
        ),
    ]

    read_only: Annotated[
        bool,
        Field(
            title="Is read-only",
            description=(
                "Whether to mount the NFS volume read-only. If this is true,"
                " any mount of this volume will be read-only even if the mount"
                " is not marked as such."
            ),
        ),
    ] = False

    @override
    def to_kubernetes(self, name: str) -> V1Volume:
        source = V1NFSVolumeSource(
            path=self.server_path,
            read_only=self.read_only,
            server=self.server,
        )
        return V1Volume(name=name, nfs=source)


class PVCVolumeSource(BaseVolumeSource):
    """Existing persistent volume claim to mount in the container."""

    type: Literal["persistentVolumeClaim"]

    claim_name: Annotated[
        str,
        Field(
            title="Claim name",
            description="Name of an existing persistent volume claim",
            examples=["glance-staging"],
            pattern=KUBERNETES_NAME_PATTERN,
        ),
    ]

    read_only: Annotated[
        bool,
        Field(
            title="Is read-only",
            description="Whether to force all mounts of this volume read-only",
        ),
    ] = False

    @override
    def to_kubernetes(self, name: str) -> V1Volume:
        claim = V1PersistentVolumeClaimVolumeSource(
            claim_name=self.claim_name, read_only=self.read_only
        )
        return V1Volume(name=name, persistent_volume_claim=claim)


class SecretVolumeSource(BaseVolumeSource):
    """Secret whose keys are projected as files."""

    type: Literal["secret"]

    secret_name: Annotated[
        str,
        Field(
            title="Secret name",
            examples=["ceph-client-keys"],
            pattern=KUBERNETES_NAME_PATTERN,
        ),
    ]

    default_mode: Annotated[
        int | None,
        Field(title="Default file mode", examples=[0o640], ge=0, le=0o777),
    ] = None

    @override
    def to_kubernetes(self, name: str) -> V1Volume:
        source = V1SecretVolumeSource(
            secret_name=self.secret_name, default_mode=self.default_mode
        )
        return V1Volume(name=name, secret=source)


class ExtraVolumeConfig(BaseModel):
    """An extra volume that may be mounted inside a container."""

    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    name: Annotated[
        str,
        Field(
            title="Name of volume",
            description=(
                "Used as the Kubernetes volume name and therefore must be a"
                " valid Kubernetes name"
            ),
            pattern=KUBERNETES_NAME_PATTERN,
        ),
    ]

    source: Annotated[
        (
            ConfigMapVolumeSource
            | EmptyDirVolumeSource
            | HostPathVolumeSource
            | NFSVolumeSource
            | PVCVolumeSource
            | SecretVolumeSource
        ),
        Field(title="Source of volume", discriminator="type"),
    ]

    def to_kubernetes(self) -> V1Volume:
        """Convert to the Kubernetes representation."""
        return self.source.to_kubernetes(self.name)


class ExtraVolumeMountConfig(BaseModel):
    """The mount of an extra volume inside a container."""

    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    container_path: Annotated[
        str,
        Field(
            title="Path inside container",
            description="Absolute path at which to mount the volume",
            examples=["/etc/ceph"],
            pattern="^/.*",
        ),
    ]

    sub_path: Annotated[
        str | None,
        Field(
            title="Sub-path of source to mount",
            description="Mount only this sub-path of the volume source",
            examples=["ceph.conf"],
        ),
    ] = None

    read_only: Annotated[
        bool,
        Field(
            title="Is read-only",
            description="Whether this mount of the volume should be read-only",
            examples=[True],
        ),
    ] = False

    volume_name: Annotated[
        str,
        Field(title="Volume name", description="Name of the volume to mount"),
    ]

    def to_kubernetes(self) -> V1VolumeMount:
        """Convert to the Kubernetes representation."""
        return V1VolumeMount(
            name=self.volume_name,
            mount_path=self.container_path,
            sub_path=self.sub_path,
            read_only=self.read_only,
        )


class VolMounts(BaseModel):
    """A group of extra volumes and mounts propagated together."""

    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    propagation: Annotated[
        list[str],
        Field(
            title="Propagation targets",
            description=(
                "Services or containers that receive this group. A group with"
                " no targets is never propagated."
            ),
            examples=[["glance", "CinderVolume"]],
        ),
    ] = []

    extra_vol_type: Annotated[
        ExtraVolType,
        Field(title="Backend type", examples=[ExtraVolType.CEPH]),
    ] = ExtraVolType.UNDEFINED

    volumes: Annotated[
        list[ExtraVolumeConfig], Field(title="Volumes of this group")
    ] = []

    mounts: Annotated[
        list[ExtraVolumeMountConfig], Field(title="Mounts of this group")
    ] = []

    def applies_to(self, targets: Sequence[str]) -> bool:
        """Whether any of the given targets selects this group."""
        return any(t in self.propagation for t in targets)

    def to_volume_set(self) -> VolumeSet:
        """Convert the group to Kubernetes volumes and mounts."""
        return VolumeSet(
            volumes=[v.to_kubernetes() for v in self.volumes],
            mounts=[m.to_kubernetes() for m in self.mounts],
        )


class ExtraVolMounts(BaseModel):
    """Named collection of extra volume groups.

    This implements `~volumeset.models.domain.volumes.ExtraVolumeProvider`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, extra="forbid", populate_by_name=True
    )

    name: Annotated[
        str | None,
        Field(title="Name", description="Label for this collection"),
    ] = None

    region: Annotated[
        str | None,
        Field(
            title="Region",
            description="Region of the backend these volumes belong to",
            examples=["regionOne"],
        ),
    ] = None

    ext_vol_mounts: Annotated[
        list[VolMounts], Field(title="Volume groups", alias="extraVol")
    ] = []

    def propagate(self, targets: Sequence[str]) -> list[VolumeSet]:
        """Return the volume groups that apply to the given targets.

        Parameters
        ----------
        targets
            Services or containers for which volumes are being composed.

        Returns
        -------
        list of VolumeSet
            One entry per matching group, in configuration order.
        """
        return [
            g.to_volume_set()
            for g in self.ext_vol_mounts
            if g.applies_to(targets)
        ]
