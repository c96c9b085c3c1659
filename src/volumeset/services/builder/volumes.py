"""Construction of the volumes and mounts of a service pod."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from kubernetes_asyncio.client import (
    V1EmptyDirVolumeSource,
    V1PersistentVolumeClaimVolumeSource,
    V1SecretVolumeSource,
    V1Volume,
    V1VolumeMount,
)
from structlog.stdlib import BoundLogger, get_logger

from ...constants import (
    API_CONFIG_VOLUME,
    CONFIG_VOLUME,
    CONFIG_VOLUME_MODE,
    DEFAULT_SERVICE_NAME,
    KOLLA_CONFIG_PATH,
    LOG_VOLUME,
    MOUNT_PATH_CONFIG_DEFAULT,
    MOUNT_PATH_MY_CNF,
    MOUNT_PATH_SCRIPTS,
    MY_CNF_SUB_PATH,
    ROOT_LOGGER,
    SCRIPTS_VOLUME,
    SCRIPTS_VOLUME_MODE,
)
from ...models.domain.volumes import (
    ExtraVolumeProvider,
    PodVolumes,
    ServiceLayout,
)
from ..validator import validate_volume_set
from .blockstorage import (
    build_block_storage_mounts,
    build_block_storage_volumes,
)
from .extra import merge_extra_volumes
from .secrets import build_secret_projections

__all__ = ["VolumeSetBuilder"]


class VolumeSetBuilder:
    """Construct the Kubernetes volumes and mounts of a service pod.

    Every method is a pure function of its arguments and the service layout.
    Each call builds new objects, so results may be modified by the caller
    without affecting later calls.

    Parameters
    ----------
    service_name
        Canonical name of the service, used to derive data, log and cache
        paths.
    logger
        Logger to use. If not given, the ``volumeset`` logger is used.
    """

    def __init__(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        logger: BoundLogger | None = None,
    ) -> None:
        self._layout = ServiceLayout.for_service(service_name)
        self._logger = logger or get_logger(ROOT_LOGGER)

    @property
    def layout(self) -> ServiceLayout:
        """Names and paths derived from the service name."""
        return self._layout

    def build_volumes(
        self,
        instance_name: str,
        *,
        enable_block_storage: bool = False,
        secret_names: Iterable[str] = (),
        extra_volumes: Iterable[ExtraVolumeProvider] = (),
        targets: Sequence[str] = (),
        external_data_store: bool = False,
    ) -> list[V1Volume]:
        """Construct the volumes shared by all containers of the service.

        Contributions are appended in a fixed order: base volumes, extra
        volumes, secret projections, then block storage host paths.

        Parameters
        ----------
        instance_name
            Name of the service instance, used to find its configuration
            secret.
        enable_block_storage
            Whether to add the host paths needed by the block-storage client.
        secret_names
            Additional secrets to project, in mount order.
        extra_volumes
            Providers of caller-supplied extra volumes.
        targets
            Propagation targets passed to the extra volume providers.
        external_data_store
            Whether the service data directory is managed externally, in
            which case no local data volume is added.

        Returns
        -------
        list of kubernetes_asyncio.client.V1Volume
            Volumes in composition order.
        """
        volumes = self.build_base_volumes(
            instance_name, external_data_store=external_data_store
        )
        volumes.extend(merge_extra_volumes(extra_volumes, targets).volumes)
        volumes.extend(build_secret_projections(secret_names).volumes)
        if enable_block_storage:
            volumes.extend(build_block_storage_volumes())
        self._logger.debug(
            "Built service volumes",
            instance=instance_name,
            count=len(volumes),
        )
        return volumes

    def build_mounts(
        self,
        *,
        enable_block_storage: bool = False,
        secret_names: Iterable[str] = (),
        extra_volumes: Iterable[ExtraVolumeProvider] = (),
        targets: Sequence[str] = (),
        external_data_store: bool = False,
    ) -> list[V1VolumeMount]:
        """Construct the mounts matching `build_volumes`.

        Parameters are the same as `build_volumes`, and contributions are
        appended in the same order.

        Returns
        -------
        list of kubernetes_asyncio.client.V1VolumeMount
            Mounts in composition order.
        """
        mounts = self.build_base_mounts(
            external_data_store=external_data_store
        )
        mounts.extend(merge_extra_volumes(extra_volumes, targets).mounts)
        mounts.extend(build_secret_projections(secret_names).mounts)
        if enable_block_storage:
            mounts.extend(build_block_storage_mounts())
        self._logger.debug("Built service mounts", count=len(mounts))
        return mounts

    def build_api_volumes(
        self, instance_name: str, *, cache_claim_name: str | None = None
    ) -> list[V1Volume]:
        """Construct the volumes used only by the API container.

        Parameters
        ----------
        instance_name
            Name of the service instance.
        cache_claim_name
            Persistent volume claim backing the image cache. If not given, no
            cache volume is added.

        Returns
        -------
        list of kubernetes_asyncio.client.V1Volume
            Custom configuration, log, script and (optionally) cache volumes.
        """
        source = V1SecretVolumeSource(
            secret_name=f"{instance_name}-config-data",
            default_mode=CONFIG_VOLUME_MODE,
        )
        volumes = [V1Volume(name=API_CONFIG_VOLUME, secret=source)]
        volumes.append(self.build_log_volume())
        volumes.append(self.build_script_volume())
        if cache_claim_name:
            volumes.append(self.build_cache_volume(cache_claim_name))
        return volumes

    def build_api_mounts(
        self, *, cache_size: str | None = None
    ) -> list[V1VolumeMount]:
        """Construct the mounts used only by the API container.

        Parameters
        ----------
        cache_size
            Configured size of the image cache. If empty or not given, the
            cache is not mounted.

        Returns
        -------
        list of kubernetes_asyncio.client.V1VolumeMount
            Start configuration, log, script and (optionally) cache mounts.
        """
        mounts = [
            V1VolumeMount(
                name=CONFIG_VOLUME,
                mount_path=KOLLA_CONFIG_PATH,
                sub_path=self._layout.api_config_key,
                read_only=True,
            ),
            self.build_log_mount(),
            self.build_script_mount(),
        ]
        if cache_size:
            mounts.append(self.build_cache_mount())
        return mounts

    def build_base_volumes(
        self, instance_name: str, *, external_data_store: bool = False
    ) -> list[V1Volume]:
        """Construct the volumes every instance of the service needs.

        Parameters
        ----------
        instance_name
            Name of the service instance.
        external_data_store
            Whether the service data directory is managed externally.

        Returns
        -------
        list of kubernetes_asyncio.client.V1Volume
            Configuration volume and, unless the data store is external, the
            local data volume.
        """
        source = V1SecretVolumeSource(
            secret_name=f"{instance_name}-config-data",
            default_mode=CONFIG_VOLUME_MODE,
        )
        volumes = [V1Volume(name=CONFIG_VOLUME, secret=source)]

        # The claim is allocated by whatever creates the pod.
        if not external_data_store:
            service = self._layout.service_name
            claim = V1PersistentVolumeClaimVolumeSource(claim_name=service)
            volume = V1Volume(name=service, persistent_volume_claim=claim)
            volumes.append(volume)

        return volumes

    def build_base_mounts(
        self, *, external_data_store: bool = False
    ) -> list[V1VolumeMount]:
        """Construct the mounts every instance of the service needs.

        Parameters
        ----------
        external_data_store
            Whether the service data directory is managed externally.

        Returns
        -------
        list of kubernetes_asyncio.client.V1VolumeMount
            Configuration mounts and, unless the data store is external, the
            local data mount.
        """
        mounts = [
            V1VolumeMount(
                name=CONFIG_VOLUME,
                mount_path=MOUNT_PATH_CONFIG_DEFAULT,
                read_only=True,
            ),
            V1VolumeMount(
                name=CONFIG_VOLUME,
                mount_path=MOUNT_PATH_MY_CNF,
                sub_path=MY_CNF_SUB_PATH,
                read_only=True,
            ),
        ]
        if not external_data_store:
            mount = V1VolumeMount(
                name=self._layout.service_name,
                mount_path=self._layout.data_dir,
                read_only=False,
            )
            mounts.append(mount)
        return mounts

    def build_cache_volume(self, claim_name: str) -> V1Volume:
        """Construct the image cache volume.

        Parameters
        ----------
        claim_name
            Persistent volume claim backing the cache.
        """
        claim = V1PersistentVolumeClaimVolumeSource(claim_name=claim_name)
        return V1Volume(
            name=self._layout.cache_volume, persistent_volume_claim=claim
        )

    def build_cache_mount(self) -> V1VolumeMount:
        """Construct the mount of the image cache volume."""
        return V1VolumeMount(
            name=self._layout.cache_volume,
            mount_path=self._layout.image_cache_dir,
            read_only=False,
        )

    def build_httpd_mounts(self) -> list[V1VolumeMount]:
        """Construct the mounts of the reverse-proxy sidecar.

        These reuse the configuration volume, so there are no matching
        volumes to add.
        """
        return [
            V1VolumeMount(
                name=CONFIG_VOLUME,
                mount_path=MOUNT_PATH_CONFIG_DEFAULT,
                read_only=True,
            ),
            V1VolumeMount(
                name=CONFIG_VOLUME,
                mount_path=KOLLA_CONFIG_PATH,
                sub_path=self._layout.httpd_config_key,
                read_only=True,
            ),
        ]

    def build_log_volume(self) -> V1Volume:
        """Construct the scratch volume used to stream logs."""
        return V1Volume(
            name=LOG_VOLUME, empty_dir=V1EmptyDirVolumeSource(medium="")
        )

    def build_log_mount(self) -> V1VolumeMount:
        """Construct the mount of the log volume."""
        return V1VolumeMount(
            name=LOG_VOLUME, mount_path=self._layout.log_dir, read_only=False
        )

    def build_script_volume(self) -> V1Volume:
        """Construct the volume holding the container scripts."""
        source = V1SecretVolumeSource(
            secret_name=self._layout.scripts_secret,
            default_mode=SCRIPTS_VOLUME_MODE,
        )
        return V1Volume(name=SCRIPTS_VOLUME, secret=source)

    def build_script_mount(self) -> V1VolumeMount:
        """Construct the mount of the container scripts."""
        return V1VolumeMount(
            name=SCRIPTS_VOLUME, mount_path=MOUNT_PATH_SCRIPTS, read_only=True
        )

    def build_pod(
        self,
        instance_name: str,
        *,
        enable_block_storage: bool = False,
        secret_names: Sequence[str] = (),
        extra_volumes: Sequence[ExtraVolumeProvider] = (),
        targets: Sequence[str] | None = None,
        external_data_store: bool = False,
        cache_size: str | None = None,
        cache_claim_name: str | None = None,
        validate: bool = False,
    ) -> PodVolumes:
        """Construct the volumes and mounts of an API pod.

        Parameters
        ----------
        instance_name
            Name of the service instance.
        enable_block_storage
            Whether to add the host paths needed by the block-storage client.
        secret_names
            Additional secrets to project, in mount order.
        extra_volumes
            Providers of caller-supplied extra volumes.
        targets
            Propagation targets for the extra volumes. Defaults to the
            service name.
        external_data_store
            Whether the service data directory is managed externally.
        cache_size
            Configured size of the image cache, if any.
        cache_claim_name
            Claim backing the image cache. Defaults to
            ``<instance_name>-cache`` when a cache size is set.
        validate
            Whether to check each container's mounts against the pod volumes.

        Returns
        -------
        PodVolumes
            Pod volumes along with the mounts of each container.

        Raises
        ------
        VolumeSetError
            Raised if ``validate`` is set and a container's mounts are not
            consistent with the pod volumes.
        """
        if targets is None:
            targets = [self._layout.service_name]
        if cache_size and not cache_claim_name:
            cache_claim_name = f"{instance_name}-cache"
        if not cache_size:
            cache_claim_name = None

        volumes = self.build_volumes(
            instance_name,
            enable_block_storage=enable_block_storage,
            secret_names=secret_names,
            extra_volumes=extra_volumes,
            targets=targets,
            external_data_store=external_data_store,
        )
        volumes.extend(
            self.build_api_volumes(
                instance_name, cache_claim_name=cache_claim_name
            )
        )
        api_mounts = self.build_mounts(
            enable_block_storage=enable_block_storage,
            secret_names=secret_names,
            extra_volumes=extra_volumes,
            targets=targets,
            external_data_store=external_data_store,
        )
        api_mounts.extend(self.build_api_mounts(cache_size=cache_size))
        pod = PodVolumes(
            volumes=volumes,
            api_mounts=api_mounts,
            httpd_mounts=self.build_httpd_mounts(),
        )

        if validate:
            for container, mounts in pod.containers().items():
                validate_volume_set(volumes, mounts, container=container)
        self._logger.debug(
            "Built pod volumes",
            instance=instance_name,
            volumes=len(volumes),
            api_mounts=len(api_mounts),
            httpd_mounts=len(pod.httpd_mounts),
        )
        return pod
