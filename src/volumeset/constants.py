"""Global constants.

Every fixed path, volume name and file mode used when composing volumes lives
here so that a change in one place is honored by every builder. Paths that
depend on the service name are derived from these in
`~volumeset.models.domain.volumes.ServiceLayout`.
"""

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "API_CONFIG_VOLUME",
    "BLOCK_STORAGE_HOST_PATHS",
    "CONFIG_FILE",
    "CONFIG_FILE_ENV_VAR",
    "CONFIG_VOLUME",
    "CONFIG_VOLUME_MODE",
    "DATA_DIR_ROOT",
    "DEFAULT_SERVICE_NAME",
    "ENV_PREFIX",
    "IMAGE_CACHE_SUBDIR",
    "KOLLA_CONFIG_PATH",
    "KUBERNETES_NAME_PATTERN",
    "LOG_DIR_ROOT",
    "LOG_VOLUME",
    "MOUNT_PATH_CONFIG_DEFAULT",
    "MOUNT_PATH_CONFIG_ROOT",
    "MOUNT_PATH_MY_CNF",
    "MOUNT_PATH_SCRIPTS",
    "MY_CNF_SUB_PATH",
    "ROOT_LOGGER",
    "SCRIPTS_VOLUME",
    "SCRIPTS_VOLUME_MODE",
    "SECRET_VOLUME_MODE",
    "BlockStorageHostPath",
]

CONFIG_FILE = Path("/etc/volumeset/config.yaml")
"""Default path to the volume set configuration."""

ENV_PREFIX = "VOLUMESET_"
"""Prefix for environment variables overriding configuration settings."""

CONFIG_FILE_ENV_VAR = f"{ENV_PREFIX}CONFIG_FILE"
"""Environment variable that overrides the configuration path."""

ROOT_LOGGER = "volumeset"
"""Name of the logger used by the builder and the command-line interface."""

DEFAULT_SERVICE_NAME = "glance"
"""Canonical service name used when none is configured."""

KUBERNETES_NAME_PATTERN = "^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"
"""Pattern matching valid Kubernetes names."""

CONFIG_VOLUME = "config-data"
"""Name of the volume projecting the per-instance configuration secret."""

API_CONFIG_VOLUME = "config-data-custom"
"""Name of the API-facing copy of the per-instance configuration secret."""

LOG_VOLUME = "logs"
"""Name of the scratch volume used to stream logs."""

SCRIPTS_VOLUME = "scripts"
"""Name of the volume holding the container scripts."""

CONFIG_VOLUME_MODE = 0o644
"""Default file mode of files projected from the configuration secret."""

SECRET_VOLUME_MODE = 0o640
"""Default file mode of files projected from additional secrets."""

SCRIPTS_VOLUME_MODE = 0o755
"""Default file mode of the container scripts, which must be executable."""

MOUNT_PATH_CONFIG_ROOT = "/var/lib/config-data"
"""Directory under which configuration secrets are mounted.

Additional secrets are mounted in ``secret-<index>`` subdirectories, keyed by
their position in the configured list rather than by their name.
"""

MOUNT_PATH_CONFIG_DEFAULT = f"{MOUNT_PATH_CONFIG_ROOT}/default"
"""Path at which the default configuration is mounted."""

MOUNT_PATH_MY_CNF = "/etc/my.cnf"
"""Path of the database client configuration file."""

MY_CNF_SUB_PATH = "my.cnf"
"""Key of the database client configuration in the configuration secret."""

KOLLA_CONFIG_PATH = "/var/lib/kolla/config_files/config.json"
"""Path at which the container start configuration is mounted.

Each container mounts a different key of the configuration secret here.
"""

MOUNT_PATH_SCRIPTS = "/usr/local/bin/container-scripts"
"""Path at which the container scripts are mounted."""

DATA_DIR_ROOT = "/var/lib"
"""Directory under which each service keeps its data directory."""

LOG_DIR_ROOT = "/var/log"
"""Directory under which each service writes its log directory."""

IMAGE_CACHE_SUBDIR = "image-cache"
"""Subdirectory of the service data directory holding the image cache."""


@dataclass(frozen=True)
class BlockStorageHostPath:
    """Host directory exposed to the block-storage client library."""

    name: str
    """Name of the volume."""

    path: str
    """Path on the host, which is also the path inside the container."""

    read_only: bool
    """Whether the container mounts the path read-only."""

    create: bool = False
    """Whether the host directory is created if it is missing."""


BLOCK_STORAGE_HOST_PATHS = (
    # os-brick reads the iSCSI initiator name from here.
    BlockStorageHostPath("etc-iscsi", "/etc/iscsi", read_only=True),
    BlockStorageHostPath("dev", "/dev", read_only=False),
    BlockStorageHostPath("lib-modules", "/lib/modules", read_only=True),
    BlockStorageHostPath("run", "/run", read_only=False),
    BlockStorageHostPath("sys", "/sys", read_only=True),
    # Shared with every other os-brick consumer on the node.
    BlockStorageHostPath(
        "var-locks-brick",
        "/var/locks/openstack/os-brick",
        read_only=False,
        create=True,
    ),
    BlockStorageHostPath(
        "etc-nvme", "/etc/nvme", read_only=False, create=True
    ),
)
"""Host resources required by the block-storage client library.

This is a closed set: these are operating system contract points of the
storage initiator, not user choices, so they are not configurable.
"""
