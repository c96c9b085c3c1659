"""Configuration for volume set composition."""

from pathlib import Path
from typing import Annotated, Self

import yaml
from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging

from .constants import (
    DEFAULT_SERVICE_NAME,
    ENV_PREFIX,
    KUBERNETES_NAME_PATTERN,
    ROOT_LOGGER,
)
from .models.v1.extravolumes import ExtraVolMounts

__all__ = ["Config"]


class EnvFirstSettings(BaseSettings):
    """Base class for Pydantic settings with environment overrides.

    Classes that inherit from this base class will prioritize environment
    variables over arguments to the class constructor.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, extra="forbid", validate_by_name=True
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support. Allow environment
        variables to override init parameters, since init parameters come
        from the YAML configuration file and we want environment variables to
        take precedence.
        """
        return (env_settings, init_settings)


class Config(EnvFirstSettings):
    """Configuration for composing the volumes of a service instance."""

    service_name: Annotated[
        str,
        Field(
            title="Service name",
            description=(
                "Canonical name of the service, used to derive the data, log"
                " and cache paths"
            ),
            pattern=KUBERNETES_NAME_PATTERN,
            validation_alias=AliasChoices(
                ENV_PREFIX + "SERVICE_NAME", "serviceName"
            ),
        ),
    ] = DEFAULT_SERVICE_NAME

    instance_name: Annotated[
        str,
        Field(
            title="Instance name",
            description=(
                "Name of the service instance. Its configuration secret is"
                " named after it."
            ),
            pattern=KUBERNETES_NAME_PATTERN,
            validation_alias=AliasChoices(
                ENV_PREFIX + "INSTANCE_NAME", "instanceName"
            ),
        ),
    ]

    enable_block_storage: Annotated[
        bool,
        Field(
            title="Enable block storage",
            description=(
                "Whether to mount the host paths needed by the block-storage"
                " client library"
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "ENABLE_BLOCK_STORAGE", "enableBlockStorage"
            ),
        ),
    ] = False

    external_data_store: Annotated[
        bool,
        Field(
            title="External data store",
            description=(
                "Whether the service data directory is managed externally, in"
                " which case no local data volume is mounted"
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "EXTERNAL_DATA_STORE", "externalDataStore"
            ),
        ),
    ] = False

    secret_names: Annotated[
        list[str],
        Field(
            title="Additional secrets",
            description=(
                "Secrets to project into the configuration directory. Order"
                " determines the mount path of each secret."
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "SECRET_NAMES", "secretNames"
            ),
        ),
    ] = []

    extra_mounts: Annotated[
        list[ExtraVolMounts],
        Field(
            title="Extra volumes",
            validation_alias=AliasChoices(
                ENV_PREFIX + "EXTRA_MOUNTS", "extraMounts"
            ),
        ),
    ] = []

    propagation: Annotated[
        list[str] | None,
        Field(
            title="Propagation targets",
            description=(
                "Targets used to select extra volume groups. Defaults to the"
                " service name."
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "PROPAGATION", "propagation"
            ),
        ),
    ] = None

    cache_size: Annotated[
        str | None,
        Field(
            title="Image cache size",
            description="If set, an image cache volume is mounted",
            examples=["10G"],
            validation_alias=AliasChoices(
                ENV_PREFIX + "CACHE_SIZE", "cacheSize"
            ),
        ),
    ] = None

    cache_claim_name: Annotated[
        str | None,
        Field(
            title="Image cache claim",
            description=(
                "Persistent volume claim backing the image cache. Defaults to"
                " the instance name followed by ``-cache``."
            ),
            pattern=KUBERNETES_NAME_PATTERN,
            validation_alias=AliasChoices(
                ENV_PREFIX + "CACHE_CLAIM_NAME", "cacheClaimName"
            ),
        ),
    ] = None

    validate_volumes: Annotated[
        bool,
        Field(
            title="Validate composed volumes",
            description=(
                "Whether to reject volume sets with duplicate names, duplicate"
                " mount paths or mounts of undefined volumes"
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "VALIDATE_VOLUMES", "validateVolumes"
            ),
        ),
    ] = False

    debug: Annotated[
        bool,
        Field(
            title="Show debug output and log style",
            description=(
                "If True, then log level will be set to debug and will"
                " non-structured, human-readable output."
            ),
        ),
    ] = False

    log_profile: Annotated[
        Profile,
        Field(
            title="Logging profile",
            validation_alias=AliasChoices(
                ENV_PREFIX + "LOG_PROFILE", "logProfile"
            ),
        ),
    ] = Profile.production

    log_level: Annotated[
        LogLevel,
        Field(
            title="Log level",
            validation_alias=AliasChoices(
                ENV_PREFIX + "LOG_LEVEL", "logLevel"
            ),
        ),
    ] = LogLevel.INFO

    add_timestamp: Annotated[
        bool,
        Field(
            title="Add timestamp to log lines",
            validation_alias=AliasChoices(
                ENV_PREFIX + "ADD_TIMESTAMP", "addTimestamp"
            ),
        ),
    ] = False

    @model_validator(mode="after")
    def _default_propagation(self) -> Self:
        if self.propagation is None:
            self.propagation = [self.service_name]
        return self

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct the configuration from a YAML file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding configuration.
        """
        with path.open("r") as f:
            config = cls(**(yaml.safe_load(f) or {}))
        config.configure_logging()
        return config

    def configure_logging(self) -> None:
        """Configure logging based on the configuration."""
        if self.debug:
            log_level = LogLevel.DEBUG
            log_profile = Profile.development
        else:
            log_level = self.log_level
            log_profile = self.log_profile

        configure_logging(
            profile=log_profile,
            log_level=log_level,
            add_timestamp=self.add_timestamp,
            name=ROOT_LOGGER,
        )
