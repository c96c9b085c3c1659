"""CLI for composing service volumes."""

import os
from pathlib import Path

import click
import yaml
from kubernetes_asyncio.client import ApiClient
from safir.asyncio import run_with_asyncio
from safir.click import display_help
from structlog.stdlib import get_logger

from . import __version__
from .config import Config
from .constants import CONFIG_FILE, CONFIG_FILE_ENV_VAR, ROOT_LOGGER
from .exceptions import VolumeSetError
from .services.builder.volumes import VolumeSetBuilder

__all__ = ["main"]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, message="%(version)s")
def main() -> None:
    """Service volume composition command-line interface."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.argument("subtopic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None, subtopic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic, subtopic)


def _load_config(
    config_file: Path, *, debug: bool, validate: bool
) -> Config:
    """Load the configuration, overriding it from CLI options."""
    if env_config_path := os.getenv(CONFIG_FILE_ENV_VAR):
        config_file = Path(env_config_path)

    config = Config.from_file(config_file)
    if debug:
        config.debug = debug
        config.configure_logging()
    if validate:
        config.validate_volumes = validate
    return config


@main.command()
@click.option(
    "--config-file",
    "-c",
    help="Configuration file",
    type=Path,
    default=CONFIG_FILE,
)
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging",
)
@click.option(
    "--validate",
    is_flag=True,
    help="Reject inconsistent volume sets",
)
@run_with_asyncio
async def build(*, config_file: Path, debug: bool, validate: bool) -> None:
    """Print the volumes and mounts of the service pod as YAML."""
    config = _load_config(config_file, debug=debug, validate=validate)
    logger = get_logger(ROOT_LOGGER)
    builder = VolumeSetBuilder(config.service_name, logger)
    try:
        pod = builder.build_pod(
            config.instance_name,
            enable_block_storage=config.enable_block_storage,
            secret_names=config.secret_names,
            extra_volumes=config.extra_mounts,
            targets=config.propagation,
            external_data_store=config.external_data_store,
            cache_size=config.cache_size,
            cache_claim_name=config.cache_claim_name,
            validate=config.validate_volumes,
        )
    except VolumeSetError as e:
        logger.error("Invalid volume set", error=str(e), names=e.names)
        raise click.ClickException(str(e)) from e

    async with ApiClient() as api_client:
        output = api_client.sanitize_for_serialization(
            {
                "volumes": pod.volumes,
                "apiMounts": pod.api_mounts,
                "httpdMounts": pod.httpd_mounts,
            }
        )
    click.echo(yaml.safe_dump(output, sort_keys=False), nl=False)
