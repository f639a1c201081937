"""CLI module for mkvprops."""

import logging
import sys
from pathlib import Path

import click

from mkvprops.cli.exit_codes import ExitCode
from mkvprops.config import get_config
from mkvprops.exceptions import ConfigError
from mkvprops.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="mkvprops")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.mkvprops/config.toml).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """mkvprops - Read and edit Matroska properties with mkvtoolnix."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(
                config_path=config_path,
                log_level=log_level,
                log_file=log_file,
                log_format="json" if log_json else None,
                strict=config_path is not None,
            )
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.CONFIG_ERROR)

    configure_logging(ctx.obj["config"].logging)
    logger.debug("Running mkvprops %s", ctx.invoked_subcommand)


# Defer import to avoid circular dependency
def _register_commands():
    from mkvprops.cli.apply import apply_command, flag_command
    from mkvprops.cli.inspect import inspect_command, validate_command
    from mkvprops.cli.properties import properties_command
    from mkvprops.cli.serve import serve_command

    main.add_command(properties_command)
    main.add_command(validate_command)
    main.add_command(inspect_command)
    main.add_command(apply_command)
    main.add_command(flag_command)
    main.add_command(serve_command)


_register_commands()
