"""CLI validate and inspect commands."""

import asyncio
import json
import sys
from pathlib import Path

import click

from mkvprops.cli.context import get_service
from mkvprops.cli.exit_codes import ExitCode
from mkvprops.domain.models import FileInfo, TrackInfo


def _flag_summary(track: TrackInfo) -> str:
    flags = [
        name
        for name, enabled in (
            ("default", track.is_default),
            ("enabled", track.is_enabled),
            ("forced", track.is_forced),
        )
        if enabled
    ]
    return ", ".join(flags) or "-"


def format_file_info_human(info: FileInfo) -> str:
    """Render a FileInfo for terminal output."""
    lines = [f"File: {info.file_path}"]
    if info.segment_title:
        lines.append(f"Title: {info.segment_title}")

    lines.append("")
    lines.append(f"Tracks ({len(info.tracks)}):")
    for track in info.tracks:
        parts = [f"  {track.section.selector:<9} id={track.track_number:<3}"]
        parts.append(f"{track.track_type:<10}")
        parts.append(f"lang={track.language or '-':<6}")
        parts.append(f"flags={_flag_summary(track)}")
        if track.name:
            parts.append(f'name="{track.name}"')
        lines.append(" ".join(parts))

    if info.properties:
        lines.append("")
        lines.append(f"Boolean properties ({len(info.properties)}):")
        for prop in info.properties:
            lines.append(f"  {prop.name} [{prop.section.value}] = {prop.current_value}")

    return "\n".join(lines)


@click.command("validate")
@click.argument("file", type=click.Path(path_type=Path))
@click.pass_context
def validate_command(ctx: click.Context, file: Path) -> None:
    """Check that FILE is a valid Matroska container."""
    service = get_service(ctx)
    if asyncio.run(service.is_valid_file(file)):
        click.echo(f"Valid: {file}")
        return

    click.echo(f"Invalid: {file}", err=True)
    sys.exit(ExitCode.TARGET_INVALID)


@click.command("inspect")
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
@click.pass_context
def inspect_command(ctx: click.Context, file: Path, as_json: bool) -> None:
    """Show the tracks and editable boolean properties of FILE."""
    service = get_service(ctx)
    info = asyncio.run(service.read_file_properties(file))

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
    elif info.is_valid:
        click.echo(format_file_info_human(info))

    if not info.is_valid:
        if not as_json:
            click.echo(f"Error: {info.error_message}", err=True)
        sys.exit(ExitCode.TARGET_INVALID)
