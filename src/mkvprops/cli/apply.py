"""CLI apply and flag commands."""

from __future__ import annotations

import json
from pathlib import Path

import click

from mkvprops.cli.context import get_service, report_edit_result, run_edit
from mkvprops.domain.enums import ChangeType
from mkvprops.domain.models import PropertyChange
from mkvprops.domain.sections import INFO, parse_section


def parse_change_option(raw: str, change_type: ChangeType) -> PropertyChange:
    """Parse a ``[SECTION:]NAME[=VALUE]`` command-line change.

    The section defaults to ``info``. Set and Add require ``=VALUE``.

    Examples:
        ``track:2:flag-default=1``, ``title=My movie``, ``track:1:name``

    Raises:
        click.BadParameter: If the option is malformed.
    """
    target, sep, value = raw.partition("=")
    if change_type is ChangeType.DELETE:
        if sep:
            raise click.BadParameter(f"--delete takes no value: {raw}")
        new_value = None
    else:
        if not sep:
            raise click.BadParameter(
                f"--{change_type.value} needs SECTION:NAME=VALUE, got: {raw}"
            )
        new_value = value

    selector, _, name = target.rpartition(":")
    try:
        section = parse_section(selector) if selector else INFO
        return PropertyChange(
            property_name=name.strip(),
            section=section,
            change_type=change_type,
            new_value=new_value,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def load_changes_file(path: Path) -> list[PropertyChange]:
    """Load changes from a JSON file.

    The file holds a list of change objects, or an object with a
    ``changes`` list.

    Raises:
        click.BadParameter: If the file is not valid JSON or a change is
            malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.BadParameter(f"Cannot read {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("changes")
    if not isinstance(data, list):
        raise click.BadParameter(f"{path} must contain a list of changes")

    try:
        return [PropertyChange.from_dict(item) for item in data]
    except ValueError as e:
        raise click.BadParameter(f"{path}: {e}") from e


@click.command("apply")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--changes",
    "changes_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with a list of changes.",
)
@click.option(
    "--set",
    "set_values",
    multiple=True,
    metavar="SECTION:NAME=VALUE",
    help="Set a property (section defaults to info).",
)
@click.option(
    "--delete",
    "delete_values",
    multiple=True,
    metavar="SECTION:NAME",
    help="Delete a property.",
)
@click.option(
    "--add",
    "add_values",
    multiple=True,
    metavar="SECTION:NAME=VALUE",
    help="Add a property.",
)
@click.pass_context
def apply_command(
    ctx: click.Context,
    file: Path,
    changes_file: Path | None,
    set_values: tuple[str, ...],
    delete_values: tuple[str, ...],
    add_values: tuple[str, ...],
) -> None:
    """Apply property changes to FILE in one mkvpropedit run.

    Changes from --changes come first, followed by --set, --delete and --add
    in that order.

    \b
    Examples:
        mkvprops apply movie.mkv --set title="My movie"
        mkvprops apply movie.mkv --set track:2:flag-default=1
        mkvprops apply movie.mkv --delete track:3:name
        mkvprops apply movie.mkv --changes edits.json
    """
    changes: list[PropertyChange] = []
    if changes_file is not None:
        changes.extend(load_changes_file(changes_file))
    for raw_values, change_type in (
        (set_values, ChangeType.SET),
        (delete_values, ChangeType.DELETE),
        (add_values, ChangeType.ADD),
    ):
        changes.extend(parse_change_option(raw, change_type) for raw in raw_values)

    if not changes:
        raise click.UsageError(
            "No changes given; use --changes, --set, --delete or --add"
        )

    service = get_service(ctx)
    result = run_edit(service.apply_changes(file, changes))
    report_edit_result(result)


@click.command("flag")
@click.argument("file", type=click.Path(path_type=Path))
@click.argument("ordinal", type=click.IntRange(min=1))
@click.argument("property_name", metavar="PROPERTY")
@click.option(
    "--on/--off", "value", default=True, show_default=True, help="Flag state to set."
)
@click.pass_context
def flag_command(
    ctx: click.Context,
    file: Path,
    ordinal: int,
    property_name: str,
    value: bool,
) -> None:
    """Set a boolean flag on track ORDINAL of FILE.

    Turning flag-default on also clears it on the other tracks of the same
    type. Video tracks cannot be edited.

    \b
    Examples:
        mkvprops flag movie.mkv 2 flag-default --on
        mkvprops flag movie.mkv 3 flag-forced --off
    """
    service = get_service(ctx)
    result = run_edit(service.set_track_flag(file, ordinal, property_name, value))
    report_edit_result(result)
