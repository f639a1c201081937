"""CLI properties command: list what mkvpropedit can edit."""

import asyncio
import json
import sys

import click

from mkvprops.cli.context import get_service
from mkvprops.cli.exit_codes import ExitCode
from mkvprops.domain.models import PropertyDefinition


def format_properties_human(properties: list[PropertyDefinition]) -> str:
    """Render the catalog as an aligned table grouped by section."""
    width = max(len(p.name) for p in properties)
    lines: list[str] = []
    for section in sorted({p.section for p in properties}, key=lambda s: s.value):
        lines.append(f"[{section.value}]")
        for prop in properties:
            if prop.section is not section:
                continue
            line = f"  {prop.name.ljust(width)}  {prop.type.value:<16}"
            if prop.description:
                line = f"{line}  {prop.description}"
            lines.append(line.rstrip())
    return "\n".join(lines)


@click.command("properties")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
@click.pass_context
def properties_command(ctx: click.Context, as_json: bool) -> None:
    """List the properties the installed mkvpropedit can edit."""
    service = get_service(ctx)
    properties = asyncio.run(service.get_available_properties())

    if as_json:
        click.echo(json.dumps([p.to_dict() for p in properties], indent=2))
        return

    if not properties:
        click.echo("Error: No properties reported by mkvpropedit", err=True)
        sys.exit(ExitCode.OPERATION_FAILED)

    click.echo(format_properties_human(properties))
