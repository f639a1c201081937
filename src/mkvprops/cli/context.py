"""Shared helpers for CLI commands."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Coroutine
from typing import Any

import click

from mkvprops.cli.exit_codes import ExitCode
from mkvprops.domain.models import EditResult
from mkvprops.exceptions import ToolNotAvailableError
from mkvprops.service import MkvService


def get_service(ctx: click.Context) -> MkvService:
    """Return the service for this invocation, creating it on first use.

    A service already present in ``ctx.obj`` (e.g. injected by tests) is
    reused. Exits with TOOL_NOT_AVAILABLE when mkvtoolnix is missing.
    """
    obj = ctx.ensure_object(dict)
    service = obj.get("service")
    if service is not None:
        return service

    try:
        service = MkvService.create(obj["config"])
    except ToolNotAvailableError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)

    obj["service"] = service
    return service


def run_edit(operation: Coroutine[Any, Any, EditResult]) -> EditResult:
    """Run an edit operation to completion.

    Exits with INTERRUPTED on Ctrl+C; mkvpropedit may already have written
    part of the batch.
    """
    try:
        return asyncio.run(operation)
    except KeyboardInterrupt:
        click.echo("Interrupted; the file may be partially edited", err=True)
        sys.exit(ExitCode.INTERRUPTED)


def report_edit_result(result: EditResult) -> None:
    """Print an EditResult and exit with the matching code."""
    for warning in result.warnings:
        click.echo(warning, err=True)

    if not result.success:
        click.echo(f"Error: {result.error_message or 'Edit failed'}", err=True)
        sys.exit(ExitCode.OPERATION_FAILED)

    if result.has_warnings:
        click.echo(result.error_message or "Changes applied with warnings")
        sys.exit(ExitCode.WARNINGS)

    click.echo("Changes applied successfully")
