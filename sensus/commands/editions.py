"""List workshop editions."""

from __future__ import annotations

import click
from rich.markup import escape

from sensus.api.models import normalize_edition
from sensus.cli import Context, pass_context
from sensus.commands._shared import EXIT_API_ERROR, make_client, require_config
from sensus.exceptions import ApiError
from sensus.utils.output import console, create_table, error


@click.command("editions")
@pass_context
def cli(ctx: Context) -> None:
    """List editions; use an id with 'sensus search --edition'."""
    config = require_config(ctx)

    try:
        editions = [normalize_edition(raw) for raw in make_client(config).fetch_editions()]
    except ApiError as e:
        error(f"Could not fetch editions: {escape(str(e))}")
        raise SystemExit(EXIT_API_ERROR)

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Edition")
    table.add_column("Year", justify="right")
    for edition in editions:
        table.add_row(escape(edition.id), escape(edition.year or ""))
    console.print(table)
